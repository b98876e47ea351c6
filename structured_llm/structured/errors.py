"""Error taxonomy for the structured output pipeline.

Three kinds of failure reach the caller:

- `LlmError`: the provider call failed, or the response broke the forced
  tool-call contract (no choices, no tool call, unparsable arguments).
- `ConversionError`: the model's arguments did not fit the target type, or
  the target type could not be turned into tool parameters. The original
  error is kept in `detail`.
- `TypeMismatchError`: conversion succeeded but the value still failed
  the final type check.
"""

from typing import Optional


class StructuredOutputError(Exception):
    """Base exception for structured output failures."""
    pass


class LlmError(StructuredOutputError):
    """Raised when the LLM call fails or returns no usable tool call."""
    pass


class ConversionError(StructuredOutputError):
    """Raised when a value cannot be converted to or from the target type.

    Args:
        message: Human readable summary.
        detail: The underlying error, if any.
    """

    def __init__(self, message: str, detail: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail is None:
            return self.message
        return f"{self.message} Detail: {self.detail}"


class TypeMismatchError(StructuredOutputError):
    """Raised when a converted value is not an instance of the target type."""
    pass
