"""Turn tool-call arguments back into the caller's requested type.

## Structured Outputs: Reconciliation

normalize() may have wrapped a non-object schema under `result`, so the
arguments are unwrapped first when `is_originally_json_object` is False.
The value is then converted with the target's TypeDescriptor and narrowed
with a final type check.

## Failure Classification

Pydantic reports every conversion failure as a ValidationError whose
error types fall in two groups:
- JSON-to-type conversion failures (`json_invalid`, `json_type`)
- general type conversion failures (every other validation error type)
Both mean the model answered with JSON that does not fit the schema, so
both become the advisory ConversionError. Any other exception is a bug in
the pipeline or the target type and propagates unchanged.
"""

import json
from typing import Any, TypeVar, overload

from pydantic import ValidationError as PydanticValidationError

from structured_llm.config import RESULT_KEY
from structured_llm.structured.errors import ConversionError
from structured_llm.structured.types import TypeDescriptor

T = TypeVar("T")

CONVERSION_ADVICE = (
    "Unable to convert the LLM response to the expected type. "
    "Retrying and/or validating the prompt could fix the response."
)

# Closed set of conversion failures caused by the model's output
MODEL_OUTPUT_ERRORS: tuple[type[Exception], ...] = (PydanticValidationError,)


def _convert(
    raw_arguments: dict[str, Any],
    descriptor: TypeDescriptor[T],
    is_originally_json_object: bool,
) -> T:
    text = json.dumps(raw_arguments)
    if is_originally_json_object:
        return descriptor.from_json(text)

    wrapper = json.loads(text)
    return descriptor.from_value(wrapper.get(RESULT_KEY))


@overload
def reconcile(
    raw_arguments: dict[str, Any],
    target: TypeDescriptor[T],
    is_originally_json_object: bool,
) -> T: ...


@overload
def reconcile(
    raw_arguments: dict[str, Any],
    target: type[T],
    is_originally_json_object: bool,
) -> T: ...


@overload
def reconcile(
    raw_arguments: dict[str, Any],
    target: Any,
    is_originally_json_object: bool,
) -> Any: ...


def reconcile(
    raw_arguments: dict[str, Any],
    target: Any,
    is_originally_json_object: bool,
) -> Any:
    """Convert tool-call arguments into the target type.

    Args:
        raw_arguments: Parsed arguments of the forced tool call.
        target: TypeDescriptor, or any type pydantic can validate.
        is_originally_json_object: Flag from the SchemaResponse used to
            build the request. False means the value sits under `result`.

    Returns:
        The converted value, already checked against the target type.

    Raises:
        ConversionError: If the arguments do not fit the target type.
        TypeMismatchError: If the converted value fails the final check.
    """
    descriptor = target if isinstance(target, TypeDescriptor) else TypeDescriptor(target)

    try:
        value = _convert(raw_arguments, descriptor, is_originally_json_object)
    except MODEL_OUTPUT_ERRORS as exc:
        raise ConversionError(CONVERSION_ADVICE, detail=exc) from exc

    return descriptor.ensure_type(value)
