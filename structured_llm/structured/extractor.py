"""Locate the forced tool call in a chat completion response.

The request forces exactly one tool and asks for one completion, so only
the first tool call of `choices[0]` is read; anything after it is ignored.
"""

import json
from typing import Any

from structured_llm.structured.errors import LlmError
from structured_llm.structured.schemas import ChatCompletionResponse

NO_CHOICES_MESSAGE = "No completion choices"
NO_RELEVANT_RESPONSE_MESSAGE = "No relevant response from the LLM"


def transport_failure(exc: Exception) -> LlmError:
    """Describe a failed provider call as an LlmError."""
    return LlmError(f"LLM call failed: {exc}")


def extract_arguments(response: ChatCompletionResponse) -> dict[str, Any]:
    """Return the parsed arguments of the first tool call.

    Args:
        response: Provider response to a forced tool-call request.

    Returns:
        The arguments as a JSON object.

    Raises:
        LlmError: If there are no choices, no tool call, or the arguments
            are not a JSON object.
    """
    if not response.choices:
        raise LlmError(NO_CHOICES_MESSAGE)

    message = response.choices[0].message
    if message is None or not message.tool_calls:
        raise LlmError(NO_RELEVANT_RESPONSE_MESSAGE)

    arguments = message.tool_calls[0].function.arguments
    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as exc:
        raise LlmError(NO_RELEVANT_RESPONSE_MESSAGE) from exc

    if not isinstance(parsed, dict):
        raise LlmError(NO_RELEVANT_RESPONSE_MESSAGE)
    return parsed
