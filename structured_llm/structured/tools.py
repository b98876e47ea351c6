"""Single forced tool definition for structured outputs."""

import json
from collections.abc import Mapping
from typing import Any

from structured_llm.config import TOOL_DESCRIPTION, TOOL_NAME
from structured_llm.structured.errors import ConversionError
from structured_llm.structured.schemas import (
    FunctionDefinition,
    Tool,
    ToolChoice,
    ToolChoiceFunction,
)


def build_tool_choice() -> ToolChoice:
    """Directive that forces the model to call `getResults`."""
    return ToolChoice(function=ToolChoiceFunction(name=TOOL_NAME))


def build_tool(parameters: Mapping[str, Any]) -> list[Tool]:
    """Wrap a normalized schema as the one `getResults` tool.

    Args:
        parameters: Object-shaped JSON Schema (see normalize()).

    Returns:
        A single-element list with the function tool.

    Raises:
        ConversionError: If the schema cannot be used as tool parameters.
    """
    if not isinstance(parameters, Mapping):
        raise ConversionError(
            f"Tool parameters must be a JSON object schema, got {type(parameters).__name__}"
        )
    if parameters.get("type") != "object":
        raise ConversionError(
            f"Tool parameters must have type 'object', got {parameters.get('type')!r}"
        )

    # Round trip through JSON so only plain JSON values reach the wire
    try:
        plain = json.loads(json.dumps(parameters))
    except (TypeError, ValueError) as exc:
        raise ConversionError("Tool parameters are not valid JSON", detail=exc) from exc

    function = FunctionDefinition(
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
        parameters=plain,
    )
    return [Tool(function=function)]
