"""Make any JSON Schema carriable as tool-call arguments.

Tool-call arguments must be a JSON object. Object schemas pass through
as they are; anything else (scalar, array, union) is nested under a
synthetic `result` property of a new object schema.
"""

from typing import Any

from structured_llm.config import RESULT_KEY, SCHEMA_METADATA_KEYS
from structured_llm.structured.schemas import SchemaResponse


def normalize(schema: dict[str, Any]) -> SchemaResponse:
    """Return an object-shaped version of `schema`.

    Args:
        schema: JSON Schema of the caller's target type.

    Returns:
        SchemaResponse holding `schema` itself when it is already an object
        schema. Otherwise a wrapper whose top level carries only the
        metadata keys plus `type: "object"`, with every other key of the
        original moved into `properties.result`.

    Example:
        >>> normalize({"title": "Age", "type": "integer", "minimum": 0}).schema
        {'title': 'Age', 'type': 'object', 'properties': {'result': {'type': 'integer', 'minimum': 0}}}
    """
    if schema.get("type") == "object":
        return SchemaResponse(schema=schema, is_originally_json_object=True)

    wrapper: dict[str, Any] = {}
    content: dict[str, Any] = {}
    for key, value in schema.items():
        if key in SCHEMA_METADATA_KEYS:
            wrapper[key] = value
        else:
            content[key] = value

    wrapper["type"] = "object"
    wrapper["properties"] = {RESULT_KEY: content}
    return SchemaResponse(schema=wrapper, is_originally_json_object=False)
