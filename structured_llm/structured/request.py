from typing import Optional

from structured_llm.structured.schemas import (
    ChatCompletionRequest,
    ChatMessage,
    SchemaResponse,
)
from structured_llm.structured.tools import build_tool, build_tool_choice


def build_request(
    rendered_prompt: str,
    schema_response: SchemaResponse,
    *,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> ChatCompletionRequest:
    """Assemble the chat completion request for one structured call.

    Args:
        rendered_prompt: Full prompt text, sent as a single user message.
        schema_response: Normalized schema used as the tool parameters.
        temperature: Optional sampling temperature.
        max_tokens: Optional completion token limit.

    Returns:
        Request offering only `getResults` and forcing the model to call it.

    Raises:
        ConversionError: If the schema cannot be used as tool parameters.
    """
    return ChatCompletionRequest(
        messages=[ChatMessage(role="user", content=rendered_prompt)],
        tools=build_tool(schema_response.schema),
        tool_choice=build_tool_choice(),
        temperature=temperature,
        max_tokens=max_tokens,
    )
