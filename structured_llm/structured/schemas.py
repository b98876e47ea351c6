"""Pydantic models for the forced tool-call wire format.

## Structured Outputs Through Tool Calls

Chat completion APIs return free text unless the request offers a tool and
forces the model to call it. The tool's `parameters` schema then shapes
the model's output, which comes back as a JSON-encoded arguments string
on the first tool call of the first choice.

## Library Usage

Pydantic v2 BaseModel describes both directions of the wire format:
- Request models are serialized with model_dump(exclude_none=True)
- Response models are validated from the provider's JSON with
  model_validate(); unknown provider fields are ignored

## Data Flow

1. normalize() produces a SchemaResponse (object-shaped schema + flag)
2. build_tool()/build_tool_choice() wrap the schema in Tool/ToolChoice
3. build_request() assembles a ChatCompletionRequest
4. The transport returns a ChatCompletionResponse
5. extract_arguments() reads choices[0].message.tool_calls[0]
"""

from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class SchemaResponse:
    """An object-shaped JSON Schema and whether the input already was one.

    Attributes:
        schema: Schema with top-level `type == "object"`.
        is_originally_json_object: False when the original schema was
            wrapped under a synthetic `result` property.
    """

    schema: dict[str, Any]
    is_originally_json_object: bool


# =============================================================================
# REQUEST
# =============================================================================


class FunctionDefinition(BaseModel):
    """Function half of a tool definition."""

    name: str
    description: str = ""
    parameters: dict[str, Any]


class Tool(BaseModel):
    """A function-type tool offered to the model."""

    type: Literal["function"] = "function"
    function: FunctionDefinition


class ToolChoiceFunction(BaseModel):
    name: str


class ToolChoice(BaseModel):
    """Directive forcing the model to call one named function."""

    type: Literal["function"] = "function"
    function: ToolChoiceFunction


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """Body of one chat completion call.

    The deployment id and API version travel in the URL, not here.
    """

    messages: list[ChatMessage]
    tools: list[Tool]
    tool_choice: ToolChoice
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


# =============================================================================
# RESPONSE
# =============================================================================


class FunctionCall(BaseModel):
    name: str = ""
    arguments: str = ""


class ToolCall(BaseModel):
    id: Optional[str] = None
    type: str = "function"
    function: FunctionCall


class ResponseMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[list[ToolCall]] = None


class Choice(BaseModel):
    index: int = 0
    message: Optional[ResponseMessage] = None
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    """Provider response; only `choices` is consulted."""

    id: Optional[str] = None
    model: Optional[str] = None
    choices: Optional[list[Choice]] = Field(default=None)
