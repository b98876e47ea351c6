"""Azure OpenAI chat completion client.

## Structured Outputs: Transport

The structured output pipeline needs exactly one operation from the
provider: send a chat completion request (messages, tools, forced tool
choice) to a named deployment and get the response back. This module is
that operation and nothing more. It does not retry; callers that want
retries re-run the whole pipeline.

## Library Usage

Uses `requests` for the HTTP call and Pydantic to validate the response
body into ChatCompletionResponse. Timeouts are handled by `requests`.

## Data Flow

1. Provider builds a ChatCompletionRequest
2. call_chat_completion() POSTs it to the deployment endpoint
3. Receives a ChatCompletionResponse or raises AzureOpenAIError
"""

from typing import Any, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from structured_llm.config import AzureOpenAISettings
from structured_llm.shared.logs import setup_logging
from structured_llm.structured.schemas import (
    ChatCompletionRequest,
    ChatCompletionResponse,
)

logger = setup_logging(__name__)


class AzureOpenAIError(Exception):
    """Base exception for Azure OpenAI API errors."""
    pass


class RateLimitError(AzureOpenAIError):
    """Raised when the deployment rejects the call with HTTP 429."""
    pass


class APIError(AzureOpenAIError):
    """Raised when the API returns an error or malformed response."""
    pass


def chat_completions_url(settings: AzureOpenAISettings) -> str:
    """Deployment endpoint for chat completions (without query string)."""
    return (
        f"{settings.service_url}/openai/deployments/"
        f"{settings.deployment_id}/chat/completions"
    )


def _error_detail(response: requests.Response) -> str:
    try:
        return response.json().get("error", {}).get("message", response.text)
    except (ValueError, AttributeError):
        return response.text


def call_chat_completion(
    request: ChatCompletionRequest,
    *,
    settings: AzureOpenAISettings,
    timeout: Optional[float] = None,
) -> ChatCompletionResponse:
    """Send one chat completion request to an Azure OpenAI deployment.

    Args:
        request: Request body (messages, tools, tool choice, sampling).
        settings: Endpoint, key, deployment and API version.
        timeout: Request timeout in seconds. Defaults to settings.timeout.

    Returns:
        The validated response.

    Raises:
        RateLimitError: On HTTP 429.
        APIError: On any other non-200 status or a malformed body.
        AzureOpenAIError: If the request itself fails (network, timeout).

    Example:
        >>> response = call_chat_completion(request, settings=settings_from_env())
        >>> response.choices[0].message.tool_calls[0].function.arguments
        '{"result": 4}'
    """
    url = chat_completions_url(settings)
    headers = {
        "api-key": settings.api_key,
        "Content-Type": "application/json",
    }
    payload: dict[str, Any] = request.model_dump(exclude_none=True)

    try:
        response = requests.post(
            url,
            params={"api-version": settings.api_version},
            json=payload,
            headers=headers,
            timeout=timeout if timeout is not None else settings.timeout,
        )
    except requests.RequestException as exc:
        raise AzureOpenAIError(f"Request failed: {exc}") from exc

    if response.status_code == 429:
        raise RateLimitError(f"Rate limited: {_error_detail(response)}")
    if response.status_code != 200:
        raise APIError(f"API error {response.status_code}: {_error_detail(response)}")

    try:
        result = ChatCompletionResponse.model_validate(response.json())
    except (ValueError, PydanticValidationError) as exc:
        raise APIError(f"Malformed API response: {exc}") from exc

    # Log successful LLM call
    chars_in = sum(len(m.content) for m in request.messages)
    tool_calls = sum(
        len(choice.message.tool_calls or [])
        for choice in result.choices or []
        if choice.message is not None
    )
    logger.info(
        f"[LLM] deployment={settings.deployment_id} chars_in={chars_in} tool_calls={tool_calls}"
    )

    return result
