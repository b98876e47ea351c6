"""Azure OpenAI model provider with typed results.

## Structured Outputs Through a Forced Tool Call

The chat API only returns free text or tool-call arguments. To get a
typed value back, generate():
1. Derives the target type's JSON Schema and makes it object-shaped
2. Offers a single `getResults` tool with that schema and forces the call
3. Sends one chat completion request to the deployment
4. Reads the tool-call arguments from the first choice
5. Converts them back into the target type

Every call builds its schema, tool and request from scratch. Nothing is
cached, and failed calls are not retried.

## Library Usage

Transport is `requests` (see shared/azure_openai_client.py); conversion
and validation are Pydantic v2 (see structured/types.py).
"""

from typing import Any, Callable, Optional

from structured_llm.config import AzureOpenAISettings, settings_from_env
from structured_llm.prompts import Prompt, render_prompt
from structured_llm.shared.azure_openai_client import (
    AzureOpenAIError,
    call_chat_completion,
)
from structured_llm.shared.logs import setup_logging
from structured_llm.structured.extractor import extract_arguments, transport_failure
from structured_llm.structured.normalizer import normalize
from structured_llm.structured.reconciler import reconcile
from structured_llm.structured.request import build_request
from structured_llm.structured.schemas import ChatCompletionRequest, ChatCompletionResponse
from structured_llm.structured.types import TypeDescriptor

logger = setup_logging(__name__)

Transport = Callable[..., ChatCompletionResponse]


class AzureOpenAIModelProvider:
    """Generates typed values from an Azure OpenAI chat deployment.

    Args:
        settings: Deployment connection and sampling settings.
        transport: Callable with the signature of call_chat_completion();
            swapped out in tests.

    Example:
        >>> provider = AzureOpenAIModelProvider.from_env()
        >>> provider.generate("How many legs does a spider have?", int)
        8
    """

    def __init__(
        self,
        settings: AzureOpenAISettings,
        transport: Transport = call_chat_completion,
    ):
        self.settings = settings
        self.transport = transport

    @classmethod
    def from_env(cls, transport: Transport = call_chat_completion) -> "AzureOpenAIModelProvider":
        return cls(settings_from_env(), transport=transport)

    def prepare_request(self, prompt: "Prompt | str", descriptor: TypeDescriptor) -> tuple[ChatCompletionRequest, bool]:
        """Request for `prompt` plus the normalization flag needed to read the answer."""
        schema_response = normalize(descriptor.json_schema())
        request = build_request(
            render_prompt(prompt),
            schema_response,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        return request, schema_response.is_originally_json_object

    def generate(self, prompt: "Prompt | str", target: Any, timeout: Optional[float] = None) -> Any:
        """Ask the model for a value of type `target`.

        Args:
            prompt: Prompt object or plain text.
            target: Any type pydantic can validate (model, int, list[...], ...).
            timeout: Optional override of settings.timeout for this call.

        Returns:
            A value of the requested type.

        Raises:
            LlmError: If the call fails or the response has no usable tool call.
            ConversionError: If the model's output does not fit `target`, or
                `target` has no usable JSON schema.
            TypeMismatchError: If the converted value fails the final check.
        """
        descriptor = TypeDescriptor(target)
        logger.debug(f"Structured generation for '{descriptor.name}'")

        request, is_originally_json_object = self.prepare_request(prompt, descriptor)

        try:
            response = self.transport(request, settings=self.settings, timeout=timeout)
        except AzureOpenAIError as exc:
            raise transport_failure(exc) from exc

        raw_arguments = extract_arguments(response)
        return reconcile(raw_arguments, descriptor, is_originally_json_object)
