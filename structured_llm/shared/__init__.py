# Shared utilities for structured_llm

from .logs import setup_logging

# Azure OpenAI transport
from .azure_openai_client import (
    call_chat_completion,
    AzureOpenAIError,
    RateLimitError,
    APIError,
)
