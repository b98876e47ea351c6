# structured_llm: typed results from chat models through a forced tool call

from .prompts import Prompt, TextDocument
from .provider import AzureOpenAIModelProvider
from .structured import (
    StructuredOutputError,
    LlmError,
    ConversionError,
    TypeMismatchError,
    TypeDescriptor,
)
