# Forced tool-call pipeline: normalize -> tools -> request | extract -> reconcile

from .errors import (
    StructuredOutputError,
    LlmError,
    ConversionError,
    TypeMismatchError,
)
from .schemas import SchemaResponse, ChatCompletionRequest, ChatCompletionResponse
from .normalizer import normalize
from .tools import build_tool, build_tool_choice
from .request import build_request
from .extractor import extract_arguments, transport_failure
from .types import TypeDescriptor
from .reconciler import reconcile
