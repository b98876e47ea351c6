"""Central configuration for the structured output adapter.

Contains:
- Azure OpenAI connection settings (loaded from .env)
- Sampling defaults sent with every chat completion
- Forced tool-call constants shared by the request and response paths
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ============================================================================
# PROJECT PATHS
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")


# ============================================================================
# AZURE OPENAI SETTINGS
# ============================================================================

DEFAULT_API_VERSION = "2023-08-01-preview"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 512
DEFAULT_TIMEOUT = 60  # seconds, handed to requests


@dataclass(frozen=True)
class AzureOpenAISettings:
    """Connection and sampling settings for one Azure OpenAI deployment.

    Attributes:
        service_url: Resource endpoint, e.g. "https://my-res.openai.azure.com".
        api_key: Key sent in the `api-key` header.
        deployment_id: Name of the model deployment to call.
        api_version: Value of the `api-version` query parameter.
        temperature: Sampling temperature for every request.
        max_tokens: Completion token limit for every request.
        timeout: Request timeout in seconds.
    """

    service_url: str
    api_key: str
    deployment_id: str
    api_version: str = DEFAULT_API_VERSION
    temperature: Optional[float] = DEFAULT_TEMPERATURE
    max_tokens: Optional[int] = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT


def _required(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} not set in environment")
    return value


def settings_from_env() -> AzureOpenAISettings:
    """Build settings from AZURE_OPENAI_* environment variables.

    Raises:
        ValueError: If the service URL, API key or deployment id is missing.
    """
    return AzureOpenAISettings(
        service_url=_required("AZURE_OPENAI_SERVICE_URL").rstrip("/"),
        api_key=_required("AZURE_OPENAI_API_KEY"),
        deployment_id=_required("AZURE_OPENAI_DEPLOYMENT_ID"),
        api_version=os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_API_VERSION),
        temperature=float(os.getenv("AZURE_OPENAI_TEMPERATURE", DEFAULT_TEMPERATURE)),
        max_tokens=int(os.getenv("AZURE_OPENAI_MAX_TOKENS", DEFAULT_MAX_TOKENS)),
        timeout=float(os.getenv("AZURE_OPENAI_TIMEOUT", DEFAULT_TIMEOUT)),
    )


# ============================================================================
# FORCED TOOL CALL
# ============================================================================

# Name of the single synthetic tool the model is forced to call
TOOL_NAME = "getResults"
TOOL_DESCRIPTION = (
    "This tool is used to call and return the results from the LLM. "
    "Call it with arguments that match the parameters schema exactly."
)

# Property that carries a non-object result inside the wrapper schema
RESULT_KEY = "result"

# Top-level keys kept on the wrapper when a non-object schema is wrapped
SCHEMA_METADATA_KEYS: frozenset[str] = frozenset(
    {"$schema", "$id", "$anchor", "$comment", "title", "description"}
)
