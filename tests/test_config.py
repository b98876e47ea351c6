from __future__ import annotations

import pytest

from structured_llm.config import DEFAULT_API_VERSION, settings_from_env

_ENV = {
    "AZURE_OPENAI_SERVICE_URL": "https://res.openai.azure.com/",
    "AZURE_OPENAI_API_KEY": "k",
    "AZURE_OPENAI_DEPLOYMENT_ID": "gpt-4o",
}

_OPTIONAL = (
    "AZURE_OPENAI_API_VERSION",
    "AZURE_OPENAI_TEMPERATURE",
    "AZURE_OPENAI_MAX_TOKENS",
    "AZURE_OPENAI_TIMEOUT",
)


@pytest.fixture()
def azure_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _OPTIONAL:
        monkeypatch.delenv(name, raising=False)
    for name, value in _ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


def test_settings_from_env_defaults(azure_env: pytest.MonkeyPatch) -> None:
    s = settings_from_env()
    assert s.service_url == "https://res.openai.azure.com"
    assert s.deployment_id == "gpt-4o"
    assert s.api_version == DEFAULT_API_VERSION
    assert s.temperature == 0.7
    assert s.max_tokens == 512


def test_settings_from_env_overrides(azure_env: pytest.MonkeyPatch) -> None:
    azure_env.setenv("AZURE_OPENAI_API_VERSION", "2024-06-01")
    azure_env.setenv("AZURE_OPENAI_TEMPERATURE", "0")
    azure_env.setenv("AZURE_OPENAI_MAX_TOKENS", "2048")
    azure_env.setenv("AZURE_OPENAI_TIMEOUT", "12.5")

    s = settings_from_env()
    assert s.api_version == "2024-06-01"
    assert s.temperature == 0.0
    assert s.max_tokens == 2048
    assert s.timeout == 12.5


@pytest.mark.parametrize("missing", sorted(_ENV))
def test_required_variables(azure_env: pytest.MonkeyPatch, missing: str) -> None:
    azure_env.delenv(missing)
    with pytest.raises(ValueError, match=missing):
        settings_from_env()
