from __future__ import annotations

import pytest

from structured_llm.config import AzureOpenAISettings


@pytest.fixture()
def settings() -> AzureOpenAISettings:
    return AzureOpenAISettings(
        service_url="https://unit-test.openai.azure.com",
        api_key="test-key",
        deployment_id="gpt-4o",
        api_version="2023-08-01-preview",
        temperature=0.2,
        max_tokens=256,
        timeout=5,
    )
