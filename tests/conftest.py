"""Shared fixtures: isolate every test from the developer's environment."""

import pytest

_ENV_VARS = (
    "CHEMGPT_DEFAULT_MODEL",
    "CHEMGPT_USE_MOCK_AI",
    "CHEMGPT_REQUEST_TIMEOUT",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CHEMGPT_MOCK_DELAY_SECONDS", "0")


@pytest.fixture
def mock_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHEMGPT_USE_MOCK_AI", "true")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
