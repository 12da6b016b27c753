"""Pytest fixtures and config."""

import pytest

_PROVIDER_ENV = (
    "OLLAMA_ENDPOINT",
    "OLLAMA_MODEL",
    "OLLAMA_API_KEY",
    "OLLAMA_API_KEY_ENV",
    "HTTP_PROVIDER_ENDPOINT",
    "HTTP_PROVIDER_MODEL",
    "HTTP_PROVIDER_API_KEY_ENV",
    "HTTP_PROVIDER_STREAM",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "WEB_SEARCH_PROVIDER",
    "TTS_ENGINE",
    "RELAY_HOST",
    "RELAY_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def env_cleanup(monkeypatch):
    """Keep real provider keys and local .env values out of tests."""
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def collector():
    """Returns (chunks, emit): emit appends every chunk to the list."""
    chunks: list[str] = []

    async def emit(chunk: str) -> None:
        chunks.append(chunk)

    return chunks, emit
