"""Tests for the Anthropic and OpenAI providers (SDK clients replaced with fakes)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import openai
import pytest

from src.ai.errors import CancellationError, TransportError, UpstreamStatusError
from src.ai.llm_provider import LLMProvider
from src.ai.providers.anthropic_provider import AnthropicProvider
from src.ai.providers.openai_provider import OpenAIProvider
from src.ai.scope import CancelScope

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class _FakeMessageStream:
    """Stands in for the context manager returned by messages.stream()."""

    def __init__(self, texts):
        self._texts = texts

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    @property
    def text_stream(self):
        return self._iter()

    async def _iter(self):
        for text in self._texts:
            yield text


async def _completion_chunks(chunks):
    for chunk in chunks:
        yield chunk


def _delta(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


def _status_error(cls, url, status_code):
    request = httpx.Request("POST", url)
    response = httpx.Response(status_code, request=request, text="overloaded")
    return cls("overloaded", response=response, body=None)


def _anthropic(texts=None, side_effect=None) -> AnthropicProvider:
    provider = AnthropicProvider(api_key="sk-ant-test")
    provider._client = MagicMock()
    provider._client.messages.stream = MagicMock(
        return_value=_FakeMessageStream(texts or []), side_effect=side_effect
    )
    return provider


def _openai(chunks=None, side_effect=None) -> OpenAIProvider:
    provider = OpenAIProvider(api_key="sk-test")
    provider._client = MagicMock()
    provider._client.chat.completions.create = AsyncMock(
        return_value=_completion_chunks(chunks or []), side_effect=side_effect
    )
    return provider


def test_sdk_providers_satisfy_protocol():
    assert isinstance(AnthropicProvider(api_key="sk-ant-test"), LLMProvider)
    assert isinstance(OpenAIProvider(api_key="sk-test"), LLMProvider)


# --- Anthropic ---


@pytest.mark.asyncio
async def test_anthropic_streams_text_and_skips_empty(collector):
    chunks, emit = collector
    provider = _anthropic(texts=["Hello", "", " world"])

    await provider.stream(CancelScope(), "hi", emit)

    assert chunks == ["Hello", " world"]
    _, kwargs = provider._client.messages.stream.call_args
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]


@pytest.mark.asyncio
async def test_anthropic_stops_after_cancellation():
    scope = CancelScope()
    chunks = []

    async def emit(chunk):
        chunks.append(chunk)
        scope.cancel("client write failed")

    provider = _anthropic(texts=["one", "two", "three"])
    with pytest.raises(CancellationError) as exc_info:
        await provider.stream(scope, "hi", emit)

    assert exc_info.value.reason == "client write failed"
    assert chunks == ["one"]


@pytest.mark.asyncio
async def test_anthropic_status_error_is_mapped(collector):
    chunks, emit = collector
    provider = _anthropic(side_effect=_status_error(anthropic.APIStatusError, ANTHROPIC_URL, 529))

    with pytest.raises(UpstreamStatusError) as exc_info:
        await provider.stream(CancelScope(), "hi", emit)

    assert exc_info.value.status_code == 529
    assert exc_info.value.status.startswith("529 ")
    assert chunks == []


@pytest.mark.asyncio
async def test_anthropic_connection_error_is_transport_error(collector):
    chunks, emit = collector
    error = anthropic.APIConnectionError(request=httpx.Request("POST", ANTHROPIC_URL))
    provider = _anthropic(side_effect=error)

    with pytest.raises(TransportError, match="anthropic:"):
        await provider.stream(CancelScope(), "hi", emit)
    assert chunks == []


# --- OpenAI ---


@pytest.mark.asyncio
async def test_openai_streams_deltas_and_skips_empty(collector):
    chunks, emit = collector
    provider = _openai(
        chunks=[
            _delta("Hello"),
            SimpleNamespace(choices=[]),
            _delta(None),
            _delta(""),
            _delta(" world"),
        ]
    )

    await provider.stream(CancelScope(), "hi", emit)

    assert chunks == ["Hello", " world"]
    _, kwargs = provider._client.chat.completions.create.call_args
    assert kwargs["stream"] is True
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]


@pytest.mark.asyncio
async def test_openai_stops_after_cancellation():
    scope = CancelScope()
    chunks = []

    async def emit(chunk):
        chunks.append(chunk)
        scope.cancel("client write failed")

    provider = _openai(chunks=[_delta("one"), _delta("two")])
    with pytest.raises(CancellationError) as exc_info:
        await provider.stream(scope, "hi", emit)

    assert exc_info.value.reason == "client write failed"
    assert chunks == ["one"]


@pytest.mark.asyncio
async def test_openai_status_error_is_mapped(collector):
    chunks, emit = collector
    provider = _openai(side_effect=_status_error(openai.APIStatusError, OPENAI_URL, 429))

    with pytest.raises(UpstreamStatusError) as exc_info:
        await provider.stream(CancelScope(), "hi", emit)

    assert exc_info.value.status_code == 429
    assert exc_info.value.status.startswith("429 ")
    assert chunks == []


@pytest.mark.asyncio
async def test_openai_connection_error_is_transport_error(collector):
    chunks, emit = collector
    error = openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL))
    provider = _openai(side_effect=error)

    with pytest.raises(TransportError, match="openai:"):
        await provider.stream(CancelScope(), "hi", emit)
    assert chunks == []
