"""Anthropic Claude provider with async streaming."""

from __future__ import annotations

from ..errors import TransportError, UpstreamStatusError
from ..llm_provider import ChunkEmitter
from ..scope import CancelScope

DEFAULT_SYSTEM = "You are a helpful assistant. Answer concisely."


class AnthropicProvider:
    """LLM provider using Anthropic's Claude API."""

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514") -> None:
        import anthropic

        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self._model = model

    @property
    def name(self) -> str:
        return f"Claude ({self._model.split('-')[1]})"

    async def stream(
        self, scope: CancelScope, prompt: str, emit: ChunkEmitter
    ) -> None:
        """Stream response text from Claude, one text delta per chunk."""
        import anthropic

        try:
            async with self._client.messages.stream(
                model=self._model,
                max_tokens=2048,
                system=DEFAULT_SYSTEM,
                messages=[{"role": "user", "content": prompt}],
            ) as stream:
                async for text in stream.text_stream:
                    scope.raise_if_cancelled()
                    if text:
                        await emit(text)
        except anthropic.APIStatusError as e:
            raise UpstreamStatusError(
                e.status_code, f"{e.status_code} {type(e).__name__}", str(e)[:4096]
            ) from e
        except anthropic.APIConnectionError as e:
            raise TransportError(f"anthropic: {e}") from e
