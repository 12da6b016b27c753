"""OpenAI provider with async streaming."""

from __future__ import annotations

from ..errors import TransportError, UpstreamStatusError
from ..llm_provider import ChunkEmitter
from ..scope import CancelScope


class OpenAIProvider:
    """LLM provider using OpenAI's API."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini") -> None:
        from openai import AsyncOpenAI

        self._client = AsyncOpenAI(api_key=api_key)
        self._model = model

    @property
    def name(self) -> str:
        return f"OpenAI ({self._model})"

    async def stream(
        self, scope: CancelScope, prompt: str, emit: ChunkEmitter
    ) -> None:
        """Stream response tokens from OpenAI."""
        import openai

        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=2048,
                stream=True,
            )

            async for chunk in stream:
                scope.raise_if_cancelled()
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                if delta.content:
                    await emit(delta.content)
        except openai.APIStatusError as e:
            raise UpstreamStatusError(
                e.status_code, f"{e.status_code} {type(e).__name__}", str(e)[:4096]
            ) from e
        except openai.APIConnectionError as e:
            raise TransportError(f"openai: {e}") from e
