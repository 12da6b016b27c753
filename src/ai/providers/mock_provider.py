"""Mock provider - deterministic, network-free replies for local testing."""

from __future__ import annotations

import asyncio

from ..errors import EmptyInputError
from ..llm_provider import ChunkEmitter
from ..scope import CancelScope

CANNED_REPLY = ("Hello,", "this is a mock AI reply.", "Replace with a real provider.")
WINDOW_SIZE = 6


class MockProvider:
    """Echoes the prompt back in windows of six words.

    Short prompts (fewer than six words) get a fixed three-part canned reply
    instead. Both paths pause between emissions to simulate streaming.
    """

    def __init__(self, reply_delay: float = 0.25, window_delay: float = 0.2) -> None:
        self._reply_delay = reply_delay
        self._window_delay = window_delay

    @property
    def name(self) -> str:
        return "Mock"

    async def stream(
        self, scope: CancelScope, prompt: str, emit: ChunkEmitter
    ) -> None:
        if not prompt.strip():
            raise EmptyInputError("empty prompt")

        words = prompt.split()
        if len(words) < WINDOW_SIZE:
            chunks = list(CANNED_REPLY)
            delay = self._reply_delay
        else:
            chunks = [
                " ".join(words[i : i + WINDOW_SIZE])
                for i in range(0, len(words), WINDOW_SIZE)
            ]
            delay = self._window_delay

        for chunk in chunks:
            scope.raise_if_cancelled()
            await emit(chunk)
            if delay:
                await asyncio.sleep(delay)
