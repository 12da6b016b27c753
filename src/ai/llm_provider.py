"""LLM Provider protocol and the ChunkEmitter callback type."""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol, runtime_checkable

from .scope import CancelScope

ChunkEmitter = Callable[[str], Awaitable[None]]
"""Signature: await emit(chunk) - called once per text fragment, in order."""


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for providers that stream a prompt to completion."""

    @property
    def name(self) -> str:
        """Human-readable provider name (e.g. 'Mock', 'Ollama (llama3)')."""
        ...

    async def stream(
        self, scope: CancelScope, prompt: str, emit: ChunkEmitter
    ) -> None:
        """Stream generated text for ``prompt`` through ``emit``.

        Args:
            scope: Cancellation scope for this invocation only. Checked before
                every emission; once cancelled no further chunks are emitted.
            prompt: Non-empty prompt text.
            emit: Awaited once per chunk, strictly in generation order.

        Raises:
            ProviderError: A subclass describing the failure. Cancellation is
                reported as ``CancellationError`` carrying the scope's reason.
        """
        ...
