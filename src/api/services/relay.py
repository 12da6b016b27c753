"""RelaySession - pumps prompts from one client connection through a provider.

One session owns one connection for its lifetime. Each inbound message (text or
binary frame) is one prompt; the provider's chunks are written back as they
arrive, followed by an optional error sentinel and always an end-of-stream
marker.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Protocol

from src.ai.errors import ClientConnectionError, ProviderError
from src.ai.registry import ProviderRegistry
from src.ai.scope import CancelScope
from src.tts.speaker import Speaker

logger = logging.getLogger(__name__)

END_MARKER = "__end__"
ERROR_PREFIX = "__error__: "

# Raw ASGI websocket message, e.g. {"type": "websocket.receive", "text": "..."}
Message = dict[str, Any]


class RelayConnection(Protocol):
    """The slice of a websocket the relay needs."""

    async def receive(self) -> Message: ...

    async def send_text(self, data: str) -> None: ...


class SessionState(str, Enum):
    IDLE = "idle"
    READING_PROMPT = "reading_prompt"
    STREAMING = "streaming"
    EMITTING_TERMINAL = "emitting_terminal"
    CLOSED = "closed"


class RelaySession:
    """Relay loop for a single client connection.

    The provider name is fixed when the session is created. A failed prompt
    cycle is reported to the client and the loop continues; only a failed read
    or a failed end-marker write ends the session.
    """

    def __init__(
        self,
        connection: RelayConnection,
        registry: ProviderRegistry,
        provider_name: str = "",
        speaker: Speaker | None = None,
    ) -> None:
        self._connection = connection
        self._registry = registry
        self._provider_name = provider_name
        self._speaker = speaker
        self.state = SessionState.IDLE

    @property
    def provider_name(self) -> str:
        return self._provider_name

    async def run(self) -> None:
        """Serve prompt cycles until the connection fails."""
        logger.info("ws: session opened (provider=%s)", self.provider_name or "mock")
        try:
            while True:
                self.state = SessionState.READING_PROMPT
                prompt = await self._read()
                await self.run_cycle(prompt)
        except ClientConnectionError as e:
            logger.info("ws: session closed (provider=%s): %s", self.provider_name or "mock", e)
        finally:
            self.state = SessionState.CLOSED

    async def run_cycle(self, prompt: str) -> None:
        """Stream one prompt and write its terminal marker(s).

        Raises:
            ClientConnectionError: If the end-of-stream marker can't be written.
        """
        self.state = SessionState.STREAMING
        scope = CancelScope()
        provider = self._registry.resolve(self.provider_name)
        logger.info(
            "ws: received prompt (provider=%s, chars=%d)", provider.name, len(prompt)
        )

        async def emit(chunk: str) -> None:
            if scope.cancelled:
                return
            try:
                await self._write(chunk)
            except ClientConnectionError as e:
                logger.warning("ws write error: %s", e)
                scope.cancel(f"client write failed: {e}")
                return
            if self._speaker is not None:
                self._speaker.speak(chunk)

        try:
            await provider.stream(scope, prompt, emit)
        except ProviderError as e:
            logger.warning("ai stream error (%s): %s", provider.name, e)
            await self._report_error(scope, e)
        except Exception as e:
            logger.exception("ai stream crashed (%s)", provider.name)
            await self._report_error(scope, e)

        self.state = SessionState.EMITTING_TERMINAL
        await self._write(END_MARKER)
        self.state = SessionState.IDLE

    async def _report_error(self, scope: CancelScope, error: Exception) -> None:
        description = str(error) or type(error).__name__
        try:
            await self._write(ERROR_PREFIX + description)
        except ClientConnectionError as e:
            logger.warning("ws write error on error sentinel: %s", e)
        scope.cancel(description)

    async def _read(self) -> str:
        """Read one prompt. Text and binary frames are both accepted."""
        try:
            message = await self._connection.receive()
        except Exception as e:
            raise ClientConnectionError(f"read failed: {e!r}") from e

        if message.get("type") == "websocket.disconnect":
            raise ClientConnectionError(f"client disconnected (code={message.get('code')})")
        text = message.get("text")
        if text is not None:
            return text
        data = message.get("bytes")
        if data is not None:
            return data.decode("utf-8", errors="replace")
        raise ClientConnectionError(f"read failed: unexpected message {message.get('type')!r}")

    async def _write(self, data: str) -> None:
        try:
            await self._connection.send_text(data)
        except Exception as e:
            raise ClientConnectionError(f"write failed: {e!r}") from e
