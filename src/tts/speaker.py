"""Best-effort local speech playback of streamed text.

``Speaker.speak`` returns immediately; playback happens in a detached asyncio
task running the speech engine as a subprocess. Failures are logged and never
reach the caller.
"""

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


class Speaker:
    def __init__(self, engine: str = "espeak") -> None:
        self._engine = engine.strip()
        self._tasks: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return bool(self._engine)

    def speak(self, text: str) -> None:
        """Schedule playback of ``text`` without waiting for it."""
        if not self.enabled or not text.strip():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("tts: no running event loop, skipping playback")
            return
        task = loop.create_task(self._play(text))
        # Keep a reference until done so the task isn't garbage collected
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _play(self, text: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                self._engine,
                text,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            code = await proc.wait()
        except OSError as e:
            logger.debug("tts: %s not available, falling back to log output: %s (text=%r)", self._engine, e, text)
            return
        if code != 0:
            logger.debug("tts: %s exited with %d (text=%r)", self._engine, code, text)
            return
        logger.debug("tts: spoke text with %s", self._engine)

    async def drain(self) -> None:
        """Wait for pending playback tasks (used on shutdown)."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
