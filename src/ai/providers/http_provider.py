"""Generic HTTP provider - POSTs the prompt to an endpoint and streams the reply.

Supports two response framings:

- single-response: the whole body is one chunk.
- incremental: newline-delimited records, one chunk per non-blank record.
  Ollama-compatible endpoints send each record as a JSON object whose
  ``response`` field carries the text.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

import httpx

from ..errors import (
    ConfigurationError,
    ParseError,
    TransportError,
    UpstreamStatusError,
)
from ..llm_provider import ChunkEmitter
from ..scope import CancelScope

logger = logging.getLogger(__name__)

SNIPPET_LIMIT = 4096


@dataclass
class HTTPProviderConfig:
    endpoint: str
    model: str = ""
    api_key_env: str = ""  # name of the env var holding the bearer key
    stream_enabled: bool = False
    label: str = "HTTP"


def is_ollama_endpoint(endpoint: str) -> bool:
    """Heuristic: URL mentions ollama or its default port."""
    lowered = endpoint.lower()
    return "ollama" in lowered or "11434" in lowered


def parse_ollama_record(record: str) -> str:
    """Extract the ``response`` text from one Ollama JSON line.

    Returns an empty string when the field is missing or empty.

    Raises:
        ParseError: If the record is not a JSON object with a string field.
    """
    try:
        data = json.loads(record)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON record: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("record is not a JSON object")
    text = data.get("response", "")
    if not isinstance(text, str):
        raise ParseError("response field is not a string")
    return text


class HTTPProvider:
    """Provider backed by a POST-based generation endpoint."""

    def __init__(
        self,
        config: HTTPProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def name(self) -> str:
        if self._config.model:
            return f"{self._config.label} ({self._config.model})"
        return self._config.label

    @property
    def config(self) -> HTTPProviderConfig:
        return self._config

    def _build_body(self, prompt: str) -> dict:
        body: dict = {"prompt": prompt}
        if self._config.model:
            body["model"] = self._config.model
        if self._config.stream_enabled:
            body["stream"] = True
        return body

    def _build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.api_key_env:
            key = os.getenv(self._config.api_key_env, "")
            if key:
                headers["Authorization"] = f"Bearer {key}"
        return headers

    async def stream(
        self, scope: CancelScope, prompt: str, emit: ChunkEmitter
    ) -> None:
        endpoint = self._config.endpoint.strip()
        if not endpoint:
            raise ConfigurationError("http provider: endpoint is empty")

        body = json.dumps(self._build_body(prompt))
        headers = self._build_headers()

        try:
            # No timeout: the caller's scope governs the request lifetime
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(None), transport=self._transport
            ) as client:
                async with client.stream(
                    "POST", endpoint, content=body, headers=headers
                ) as response:
                    if not response.is_success:
                        snippet = await _read_snippet(response)
                        raise UpstreamStatusError(
                            response.status_code,
                            f"{response.status_code} {response.reason_phrase}",
                            snippet,
                        )
                    if self._config.stream_enabled:
                        await self._emit_records(scope, response, emit, endpoint)
                    else:
                        await self._emit_whole(scope, response, emit)
        except httpx.TransportError as e:
            logger.warning("http provider: transport error: %s", e)
            raise TransportError(f"http provider: {e}") from e

    async def _emit_whole(
        self, scope: CancelScope, response: httpx.Response, emit: ChunkEmitter
    ) -> None:
        data = await response.aread()
        text = data.decode(response.encoding or "utf-8", errors="replace")
        scope.raise_if_cancelled()
        if text:
            await emit(text)

    async def _emit_records(
        self,
        scope: CancelScope,
        response: httpx.Response,
        emit: ChunkEmitter,
        endpoint: str,
    ) -> None:
        ollama = is_ollama_endpoint(endpoint)
        records = response.aiter_lines()
        try:
            while True:
                scope.raise_if_cancelled()
                try:
                    line = await anext(records)
                except StopAsyncIteration:
                    return

                line = line.strip()
                if not line:
                    continue

                if not ollama:
                    await emit(line)
                    continue

                try:
                    text = parse_ollama_record(line)
                except ParseError as e:
                    logger.warning("http provider: skipping record: %s", e)
                    continue
                if text:
                    await emit(text)
        finally:
            await records.aclose()


async def _read_snippet(response: httpx.Response) -> str:
    """Read at most SNIPPET_LIMIT bytes of the body for error reporting."""
    buf = b""
    async for data in response.aiter_bytes():
        buf += data
        if len(buf) >= SNIPPET_LIMIT:
            break
    return buf[:SNIPPET_LIMIT].decode("utf-8", errors="replace")
