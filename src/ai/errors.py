"""Error taxonomy for provider invocations and client sessions."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for every failure a provider can report as its outcome."""


class ConfigurationError(ProviderError):
    """Provider is misconfigured (e.g. no endpoint)."""


class EmptyInputError(ProviderError):
    """Prompt was empty or whitespace-only."""


class TransportError(ProviderError):
    """Network failure while talking to the upstream backend."""


class UpstreamStatusError(ProviderError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, status: str, body_snippet: str) -> None:
        self.status_code = status_code
        self.status = status
        self.body_snippet = body_snippet
        super().__init__(f"bad status {status} body: {body_snippet}")


class ParseError(ProviderError):
    """A single incremental record could not be decoded.

    Never surfaces as an invocation outcome: the HTTP provider logs it and
    skips the record.
    """


class CancellationError(ProviderError):
    """The invocation's scope was cancelled; carries the scope's reason."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ClientConnectionError(Exception):
    """Reading from or writing to the client connection failed."""
