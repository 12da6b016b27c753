"""CancelScope - cooperative, per-invocation cancellation token."""

from __future__ import annotations

from .errors import CancellationError

DEFAULT_REASON = "context canceled"


class CancelScope:
    """Cancellation token handed to a provider for exactly one invocation.

    Cancellation is cooperative: providers call ``raise_if_cancelled()`` before
    each emission or record read instead of being interrupted.
    """

    def __init__(self) -> None:
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str = DEFAULT_REASON) -> None:
        """Cancel the scope. The first reason wins; later calls are no-ops."""
        if self._reason is None:
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        if self._reason is not None:
            raise CancellationError(self._reason)
