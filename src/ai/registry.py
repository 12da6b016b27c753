"""ProviderRegistry - name to provider lookup with a mock fallback."""

from __future__ import annotations

import threading

from .llm_provider import LLMProvider

MOCK_NAME = "mock"


class ProviderRegistry:
    """Maps provider names to provider instances.

    Populated once at startup, then read concurrently by every session.
    Resolution never fails: empty or unknown names fall back to the mock
    entry, which is always present.
    """

    def __init__(self, mock: LLMProvider | None = None) -> None:
        if mock is None:
            from .providers.mock_provider import MockProvider

            mock = MockProvider()
        self._providers: dict[str, LLMProvider] = {MOCK_NAME: mock}
        self._lock = threading.Lock()

    def register(self, name: str, provider: LLMProvider) -> None:
        """Insert or overwrite a provider. Last writer wins."""
        with self._lock:
            self._providers[name] = provider

    def resolve(self, name: str | None) -> LLMProvider:
        provider = self._providers.get(name or MOCK_NAME)
        if provider is None:
            return self._providers[MOCK_NAME]
        return provider

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers
