"""Web search helpers - DuckDuckGo Instant Answer client plus a mock fallback."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import requests

MOCK_NAME = "mock"


class SearchError(Exception):
    """Search backend returned an error or an unreadable response."""


@runtime_checkable
class WebSearcher(Protocol):
    def search(self, query: str) -> list[str]:
        """Return result snippets for ``query``, best first."""
        ...


class MockWebSearcher:
    """Fallback searcher for local testing."""

    def search(self, query: str) -> list[str]:
        return [f"This is a mock search result for: {query}"]


class DuckDuckGoWebSearcher:
    """Client for DuckDuckGo's Instant Answer API (no API key required)."""

    BASE_URL = "https://api.duckduckgo.com/"

    def __init__(self, session: requests.Session | None = None, timeout: float = 10.0) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def search(self, query: str) -> list[str]:
        params = {"q": query, "format": "json", "no_redirect": "1", "no_html": "1"}
        try:
            response = self.session.get(self.BASE_URL, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise SearchError(f"duckduckgo: {e}") from e

        if not 200 <= response.status_code < 300:
            raise SearchError(
                f"duckduckgo: bad status {response.status_code} {response.reason} "
                f"body: {response.text[:4096]}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise SearchError(f"duckduckgo: invalid JSON: {e}") from e

        out = []
        if result.get("AbstractText"):
            out.append(f"{result['AbstractText']} ({result.get('AbstractURL', '')})")
        for topic in result.get("RelatedTopics") or []:
            # Grouped topics carry a "Topics" list instead of Text/FirstURL
            text = topic.get("Text")
            url = topic.get("FirstURL")
            if text and url:
                out.append(f"{text} ({url})")
        if not out:
            out.append("No results found.")
        return out


class SearchRegistry:
    """Name to searcher lookup; empty or unknown names resolve to mock."""

    def __init__(self) -> None:
        self._searchers: dict[str, WebSearcher] = {MOCK_NAME: MockWebSearcher()}

    def register(self, name: str, searcher: WebSearcher) -> None:
        self._searchers[name] = searcher

    def resolve(self, name: str | None) -> WebSearcher:
        return self._searchers.get(name or MOCK_NAME) or self._searchers[MOCK_NAME]

    def search(self, name: str | None, query: str) -> list[str]:
        return self.resolve(name).search(query)


def build_search_registry() -> SearchRegistry:
    registry = SearchRegistry()
    registry.register("duckduckgo", DuckDuckGoWebSearcher())
    return registry
