"""Pydantic models for API response types."""

from __future__ import annotations

from pydantic import BaseModel


class ProviderList(BaseModel):
    providers: list[str]


class SearchResults(BaseModel):
    query: str
    provider: str
    results: list[str]
