"""Web search endpoint."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from src.search.web_search import SearchError

from ..models import SearchResults

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search")
def search(
    request: Request,
    q: str = Query(min_length=1),
    provider: str | None = None,
) -> SearchResults:
    name = provider if provider is not None else request.app.state.settings.web_search_provider
    registry = request.app.state.search_registry
    try:
        results = registry.search(name, q)
    except SearchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return SearchResults(query=q, provider=name or "mock", results=results)
