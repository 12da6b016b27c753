"""Relay WebSocket endpoint - streams provider output back to the client."""

from __future__ import annotations

import contextlib

from fastapi import APIRouter, Request, WebSocket
from starlette.websockets import WebSocketState

from ..models import ProviderList
from ..services.relay import RelaySession

router = APIRouter(tags=["relay"])


@router.websocket("/ws/ai")
async def relay_websocket(websocket: WebSocket):
    await websocket.accept()

    # Provider is chosen once per connection, e.g. ?provider=ollama
    provider = websocket.query_params.get("provider", "")
    session = RelaySession(
        websocket,
        registry=websocket.app.state.registry,
        provider_name=provider,
        speaker=websocket.app.state.speaker,
    )
    try:
        await session.run()
    finally:
        if websocket.client_state == WebSocketState.CONNECTED:
            with contextlib.suppress(Exception):
                await websocket.close()


@router.get("/api/providers")
def list_providers(request: Request) -> ProviderList:
    registry = request.app.state.registry
    return ProviderList(providers=registry.names())
