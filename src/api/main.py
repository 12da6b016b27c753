"""AI Relay Web API - FastAPI application."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.ai.providers import build_registry
from src.ai.registry import ProviderRegistry
from src.config import Settings
from src.logging_setup import setup_logging
from src.search.web_search import SearchRegistry, build_search_registry
from src.tts.speaker import Speaker

from .routes import health, relay, search

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
    search_registry: SearchRegistry | None = None,
    speaker: Speaker | None = None,
) -> FastAPI:
    """Build the app. Anything not passed in is created from settings at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        cfg = settings or Settings.from_env()
        setup_logging(cfg.log_level)
        app.state.settings = cfg
        # Registries are populated once here and only read afterwards
        app.state.registry = registry or build_registry(cfg)
        app.state.search_registry = search_registry or build_search_registry()
        app.state.speaker = speaker or Speaker(cfg.tts_engine)
        logger.info("relay ready")
        yield
        # Shutdown - let in-flight playback finish
        await app.state.speaker.drain()

    app = FastAPI(title="AI Relay", lifespan=lifespan)
    app.include_router(health.router)
    app.include_router(relay.router)
    app.include_router(search.router)
    return app


app = create_app()
