"""Provider registry factory - registers built-in providers from settings."""

from __future__ import annotations

import logging

from ...config import Settings
from ..registry import ProviderRegistry
from .http_provider import HTTPProvider, HTTPProviderConfig
from .mock_provider import MockProvider

logger = logging.getLogger(__name__)


def build_registry(settings: Settings) -> ProviderRegistry:
    """Create the process-wide registry.

    Always registers ``mock`` and ``ollama``. ``http``, ``anthropic`` and
    ``openai`` are registered only when configured.
    """
    registry = ProviderRegistry(mock=MockProvider())

    registry.register(
        "ollama",
        HTTPProvider(
            HTTPProviderConfig(
                endpoint=settings.ollama_endpoint,
                model=settings.ollama_model,
                api_key_env=settings.ollama_api_key_env,
                stream_enabled=True,
                label="Ollama",
            )
        ),
    )

    if settings.http_endpoint:
        registry.register(
            "http",
            HTTPProvider(
                HTTPProviderConfig(
                    endpoint=settings.http_endpoint,
                    model=settings.http_model,
                    api_key_env=settings.http_api_key_env,
                    stream_enabled=settings.http_stream,
                )
            ),
        )

    if settings.anthropic_api_key:
        from .anthropic_provider import AnthropicProvider

        registry.register("anthropic", AnthropicProvider(api_key=settings.anthropic_api_key))

    if settings.openai_api_key:
        from .openai_provider import OpenAIProvider

        registry.register("openai", OpenAIProvider(api_key=settings.openai_api_key))

    logger.info("registered providers: %s", ", ".join(registry.names()))
    return registry
