"""Runtime settings loaded from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class Settings:
    ollama_endpoint: str = "http://localhost:11434/api/generate"
    ollama_model: str = "llama3"
    ollama_api_key_env: str = "OLLAMA_API_KEY"

    http_endpoint: str = ""
    http_model: str = ""
    http_api_key_env: str = ""
    http_stream: bool = True

    anthropic_api_key: str = ""
    openai_api_key: str = ""

    web_search_provider: str = "duckduckgo"
    tts_engine: str = "espeak"

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "Settings":
        """Build settings from environment variables.

        Values already present in the environment take precedence over the
        .env file.
        """
        load_dotenv(env_file or PROJECT_ROOT / ".env")
        return cls(
            ollama_endpoint=os.getenv("OLLAMA_ENDPOINT") or cls.ollama_endpoint,
            ollama_model=os.getenv("OLLAMA_MODEL") or cls.ollama_model,
            ollama_api_key_env=os.getenv("OLLAMA_API_KEY_ENV") or cls.ollama_api_key_env,
            http_endpoint=os.getenv("HTTP_PROVIDER_ENDPOINT", ""),
            http_model=os.getenv("HTTP_PROVIDER_MODEL", ""),
            http_api_key_env=os.getenv("HTTP_PROVIDER_API_KEY_ENV", ""),
            http_stream=_env_bool("HTTP_PROVIDER_STREAM", True),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            web_search_provider=os.getenv("WEB_SEARCH_PROVIDER") or cls.web_search_provider,
            # Empty TTS_ENGINE disables playback, so don't fall back here
            tts_engine=os.getenv("TTS_ENGINE", cls.tts_engine),
            host=os.getenv("RELAY_HOST") or cls.host,
            port=_env_int("RELAY_PORT", cls.port),
            log_level=os.getenv("LOG_LEVEL") or cls.log_level,
        )
