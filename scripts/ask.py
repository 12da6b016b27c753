#!/usr/bin/env python3
"""
Ask Script

Streams one prompt through a registered provider and prints chunks as they
arrive. Useful for checking a provider without opening a websocket.

Usage:
    python scripts/ask.py --provider ollama "What are some common concurrency patterns?"
    python scripts/ask.py --list
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.ai.errors import ProviderError
from src.ai.providers import build_registry
from src.ai.scope import CancelScope
from src.config import Settings
from src.logging_setup import setup_logging


async def ask(provider_name: str, prompt: str) -> int:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    registry = build_registry(settings)
    provider = registry.resolve(provider_name)
    scope = CancelScope()

    async def emit(chunk: str) -> None:
        print(chunk, end=" ", flush=True)

    print(f"[{provider.name}]")
    try:
        await provider.stream(scope, prompt, emit)
    except ProviderError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except asyncio.CancelledError:
        scope.cancel("interrupted")
        raise
    print()
    return 0


def main():
    parser = argparse.ArgumentParser(description="Stream a prompt through an AI provider")
    parser.add_argument("prompt", nargs="*", help="Prompt text")
    parser.add_argument("--provider", default="", help="Provider name (default: mock)")
    parser.add_argument("--list", action="store_true", help="List registered providers and exit")
    args = parser.parse_args()

    if args.list:
        registry = build_registry(Settings.from_env())
        for name in registry.names():
            print(f"  {name:<12} {registry.resolve(name).name}")
        return 0

    prompt = " ".join(args.prompt)
    if not prompt:
        parser.error("a prompt is required")

    try:
        return asyncio.run(ask(args.provider, prompt))
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
