#!/usr/bin/env python3
"""Start the AI Relay Web API server."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from src.config import Settings

if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run(
        "src.api.main:app",
        host=settings.host,
        port=settings.port,
        reload="--reload" in sys.argv,
        reload_dirs=[str(project_root / "src")],
    )
