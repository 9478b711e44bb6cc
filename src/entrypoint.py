"""
Process entry point: build the cache and application from the environment
and serve it with uvicorn.

    python -m src.entrypoint
"""
from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from .config import Settings, load_settings
from .index import create_app
from .services.cache import Cache
from .utils.log_setup import setup_logging

logger = logging.getLogger(__name__)


def build_app(settings: Settings) -> FastAPI:
    cache = Cache(override=settings.allow_override, debug=settings.debug)
    return create_app(cache, settings.port, debug=settings.debug)


def main() -> None:
    settings = load_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    app = build_app(settings)
    logger.info(
        f"Server running on {settings.host}:{settings.port} "
        f"(override={settings.allow_override}, env={settings.python_env})"
    )
    # uvicorn installs SIGINT/SIGTERM handlers and returns after a graceful shutdown
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    logger.info(f"Shutting down server running on {settings.port}")


if __name__ == "__main__":
    main()
