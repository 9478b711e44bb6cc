"""
FastAPI application factory.

The cache is constructed by the caller and attached to ``app.state`` so each
application (and each test) owns an independent store.
"""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from .middleware.cors import CORSHeadersMiddleware
from .middleware.error_handler import register_error_handlers
from .routes import api, system
from .services.cache import Cache
from .services.html import Html


def create_app(
    cache: Cache,
    port: int,
    *,
    html: Optional[Html] = None,
    debug: bool = False,
) -> FastAPI:
    app = FastAPI(title="KV Cache API", version="1.0.0")
    app.state.cache = cache
    app.state.port = port
    app.state.html = html or Html(debug=debug)

    app.add_middleware(CORSHeadersMiddleware)
    register_error_handlers(app)

    app.include_router(api.router)
    app.include_router(system.router)
    return app
