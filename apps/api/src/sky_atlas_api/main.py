"""FastAPI application factory."""

from __future__ import annotations

import os

from sky_atlas_api.config import settings

# Propagate DB URL so sky_atlas_db.database picks it up via os.getenv.
os.environ.setdefault("DATABASE_URL", settings.database_url)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sky_atlas_api.routers import indexing, sitemaps


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title="Sky Atlas API",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # JSON API under /api/v1; sitemaps and robots.txt at the site root
    _prefix = "/api/v1"
    app.include_router(indexing.router, prefix=_prefix)
    app.include_router(sitemaps.router)

    return app


app = create_app()
