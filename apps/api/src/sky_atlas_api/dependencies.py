"""FastAPI dependency injection providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from sky_atlas_db.database import get_db as _db_dependency
from sky_atlas_db.database import get_session_factory as _session_factory

from .config import ApiSettings, settings
from .services.catalog_service import CatalogService
from .services.indexing_service import IndexingService
from .services.sitemap_service import SitemapService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Re-export the DB dependencies unchanged.
get_db = _db_dependency
get_session_factory = _session_factory


def get_settings() -> ApiSettings:
    return settings


async def get_catalog_service(
    db: Annotated["AsyncSession", Depends(get_db)],
    session_factory: Annotated[
        "async_sessionmaker[AsyncSession] | None", Depends(get_session_factory)
    ],
) -> CatalogService:
    return CatalogService(db, session_factory)


async def get_indexing_service(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    config: Annotated[ApiSettings, Depends(get_settings)],
) -> IndexingService:
    return IndexingService(catalog, config)


async def get_sitemap_service(
    indexing: Annotated[IndexingService, Depends(get_indexing_service)],
) -> SitemapService:
    """Fresh pipeline per request; nothing survives across requests."""
    return SitemapService(indexing)
