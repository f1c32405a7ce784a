"""Sitemap and robots.txt router, mounted at the site root."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from sky_atlas_core.schemas import SitemapKind
from sky_atlas_seo.renderer import render_fallback, render_sitemap_index

from ..config import ApiSettings
from ..dependencies import get_settings, get_sitemap_service
from ..services.sitemap_service import SitemapService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sitemaps"])

XML_MEDIA_TYPE = "application/xml"

SitemapDep = Annotated[SitemapService, Depends(get_sitemap_service)]
SettingsDep = Annotated[ApiSettings, Depends(get_settings)]


def _xml(body: str, config: ApiSettings) -> Response:
    return Response(
        content=body,
        media_type=XML_MEDIA_TYPE,
        headers={"Cache-Control": f"public, max-age={config.sitemap_cache_max_age}"},
    )


def parse_sitemap_name(name: str) -> tuple[SitemapKind, int]:
    """``"flights-2"`` -> (FLIGHTS, 2); ``"airline-routes"`` -> (AIRLINE_ROUTES, 1).

    Raises:
        ValueError: for an unknown kind or a part number below 1.
    """
    kind_name, part_index = name, 1
    head, sep, tail = name.rpartition("-")
    if sep and tail.isdigit():
        kind_name, part_index = head, int(tail)
    if part_index < 1:
        msg = f"Sitemap part must be >= 1, got {part_index}"
        raise ValueError(msg)
    return SitemapKind(kind_name), part_index


@router.get("/sitemap.xml", response_class=Response)
async def sitemap_index(sitemaps: SitemapDep, config: SettingsDep) -> Response:
    try:
        body = await sitemaps.render_index()
    except Exception:
        logger.exception("Sitemap index failed; serving static-only index")
        site_url = config.site_url.rstrip("/")
        body = render_sitemap_index(
            [(f"{site_url}/sitemap-static.xml", sitemaps.clock.now.date())]
        )
    return _xml(body, config)


@router.get("/sitemap-static.xml", response_class=Response)
async def sitemap_static(sitemaps: SitemapDep, config: SettingsDep) -> Response:
    return _xml(sitemaps.render_static(), config)


@router.get("/sitemap-{name}.xml", response_class=Response)
async def sitemap_part(
    name: str, sitemaps: SitemapDep, config: SettingsDep
) -> Response:
    try:
        kind, part_index = parse_sitemap_name(name)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown sitemap: sitemap-{name}.xml",
        ) from exc

    try:
        body = await sitemaps.render_sitemap_part(kind, part_index)
    except Exception:
        logger.exception("Sitemap %s part %d failed", kind.value, part_index)
        body = render_fallback(config.site_url, kind, sitemaps.clock.default)
    return _xml(body, config)


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots_txt(sitemaps: SitemapDep) -> PlainTextResponse:
    return PlainTextResponse(sitemaps.robots_txt())
