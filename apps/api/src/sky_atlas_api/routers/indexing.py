"""Page-facing indexing decisions and the index health report."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from sky_atlas_seo.health import IndexHealthReport

from ..dependencies import get_indexing_service, get_sitemap_service
from ..schemas.common import ErrorResponse
from ..schemas.indexing import DecisionResponse
from ..services.indexing_service import EntityNotFoundError, IndexingService
from ..services.sitemap_service import SitemapService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/indexing",
    tags=["indexing"],
    responses={404: {"model": ErrorResponse}},
)

IndexingDep = Annotated[IndexingService, Depends(get_indexing_service)]
SitemapDep = Annotated[SitemapService, Depends(get_sitemap_service)]


def _not_found(exc: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/routes/{origin}/{destination}", response_model=DecisionResponse)
async def route_decision(
    origin: str, destination: str, indexing: IndexingDep
) -> DecisionResponse:
    try:
        decision = await indexing.route_decision(origin, destination)
    except EntityNotFoundError as exc:
        raise _not_found(exc) from exc
    return DecisionResponse.from_decision(decision)


@router.get("/airports/{iata}", response_model=DecisionResponse)
async def airport_decision(iata: str, indexing: IndexingDep) -> DecisionResponse:
    try:
        decision = await indexing.airport_decision(iata)
    except EntityNotFoundError as exc:
        raise _not_found(exc) from exc
    return DecisionResponse.from_decision(decision)


@router.get(
    "/airlines/{code}/routes/{origin}/{destination}",
    response_model=DecisionResponse,
)
async def airline_route_decision(
    code: str, origin: str, destination: str, indexing: IndexingDep
) -> DecisionResponse:
    try:
        decision = await indexing.airline_route_decision(code, origin, destination)
    except EntityNotFoundError as exc:
        raise _not_found(exc) from exc
    return DecisionResponse.from_decision(decision)


@router.get("/airlines/{code}/airports/{iata}", response_model=DecisionResponse)
async def airline_airport_decision(
    code: str, iata: str, indexing: IndexingDep
) -> DecisionResponse:
    try:
        decision = await indexing.airline_airport_decision(code, iata)
    except EntityNotFoundError as exc:
        raise _not_found(exc) from exc
    return DecisionResponse.from_decision(decision)


@router.get("/health", response_model=IndexHealthReport)
async def index_health(sitemaps: SitemapDep) -> IndexHealthReport:
    report = await sitemaps.health_report()
    logger.info(
        "Index health: %d/%d indexable", report.indexable, report.total
    )
    return report
