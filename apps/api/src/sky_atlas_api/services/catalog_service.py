"""Read-only queries against the entity catalog and the flight-leg store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, or_, select

from sky_atlas_core.schemas import (
    AirlineRecord,
    AirportRecord,
    FlightLegRecord,
    RouteRecord,
)
from sky_atlas_db.models import Airline, Airport, FlightLeg, Route
from sky_atlas_seo.partition import route_sort_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


def to_records(rows: Iterable[object], model: type[R]) -> list[R]:
    """Validate ORM rows into DTOs, skipping (and logging) malformed ones."""
    records: list[R] = []
    for row in rows:
        try:
            records.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed %s row %r: %d validation error(s)",
                model.__name__,
                row,
                exc.error_count(),
            )
    return records


class CatalogService:
    """Find-by-filter, sort, limit and distinct queries used by the pipeline.

    ``db`` serves the sequential catalog reads of a request. Leg samples are
    fetched concurrently, so each opens its own session from
    ``session_factory``.
    """

    def __init__(
        self,
        db: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self._db = db
        self._session_factory = session_factory

    @property
    def concurrent_reads(self) -> bool:
        """Whether leg samples may be fetched in parallel."""
        return self._session_factory is not None

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    async def list_airlines(self, limit: int) -> list[AirlineRecord]:
        stmt = (
            select(Airline)
            .order_by(func.coalesce(Airline.iata, Airline.code), Airline.id)
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return to_records(result.scalars().all(), AirlineRecord)

    async def list_airports(self, limit: int) -> list[AirportRecord]:
        """Every airport, active or not, busiest first."""
        stmt = (
            select(Airport)
            .order_by(func.coalesce(Airport.departure_count, 0).desc(), Airport.iata)
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return to_records(result.scalars().all(), AirportRecord)

    async def list_active_airports(self, limit: int) -> list[AirportRecord]:
        """Airports with any departures or arrivals, busiest first."""
        stmt = (
            select(Airport)
            .where(or_(Airport.departure_count > 0, Airport.arrival_count > 0))
            .order_by(func.coalesce(Airport.departure_count, 0).desc(), Airport.iata)
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return to_records(result.scalars().all(), AirportRecord)

    async def list_routes_with_flight_data(self, limit: int) -> list[RouteRecord]:
        """The busiest ``limit`` routes that carry flight data.

        Frequency is a free-text descriptor, so ranking happens on the parsed
        value after the read and the cut is taken from the ranked list.
        """
        stmt = (
            select(Route)
            .where(Route.has_flight_data.is_(True))
            .order_by(Route.origin_iata, Route.destination_iata)
        )
        result = await self._db.execute(stmt)
        routes = to_records(result.scalars().all(), RouteRecord)
        routes.sort(key=route_sort_key)
        return routes[:limit]

    async def hub_airport_codes(self, k: int) -> list[str]:
        """Top-``k`` airports by departure count, ties broken by IATA code."""
        if k <= 0:
            return []
        stmt = (
            select(Airport.iata)
            .where(Airport.departure_count > 0)
            .order_by(Airport.departure_count.desc(), Airport.iata)
            .limit(k)
        )
        result = await self._db.execute(stmt)
        return [code.upper() for code in result.scalars().all() if code]

    async def airports_with_routes(self) -> set[str]:
        """Distinct origins of routes that carry flight data."""
        stmt = (
            select(Route.origin_iata)
            .distinct()
            .where(Route.has_flight_data.is_(True))
        )
        result = await self._db.execute(stmt)
        return {code.upper() for code in result.scalars().all() if code}

    # ------------------------------------------------------------------
    # Single-entity lookups
    # ------------------------------------------------------------------

    async def get_airport(self, iata: str) -> AirportRecord | None:
        stmt = select(Airport).where(Airport.iata == iata.upper())
        row = (await self._db.execute(stmt)).scalars().first()
        records = to_records([row], AirportRecord) if row is not None else []
        return records[0] if records else None

    async def get_route(self, origin: str, destination: str) -> RouteRecord | None:
        stmt = select(Route).where(
            Route.origin_iata == origin.upper(),
            Route.destination_iata == destination.upper(),
        )
        row = (await self._db.execute(stmt)).scalars().first()
        records = to_records([row], RouteRecord) if row is not None else []
        return records[0] if records else None

    async def get_airline(self, code: str) -> AirlineRecord | None:
        code = code.upper()
        stmt = (
            select(Airline)
            .where(func.coalesce(Airline.iata, Airline.code) == code)
            .order_by(Airline.id)
        )
        row = (await self._db.execute(stmt)).scalars().first()
        records = to_records([row], AirlineRecord) if row is not None else []
        return records[0] if records else None

    # ------------------------------------------------------------------
    # Flight legs
    # ------------------------------------------------------------------

    async def fetch_leg_sample(
        self, airline_code: str, limit: int
    ) -> list[FlightLegRecord]:
        """Most recent ``limit`` legs of one airline, in a stable order."""
        stmt = (
            select(FlightLeg)
            .where(FlightLeg.airline_iata == airline_code.upper())
            .order_by(
                FlightLeg.departure_time.is_(None),
                FlightLeg.departure_time.desc(),
                FlightLeg.id,
            )
            .limit(limit)
        )
        if self._session_factory is None:
            result = await self._db.execute(stmt)
            return to_records(result.scalars().all(), FlightLegRecord)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return to_records(result.scalars().all(), FlightLegRecord)
