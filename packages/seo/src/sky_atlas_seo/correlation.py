"""Derive airline -> routes and airline -> airports relations from flight legs.

Neither relation is stored. Each pipeline run scans a capped sample of every
airline's legs and rebuilds both maps from scratch.

The sample cap is a deliberate recall/latency trade-off: an airline with more
legs than the cap may under-report rare routes or airports. The approximation
is accepted; raising the caps trades request latency for recall.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

from pydantic import BaseModel, Field

from sky_atlas_core.schemas import (
    AirlineAirportLink,
    AirlineRouteLink,
    FlightLegRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_ROUTE_SAMPLE_CAP = 1000
DEFAULT_AIRPORT_SAMPLE_CAP = 2000
DEFAULT_MAX_CONCURRENCY = 10

LegFetcher = Callable[[str, int], Awaitable[list[FlightLegRecord]]]
"""``async (airline_code, limit) -> legs`` returning a deterministic sample."""


class AirlineRelations(BaseModel):
    """Request-scoped correlation result."""

    routes: dict[str, set[str]] = Field(default_factory=dict)
    airports: dict[str, set[str]] = Field(default_factory=dict)
    failed: set[str] = Field(default_factory=set)

    def route_links(self) -> list[AirlineRouteLink]:
        """Links ordered by airline code, then route key."""
        links: list[AirlineRouteLink] = []
        for code in sorted(self.routes):
            for route_key in sorted(self.routes[code]):
                origin, destination = route_key.split("-", 1)
                links.append(
                    AirlineRouteLink(
                        airline_code=code,
                        origin_iata=origin,
                        destination_iata=destination,
                    )
                )
        return links

    def airport_links(self) -> list[AirlineAirportLink]:
        """Links ordered by airline code, then airport code."""
        return [
            AirlineAirportLink(airline_code=code, airport_iata=iata)
            for code in sorted(self.airports)
            for iata in sorted(self.airports[code])
        ]


def collect_route_keys(legs: Iterable[FlightLegRecord]) -> set[str]:
    """``ORIGIN-DEST`` keys of legs that carry both endpoint codes."""
    return {
        f"{leg.origin_iata}-{leg.destination_iata}"
        for leg in legs
        if leg.origin_iata and leg.destination_iata
    }


def collect_airports(legs: Iterable[FlightLegRecord]) -> set[str]:
    """Both endpoint codes of legs that carry both endpoint codes."""
    airports: set[str] = set()
    for leg in legs:
        if leg.origin_iata and leg.destination_iata:
            airports.add(leg.origin_iata)
            airports.add(leg.destination_iata)
    return airports


class CorrelationEngine:
    """Fan out one bounded leg query per airline and fold the results.

    At most ``max_concurrency`` sub-queries are in flight at once. A failing
    sub-query leaves that airline with empty relations; the rest of the run
    continues.
    """

    def __init__(
        self,
        fetch_legs: LegFetcher,
        *,
        route_sample_cap: int = DEFAULT_ROUTE_SAMPLE_CAP,
        airport_sample_cap: int = DEFAULT_AIRPORT_SAMPLE_CAP,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        if max_concurrency < 1:
            msg = "max_concurrency must be at least 1"
            raise ValueError(msg)
        self._fetch_legs = fetch_legs
        self._route_cap = max(route_sample_cap, 0)
        self._airport_cap = max(airport_sample_cap, 0)
        self._max_concurrency = max_concurrency

    @property
    def sample_limit(self) -> int:
        return max(self._route_cap, self._airport_cap)

    async def correlate(self, airline_codes: Iterable[str]) -> AirlineRelations:
        """Build fresh relation maps for the given airline codes."""
        codes = sorted({code.upper() for code in airline_codes if code})
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _sample(code: str) -> tuple[str, list[FlightLegRecord] | None]:
            async with semaphore:
                try:
                    legs = await self._fetch_legs(code, self.sample_limit)
                except Exception:
                    logger.warning(
                        "Leg sample for airline %s failed; treating as empty",
                        code,
                        exc_info=True,
                    )
                    return code, None
            return code, legs

        samples = await asyncio.gather(*(_sample(code) for code in codes))

        relations = AirlineRelations()
        for code, legs in samples:
            if legs is None:
                relations.failed.add(code)
                legs = []
            relations.routes[code] = collect_route_keys(legs[: self._route_cap])
            relations.airports[code] = collect_airports(legs[: self._airport_cap])

        logger.info(
            "Correlated %d airlines (%d failed): %d route links, %d airport links",
            len(codes),
            len(relations.failed),
            sum(len(v) for v in relations.routes.values()),
            sum(len(v) for v in relations.airports.values()),
        )
        return relations
