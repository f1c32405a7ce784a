"""Per-request indexing policy and single-entity decisions.

The sitemap pipeline and the page-facing decision endpoints both obtain their
:class:`IndexabilityPolicy` from here, so they always agree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sky_atlas_core.schemas import AirlineAirportLink, AirlineRouteLink
from sky_atlas_seo.correlation import (
    CorrelationEngine,
    collect_airports,
    collect_route_keys,
)
from sky_atlas_seo.indexability import IndexabilityPolicy
from sky_atlas_seo.roles import RoleAssigner

from ..config import ApiSettings, settings

if TYPE_CHECKING:
    from sky_atlas_core.schemas import IndexabilityDecision

    from .catalog_service import CatalogService

logger = logging.getLogger(__name__)


class EntityNotFoundError(LookupError):
    """Raised when the entity a decision is requested for does not exist."""


class IndexingService:
    """Builds the policy for one request and answers single-entity lookups."""

    def __init__(
        self,
        catalog: CatalogService,
        config: ApiSettings = settings,
    ) -> None:
        self._catalog = catalog
        self._config = config
        self._policy: IndexabilityPolicy | None = None

    @property
    def catalog(self) -> CatalogService:
        return self._catalog

    @property
    def config(self) -> ApiSettings:
        return self._config

    async def policy(self) -> IndexabilityPolicy:
        """Policy for this request; hub set and route origins are read once."""
        if self._policy is None:
            hubs = await self._catalog.hub_airport_codes(
                self._config.hub_airport_count
            )
            origins = await self._catalog.airports_with_routes()
            self._policy = IndexabilityPolicy(
                RoleAssigner(hubs),
                airports_with_routes=origins,
                derived_link_policy=self._config.derived_link_policy,
            )
            logger.debug(
                "Indexing policy built: %d hubs, %d airports with routes",
                len(hubs),
                len(origins),
            )
        return self._policy

    def correlation_engine(self) -> CorrelationEngine:
        concurrency = (
            self._config.correlation_concurrency
            if self._catalog.concurrent_reads
            else 1
        )
        return CorrelationEngine(
            self._catalog.fetch_leg_sample,
            route_sample_cap=self._config.route_leg_sample_cap,
            airport_sample_cap=self._config.airport_leg_sample_cap,
            max_concurrency=concurrency,
        )

    # ------------------------------------------------------------------
    # Single-entity decisions
    # ------------------------------------------------------------------

    async def route_decision(
        self, origin: str, destination: str
    ) -> IndexabilityDecision:
        route = await self._catalog.get_route(origin, destination)
        if route is None:
            msg = f"Route {origin.upper()}-{destination.upper()} not found"
            raise EntityNotFoundError(msg)
        return (await self.policy()).evaluate(route)

    async def airport_decision(self, iata: str) -> IndexabilityDecision:
        airport = await self._catalog.get_airport(iata)
        if airport is None:
            msg = f"Airport {iata.upper()} not found"
            raise EntityNotFoundError(msg)
        return (await self.policy()).evaluate(airport)

    async def airline_route_decision(
        self, code: str, origin: str, destination: str
    ) -> IndexabilityDecision:
        airline_code = await self._airline_code(code)
        link = AirlineRouteLink(
            airline_code=airline_code,
            origin_iata=origin.upper(),
            destination_iata=destination.upper(),
        )
        legs = await self._catalog.fetch_leg_sample(
            airline_code, self._config.route_leg_sample_cap
        )
        served = link.route_key in collect_route_keys(legs)
        route = await self._catalog.get_route(origin, destination) if served else None
        return (await self.policy()).evaluate(link, route, served=served)

    async def airline_airport_decision(
        self, code: str, iata: str
    ) -> IndexabilityDecision:
        airline_code = await self._airline_code(code)
        link = AirlineAirportLink(airline_code=airline_code, airport_iata=iata.upper())
        legs = await self._catalog.fetch_leg_sample(
            airline_code, self._config.airport_leg_sample_cap
        )
        served = link.airport_iata in collect_airports(legs)
        airport = await self._catalog.get_airport(iata) if served else None
        return (await self.policy()).evaluate(link, airport, served=served)

    async def _airline_code(self, code: str) -> str:
        airline = await self._catalog.get_airline(code)
        if airline is None or airline.key is None:
            msg = f"Airline {code.upper()} not found"
            raise EntityNotFoundError(msg)
        return airline.key
