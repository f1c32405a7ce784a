"""Indexability policy shared by the sitemap pipeline and page rendering.

Every "may this URL be indexed" question goes through
:class:`IndexabilityPolicy`. A URL listed in a sitemap is exactly a URL whose
decision is ``indexable``; the page layer renders ``noindex`` for everything
else.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from sky_atlas_core.schemas import (
    AirlineAirportLink,
    AirlineRecord,
    AirlineRouteLink,
    AirportRecord,
    DerivedLinkPolicy,
    EntityRole,
    EntityType,
    IndexabilityDecision,
    RouteRecord,
)

from sky_atlas_seo.roles import (
    AIRLINE_PRIORITY,
    AIRPORT_PRIORITY,
    RoleAssigner,
    sitemap_priority,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

ZERO_FREQUENCY_DESCRIPTORS = frozenset({"0 flights", "0-0 flights"})

_NUMBER_RE = re.compile(r"\d+")


def has_frequency(flights_per_day: str | None) -> bool:
    """True when the descriptor indicates real scheduled activity."""
    if flights_per_day is None:
        return False
    descriptor = flights_per_day.strip()
    return bool(descriptor) and descriptor not in ZERO_FREQUENCY_DESCRIPTORS


def flights_per_day_value(flights_per_day: str | None) -> int:
    """Numeric sort value of a frequency descriptor.

    ``"12 flights"`` -> 12, ``"3-5 flights"`` -> 5, unparseable -> 0.
    """
    if not flights_per_day:
        return 0
    numbers = [int(n) for n in _NUMBER_RE.findall(flights_per_day)]
    return max(numbers, default=0)


def route_quality_score(route: RouteRecord) -> int:
    """Count of present signals: flight data, frequency, duration, endpoints."""
    score = 0
    if route.has_flight_data:
        score += 1
    if route.flights_per_day:
        score += 1
    if route.duration:
        score += 1
    if route.origin_iata and route.destination_iata:
        score += 1
    return score


def airport_quality_score(airport: AirportRecord, has_outgoing_routes: bool) -> int:
    """Count of present signals: activity, destinations, terminals, routes/POIs."""
    score = 0
    if airport.has_activity:
        score += 1
    if airport.destinations_count > 0:
        score += 1
    if airport.terminals:
        score += 1
    if has_outgoing_routes or airport.poi_count > 0:
        score += 1
    return score


def airline_quality_score(airline: AirlineRecord) -> int:
    return sum(1 for value in (airline.key, airline.name, airline.country) if value)


class IndexabilityPolicy:
    """Single source of truth for indexing decisions.

    Args:
        roles: Role assigner carrying the hub airport set for this run.
        airports_with_routes: IATA codes that are the origin of at least one
            route with flight data (the airport page's outgoing-route list).
        derived_link_policy: How airline-scoped links inherit eligibility
            from their base route or airport.
    """

    def __init__(
        self,
        roles: RoleAssigner,
        *,
        airports_with_routes: Iterable[str] = (),
        derived_link_policy: DerivedLinkPolicy = DerivedLinkPolicy.GATE,
    ) -> None:
        self._roles = roles
        self._airports_with_routes = frozenset(
            code.upper() for code in airports_with_routes
        )
        self._link_policy = derived_link_policy

    @property
    def roles(self) -> RoleAssigner:
        return self._roles

    # ------------------------------------------------------------------
    # Base entities
    # ------------------------------------------------------------------

    def evaluate_route(self, route: RouteRecord) -> IndexabilityDecision:
        quality = route_quality_score(route)
        role = self._roles.route_role(route)
        reason: str | None = None
        if not route.has_flight_data:
            reason = "Route has no flight data"
        elif not has_frequency(route.flights_per_day):
            reason = "Zero flights per day"
        return IndexabilityDecision(
            entity_type=EntityType.ROUTE,
            entity_key=route.route_key,
            should_index=reason is None,
            quality_score=quality,
            role=role,
            priority=sitemap_priority(role, quality),
            reason=reason,
        )

    def evaluate_airport(self, airport: AirportRecord) -> IndexabilityDecision:
        has_routes = airport.iata in self._airports_with_routes
        quality = airport_quality_score(airport, has_routes)
        role = self._roles.airport_role(airport)
        reason: str | None = None
        if not airport.has_activity:
            reason = "No airport activity"
        elif not (airport.poi_count > 0 or airport.terminals or has_routes):
            reason = "Thin page: no POIs, terminals or outgoing routes"
        return IndexabilityDecision(
            entity_type=EntityType.AIRPORT,
            entity_key=airport.iata,
            should_index=reason is None,
            quality_score=quality,
            role=role,
            priority=AIRPORT_PRIORITY,
            reason=reason,
        )

    def evaluate_airline(self, airline: AirlineRecord) -> IndexabilityDecision:
        key = airline.key
        return IndexabilityDecision(
            entity_type=EntityType.AIRLINE,
            entity_key=key or "",
            should_index=key is not None,
            quality_score=airline_quality_score(airline),
            role=self._roles.airline_role(airline),
            priority=AIRLINE_PRIORITY,
            reason=None if key else "Airline has no code",
        )

    # ------------------------------------------------------------------
    # Airline-scoped links
    # ------------------------------------------------------------------

    def evaluate_airline_route(
        self,
        link: AirlineRouteLink,
        route: RouteRecord | None,
        *,
        served: bool = True,
    ) -> IndexabilityDecision:
        """Decision for an airline-scoped route page.

        ``served`` is False when the airline has no sampled legs on the route;
        such a link is never indexable.
        """
        key = f"{link.airline_code}:{link.route_key}"
        if not served:
            return self._missing_base(
                EntityType.AIRLINE_ROUTE, key, "Airline does not serve route"
            )
        if route is None:
            return self._missing_base(EntityType.AIRLINE_ROUTE, key, "Route not found")

        base = self.evaluate_route(route)
        if self._link_policy == DerivedLinkPolicy.GATE:
            should_index = base.indexable
            reason = None if should_index else (base.reason or "Route not indexable")
        else:
            should_index = route.has_flight_data
            reason = None if should_index else "Route has no flight data"
        return IndexabilityDecision(
            entity_type=EntityType.AIRLINE_ROUTE,
            entity_key=key,
            should_index=should_index,
            quality_score=base.quality_score,
            role=base.role,
            priority=sitemap_priority(base.role, base.quality_score),
            reason=reason,
        )

    def evaluate_airline_airport(
        self,
        link: AirlineAirportLink,
        airport: AirportRecord | None,
        *,
        served: bool = True,
    ) -> IndexabilityDecision:
        key = f"{link.airline_code}:{link.airport_iata}"
        if not served:
            return self._missing_base(
                EntityType.AIRLINE_AIRPORT, key, "Airline does not serve airport"
            )
        if airport is None:
            return self._missing_base(
                EntityType.AIRLINE_AIRPORT, key, "Airport not found"
            )

        base = self.evaluate_airport(airport)
        if self._link_policy == DerivedLinkPolicy.GATE:
            should_index = base.indexable
            reason = None if should_index else (base.reason or "Airport not indexable")
        else:
            should_index = airport.has_activity
            reason = None if should_index else "No airport activity"
        return IndexabilityDecision(
            entity_type=EntityType.AIRLINE_AIRPORT,
            entity_key=key,
            should_index=should_index,
            quality_score=base.quality_score,
            role=base.role,
            priority=sitemap_priority(base.role, base.quality_score),
            reason=reason,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def evaluate(
        self,
        entity: (
            RouteRecord
            | AirportRecord
            | AirlineRecord
            | AirlineRouteLink
            | AirlineAirportLink
        ),
        base: RouteRecord | AirportRecord | None = None,
        *,
        served: bool = True,
    ) -> IndexabilityDecision:
        """Evaluate any supported entity.

        Links take their base record and whether the airline's leg sample
        serves them; ``served`` is ignored for base entities.
        """
        match entity:
            case RouteRecord():
                return self.evaluate_route(entity)
            case AirportRecord():
                return self.evaluate_airport(entity)
            case AirlineRecord():
                return self.evaluate_airline(entity)
            case AirlineRouteLink():
                if base is not None and not isinstance(base, RouteRecord):
                    msg = "Airline-route links need a RouteRecord base"
                    raise TypeError(msg)
                return self.evaluate_airline_route(entity, base, served=served)
            case AirlineAirportLink():
                if base is not None and not isinstance(base, AirportRecord):
                    msg = "Airline-airport links need an AirportRecord base"
                    raise TypeError(msg)
                return self.evaluate_airline_airport(entity, base, served=served)
        msg = f"Cannot evaluate {type(entity).__name__}"
        raise TypeError(msg)

    @staticmethod
    def _missing_base(
        entity_type: EntityType, key: str, reason: str
    ) -> IndexabilityDecision:
        logger.debug("%s %s: %s", entity_type.value, key, reason)
        return IndexabilityDecision(
            entity_type=entity_type,
            entity_key=key,
            should_index=False,
            quality_score=0,
            role=EntityRole.THIN,
            priority=sitemap_priority(EntityRole.THIN, 0),
            reason=reason,
        )
