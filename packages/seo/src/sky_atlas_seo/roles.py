"""Entity roles and the sitemap priority table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sky_atlas_core.schemas import EntityRole, EntityType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sky_atlas_core.schemas import AirlineRecord, AirportRecord, RouteRecord

HUB_PRIORITY = 0.8
HIGH_QUALITY_PRIORITY = 0.7
MIN_QUALITY_PRIORITY = 0.6
BASE_PRIORITY = 0.5
AIRPORT_PRIORITY = 0.8
AIRLINE_PRIORITY = 0.8
FALLBACK_PRIORITY = 0.8


def sitemap_priority(role: EntityRole, quality_score: int) -> float:
    """Priority lookup for routes and airline-scoped links.

    hub -> 0.8, standard with quality >= 3 -> 0.7, standard with
    quality == 2 -> 0.6, anything else -> 0.5.
    """
    if role == EntityRole.HUB:
        return HUB_PRIORITY
    if role == EntityRole.STANDARD and quality_score >= 3:
        return HIGH_QUALITY_PRIORITY
    if role == EntityRole.STANDARD and quality_score == 2:
        return MIN_QUALITY_PRIORITY
    return BASE_PRIORITY


class RoleAssigner:
    """Assigns ``hub`` / ``standard`` / ``thin`` roles.

    The hub set is the top-K airports by departure count, resolved once per
    pipeline run and passed in.
    """

    def __init__(self, hub_airports: Iterable[str] = ()) -> None:
        self._hubs = frozenset(code.upper() for code in hub_airports)

    @property
    def hub_airports(self) -> frozenset[str]:
        return self._hubs

    def is_hub(self, iata: str | None) -> bool:
        return iata is not None and iata.upper() in self._hubs

    def route_role(self, route: RouteRecord) -> EntityRole:
        if self.is_hub(route.origin_iata) or self.is_hub(route.destination_iata):
            return EntityRole.HUB
        if route.has_flight_data:
            return EntityRole.STANDARD
        return EntityRole.THIN

    def airport_role(self, airport: AirportRecord) -> EntityRole:
        if self.is_hub(airport.iata):
            return EntityRole.HUB
        if airport.has_activity:
            return EntityRole.STANDARD
        return EntityRole.THIN

    def airline_role(self, airline: AirlineRecord) -> EntityRole:
        return EntityRole.HUB if airline.key else EntityRole.THIN

    def assign(
        self,
        entity_type: EntityType,
        entity: RouteRecord | AirportRecord | AirlineRecord,
    ) -> EntityRole:
        match entity_type:
            case EntityType.ROUTE | EntityType.AIRLINE_ROUTE:
                return self.route_role(entity)  # type: ignore[arg-type]
            case EntityType.AIRPORT | EntityType.AIRLINE_AIRPORT:
                return self.airport_role(entity)  # type: ignore[arg-type]
            case EntityType.AIRLINE:
                return self.airline_role(entity)  # type: ignore[arg-type]
        msg = f"Unsupported entity type: {entity_type}"
        raise ValueError(msg)

