"""Canonical orderings and fixed-size partitioning of sitemap families."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, TypeVar

from sky_atlas_seo.indexability import flights_per_day_value

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sky_atlas_core.schemas import (
        AirlineAirportLink,
        AirlineRecord,
        AirlineRouteLink,
        AirportRecord,
        RouteRecord,
    )

T = TypeVar("T")

DEFAULT_PART_SIZE = 10_000


def route_sort_key(route: RouteRecord) -> tuple[int, str, str]:
    """Busiest first, then origin and destination ascending."""
    return (
        -flights_per_day_value(route.flights_per_day),
        route.origin_iata or "",
        route.destination_iata or "",
    )


def airport_sort_key(airport: AirportRecord) -> tuple[int, str]:
    return (-airport.departure_count, airport.iata)


def airline_sort_key(airline: AirlineRecord) -> str:
    return airline.key or ""


def airline_route_sort_key(link: AirlineRouteLink) -> tuple[str, str, str]:
    return (link.airline_code, link.origin_iata, link.destination_iata)


def airline_airport_sort_key(link: AirlineAirportLink) -> tuple[str, str]:
    return (link.airline_code, link.airport_iata)


def partition(
    sorted_items: Sequence[T],
    part_index: int,
    part_size: int = DEFAULT_PART_SIZE,
) -> list[T]:
    """Return the 1-based ``part_index`` slice of an already-sorted sequence.

    Pure: the same sequence and index always give the same slice. Out of
    range indexes give an empty list.
    """
    if part_index < 1:
        msg = f"part_index must be >= 1, got {part_index}"
        raise ValueError(msg)
    if part_size < 1:
        msg = f"part_size must be >= 1, got {part_size}"
        raise ValueError(msg)
    start = (part_index - 1) * part_size
    return list(sorted_items[start : start + part_size])


def part_count(total: int, part_size: int = DEFAULT_PART_SIZE) -> int:
    """Number of parts needed for ``total`` entries; never less than one."""
    if part_size < 1:
        msg = f"part_size must be >= 1, got {part_size}"
        raise ValueError(msg)
    return max(1, math.ceil(total / part_size))
