"""Shared factory fixtures for pipeline tests."""

from __future__ import annotations

from typing import Any

import pytest

from sky_atlas_core.schemas import (
    AirlineRecord,
    AirportRecord,
    DerivedLinkPolicy,
    FlightLegRecord,
    RouteRecord,
)
from sky_atlas_seo.indexability import IndexabilityPolicy
from sky_atlas_seo.roles import RoleAssigner


@pytest.fixture
def make_route():
    """Factory fixture for RouteRecord; defaults describe a healthy route."""

    def _make(
        origin: str | None = "DEL", destination: str | None = "BOM", **kw: Any
    ) -> RouteRecord:
        fields: dict[str, Any] = {
            "has_flight_data": True,
            "flights_per_day": "12 flights",
            "average_duration": "2h10m",
        }
        fields.update(kw)
        return RouteRecord(origin_iata=origin, destination_iata=destination, **fields)

    return _make


@pytest.fixture
def make_airport():
    """Factory fixture for AirportRecord; defaults describe an active airport."""

    def _make(iata: str = "DEL", **kw: Any) -> AirportRecord:
        fields: dict[str, Any] = {
            "departure_count": 100,
            "arrival_count": 90,
            "destinations_count": 40,
            "terminals": ["T1", "T3"],
        }
        fields.update(kw)
        return AirportRecord(iata=iata, **fields)

    return _make


@pytest.fixture
def make_airline():
    def _make(iata: str | None = "AI", **kw: Any) -> AirlineRecord:
        fields: dict[str, Any] = {"name": "Air India", "country": "India"}
        fields.update(kw)
        return AirlineRecord(iata=iata, **fields)

    return _make


@pytest.fixture
def make_leg():
    def _make(
        airline: str = "AI", origin: str | None = "DEL", destination: str | None = "BOM"
    ) -> FlightLegRecord:
        return FlightLegRecord(
            airline_iata=airline, origin_iata=origin, destination_iata=destination
        )

    return _make


@pytest.fixture
def make_policy():
    """Factory fixture for IndexabilityPolicy."""

    def _make(
        hubs: tuple[str, ...] = (),
        airports_with_routes: tuple[str, ...] = (),
        link_policy: DerivedLinkPolicy = DerivedLinkPolicy.GATE,
    ) -> IndexabilityPolicy:
        return IndexabilityPolicy(
            RoleAssigner(hubs),
            airports_with_routes=airports_with_routes,
            derived_link_policy=link_policy,
        )

    return _make
