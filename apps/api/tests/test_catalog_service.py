"""Tests for catalog queries and row validation."""

from __future__ import annotations

from types import SimpleNamespace

from sqlalchemy.exc import SAWarning

from sky_atlas_api.services.catalog_service import CatalogService, to_records
from sky_atlas_core.schemas import AirportRecord


def test_to_records_skips_malformed_rows(caplog):
    rows = [
        SimpleNamespace(iata="del", departure_count=5, arrival_count=None),
        SimpleNamespace(iata="D1", departure_count=5),
        SimpleNamespace(iata="BOM", departure_count="many"),
        SimpleNamespace(iata=None),
    ]

    records = to_records(rows, AirportRecord)

    assert [r.iata for r in records] == ["DEL"]
    assert records[0].arrival_count == 0
    assert caplog.text.count("Skipping malformed AirportRecord") == 3


async def test_active_airports_busiest_first(session_factory, catalog):
    async with session_factory() as session:
        airports = await CatalogService(session).list_active_airports(10)
    assert [a.iata for a in airports] == ["DEL", "BOM", "BLR", "GOI"]


async def test_all_airports_include_inactive(session_factory, catalog):
    async with session_factory() as session:
        catalog_service = CatalogService(session)
        airports = await catalog_service.list_airports(10)
        top_two = await catalog_service.list_airports(2)
    assert [a.iata for a in airports] == ["DEL", "BOM", "BLR", "GOI", "IXZ"]
    assert [a.iata for a in top_two] == ["DEL", "BOM"]


async def test_scan_limit_keeps_busiest_routes(session_factory, catalog):
    async with session_factory() as session:
        catalog_service = CatalogService(session)
        top_two = await catalog_service.list_routes_with_flight_data(2)
        every = await catalog_service.list_routes_with_flight_data(10)
    assert [r.route_key for r in top_two] == ["DEL-BOM", "BOM-DEL"]
    assert [r.route_key for r in every] == [
        "DEL-BOM",
        "BOM-DEL",
        "GOI-DEL",
        "DEL-BLR",
    ]


async def test_hub_codes_and_route_origins(session_factory, catalog):
    async with session_factory() as session:
        catalog_service = CatalogService(session)
        assert await catalog_service.hub_airport_codes(2) == ["DEL", "BOM"]
        assert await catalog_service.hub_airport_codes(0) == []
        assert await catalog_service.airports_with_routes() == {"DEL", "BOM", "GOI"}


async def test_route_origins_query_is_warning_free(session_factory, catalog, recwarn):
    async with session_factory() as session:
        origins = await CatalogService(session).airports_with_routes()
    assert origins == {"DEL", "BOM", "GOI"}
    assert not [w for w in recwarn if issubclass(w.category, SAWarning)]


async def test_airline_lookup_falls_back_to_code(session_factory, catalog):
    async with session_factory() as session:
        catalog_service = CatalogService(session)
        indigo = await catalog_service.get_airline("6e")
        missing = await catalog_service.get_airline("ZZ")
    assert indigo is not None
    assert indigo.key == "6E"
    assert missing is None


async def test_leg_sample_is_latest_first(session_factory, catalog):
    async with session_factory() as session:
        catalog_service = CatalogService(session, session_factory)
        assert catalog_service.concurrent_reads is True
        legs = await catalog_service.fetch_leg_sample("ai", 3)
        everything = await catalog_service.fetch_leg_sample("AI", 10)

    assert [(leg.origin_iata, leg.destination_iata) for leg in legs] == [
        ("DEL", "BLR"),
        ("BOM", "DEL"),
        ("DEL", "BOM"),
    ]
    assert everything[-1].origin_iata is None
    assert len(everything) == 4
