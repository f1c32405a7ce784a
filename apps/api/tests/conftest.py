"""Shared fixtures for API tests: a file-backed SQLite catalog and an app client."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from sky_atlas_api.config import ApiSettings
from sky_atlas_api.dependencies import get_db, get_session_factory, get_settings
from sky_atlas_api.main import create_app
from sky_atlas_db.models import Airline, Airport, Base, FlightLeg, Route

SITE_URL = "https://skyatlas.test"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def config() -> ApiSettings:
    """Small parts and a single hub so paging is visible with a tiny catalog."""
    return ApiSettings(
        _env_file=None,
        site_url=SITE_URL,
        sitemap_part_size=2,
        hub_airport_count=1,
    )


@pytest.fixture
def seed(session_factory):
    """Factory fixture that inserts ORM rows in one transaction."""

    async def _seed(*rows: Base) -> None:
        async with session_factory() as session, session.begin():
            session.add_all(rows)

    return _seed


@pytest.fixture
async def catalog(seed):
    """A small catalog covering every branch of the indexing policy.

    DEL is the only hub. DEL-BLR is live but has zero frequency; XYZ-ABC has
    no flight data; IXZ has no activity. Airline AA has no legs.
    """
    await seed(
        Airport(iata="DEL", departure_count=500, arrival_count=480,
                destinations_count=60, terminals=["T1", "T2", "T3"]),
        Airport(iata="BOM", departure_count=400, arrival_count=390,
                destinations_count=50, terminals=["T1", "T2"]),
        Airport(iata="BLR", departure_count=300, arrival_count=310,
                destinations_count=40, terminals=["T1"]),
        Airport(iata="GOI", departure_count=50, arrival_count=45,
                destinations_count=10, terminals=[], poi_count=0),
        Airport(iata="IXZ", departure_count=0, arrival_count=0),
        Route(origin_iata="DEL", destination_iata="BOM", has_flight_data=True,
              flights_per_day="12 flights", average_duration="2h10m"),
        Route(origin_iata="BOM", destination_iata="DEL", has_flight_data=True,
              flights_per_day="10 flights", average_duration="2h05m"),
        Route(origin_iata="GOI", destination_iata="DEL", has_flight_data=True,
              flights_per_day="3-5 flights"),
        Route(origin_iata="DEL", destination_iata="BLR", has_flight_data=True,
              flights_per_day="0 flights", average_duration="2h40m"),
        Route(origin_iata="XYZ", destination_iata="ABC", has_flight_data=False),
        Airline(iata="AI", code="AIC", name="Air India", country="India"),
        Airline(iata=None, code="6E", name="IndiGo", country="India"),
        Airline(iata="AA", code="AAL", name="American Airlines", country="USA"),
        FlightLeg(airline_iata="AI", flight_number="101", origin_iata="DEL",
                  destination_iata="BOM",
                  departure_time=datetime(2026, 3, 1, 6, 0, tzinfo=UTC)),
        FlightLeg(airline_iata="AI", flight_number="102", origin_iata="BOM",
                  destination_iata="DEL",
                  departure_time=datetime(2026, 3, 1, 9, 0, tzinfo=UTC)),
        FlightLeg(airline_iata="AI", flight_number="503", origin_iata="DEL",
                  destination_iata="BLR",
                  departure_time=datetime(2026, 3, 2, 7, 0, tzinfo=UTC)),
        FlightLeg(airline_iata="AI", flight_number="999", origin_iata=None,
                  destination_iata="GOI", departure_time=None),
        FlightLeg(airline_iata="6E", flight_number="211", origin_iata="GOI",
                  destination_iata="DEL",
                  departure_time=datetime(2026, 3, 1, 12, 0, tzinfo=UTC)),
    )


@pytest.fixture
async def client(session_factory, config):
    app = create_app()

    async def _db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_settings] = lambda: config

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
