"""Tests for the shared indexability policy."""

from __future__ import annotations

import pytest

from sky_atlas_core.schemas import (
    AirlineAirportLink,
    AirlineRouteLink,
    DerivedLinkPolicy,
    EntityRole,
    EntityType,
)
from sky_atlas_seo.indexability import (
    flights_per_day_value,
    has_frequency,
    route_quality_score,
)

# ---------------------------------------------------------------------------
# Frequency descriptors
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        ("12 flights", True),
        ("3-5 flights", True),
        ("0 flights", False),
        ("0-0 flights", False),
        ("", False),
        ("   ", False),
        (None, False),
    ],
)
def test_has_frequency(descriptor, expected):
    assert has_frequency(descriptor) is expected


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [("12 flights", 12), ("3-5 flights", 5), ("daily", 0), (None, 0), ("", 0)],
)
def test_flights_per_day_value(descriptor, expected):
    assert flights_per_day_value(descriptor) == expected


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def test_healthy_route_is_indexable(make_route, make_policy):
    decision = make_policy().evaluate_route(make_route("DEL", "BOM"))

    assert decision.entity_type == EntityType.ROUTE
    assert decision.entity_key == "DEL-BOM"
    assert decision.quality_score == 4
    assert decision.should_index is True
    assert decision.indexable is True
    assert decision.priority >= 0.6
    assert decision.robots == "index, follow"


def test_route_without_flight_data_is_excluded(make_route, make_policy):
    route = make_route(
        "XYZ",
        "ABC",
        has_flight_data=False,
        flights_per_day=None,
        average_duration=None,
    )
    decision = make_policy().evaluate_route(route)

    assert decision.should_index is False
    assert decision.indexable is False
    assert decision.reason == "Route has no flight data"
    assert decision.robots == "noindex, follow"


@pytest.mark.parametrize("descriptor", ["0 flights", "0-0 flights", "", None])
def test_route_with_zero_frequency_is_excluded(make_route, make_policy, descriptor):
    decision = make_policy().evaluate_route(make_route(flights_per_day=descriptor))
    assert decision.should_index is False
    assert decision.reason == "Zero flights per day"


def test_hub_route_keeps_hub_priority(make_route, make_policy):
    decision = make_policy(hubs=("BOM",)).evaluate_route(make_route())
    assert decision.role == EntityRole.HUB
    assert decision.priority == 0.8


@pytest.mark.parametrize("has_flight_data", [True, False])
@pytest.mark.parametrize("flights_per_day", ["12 flights", "0 flights", None])
@pytest.mark.parametrize("duration", ["2h", None])
def test_route_quality_bounds_and_index_implication(
    make_route, make_policy, has_flight_data, flights_per_day, duration
):
    route = make_route(
        has_flight_data=has_flight_data,
        flights_per_day=flights_per_day,
        average_duration=duration,
    )
    decision = make_policy().evaluate_route(route)

    assert 0 <= route_quality_score(route) <= 4
    if decision.indexable:
        assert decision.quality_score >= 2 or decision.role == EntityRole.HUB


def test_typical_duration_counts_as_duration(make_route):
    route = make_route(average_duration=None, typical_duration="1h 45m")
    assert route_quality_score(route) == 4


# ---------------------------------------------------------------------------
# Airports
# ---------------------------------------------------------------------------


def test_active_airport_with_terminals_is_indexable(make_airport, make_policy):
    decision = make_policy().evaluate_airport(make_airport("DEL"))
    assert decision.indexable is True
    assert decision.priority == 0.8


def test_airport_without_activity_is_excluded(make_airport, make_policy):
    airport = make_airport("IXZ", departure_count=0, arrival_count=0)
    decision = make_policy().evaluate_airport(airport)
    assert decision.should_index is False
    assert decision.reason == "No airport activity"


def test_thin_airport_page_is_excluded(make_airport, make_policy):
    airport = make_airport("GOI", terminals=[], poi_count=0)
    decision = make_policy().evaluate_airport(airport)
    assert decision.should_index is False
    assert decision.reason.startswith("Thin page")


def test_outgoing_routes_rescue_thin_airport(make_airport, make_policy):
    airport = make_airport("GOI", terminals=[], poi_count=0)
    decision = make_policy(airports_with_routes=("goi",)).evaluate_airport(airport)
    assert decision.should_index is True


def test_airport_with_only_pois_passes_quality(make_airport, make_policy):
    airport = make_airport("GOI", terminals=None, poi_count=3)
    assert make_policy().evaluate_airport(airport).should_index is True


# ---------------------------------------------------------------------------
# Airlines
# ---------------------------------------------------------------------------


def test_airline_with_code_is_indexable(make_airline, make_policy):
    decision = make_policy().evaluate_airline(make_airline("ai"))
    assert decision.entity_key == "AI"
    assert decision.role == EntityRole.HUB
    assert decision.quality_score == 3
    assert decision.indexable is True


def test_airline_falls_back_to_code(make_airline, make_policy):
    decision = make_policy().evaluate_airline(make_airline(None, code="6E"))
    assert decision.entity_key == "6E"


def test_airline_without_code_is_excluded(make_airline, make_policy):
    decision = make_policy().evaluate_airline(make_airline(None))
    assert decision.should_index is False
    assert decision.reason == "Airline has no code"


# ---------------------------------------------------------------------------
# Airline-scoped links
# ---------------------------------------------------------------------------

ROUTE_LINK = AirlineRouteLink(
    airline_code="AI", origin_iata="DEL", destination_iata="BOM"
)
AIRPORT_LINK = AirlineAirportLink(airline_code="AI", airport_iata="GOI")


def test_route_link_inherits_base_decision(make_route, make_policy):
    decision = make_policy().evaluate_airline_route(ROUTE_LINK, make_route())
    assert decision.entity_type == EntityType.AIRLINE_ROUTE
    assert decision.entity_key == "AI:DEL-BOM"
    assert decision.indexable is True
    assert decision.quality_score == 4
    assert decision.priority == 0.7


def test_route_link_never_rescues_ineligible_route(make_route, make_policy):
    route = make_route(flights_per_day="0 flights")
    decision = make_policy().evaluate_airline_route(ROUTE_LINK, route)
    assert decision.indexable is False
    assert decision.reason == "Zero flights per day"


def test_presence_policy_only_needs_flight_data(make_route, make_policy):
    route = make_route(flights_per_day="0 flights", average_duration=None)
    policy = make_policy(link_policy=DerivedLinkPolicy.PRESENCE)
    assert policy.evaluate_airline_route(ROUTE_LINK, route).indexable is True


def test_route_link_without_base_route(make_policy):
    decision = make_policy().evaluate_airline_route(ROUTE_LINK, None)
    assert decision.indexable is False
    assert decision.reason == "Route not found"
    assert decision.role == EntityRole.THIN


def test_unserved_route_link(make_route, make_policy):
    decision = make_policy().evaluate_airline_route(
        ROUTE_LINK, make_route(), served=False
    )
    assert decision.indexable is False
    assert decision.reason == "Airline does not serve route"


def test_airport_link_gate_and_presence(make_airport, make_policy):
    thin = make_airport("GOI", terminals=[], poi_count=0)

    gate = make_policy().evaluate_airline_airport(AIRPORT_LINK, thin)
    presence = make_policy(
        link_policy=DerivedLinkPolicy.PRESENCE
    ).evaluate_airline_airport(AIRPORT_LINK, thin)

    assert gate.indexable is False
    assert presence.should_index is True
    assert presence.entity_key == "AI:GOI"


def test_airport_link_without_base_airport(make_policy):
    decision = make_policy().evaluate_airline_airport(AIRPORT_LINK, None)
    assert decision.reason == "Airport not found"
    assert decision.indexable is False


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def test_evaluate_dispatches_on_shape(
    make_route, make_airport, make_airline, make_policy
):
    policy = make_policy()
    assert policy.evaluate(make_route()).entity_type == EntityType.ROUTE
    assert policy.evaluate(make_airport()).entity_type == EntityType.AIRPORT
    assert policy.evaluate(make_airline()).entity_type == EntityType.AIRLINE
    link = policy.evaluate(ROUTE_LINK, make_route())
    assert link.entity_type == EntityType.AIRLINE_ROUTE


def test_evaluate_forwards_served_flag_to_links(make_route, make_airport, make_policy):
    policy = make_policy()
    route_gap = policy.evaluate(ROUTE_LINK, make_route(), served=False)
    airport_gap = policy.evaluate(AIRPORT_LINK, make_airport(), served=False)

    assert route_gap.reason == "Airline does not serve route"
    assert airport_gap.reason == "Airline does not serve airport"
    assert not route_gap.indexable
    assert not airport_gap.indexable
    assert policy.evaluate(make_route(), served=False).indexable


def test_evaluate_rejects_mismatched_base(make_airport, make_policy):
    with pytest.raises(TypeError):
        make_policy().evaluate(ROUTE_LINK, make_airport())


def test_evaluate_rejects_unknown_entity(make_policy):
    with pytest.raises(TypeError):
        make_policy().evaluate("DEL-BOM")  # type: ignore[arg-type]
