"""Tests for the index health report."""

from __future__ import annotations

from sky_atlas_seo.health import build_health_report


def test_health_report_counts_and_reasons(make_route, make_airport, make_policy):
    policy = make_policy()
    decisions = [
        policy.evaluate_route(make_route("DEL", "BOM")),
        policy.evaluate_route(make_route("BOM", "GOI", has_flight_data=False)),
        policy.evaluate_route(make_route("GOI", "BLR", flights_per_day="0 flights")),
        policy.evaluate_airport(make_airport("DEL")),
    ]

    report = build_health_report(decisions)

    assert report.total == 4
    assert report.indexable == 2
    assert report.noindex == 2
    assert report.indexability_rate == 0.5
    assert report.by_entity_type["route"].total == 3
    assert report.by_entity_type["route"].noindex == 2
    assert report.by_entity_type["airport"].indexable == 1
    assert report.noindex_reasons == {
        "Route has no flight data": 1,
        "Zero flights per day": 1,
    }


def test_empty_health_report():
    report = build_health_report([])
    assert report.total == 0
    assert report.indexability_rate == 0.0
    assert report.by_entity_type == {}
