"""Core schemas for Sky Atlas."""

from .catalog import (
    AirlineAirportLink,
    AirlineRecord,
    AirlineRouteLink,
    AirportRecord,
    FlightLegRecord,
    RouteRecord,
)
from .enums import ChangeFreq, DerivedLinkPolicy, EntityRole, EntityType, SitemapKind
from .sitemap import (
    MAX_QUALITY_SCORE,
    MIN_QUALITY_SCORE,
    IndexabilityDecision,
    SitemapPart,
    SitemapURL,
)

__all__ = [
    "MAX_QUALITY_SCORE",
    "MIN_QUALITY_SCORE",
    "AirlineAirportLink",
    "AirlineRecord",
    "AirlineRouteLink",
    "AirportRecord",
    "ChangeFreq",
    "DerivedLinkPolicy",
    "EntityRole",
    "EntityType",
    "FlightLegRecord",
    "IndexabilityDecision",
    "RouteRecord",
    "SitemapKind",
    "SitemapPart",
    "SitemapURL",
]
