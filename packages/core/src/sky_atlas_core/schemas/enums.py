"""Pydantic-compatible enums shared by the pipeline and the API (DB-independent)."""

from enum import StrEnum


class EntityType(StrEnum):
    """Shape of an entity that can receive an indexability decision."""

    AIRPORT = "airport"
    ROUTE = "route"
    AIRLINE = "airline"
    AIRLINE_ROUTE = "airline_route"
    AIRLINE_AIRPORT = "airline_airport"


class EntityRole(StrEnum):
    """Role of an entity in the site graph."""

    HUB = "hub"
    STANDARD = "standard"
    THIN = "thin"


class ChangeFreq(StrEnum):
    """Sitemap protocol ``changefreq`` values."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


class SitemapKind(StrEnum):
    """Dynamic sitemap families, named as they appear in sitemap URLs."""

    FLIGHTS = "flights"
    AIRPORTS = "airports"
    AIRLINES = "airlines"
    AIRLINE_ROUTES = "airline-routes"
    AIRLINE_AIRPORTS = "airline-airports"

    @property
    def category_root(self) -> str:
        """Site path used for the single-URL fallback of an empty part."""
        return _KIND_ROOT[self]

    @property
    def changefreq(self) -> ChangeFreq:
        if self is SitemapKind.AIRLINES:
            return ChangeFreq.WEEKLY
        return ChangeFreq.DAILY


class DerivedLinkPolicy(StrEnum):
    """How airline-scoped links inherit eligibility from their base entity.

    ``GATE`` requires the base route/airport to be indexable on its own.
    ``PRESENCE`` only requires the base record to exist and be active.
    """

    GATE = "gate"
    PRESENCE = "presence"


_KIND_ROOT = {
    SitemapKind.FLIGHTS: "/flights",
    SitemapKind.AIRPORTS: "/airports",
    SitemapKind.AIRLINES: "/airlines",
    SitemapKind.AIRLINE_ROUTES: "/airlines",
    SitemapKind.AIRLINE_AIRPORTS: "/airlines",
}
