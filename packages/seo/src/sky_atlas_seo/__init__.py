"""Sky Atlas SEO - indexability policy and sitemap pipeline stages."""

from sky_atlas_seo.correlation import AirlineRelations, CorrelationEngine
from sky_atlas_seo.health import IndexHealthReport, build_health_report
from sky_atlas_seo.indexability import (
    IndexabilityPolicy,
    flights_per_day_value,
    has_frequency,
    route_quality_score,
)
from sky_atlas_seo.lastmod import LastmodClock
from sky_atlas_seo.partition import DEFAULT_PART_SIZE, part_count, partition
from sky_atlas_seo.renderer import (
    SITEMAP_NS,
    parse_urlset,
    render_fallback,
    render_sitemap_index,
    render_urlset,
)
from sky_atlas_seo.roles import RoleAssigner, sitemap_priority

__all__ = [
    "DEFAULT_PART_SIZE",
    "SITEMAP_NS",
    "AirlineRelations",
    "CorrelationEngine",
    "IndexHealthReport",
    "IndexabilityPolicy",
    "LastmodClock",
    "RoleAssigner",
    "build_health_report",
    "flights_per_day_value",
    "has_frequency",
    "parse_urlset",
    "part_count",
    "partition",
    "render_fallback",
    "render_sitemap_index",
    "render_urlset",
    "route_quality_score",
    "sitemap_priority",
]
