"""API configuration via environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sky_atlas_core.schemas import DerivedLinkPolicy


class ApiSettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    database_url: str = "postgresql+asyncpg://localhost:5432/sky_atlas"
    site_url: str = "https://example.com"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Sitemap layout
    sitemap_part_size: int = Field(default=10_000, ge=1, le=50_000)
    sitemap_cache_max_age: int = 3600  # seconds, for the CDN

    # Indexing policy
    hub_airport_count: int = 50
    derived_link_policy: DerivedLinkPolicy = DerivedLinkPolicy.GATE

    # Correlation sampling (per airline)
    route_leg_sample_cap: int = 1000
    airport_leg_sample_cap: int = 2000
    correlation_concurrency: int = 10

    # Catalog scan bounds
    airline_scan_limit: int = 10_000
    airport_scan_limit: int = 10_000
    route_scan_limit: int = 50_000

    model_config = SettingsConfigDict(
        env_prefix="API_", env_file=".env", extra="ignore"
    )


settings = ApiSettings()
