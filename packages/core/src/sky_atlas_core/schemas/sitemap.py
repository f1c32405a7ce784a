"""Indexability decisions and sitemap DTOs."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .enums import ChangeFreq, EntityRole, EntityType

MIN_QUALITY_SCORE = 2
MAX_QUALITY_SCORE = 4


class IndexabilityDecision(BaseModel):
    """Outcome of evaluating one entity against the indexing policy."""

    model_config = ConfigDict(frozen=True)

    entity_type: EntityType
    entity_key: str
    should_index: bool
    quality_score: int = Field(ge=0, le=MAX_QUALITY_SCORE)
    role: EntityRole
    priority: float = Field(ge=0.0, le=1.0)
    reason: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def indexable(self) -> bool:
        """Whether the entity may appear in a sitemap and be rendered ``index``."""
        return self.should_index and (
            self.quality_score >= MIN_QUALITY_SCORE or self.role == EntityRole.HUB
        )

    @property
    def robots(self) -> str:
        return "index, follow" if self.indexable else "noindex, follow"


class SitemapURL(BaseModel):
    """Single ``<url>`` entry of a urlset document."""

    model_config = ConfigDict(frozen=True)

    loc: str
    lastmod: date
    changefreq: ChangeFreq = ChangeFreq.DAILY
    priority: float = Field(ge=0.0, le=1.0)


class SitemapPart(BaseModel):
    """One page of a partitioned sitemap family."""

    part_index: int = Field(ge=1)
    urls: list[SitemapURL]
    is_fallback: bool = False
