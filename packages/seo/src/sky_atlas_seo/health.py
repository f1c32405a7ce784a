"""Index health audit over a set of indexability decisions."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sky_atlas_core.schemas import IndexabilityDecision


class EntityHealth(BaseModel):
    """Indexable/noindex split for one entity type."""

    total: int = 0
    indexable: int = 0
    noindex: int = 0


class IndexHealthReport(BaseModel):
    """Share of indexable pages and the reasons the rest are excluded."""

    total: int
    indexable: int
    noindex: int
    indexability_rate: float
    by_entity_type: dict[str, EntityHealth] = Field(default_factory=dict)
    noindex_reasons: dict[str, int] = Field(default_factory=dict)


def build_health_report(decisions: Iterable[IndexabilityDecision]) -> IndexHealthReport:
    by_type: dict[str, EntityHealth] = {}
    reasons: Counter[str] = Counter()
    total = indexable = 0

    for decision in decisions:
        total += 1
        bucket = by_type.setdefault(decision.entity_type.value, EntityHealth())
        bucket.total += 1
        if decision.indexable:
            indexable += 1
            bucket.indexable += 1
        else:
            bucket.noindex += 1
            reasons[decision.reason or "Below quality threshold"] += 1

    return IndexHealthReport(
        total=total,
        indexable=indexable,
        noindex=total - indexable,
        indexability_rate=round(indexable / total, 4) if total else 0.0,
        by_entity_type=dict(sorted(by_type.items())),
        noindex_reasons=dict(reasons.most_common()),
    )
