"""Indexing decision schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from sky_atlas_core.schemas import EntityRole, EntityType

if TYPE_CHECKING:
    from sky_atlas_core.schemas import IndexabilityDecision


class DecisionResponse(BaseModel):
    """Indexing decision for one page, with the robots directive to render."""

    entity_type: EntityType
    entity_key: str
    indexable: bool
    should_index: bool
    quality_score: int
    role: EntityRole
    priority: float
    reason: str | None = None
    robots: str

    @classmethod
    def from_decision(cls, decision: IndexabilityDecision) -> DecisionResponse:
        return cls(
            entity_type=decision.entity_type,
            entity_key=decision.entity_key,
            indexable=decision.indexable,
            should_index=decision.should_index,
            quality_score=decision.quality_score,
            role=decision.role,
            priority=decision.priority,
            reason=decision.reason,
            robots=decision.robots,
        )
