"""
Roadmap output models.

``RecommendationDependency`` — derived "X depends on {Y, Z}" fact with a
joined human-readable reason. Recomputed on every roadmap generation.

``TimeEstimate`` — day range plus a coarse confidence grade.

``Phase`` — one batch of recommendations executed together, numbered from 1.

``Roadmap`` — ordered phases, total estimate, critical path (titles), and at
most five quick wins.

``RoadmapStatistics`` — per-priority / per-type counts for the downstream
report collaborator.

All models are frozen — a roadmap is built in full on each call and
returned; nothing downstream should mutate it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.taxonomy.modernization_taxonomy import EstimateConfidence

MAX_QUICK_WINS = 5


class RecommendationDependency(BaseModel):
    """Recommendation ``recommendation_id`` depends on every id in ``depends_on``.

    Attributes:
        recommendation_id: The dependent recommendation.
        depends_on: Ids that must be completed first (never contains
            ``recommendation_id`` itself).
        reason: Reasons from every triggered rule, joined with ``"; "``.
    """

    model_config = ConfigDict(frozen=True)

    recommendation_id: str
    depends_on: list[str]
    reason: str = ""

    @model_validator(mode="after")
    def validate_not_self_referential(self) -> "RecommendationDependency":
        if self.recommendation_id in self.depends_on:
            raise ValueError(
                f"Recommendation '{self.recommendation_id}' cannot depend on itself."
            )
        return self


class TimeEstimate(BaseModel):
    """Estimated duration in days with a confidence grade."""

    model_config = ConfigDict(frozen=True)

    min_days: float = 0.0
    max_days: float = 0.0
    confidence: EstimateConfidence = EstimateConfidence.MEDIUM

    @model_validator(mode="after")
    def validate_range(self) -> "TimeEstimate":
        if self.min_days < 0:
            raise ValueError("min_days must be non-negative.")
        if self.min_days > self.max_days:
            raise ValueError(
                f"min_days ({self.min_days}) must be <= max_days ({self.max_days})."
            )
        return self


class Phase(BaseModel):
    """A contiguous batch of recommendations.

    Attributes:
        number: 1-based sequential phase number.
        name: Generated name, e.g. ``"Phase 1: Framework Modernization"``.
        description: Generated summary of what the phase contains.
        recommendations: Members, in execution order.
        estimate: Summed time estimate of the members.
        prerequisites: Phase numbers that must complete first
            (``[number - 1]``, or ``[]`` for phase 1).
    """

    model_config = ConfigDict(frozen=True)

    number: int
    name: str
    description: str = ""
    recommendations: list[Recommendation] = Field(default_factory=list)
    estimate: TimeEstimate = TimeEstimate()
    prerequisites: list[int] = Field(default_factory=list)

    @field_validator("number")
    @classmethod
    def validate_number(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Phase number must be >= 1, got {v}.")
        return v


class Roadmap(BaseModel):
    """Complete phased migration roadmap.

    Invariants (checked on construction):
      - phase numbers are 1, 2, ..., N in order.
      - at most ``MAX_QUICK_WINS`` quick wins.
    """

    model_config = ConfigDict(frozen=True)

    phases: list[Phase] = Field(default_factory=list)
    total_estimate: TimeEstimate = TimeEstimate()
    critical_path: list[str] = Field(default_factory=list)
    quick_wins: list[Recommendation] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_roadmap_consistency(self) -> "Roadmap":
        numbers = [phase.number for phase in self.phases]
        if numbers != list(range(1, len(self.phases) + 1)):
            raise ValueError(
                f"Phase numbers must be contiguous from 1, got {numbers}."
            )
        if len(self.quick_wins) > MAX_QUICK_WINS:
            raise ValueError(
                f"At most {MAX_QUICK_WINS} quick wins allowed, got {len(self.quick_wins)}."
            )
        return self

    def phase_of(self, recommendation_id: str) -> int | None:
        """Return the phase number containing ``recommendation_id``, or ``None``."""
        for phase in self.phases:
            if any(rec.id == recommendation_id for rec in phase.recommendations):
                return phase.number
        return None


class RoadmapStatistics(BaseModel):
    """Aggregate counts for report rendering.

    Attributes:
        total_recommendations: Number of input recommendations.
        by_priority: Count per priority level (every level present, zeros included).
        by_type: Count per recommendation type (every type present).
        estimated_effort: The roadmap's total estimate.
    """

    model_config = ConfigDict(frozen=True)

    total_recommendations: int = 0
    by_priority: dict[str, int] = Field(default_factory=dict)
    by_type: dict[str, int] = Field(default_factory=dict)
    estimated_effort: TimeEstimate = TimeEstimate()
