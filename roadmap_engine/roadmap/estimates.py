"""
Time estimation: converts recommendation effort into day ranges and
aggregates them per phase and for the whole roadmap.

Per recommendation
------------------
    base range by effort:  low [0.5, 1]   medium [1, 3]   high [3, 7]
    multiplier:            framework x1.5
                           pattern   x min(1 + occurrences / 10, 3) when the
                                     title names an occurrence count
                           otherwise x1

Phase confidence
----------------
    medium; high when <= 3 members; low when > 10 members;
    any high-effort member then downgrades one step.

Total confidence
----------------
    medium; high when <= 2 phases; low when > 5 phases.
"""

from __future__ import annotations

import re
from typing import Iterable

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.models.roadmap import Phase, TimeEstimate
from roadmap_engine.taxonomy.modernization_taxonomy import (
    CONFIDENCE_DOWNGRADE,
    EffortLevel,
    EstimateConfidence,
    RecommendationType,
)

BASE_DAYS: dict[EffortLevel, tuple[float, float]] = {
    EffortLevel.LOW:    (0.5, 1.0),
    EffortLevel.MEDIUM: (1.0, 3.0),
    EffortLevel.HIGH:   (3.0, 7.0),
}

FRAMEWORK_MULTIPLIER = 1.5
MAX_PATTERN_MULTIPLIER = 3.0

_OCCURRENCE_RE = re.compile(r"(\d+) occurrence")


def _multiplier(rec: Recommendation) -> float:
    if rec.type == RecommendationType.FRAMEWORK:
        return FRAMEWORK_MULTIPLIER
    if rec.type == RecommendationType.PATTERN:
        match = _OCCURRENCE_RE.search(rec.title)
        if match:
            count = int(match.group(1))
            return min(1.0 + count / 10.0, MAX_PATTERN_MULTIPLIER)
    return 1.0


def estimate_recommendation_time(rec: Recommendation) -> TimeEstimate:
    """Day range for a single recommendation (confidence always ``medium``)."""
    low, high = BASE_DAYS.get(rec.effort, BASE_DAYS[EffortLevel.MEDIUM])
    multiplier = _multiplier(rec)
    return TimeEstimate(
        min_days=low * multiplier,
        max_days=high * multiplier,
        confidence=EstimateConfidence.MEDIUM,
    )


def estimate_phase_time(recommendations: list[Recommendation]) -> TimeEstimate:
    """Summed day range and confidence grade for one batch of recommendations."""
    min_days = 0.0
    max_days = 0.0
    for rec in recommendations:
        est = estimate_recommendation_time(rec)
        min_days += est.min_days
        max_days += est.max_days

    confidence = EstimateConfidence.MEDIUM
    if len(recommendations) > 10:
        confidence = EstimateConfidence.LOW
    elif len(recommendations) <= 3:
        confidence = EstimateConfidence.HIGH

    if any(rec.effort == EffortLevel.HIGH for rec in recommendations):
        confidence = CONFIDENCE_DOWNGRADE[confidence]

    return TimeEstimate(min_days=min_days, max_days=max_days, confidence=confidence)


def estimate_timeline(phase: Phase) -> TimeEstimate:
    """Recompute the estimate of an existing phase from its members."""
    return estimate_phase_time(phase.recommendations)


def calculate_total_estimate(estimates: Iterable[TimeEstimate]) -> TimeEstimate:
    """Elementwise sum of phase estimates.

    Confidence depends only on the number of phases, independent of the
    per-phase grades.
    """
    estimates = list(estimates)
    min_days = sum(est.min_days for est in estimates)
    max_days = sum(est.max_days for est in estimates)

    confidence = EstimateConfidence.MEDIUM
    if len(estimates) > 5:
        confidence = EstimateConfidence.LOW
    elif len(estimates) <= 2:
        confidence = EstimateConfidence.HIGH

    return TimeEstimate(min_days=min_days, max_days=max_days, confidence=confidence)
