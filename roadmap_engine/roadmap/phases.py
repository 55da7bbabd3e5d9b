"""
Phase partitioning: groups recommendations by dependency depth into ordered
phases, orders members inside each phase, and names / describes the phase.

Within a phase, members are ordered by type (framework, dependency, pattern)
and then by descending quick-win score. Both sorts are stable, so equal
members keep their topological order.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.models.roadmap import Phase, RecommendationDependency
from roadmap_engine.prioritization.scorer import has_security_benefit
from roadmap_engine.roadmap.estimates import estimate_phase_time
from roadmap_engine.roadmap.graph import (
    build_dependency_graph,
    calculate_depths,
    topological_sort,
)
from roadmap_engine.taxonomy.modernization_taxonomy import (
    TYPE_PRECEDENCE,
    EffortLevel,
    PriorityLevel,
    RecommendationType,
)

logger = logging.getLogger(__name__)

_PRIORITY_POINTS: dict[PriorityLevel, float] = {
    PriorityLevel.CRITICAL: 40.0,
    PriorityLevel.HIGH:     30.0,
    PriorityLevel.MEDIUM:   20.0,
    PriorityLevel.LOW:      10.0,
}

_EFFORT_POINTS: dict[EffortLevel, float] = {
    EffortLevel.LOW:    30.0,
    EffortLevel.MEDIUM: 15.0,
    EffortLevel.HIGH:    5.0,
}

MAX_BENEFIT_POINTS = 20.0
SECURITY_POINTS = 20.0

# (noun, plural) per type, in description order.
_TYPE_NOUNS: tuple[tuple[RecommendationType, str, str], ...] = (
    (RecommendationType.FRAMEWORK,  "framework upgrade",          "framework upgrades"),
    (RecommendationType.DEPENDENCY, "dependency update",          "dependency updates"),
    (RecommendationType.PATTERN,    "code pattern modernization", "code pattern modernizations"),
)


def quick_win_score(rec: Recommendation) -> float:
    """Higher is a better quick win: urgent, cheap, many benefits, security."""
    score = _PRIORITY_POINTS.get(rec.priority, 0.0)
    score += _EFFORT_POINTS.get(rec.effort, 0.0)
    score += min(len(rec.benefits) * 2.0, MAX_BENEFIT_POINTS)
    if has_security_benefit(rec):
        score += SECURITY_POINTS
    return score


def order_phase_members(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Type precedence first, then descending quick-win score."""
    return sorted(
        recommendations,
        key=lambda rec: (TYPE_PRECEDENCE.get(rec.type, len(TYPE_PRECEDENCE)), -quick_win_score(rec)),
    )


def group_into_phases(
    sorted_ids: list[str],
    recommendations: list[Recommendation],
    depths: dict[str, int],
) -> list[list[Recommendation]]:
    """Bucket recommendations by depth; one ordered bucket per distinct depth.

    Buckets are returned in ascending depth order. Ids without a matching
    recommendation are skipped.
    """
    by_id = {rec.id: rec for rec in recommendations}
    buckets: dict[int, list[Recommendation]] = defaultdict(list)

    for rec_id in sorted_ids:
        rec = by_id.get(rec_id)
        if rec is None:
            continue
        buckets[depths.get(rec_id, 0)].append(rec)

    return [order_phase_members(buckets[depth]) for depth in sorted(buckets)]


def phase_name(number: int, recommendations: list[Recommendation]) -> str:
    """Name a phase after its most significant content."""
    has_critical = any(rec.priority == PriorityLevel.CRITICAL for rec in recommendations)
    has_security = any(
        "security" in benefit.lower()
        for rec in recommendations
        for benefit in rec.benefits
    )
    types = {rec.type for rec in recommendations}

    if has_critical or has_security:
        label = "Critical Security Updates"
    elif RecommendationType.FRAMEWORK in types:
        label = "Framework Modernization"
    elif types == {RecommendationType.DEPENDENCY}:
        label = "Dependency Updates"
    elif types == {RecommendationType.PATTERN}:
        label = "Code Pattern Modernization"
    else:
        label = "Mixed Modernization Tasks"
    return f"Phase {number}: {label}"


def phase_description(recommendations: list[Recommendation]) -> str:
    """Per-type counts plus a note on critical / high priority members."""
    parts: list[str] = []
    for rec_type, singular, plural in _TYPE_NOUNS:
        count = sum(1 for rec in recommendations if rec.type == rec_type)
        if count:
            parts.append(f"{count} {singular if count == 1 else plural}")

    description = f"This phase includes {', '.join(parts)}."

    priorities = {rec.priority for rec in recommendations}
    if PriorityLevel.CRITICAL in priorities:
        description += " Contains critical priority items that should be addressed immediately."
    elif PriorityLevel.HIGH in priorities:
        description += " Contains high priority items that should be addressed soon."
    return description


def create_phase(number: int, recommendations: list[Recommendation]) -> Phase:
    return Phase(
        number=number,
        name=phase_name(number, recommendations),
        description=phase_description(recommendations),
        recommendations=recommendations,
        estimate=estimate_phase_time(recommendations),
        prerequisites=[number - 1] if number > 1 else [],
    )


def create_phases(
    recommendations: list[Recommendation],
    dependencies: list[RecommendationDependency],
) -> list[Phase]:
    """Partition recommendations into dependency-respecting phases.

    Steps: build graph, topological order, depths, depth buckets, then one
    ``Phase`` per bucket numbered from 1.

    Returns:
        Phases in execution order; empty for empty input.
    """
    graph = build_dependency_graph(recommendations, dependencies)
    sorted_ids = topological_sort(graph)
    depths = calculate_depths(sorted_ids, graph)
    groups = group_into_phases(sorted_ids, recommendations, depths)

    phases = [create_phase(number, group) for number, group in enumerate(groups, start=1)]
    logger.debug("Partitioned %d recommendations into %d phases", len(recommendations), len(phases))
    return phases
