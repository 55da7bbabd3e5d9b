"""
Roadmap generation: the single entry point that runs the whole pipeline.

    recommendations
      -> unique_by_id()                 (first record per id)
      -> prioritize_recommendations()   (computed priority on copies)
      -> identify_dependencies()
      -> create_phases()                (graph, topo order, depths, buckets)
      -> calculate_total_estimate()
      -> find_critical_path()           (independent of phases)
      -> identify_quick_wins()          (independent of phases)
      -> Roadmap

Total over its input: empty, single-item, disconnected and cyclic inputs all
produce a valid ``Roadmap``. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.models.roadmap import (
    MAX_QUICK_WINS,
    RecommendationDependency,
    Roadmap,
    RoadmapStatistics,
)
from roadmap_engine.prioritization.ranker import prioritize_recommendations
from roadmap_engine.roadmap.dependencies import (
    DEPENDENCY_RULES,
    DependencyRule,
    identify_dependencies,
)
from roadmap_engine.roadmap.estimates import calculate_total_estimate
from roadmap_engine.roadmap.graph import build_dependency_graph, find_critical_path
from roadmap_engine.roadmap.phases import create_phases
from roadmap_engine.taxonomy.modernization_taxonomy import (
    PRIORITY_RANK,
    EffortLevel,
    PriorityLevel,
    RecommendationType,
)

if TYPE_CHECKING:
    from roadmap_engine.config import RoadmapConfig

logger = logging.getLogger(__name__)

DEFAULT_QUICK_WIN_MIN_BENEFITS = 3


def unique_by_id(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Drop records whose id already appeared; the first occurrence wins."""
    seen: set[str] = set()
    unique: list[Recommendation] = []
    for rec in recommendations:
        if rec.id in seen:
            logger.debug("Dropping duplicate recommendation id %s", rec.id)
            continue
        seen.add(rec.id)
        unique.append(rec)
    return unique


def identify_quick_wins(
    recommendations: list[Recommendation],
    dependencies: list[RecommendationDependency],
    limit: int = MAX_QUICK_WINS,
    min_benefits: int = DEFAULT_QUICK_WIN_MIN_BENEFITS,
) -> list[Recommendation]:
    """Low-effort, unblocked recommendations worth doing first.

    Candidates have ``effort == low``, no dependency entry of their own, and
    either critical/high priority or at least ``min_benefits`` benefits.
    Sorted by priority (critical first, stable) and cut to ``limit``.
    """
    blocked = {dep.recommendation_id for dep in dependencies}
    candidates = [
        rec
        for rec in recommendations
        if rec.effort == EffortLevel.LOW
        and rec.id not in blocked
        and (
            rec.priority in (PriorityLevel.CRITICAL, PriorityLevel.HIGH)
            or len(rec.benefits) >= min_benefits
        )
    ]
    candidates.sort(key=lambda rec: -PRIORITY_RANK[rec.priority])
    return candidates[: max(0, min(limit, MAX_QUICK_WINS))]


def generate_roadmap(
    recommendations: list[Recommendation],
    config: Optional["RoadmapConfig"] = None,
    rules: tuple[DependencyRule, ...] = DEPENDENCY_RULES,
) -> Roadmap:
    """Build a complete phased migration roadmap.

    Args:
        recommendations: Upstream recommendations; never modified. Their
            priority is recomputed from content before anything else runs,
            and only the first record of a repeated id is kept.
        config: Optional quick-win tuning; defaults reproduce the standard
            limits (5 quick wins, 3 benefits).
        rules: Dependency inference rules; defaults to ``DEPENDENCY_RULES``.

    Returns:
        A ``Roadmap`` whose total estimate is the sum of its phase estimates.
    """
    limit = config.max_quick_wins if config is not None else MAX_QUICK_WINS
    min_benefits = (
        config.quick_win_min_benefits if config is not None else DEFAULT_QUICK_WIN_MIN_BENEFITS
    )

    recs = prioritize_recommendations(unique_by_id(list(recommendations)))
    dependencies = identify_dependencies(recs, rules)

    phases = create_phases(recs, dependencies)
    total_estimate = calculate_total_estimate(phase.estimate for phase in phases)

    graph = build_dependency_graph(recs, dependencies)
    critical_path = find_critical_path(recs, graph)
    quick_wins = identify_quick_wins(recs, dependencies, limit=limit, min_benefits=min_benefits)

    logger.debug(
        "Roadmap: %d phases, %.1f-%.1f days, critical path length %d, %d quick wins",
        len(phases), total_estimate.min_days, total_estimate.max_days,
        len(critical_path), len(quick_wins),
    )

    return Roadmap(
        phases=phases,
        total_estimate=total_estimate,
        critical_path=critical_path,
        quick_wins=quick_wins,
    )


def generate_statistics(
    recommendations: list[Recommendation],
    roadmap: Roadmap,
) -> RoadmapStatistics:
    """Counts by priority and type plus the roadmap's total estimate.

    Priorities are recomputed and duplicate ids dropped, matching the
    roadmap pipeline.
    """
    recs = prioritize_recommendations(unique_by_id(list(recommendations)))

    by_priority = {level.value: 0 for level in PriorityLevel}
    by_type = {rec_type.value: 0 for rec_type in RecommendationType}
    for rec in recs:
        by_priority[rec.priority.value] += 1
        by_type[rec.type.value] += 1

    return RoadmapStatistics(
        total_recommendations=len(recs),
        by_priority=by_priority,
        by_type=by_type,
        estimated_effort=roadmap.total_estimate,
    )
