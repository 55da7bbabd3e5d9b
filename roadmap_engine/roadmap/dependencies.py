"""
Dependency extraction: infers "X depends on Y" edges between recommendations
from content-matching heuristics.

Rules (all are applied; reasons from every hit are joined with "; ")
--------------------------------------------------------------------
framework_mention:
    A dependency / pattern recommendation whose title + description contains
    (case-insensitive) the name of a framework recommendation's package
    depends on that framework recommendation.

related_package:
    Between two dependency recommendations whose package names are related
    (a known co-evolving pair, or one name contains the other), the
    lower-priority one depends on the higher-priority one.

explicit_mention:
    A pattern recommendation whose title / description / migration steps say
    "requires <pkg>" or "needs <pkg>" depends on the dependency
    recommendation for <pkg>.

False positives and negatives are an accepted approximation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.models.roadmap import RecommendationDependency
from roadmap_engine.taxonomy.modernization_taxonomy import (
    PRIORITY_RANK,
    RecommendationType,
)

logger = logging.getLogger(__name__)

# Packages released in lockstep with a companion package.
RELATED_PACKAGE_GROUPS: tuple[frozenset[str], ...] = (
    frozenset({"react", "react-dom"}),
    frozenset({"@angular/core", "@angular/common"}),
    frozenset({"vue", "vue-router"}),
    frozenset({"express", "body-parser"}),
    frozenset({"webpack", "webpack-cli"}),
)


def are_packages_related(first: str, second: str) -> bool:
    """True for a known co-evolving pair, or when one name contains the other.

    Empty names are never related to anything.
    """
    a = first.strip().lower()
    b = second.strip().lower()
    if not a or not b:
        return False
    if any(a in group and b in group for group in RELATED_PACKAGE_GROUPS):
        return True
    return a in b or b in a


# ── Rule table ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DependencyRule:
    """One dependency-inference rule.

    Attributes:
        name:         Stable rule identifier.
        source_types: Types of recommendation that can gain an edge.
        target_type:  Type of recommendation the edge points to.
        matches:      ``matches(source, target)`` — does the edge apply?
        reason:       ``reason(source, target)`` — human-readable reason.
    """

    name:         str
    source_types: frozenset[RecommendationType]
    target_type:  RecommendationType
    matches:      Callable[[Recommendation, Recommendation], bool]
    reason:       Callable[[Recommendation, Recommendation], str]


def _mentions_framework(source: Recommendation, target: Recommendation) -> bool:
    framework = target.package_name.lower()
    if not framework:
        return False
    return framework in f"{source.title} {source.description}".lower()


def _outranked_by_related(source: Recommendation, target: Recommendation) -> bool:
    if not are_packages_related(source.package_name, target.package_name):
        return False
    return PRIORITY_RANK[target.priority] > PRIORITY_RANK[source.priority]


def _explicitly_requires(source: Recommendation, target: Recommendation) -> bool:
    dep = target.package_name.lower()
    if not dep:
        return False
    text = " ".join([source.title, source.description, *source.migration_steps]).lower()
    return f"requires {dep}" in text or f"needs {dep}" in text


DEPENDENCY_RULES: tuple[DependencyRule, ...] = (
    DependencyRule(
        name="framework_mention",
        source_types=frozenset({RecommendationType.DEPENDENCY, RecommendationType.PATTERN}),
        target_type=RecommendationType.FRAMEWORK,
        matches=_mentions_framework,
        reason=lambda src, tgt: f"Requires {tgt.package_name.lower()} to be upgraded first",
    ),
    DependencyRule(
        name="related_package",
        source_types=frozenset({RecommendationType.DEPENDENCY}),
        target_type=RecommendationType.DEPENDENCY,
        matches=_outranked_by_related,
        reason=lambda src, tgt: (
            f"{tgt.package_name} should be upgraded before {src.package_name}"
        ),
    ),
    DependencyRule(
        name="explicit_mention",
        source_types=frozenset({RecommendationType.PATTERN}),
        target_type=RecommendationType.DEPENDENCY,
        matches=_explicitly_requires,
        reason=lambda src, tgt: f"Requires {tgt.package_name.lower()} to be updated first",
    ),
)


def identify_dependencies(
    recommendations: list[Recommendation],
    rules: tuple[DependencyRule, ...] = DEPENDENCY_RULES,
) -> list[RecommendationDependency]:
    """Infer dependency edges between recommendations.

    Each recommendation is checked against every rule and every other
    recommendation. A recommendation with no triggered rule gets no entry.
    Edges to the recommendation's own id are never produced, and each
    target id appears at most once per entry.

    Args:
        recommendations: Recommendations with their priority already computed.
        rules:           Rule table; defaults to ``DEPENDENCY_RULES``.

    Returns:
        One ``RecommendationDependency`` per dependent recommendation, in
        input order.
    """
    dependencies: list[RecommendationDependency] = []

    for rec in recommendations:
        depends_on: list[str] = []
        reasons:    list[str] = []

        for rule in rules:
            if rec.type not in rule.source_types:
                continue
            for other in recommendations:
                if other.id == rec.id or other.type != rule.target_type:
                    continue
                if not rule.matches(rec, other):
                    continue
                if other.id not in depends_on:
                    depends_on.append(other.id)
                reasons.append(rule.reason(rec, other))

        if depends_on:
            dependencies.append(
                RecommendationDependency(
                    recommendation_id=rec.id,
                    depends_on=depends_on,
                    reason="; ".join(reasons),
                )
            )

    logger.debug(
        "Inferred %d dependency entries from %d recommendations",
        len(dependencies), len(recommendations),
    )
    return dependencies
