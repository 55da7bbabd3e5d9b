"""
Modernization taxonomy: the closed vocabularies every recommendation uses.

Four independent dimensions:
  - ``RecommendationType``  — the *what*: dependency, framework, or code pattern.
  - ``EffortLevel``         — the *how hard*: low / medium / high.
  - ``PriorityLevel``       — the *how urgent*: critical / high / medium / low.
  - ``EstimateConfidence``  — the *how sure*: grading of a time estimate.

Rank tables give each enum a stable numeric order for sorting.

Usage example::

    from roadmap_engine.taxonomy.modernization_taxonomy import PriorityLevel

    PRIORITY_RANK[PriorityLevel.CRITICAL]   # 4

This module has NO imports from any other ``roadmap_engine`` package.
"""

from enum import StrEnum


class RecommendationType(StrEnum):
    """Kind of modernization action."""

    DEPENDENCY = "dependency"
    """Upgrade or replace a single third-party package."""

    FRAMEWORK = "framework"
    """Major framework upgrade; usually gates dependent work."""

    PATTERN = "pattern"
    """Rewrite of an outdated code pattern across the codebase."""


class EffortLevel(StrEnum):
    """Relative implementation effort."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PriorityLevel(StrEnum):
    """Computed urgency class of a recommendation."""

    CRITICAL = "critical"
    """Known critical/high-severity security vulnerability."""

    HIGH = "high"
    """Deprecated package or breaking change requiring code edits."""

    MEDIUM = "medium"
    LOW = "low"


class EstimateConfidence(StrEnum):
    """Coarse reliability grading of a time estimate."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ── Rank tables ───────────────────────────────────────────────────────────────

PRIORITY_RANK: dict[PriorityLevel, int] = {
    PriorityLevel.CRITICAL: 4,
    PriorityLevel.HIGH:     3,
    PriorityLevel.MEDIUM:   2,
    PriorityLevel.LOW:      1,
}

# Execution precedence inside a phase: frameworks first, patterns last.
TYPE_PRECEDENCE: dict[RecommendationType, int] = {
    RecommendationType.FRAMEWORK:  0,
    RecommendationType.DEPENDENCY: 1,
    RecommendationType.PATTERN:    2,
}

# One downgrade step; LOW stays LOW.
CONFIDENCE_DOWNGRADE: dict[EstimateConfidence, EstimateConfidence] = {
    EstimateConfidence.HIGH:   EstimateConfidence.MEDIUM,
    EstimateConfidence.MEDIUM: EstimateConfidence.LOW,
    EstimateConfidence.LOW:    EstimateConfidence.LOW,
}
