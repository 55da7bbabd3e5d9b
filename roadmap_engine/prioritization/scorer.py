"""
Recommendation scoring: maps a recommendation's content to a numeric score
and a categorical priority.

Score formula (weighted sum)
----------------------------
    total = (
        security_bonus          # 100 x severity multiplier, when any benefit
                                # mentions security / vulnerability
        + type_weight           # framework 10, dependency 5, pattern 3
        + effort_benefit_term   # benefit_score / effort divisor, capped at 40
    )

Component explanations
----------------------
security_bonus (0 or 100-150):
    Guarantees a security item outranks any non-security item of the same
    type and effort. Multiplier: critical 1.5, high 1.2, otherwise 1.0.

type_weight (3-10):
    Frameworks gate more downstream work than single dependencies, which in
    turn outweigh localized code-pattern rewrites.

effort_benefit_term (0-40):
    benefit_score = 2 per benefit + 3 per high-value keyword present
    (security, performance, vulnerability, critical, stability,
    compatibility), divided by effort (low 1, medium 2, high 3).
    The cap keeps every non-security score below the security bonus.

Priority determination (rule cascade — first match wins)
--------------------------------------------------------
    1. CRITICAL : security vulnerability AND critical / high severity
    2. HIGH     : deprecated / no longer maintained
    3. HIGH     : breaking changes requiring code modification
    4. MEDIUM   : score >= 20
    5. LOW      : everything else
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.taxonomy.modernization_taxonomy import (
    EffortLevel,
    PriorityLevel,
    RecommendationType,
)

SECURITY_BONUS = 100.0
MAX_EFFORT_BENEFIT = 40.0
MEDIUM_THRESHOLD = 20.0

_TYPE_WEIGHT: dict[RecommendationType, float] = {
    RecommendationType.FRAMEWORK:  10.0,
    RecommendationType.DEPENDENCY:  5.0,
    RecommendationType.PATTERN:     3.0,
}

_EFFORT_DIVISOR: dict[EffortLevel, float] = {
    EffortLevel.LOW:    1.0,
    EffortLevel.MEDIUM: 2.0,
    EffortLevel.HIGH:   3.0,
}

_SEVERITY_MULTIPLIER: dict[str, float] = {
    "critical": 1.5,
    "high":     1.2,
}

_HIGH_VALUE_BENEFITS: tuple[str, ...] = (
    "security",
    "performance",
    "vulnerability",
    "critical",
    "stability",
    "compatibility",
)

# ── Keyword tables ────────────────────────────────────────────────────────────

SECURITY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p)
    for p in (
        r"vulnerab",
        r"\bsecurity\b",
        r"\bcve-\d",
        r"\bexploit",
        r"\bmalicious\b",
        r"\bbreach",
    )
)

# Evaluated in order; the first hit names the severity.
SEVERITY_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("critical", re.compile(r"\bcritical\b")),
    ("high",     re.compile(r"\bhigh[- ]severity\b|\bseverity:?\s*high\b")),
    ("medium",   re.compile(r"\b(?:medium|moderate)[- ]severity\b")),
    ("low",      re.compile(r"\blow[- ]severity\b")),
)

DEPRECATION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p)
    for p in (
        r"\bdeprecat",
        r"no longer (?:maintained|supported)",
        r"\bunmaintained\b",
        r"end[- ]of[- ]life",
        r"\beol\b",
        r"\bobsolete\b",
    )
)

BREAKING_CHANGE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p)
    for p in (
        r"breaking changes?",
        r"\bincompatible\b",
        r"requires? code (?:modifications?|changes?)",
    )
)


# ── Rule table ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PriorityRule:
    """One entry of the priority cascade.

    Attributes:
        name:      Stable rule identifier (used in logs and tests).
        predicate: Returns ``True`` when the rule fires.
        outcome:   Priority assigned when it fires.
    """

    name:      str
    predicate: Callable[[Recommendation], bool]
    outcome:   PriorityLevel


def _severity_text(rec: Recommendation) -> str:
    return " ".join([rec.title, rec.description, *rec.benefits]).lower()


def _summary_text(rec: Recommendation) -> str:
    return f"{rec.title} {rec.description}".lower()


def _matches_any(text: str, patterns: tuple[re.Pattern[str], ...]) -> bool:
    return any(p.search(text) for p in patterns)


def has_security_vulnerability(rec: Recommendation) -> bool:
    """True when title, description or benefits mention a security issue."""
    return _matches_any(_severity_text(rec), SECURITY_PATTERNS)


def vulnerability_severity(rec: Recommendation) -> str | None:
    """Severity named in the recommendation text, or ``None`` when absent."""
    text = _severity_text(rec)
    for severity, pattern in SEVERITY_PATTERNS:
        if pattern.search(text):
            return severity
    return None


def is_severe_security_issue(rec: Recommendation) -> bool:
    return has_security_vulnerability(rec) and vulnerability_severity(rec) in (
        "critical",
        "high",
    )


def is_deprecated(rec: Recommendation) -> bool:
    return _matches_any(_summary_text(rec), DEPRECATION_PATTERNS)


def has_breaking_changes(rec: Recommendation) -> bool:
    return _matches_any(_summary_text(rec), BREAKING_CHANGE_PATTERNS)


PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule("security_severity", is_severe_security_issue, PriorityLevel.CRITICAL),
    PriorityRule("deprecated",        is_deprecated,            PriorityLevel.HIGH),
    PriorityRule("breaking_change",   has_breaking_changes,     PriorityLevel.HIGH),
)


# ── Scoring ───────────────────────────────────────────────────────────────────

def has_security_benefit(rec: Recommendation) -> bool:
    """True when any benefit mentions "security" or "vulnerability"."""
    return any(
        "security" in b.lower() or "vulnerability" in b.lower() for b in rec.benefits
    )


def benefit_score(benefits: list[str]) -> float:
    """2 per benefit plus 3 per high-value keyword present in the benefits."""
    text = " ".join(benefits).lower()
    score = 2.0 * len(benefits)
    score += 3.0 * sum(1 for kw in _HIGH_VALUE_BENEFITS if kw in text)
    return score


def score_recommendation(rec: Recommendation) -> float:
    """Compute the weighted priority score of one recommendation.

    Returns:
        Score >= 100 for security-flagged items; below 100 + type weight
        for everything else.
    """
    score = 0.0

    if has_security_benefit(rec):
        multiplier = _SEVERITY_MULTIPLIER.get(vulnerability_severity(rec) or "", 1.0)
        score += SECURITY_BONUS * multiplier

    score += _TYPE_WEIGHT.get(rec.type, 0.0)

    divisor = _EFFORT_DIVISOR.get(rec.effort, 2.0)
    score += min(benefit_score(rec.benefits) / divisor, MAX_EFFORT_BENEFIT)

    return round(score, 2)


def calculate_priority(rec: Recommendation) -> PriorityLevel:
    """Classify a recommendation by walking ``PRIORITY_RULES`` in order.

    Falls back to the score threshold when no rule fires: ``MEDIUM`` at
    ``MEDIUM_THRESHOLD`` and above, ``LOW`` below.
    """
    for rule in PRIORITY_RULES:
        if rule.predicate(rec):
            return rule.outcome
    if score_recommendation(rec) >= MEDIUM_THRESHOLD:
        return PriorityLevel.MEDIUM
    return PriorityLevel.LOW
