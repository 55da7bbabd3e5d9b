"""Tests for the modernization taxonomy enums and rank tables."""

from __future__ import annotations

import pytest

from roadmap_engine.taxonomy.modernization_taxonomy import (
    CONFIDENCE_DOWNGRADE,
    PRIORITY_RANK,
    TYPE_PRECEDENCE,
    EffortLevel,
    EstimateConfidence,
    PriorityLevel,
    RecommendationType,
)


class TestEnums:
    def test_recommendation_types(self):
        assert {t.value for t in RecommendationType} == {"dependency", "framework", "pattern"}

    def test_effort_levels(self):
        assert [e.value for e in EffortLevel] == ["low", "medium", "high"]

    def test_priority_levels(self):
        assert [p.value for p in PriorityLevel] == ["critical", "high", "medium", "low"]

    def test_str_enum_compares_to_string(self):
        assert PriorityLevel.CRITICAL == "critical"
        assert f"{RecommendationType.PATTERN}" == "pattern"

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError):
            PriorityLevel("urgent")


class TestRankTables:
    def test_priority_rank_covers_every_level(self):
        assert set(PRIORITY_RANK) == set(PriorityLevel)

    def test_priority_rank_order(self):
        ranked = sorted(PriorityLevel, key=lambda p: -PRIORITY_RANK[p])
        assert ranked == [
            PriorityLevel.CRITICAL,
            PriorityLevel.HIGH,
            PriorityLevel.MEDIUM,
            PriorityLevel.LOW,
        ]

    def test_type_precedence(self):
        ordered = sorted(RecommendationType, key=TYPE_PRECEDENCE.__getitem__)
        assert ordered == [
            RecommendationType.FRAMEWORK,
            RecommendationType.DEPENDENCY,
            RecommendationType.PATTERN,
        ]

    @pytest.mark.parametrize(
        "start, expected",
        [
            (EstimateConfidence.HIGH, EstimateConfidence.MEDIUM),
            (EstimateConfidence.MEDIUM, EstimateConfidence.LOW),
            (EstimateConfidence.LOW, EstimateConfidence.LOW),
        ],
    )
    def test_confidence_downgrade(self, start, expected):
        assert CONFIDENCE_DOWNGRADE[start] == expected
