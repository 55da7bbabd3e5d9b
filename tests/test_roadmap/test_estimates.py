"""
Tests for roadmap_engine/roadmap/estimates.py.

What we test
------------
estimate_recommendation_time():
  - Base ranges per effort; framework x1.5; pattern occurrence multiplier,
    capped at 3.
  - Confidence is always medium.

estimate_phase_time():
  - Sums member ranges.
  - Confidence by member count; a high-effort member downgrades one step.

calculate_total_estimate():
  - Elementwise sum; confidence by phase count only.
"""

from __future__ import annotations

import pytest

from roadmap_engine.models.roadmap import TimeEstimate
from roadmap_engine.roadmap.estimates import (
    calculate_total_estimate,
    estimate_phase_time,
    estimate_recommendation_time,
    estimate_timeline,
)
from roadmap_engine.roadmap.phases import create_phase
from roadmap_engine.taxonomy.modernization_taxonomy import EstimateConfidence


class TestEstimateRecommendationTime:
    @pytest.mark.parametrize(
        "effort, expected",
        [("low", (0.5, 1.0)), ("medium", (1.0, 3.0)), ("high", (3.0, 7.0))],
    )
    def test_base_ranges(self, make_rec, effort, expected):
        est = estimate_recommendation_time(make_rec(effort=effort))
        assert (est.min_days, est.max_days) == pytest.approx(expected)

    def test_framework_multiplier(self, make_rec):
        est = estimate_recommendation_time(make_rec(rec_type="framework", effort="medium"))
        assert (est.min_days, est.max_days) == pytest.approx((1.5, 4.5))

    def test_pattern_occurrences(self, sample_pattern_rec):
        # 20 occurrences -> x3.0
        est = estimate_recommendation_time(sample_pattern_rec)
        assert (est.min_days, est.max_days) == pytest.approx((3.0, 9.0))

    def test_pattern_small_count(self, make_rec):
        rec = make_rec(rec_type="pattern", title="Use const (5 occurrences)", effort="low")
        est = estimate_recommendation_time(rec)
        assert (est.min_days, est.max_days) == pytest.approx((0.75, 1.5))

    def test_pattern_multiplier_capped(self, make_rec):
        rec = make_rec(rec_type="pattern", title="Drop var (400 occurrences)", effort="low")
        est = estimate_recommendation_time(rec)
        assert (est.min_days, est.max_days) == pytest.approx((1.5, 3.0))

    def test_pattern_without_count(self, make_rec):
        est = estimate_recommendation_time(make_rec(rec_type="pattern", title="Use classes"))
        assert (est.min_days, est.max_days) == pytest.approx((0.5, 1.0))

    def test_confidence_always_medium(self, make_rec):
        for effort in ("low", "medium", "high"):
            est = estimate_recommendation_time(make_rec(effort=effort))
            assert est.confidence == EstimateConfidence.MEDIUM


class TestEstimatePhaseTime:
    def test_sums_members(self, make_rec):
        recs = [make_rec(rec_id="a", effort="low"), make_rec(rec_id="b", effort="medium")]
        est = estimate_phase_time(recs)
        assert (est.min_days, est.max_days) == pytest.approx((1.5, 4.0))

    @pytest.mark.parametrize(
        "count, expected",
        [
            (1, EstimateConfidence.HIGH),
            (3, EstimateConfidence.HIGH),
            (4, EstimateConfidence.MEDIUM),
            (10, EstimateConfidence.MEDIUM),
            (11, EstimateConfidence.LOW),
        ],
    )
    def test_confidence_by_size(self, make_rec, count, expected):
        recs = [make_rec(rec_id=f"r{i}") for i in range(count)]
        assert estimate_phase_time(recs).confidence == expected

    def test_high_effort_downgrades_high(self, make_rec):
        recs = [make_rec(rec_id="a", effort="high"), make_rec(rec_id="b")]
        assert estimate_phase_time(recs).confidence == EstimateConfidence.MEDIUM

    def test_high_effort_downgrades_medium(self, make_rec):
        recs = [make_rec(rec_id=f"r{i}") for i in range(4)] + [make_rec(rec_id="h", effort="high")]
        assert estimate_phase_time(recs).confidence == EstimateConfidence.LOW

    def test_low_stays_low(self, make_rec):
        recs = [make_rec(rec_id=f"r{i}", effort="high") for i in range(12)]
        assert estimate_phase_time(recs).confidence == EstimateConfidence.LOW

    def test_timeline_matches_phase_estimate(self, make_rec):
        phase = create_phase(1, [make_rec(effort="medium"), make_rec(rec_id="b", effort="high")])
        assert estimate_timeline(phase) == phase.estimate


class TestCalculateTotalEstimate:
    def _estimates(self, n: int) -> list[TimeEstimate]:
        return [TimeEstimate(min_days=1.0, max_days=2.0) for _ in range(n)]

    def test_empty(self):
        est = calculate_total_estimate([])
        assert (est.min_days, est.max_days) == (0, 0)
        assert est.confidence == EstimateConfidence.HIGH

    def test_sums(self):
        est = calculate_total_estimate(self._estimates(3))
        assert (est.min_days, est.max_days) == pytest.approx((3.0, 6.0))

    @pytest.mark.parametrize(
        "count, expected",
        [
            (2, EstimateConfidence.HIGH),
            (3, EstimateConfidence.MEDIUM),
            (5, EstimateConfidence.MEDIUM),
            (6, EstimateConfidence.LOW),
        ],
    )
    def test_confidence_by_phase_count(self, count, expected):
        assert calculate_total_estimate(self._estimates(count)).confidence == expected

    def test_ignores_phase_confidence(self):
        estimates = [TimeEstimate(min_days=1, max_days=1, confidence=EstimateConfidence.LOW)]
        assert calculate_total_estimate(estimates).confidence == EstimateConfidence.HIGH

    def test_accepts_generator(self):
        est = calculate_total_estimate(e for e in self._estimates(2))
        assert est.max_days == pytest.approx(4.0)
