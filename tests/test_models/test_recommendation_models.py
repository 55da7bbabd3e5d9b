"""Tests for Recommendation, CodeExample and package_name()."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from roadmap_engine.models.recommendation import CodeExample, Recommendation, package_name
from roadmap_engine.taxonomy.modernization_taxonomy import (
    EffortLevel,
    PriorityLevel,
    RecommendationType,
)


class TestRecommendation:
    def test_valid_construction(self, sample_framework_rec):
        rec = sample_framework_rec
        assert rec.id == "fw-react"
        assert rec.type == RecommendationType.FRAMEWORK
        assert rec.effort == EffortLevel.HIGH
        assert rec.benefits == ["Concurrent rendering", "Better performance"]

    def test_minimal_record(self):
        rec = Recommendation(id="r1", type="pattern")
        assert rec.title == ""
        assert rec.benefits == []
        assert rec.migration_steps == []
        assert rec.effort == EffortLevel.MEDIUM
        assert rec.priority == PriorityLevel.LOW
        assert rec.code_examples is None

    def test_camel_case_keys(self):
        rec = Recommendation.model_validate(
            {
                "id": "r1",
                "type": "dependency",
                "currentState": "lodash@4.17.15",
                "suggestedState": "lodash@4.17.21",
                "migrationSteps": ["npm install lodash@4.17.21"],
                "automatedTools": ["npm"],
                "codeExamples": {"before": "_.get(a)", "after": "a?.b"},
            }
        )
        assert rec.current_state == "lodash@4.17.15"
        assert rec.suggested_state == "lodash@4.17.21"
        assert rec.migration_steps == ["npm install lodash@4.17.21"]
        assert rec.automated_tools == ["npm"]
        assert rec.code_examples == CodeExample(before="_.get(a)", after="a?.b")

    def test_none_fields_default(self):
        rec = Recommendation(id="r1", type="dependency", title=None, benefits=None, resources=None)
        assert rec.title == ""
        assert rec.benefits == []
        assert rec.resources == []

    def test_single_string_benefit_becomes_list(self):
        rec = Recommendation(id="r1", type="dependency", benefits="Faster builds")
        assert rec.benefits == ["Faster builds"]

    def test_int_id_coerced(self):
        assert Recommendation(id=7, type="dependency").id == "7"

    def test_type_case_insensitive(self):
        assert Recommendation(id="r", type=" Framework ").type == RecommendationType.FRAMEWORK

    def test_unknown_type_raises(self):
        with pytest.raises(ValidationError, match="type"):
            Recommendation(id="r", type="plugin")

    def test_missing_id_raises(self):
        with pytest.raises(ValidationError, match="id"):
            Recommendation(type="dependency")

    def test_unknown_effort_falls_back_to_medium(self):
        assert Recommendation(id="r", type="dependency", effort="huge").effort == EffortLevel.MEDIUM

    def test_unknown_priority_falls_back_to_low(self):
        rec = Recommendation(id="r", type="dependency", priority="urgent")
        assert rec.priority == PriorityLevel.LOW

    @pytest.mark.parametrize("value", [5, True, 2.5])
    def test_scalar_collection_becomes_list(self, value):
        rec = Recommendation(id="r1", type="dependency", benefits=value, resources=value)
        assert rec.benefits == [str(value)]
        assert rec.resources == [str(value)]

    def test_tuple_collection_drops_none(self):
        rec = Recommendation(id="r1", type="dependency", migration_steps=("a", None, 3))
        assert rec.migration_steps == ["a", "3"]

    def test_extra_keys_ignored(self):
        rec = Recommendation.model_validate({"id": "r", "type": "dependency", "score": 9})
        assert not hasattr(rec, "score")

    def test_frozen(self, sample_dependency_rec):
        with pytest.raises(ValidationError):
            sample_dependency_rec.title = "changed"

    def test_package_name_property(self, sample_framework_rec):
        assert sample_framework_rec.package_name == "react"


class TestPackageName:
    @pytest.mark.parametrize(
        "state, expected",
        [
            ("react@16.14.0", "react"),
            ("@angular/core@12.0.0", "@angular/core"),
            ("@angular/core", "@angular/core"),
            ("django==3.2", "django"),
            ("requests>=2.0", "requests"),
            ("flask~=2.0", "flask"),
            ("lodash", "lodash"),
            ("  vue@2.6.0 ", "vue"),
            ("", ""),
        ],
    )
    def test_parsing(self, state, expected):
        assert package_name(state) == expected
