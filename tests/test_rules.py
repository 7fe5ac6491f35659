import dataclasses

import pytest

from gradepoint import Band, EligibilityGate, RuleSet, ThresholdTable
from gradepoint.config import OVERALL, RECENT, UNWEIGHTED
from gradepoint.scales import STANDARD_PLUS_MINUS

STANDING = ThresholdTable("standing", "Standing", (Band("Good", 2.0),), below="Probation")


def make_rule_set(**overrides):
    fields = dict(
        id="test",
        name="Test",
        scale=STANDARD_PLUS_MINUS,
        category_axes={"discipline": ("science", "nonScience")},
        standing=STANDING,
    )
    fields.update(overrides)
    return RuleSet(**fields)


class TestThresholdTable:

    def test_bands_sorted_descending(self):
        table = ThresholdTable("t", "T", (Band("low", 2.0), Band("high", 3.5), Band("mid", 3.0)))
        assert [b.label for b in table.bands] == ["high", "mid", "low"]

    def test_repeated_lower_bound_rejected(self):
        with pytest.raises(ValueError):
            ThresholdTable("t", "T", (Band("a", 3.0), Band("b", 3.0)))

    def test_gate_needs_minimums(self):
        with pytest.raises(ValueError):
            EligibilityGate("g", "G", {})


class TestRuleSet:

    def test_bucket_keys(self):
        rs = make_rule_set()
        assert rs.bucket_keys == (OVERALL, "science", "nonScience")

    def test_recent_window_adds_bucket(self):
        rs = make_rule_set(recent_credit_window=45)
        assert rs.bucket_keys[-1] == RECENT

    def test_reserved_tag_rejected(self):
        with pytest.raises(ValueError):
            make_rule_set(category_axes={"x": ("overall",)})

    def test_duplicate_tag_rejected(self):
        with pytest.raises(ValueError):
            make_rule_set(category_axes={"a": ("science",), "b": ("science",)})

    def test_credit_bounds_checked(self):
        with pytest.raises(ValueError):
            make_rule_set(min_credits=5, max_credits=1)
        with pytest.raises(ValueError):
            make_rule_set(min_credits=0)

    def test_table_basis_must_exist(self):
        tier = ThresholdTable("t", "T", (Band("ok", 3.0),), basis="bcpm")
        with pytest.raises(ValueError):
            make_rule_set(tiers=(tier,))

    def test_gate_buckets_must_exist(self):
        gate = EligibilityGate("g", "G", {"overall": 3.0, "research": 3.0})
        with pytest.raises(ValueError):
            make_rule_set(gates=(gate,))

    def test_is_immutable(self):
        rs = make_rule_set()
        with pytest.raises(dataclasses.FrozenInstanceError):
            rs.max_credits = 99
        with pytest.raises(TypeError):
            rs.category_axes["extra"] = ("x",)

    def test_max_points_includes_bonus(self):
        assert make_rule_set(course_type_bonus={"honors": 0.5, "ap": 1.0}).max_points == 5.0

    def test_max_points_respects_cap(self):
        rs = make_rule_set(course_type_bonus={"ap": 1.5}, bonus_cap=5.0)
        assert rs.max_points == 5.0

    def test_bonus_validation(self):
        with pytest.raises(ValueError):
            make_rule_set(course_type_bonus={"ap": -1.0})
        with pytest.raises(ValueError):
            make_rule_set(course_type_bonus={"ap": 1.0}, bonus_cap=3.5)

    def test_unweighted_bucket_key(self):
        rs = make_rule_set(report_unweighted=True)
        assert rs.bucket_keys[-1] == UNWEIGHTED
        with pytest.raises(ValueError):
            make_rule_set(category_axes={"x": (UNWEIGHTED,)})

    def test_table_lookup(self):
        rs = make_rule_set()
        assert rs.table("standing") is STANDING
        with pytest.raises(KeyError):
            rs.table("nope")


class TestWeightedPoints:

    rs = make_rule_set(
        course_type_bonus={"Honors": 0.5, "AP": 1.0},
        bonus_cap=4.5,
    )

    def test_bonus_by_course_type(self):
        assert self.rs.weighted_points(3.0, "honors") == 3.5
        assert self.rs.weighted_points(3.0, "ap") == 4.0

    def test_cap(self):
        assert self.rs.weighted_points(4.0, "ap") == 4.5

    def test_regular_and_unknown_types(self):
        assert self.rs.weighted_points(3.0, None) == 3.0
        assert self.rs.weighted_points(3.0, "regular") == 3.0
        assert self.rs.weighted_points(3.0, "seminar") == 3.0

    def test_failing_grade(self):
        assert self.rs.weighted_points(0.0, "ap") == 0.0
        on_failing = make_rule_set(course_type_bonus={"ap": 1.0}, bonus_on_failing=True)
        assert on_failing.weighted_points(0.0, "ap") == 1.0
