"""Tests for grade scale tables and point lookup."""

import pytest

from gradepoint import GradeScale, UnknownGradeError, points_for
from gradepoint.scales import LSAC, NO_D_MINUS, STANDARD_PLUS_MINUS, UCLA


class TestPointsFor:

    def test_standard_lookup(self):
        assert points_for(STANDARD_PLUS_MINUS, "A") == 4.0
        assert points_for(STANDARD_PLUS_MINUS, "B-") == 2.7
        assert points_for(STANDARD_PLUS_MINUS, "F") == 0.0

    def test_tokens_are_normalised(self):
        assert points_for(STANDARD_PLUS_MINUS, " b+ ") == 3.3

    def test_a_plus_differs_between_scales(self):
        assert points_for(UCLA, "A+") == 4.0
        assert points_for(LSAC, "A+") == 4.33

    def test_unknown_grade_raises(self):
        with pytest.raises(UnknownGradeError) as exc:
            points_for(STANDARD_PLUS_MINUS, "Z")
        assert exc.value.grade == "Z"
        assert "Z" in str(exc.value)

    def test_unknown_grade_is_a_key_error(self):
        with pytest.raises(KeyError):
            points_for(STANDARD_PLUS_MINUS, "E")

    def test_pass_has_no_points(self):
        """P is recognised but is not a graded token"""
        assert STANDARD_PLUS_MINUS.recognises("P")
        with pytest.raises(UnknownGradeError):
            points_for(STANDARD_PLUS_MINUS, "P")

    def test_no_d_minus_scale(self):
        assert not NO_D_MINUS.is_graded("D-")
        assert NO_D_MINUS.is_graded("D")


class TestGradeScale:

    def test_max_points(self):
        assert STANDARD_PLUS_MINUS.max_points == 4.0
        assert LSAC.max_points == 4.33

    def test_grades_best_first(self):
        grades = STANDARD_PLUS_MINUS.grades
        assert grades[0] == "A+"
        assert grades[-1] == "F"

    def test_rejects_empty_table(self):
        with pytest.raises(ValueError):
            GradeScale("empty", {})

    def test_rejects_negative_points(self):
        with pytest.raises(ValueError):
            GradeScale("bad", {"A": 4.0, "F": -1.0})

    def test_rejects_graded_non_gpa_overlap(self):
        with pytest.raises(ValueError):
            GradeScale("bad", {"A": 4.0, "P": 0.0})

    def test_points_table_is_read_only(self):
        with pytest.raises(TypeError):
            STANDARD_PLUS_MINUS.points["A"] = 5.0
