import math

import pytest

from gradepoint import calculate
from gradepoint.display import format_credits, format_gpa, result_frame, round_half_up


@pytest.mark.parametrize("value,places,expected", [
    (2.675, 2, 2.68),
    (3.45, 1, 3.5),
    (3.444, 2, 3.44),
    (3.9349, 3, 3.935),
])
def test_round_half_up(value, places, expected):
    assert round_half_up(value, places) == expected


def test_format_gpa():
    assert format_gpa(None) == "N/A"
    assert format_gpa(math.nan) == "N/A"
    assert format_gpa(3.5545) == "3.55"
    assert format_gpa(4) == "4.00"
    assert format_gpa(3.9349, places=3) == "3.935"


def test_format_credits():
    assert format_credits(120.04) == "120.0"
    assert format_credits(7.25) == "7.3"


def test_result_frame(science_records):
    df = result_frame(calculate(science_records, "standard-4.0-plus-minus"))
    assert list(df.columns) == ["Bucket", "GPA", "Credits", "Quality points"]
    assert list(df["Bucket"]) == ["overall", "science", "nonScience"]
    row = df.set_index("Bucket").loc["science"]
    assert row["GPA"] == 3.55
    assert row["Credits"] == 11
    assert math.isnan(df.set_index("Bucket").loc["nonScience", "GPA"])
