import io

import pandas as pd
import pytest

from gradepoint import InvalidCreditsWarning, calculate
from gradepoint.io_csv import (
    COURSE_COLUMNS,
    _normalise_cols,
    example_courses,
    load_courses,
    parse_courses,
    read_csv_upload,
    validate_courses_csv,
)

CSV = """Name,Grade,Credit,Category,Course Key
Anatomy,A,4,science;prerequisite,BIO210
Psychology,B+,3,nonScience;prerequisite,PSY100
,,,,
Studio,A,abc,,
Ethics,P,2,,
"""


def test_normalise_cols_aliases():
    df = pd.DataFrame(columns=[" Grade ", "Units", "Course", "Exclude"])
    assert list(_normalise_cols(df).columns) == ["grade", "credits", "name", "exclude_from_gpa"]


def test_read_csv_upload():
    df = read_csv_upload(io.StringIO(CSV))
    assert {"grade", "credits", "name", "categories", "course_key"} <= set(df.columns)


def test_validate_requires_grade_and_credits():
    df = _normalise_cols(pd.DataFrame({"Grade": ["A"]}))
    with pytest.raises(ValueError) as exc:
        validate_courses_csv(df)
    assert "credits" in str(exc.value)


def test_parse_courses():
    records = load_courses(io.StringIO(CSV))
    assert [r.id for r in records] == ["row-1", "row-2", "row-3", "row-4"]

    anatomy = records[0]
    assert anatomy.grade == "A"
    assert anatomy.credits == 4.0
    assert anatomy.categories == ("science", "prerequisite")
    assert anatomy.course_key == "BIO210"
    assert anatomy.name == "Anatomy"

    studio = records[2]
    assert studio.credits is None
    assert studio.categories == ()


def test_parsed_records_through_engine():
    records = load_courses(io.StringIO(CSV))
    result = calculate(records, "nursing-prerequisite")
    assert result.by_category["prerequisite"].gpa == pytest.approx((16 + 9.9) / 7)
    assert result.units_attempted == 9
    assert [type(w) for w in result.warnings] == [InvalidCreditsWarning]


def test_flags_and_ids():
    df = pd.DataFrame({
        "id": ["x1", "x2"],
        "grade": ["A", "B"],
        "credits": [3, 3],
        "exclude_from_gpa": [True, "no"],
        "honors": ["yes", False],
    })
    records = parse_courses(df)
    assert [r.id for r in records] == ["x1", "x2"]
    assert records[0].exclude_from_gpa is True
    assert records[1].exclude_from_gpa is False
    assert records[0].honors is True
    assert records[1].honors is False


def test_numeric_flag_column_with_blank_cell():
    csv = "Grade,Credits,Exclude_From_GPA\nA,3,1\nB,3,\nC,3,0\n"
    records = load_courses(io.StringIO(csv))
    assert [r.exclude_from_gpa for r in records] == [True, False, False]

    result = calculate(records, "standard-4.0-plus-minus")
    assert result.overall.gpa == pytest.approx(2.5)
    assert result.overall.credits == 6
    assert result.units_attempted == 9


def test_course_type_column():
    csv = "Name,Grade,Credits,Course_Type\nCalculus,A,1,AP\nBiology,B,1,Honors\nArt,C,1,\n"
    records = load_courses(io.StringIO(csv))
    assert [r.course_type for r in records] == ["ap", "honors", None]

    result = calculate(records, "weighted-high-school")
    assert result.overall.gpa == pytest.approx((5.0 + 3.5 + 2.0) / 3)


def test_example_courses_cover_every_record_field():
    df = example_courses()
    assert tuple(df.columns) == COURSE_COLUMNS
    validate_courses_csv(df)

    records = parse_courses(df)
    assert [r.id for r in records] == list(df["id"])
    assert all(r.course_key for r in records)
    assert records[2].weighting == "honors"
    assert records[0].weighting == "regular"

    result = calculate(records, "weighted-high-school")
    assert result.by_category["unweighted"].gpa == pytest.approx((16 + 9.9 + 13.2) / 11)
    assert result.overall.gpa == pytest.approx((16 + 9.9 + 15.2) / 11)
