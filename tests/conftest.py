import pytest

from gradepoint import CourseRecord, get_rule_set


@pytest.fixture
def standard():
    return get_rule_set("standard-4.0-plus-minus")


@pytest.fixture
def science_records():
    """Three science courses: A (4 cr), B+ (3 cr), B+ (4 cr)."""
    return [
        CourseRecord("bio", "A", 4, categories="science", name="Biology"),
        CourseRecord("chem", "B+", 3, categories="science", name="Chemistry"),
        CourseRecord("phys", "B+", 4, categories="science", name="Physics"),
    ]


@pytest.fixture
def mixed_records():
    return [
        CourseRecord("bio", "A", 4, categories="science"),
        CourseRecord("chem", "B", 3, categories="science"),
        CourseRecord("hist", "A-", 3, categories="nonScience"),
        CourseRecord("eng", "C+", 3, categories="nonScience"),
    ]


@pytest.fixture
def science_gpa():
    return (4 * 4.0 + 3 * 3.3 + 4 * 3.3) / 11
