import re
from typing import List

import numpy as np
import pandas as pd

from .models import CourseRecord

# ------------------------
# CSV helpers
# ------------------------

_ALIASES = {
    "credit": "credits",
    "units": "credits",
    "unit": "credits",
    "course": "name",
    "category": "categories",
    "key": "course_key",
    "exclude": "exclude_from_gpa",
    "type": "course_type",
}

_TRUE = {"1", "true", "yes", "y", "x"}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    for alias, canonical in _ALIASES.items():
        if alias in df.columns and canonical not in df.columns:
            df = df.rename(columns={alias: canonical})
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)


def validate_courses_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"grade", "credits"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected at least: Grade, Credits.")
    return df


def _text(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def _flag(value) -> bool:
    if value is None or pd.isna(value):
        return False
    # 0/1 columns with a blank cell come back from pandas as floats
    if isinstance(value, (bool, int, float, np.bool_, np.number)):
        return bool(value)
    return _text(value).lower() in _TRUE


def _tags(value):
    return tuple(t.strip() for t in re.split(r"[;|,]", _text(value)) if t.strip())


def parse_courses(df: pd.DataFrame) -> List[CourseRecord]:
    """
    Turn a normalised upload into ``CourseRecord``s.

    Rows without a grade are skipped. Credits are passed through as read
    (NaN included) so the engine can flag bad values itself.
    """
    records = []
    for _, row in df.iterrows():
        grade = _text(row.get("grade"))
        if not grade:
            continue
        credits = row.get("credits")
        credits = None if pd.isna(credits) else pd.to_numeric(credits, errors="coerce")

        record_id = _text(row.get("id")) or f"row-{len(records) + 1}"
        records.append(CourseRecord(
            id=record_id,
            grade=grade,
            credits=None if credits is None or pd.isna(credits) else float(credits),
            categories=_tags(row.get("categories")),
            name=_text(row.get("name")),
            exclude_from_gpa=_flag(row.get("exclude_from_gpa")),
            course_key=_text(row.get("course_key")) or None,
            honors=_flag(row.get("honors")),
            course_type=_text(row.get("course_type")).lower() or None,
        ))
    return records


# Columns the course editor shows, in order
COURSE_COLUMNS = (
    "id", "name", "grade", "credits", "categories", "course_key", "course_type", "exclude_from_gpa",
)


def example_courses() -> pd.DataFrame:
    """Starter rows for the course editor."""
    rows = [
        ("bio-1", "Biology I", "A", 4.0, "", "BIO101", "regular", False),
        ("chem-1", "Chemistry I", "B+", 3.0, "", "CHEM101", "regular", False),
        ("writing", "Writing", "B+", 4.0, "", "ENG101", "honors", False),
    ]
    return pd.DataFrame(rows, columns=list(COURSE_COLUMNS))


def load_courses(uploaded_file) -> List[CourseRecord]:
    df = validate_courses_csv(read_csv_upload(uploaded_file))
    return parse_courses(df)
