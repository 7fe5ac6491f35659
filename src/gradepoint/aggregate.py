"""
Aggregator: folds course records against a rule set into per-bucket
credit-weighted sums.

Buckets are ``overall`` and one per declared category tag. ``recent`` is added
when the rule set defines a recent-credit window, and ``unweighted`` (scale
values without course-type bonuses) when it reports one. A record
contributes to ``overall`` and to every bucket its tags name, so
cross-cutting taxonomies (discipline x requirement) are summed independently.

Nothing here rounds. GPAs are full-precision quality points / credits.
"""

import logging
import math
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from .config import OVERALL, RECENT, UNWEIGHTED
from .errors import (
    DuplicateRecordError,
    InvalidCreditsWarning,
    InvalidPreviousRecordWarning,
    UnknownCategoryError,
    UnknownGradeError,
    UnknownGradeWarning,
)
from .models import CategoryTotals, CourseRecord, PreviousRecord
from .rules import RepeatPolicy, RuleSet
from .scales import points_for

logger = logging.getLogger(__name__)


class Aggregation(NamedTuple):
    by_category: dict
    units_attempted: float
    warnings: Tuple


class _Row(NamedTuple):
    """A record that passed validation, with its resolved numbers."""
    record: CourseRecord
    credits: float
    points: Optional[float]  # None when the row earns no grade points
    base_points: Optional[float] = None  # scale value before any bonus

    @property
    def counts_for_gpa(self) -> bool:
        return self.points is not None


# ------------------------
# Validation
# ------------------------
def _check_ids(records: List[CourseRecord]) -> None:
    seen = set()
    for r in records:
        if r.id in seen:
            raise DuplicateRecordError(r.id)
        seen.add(r.id)


def _check_categories(records: List[CourseRecord], rule_set: RuleSet) -> None:
    known = set(rule_set.categories)
    for r in records:
        for tag in r.categories:
            if tag not in known:
                raise UnknownCategoryError(r.id, tag, rule_set.id)


def credits_in_bounds(credits: float, rule_set: RuleSet) -> bool:
    """True when ``credits`` is finite and within the rule set's bounds."""
    return math.isfinite(credits) and rule_set.min_credits <= credits <= rule_set.max_credits


def _resolve(records: List[CourseRecord], rule_set: RuleSet, strict: bool, warnings: list) -> List[_Row]:
    # Credits are checked first: a row with no usable credits is skipped
    # whatever its grade says.
    scale = rule_set.scale
    rows = []
    for r in records:
        credits = r.credits_value
        if not credits_in_bounds(credits, rule_set):
            warnings.append(
                InvalidCreditsWarning(r.id, r.credits, rule_set.min_credits, rule_set.max_credits)
            )
            continue

        if r.exclude_from_gpa or scale.is_non_gpa(r.grade):
            rows.append(_Row(r, credits, None))
        elif scale.is_graded(r.grade):
            base = points_for(scale, r.grade)
            rows.append(_Row(r, credits, rule_set.weighted_points(base, r.weighting), base))
        elif strict:
            raise UnknownGradeError(r.grade, scale.name)
        else:
            warnings.append(UnknownGradeWarning(r.id, r.grade, scale.name))
    return rows


# ------------------------
# Repeated courses
# ------------------------
def apply_repeat_policy(rows: List[_Row], policy: RepeatPolicy) -> List[_Row]:
    """
    Keep one graded attempt per ``course_key``.

    Rows without a course key, and rows that earn no grade points, are never
    merged. Latest is the last attempt in input order; highest is the best
    grade-point value, ties going to the later attempt.
    """
    if policy is RepeatPolicy.INCLUDE_ALL_ATTEMPTS:
        return list(rows)

    keep = {}
    for row in rows:
        key = row.record.course_key
        if key is None or not row.counts_for_gpa:
            continue
        current = keep.get(key)
        if current is None:
            keep[key] = row
        elif policy is RepeatPolicy.REPLACE_WITH_LATEST:
            keep[key] = row
        elif row.points >= current.points:
            keep[key] = row

    survivors = {id(row) for row in keep.values()}
    return [
        row for row in rows
        if row.record.course_key is None or not row.counts_for_gpa or id(row) in survivors
    ]


# ------------------------
# Sums
# ------------------------
def _recent_weights(credits: np.ndarray, window: float) -> np.ndarray:
    """
    Credit weights for the most recent ``window`` credits, walking from the
    last row back. The row that straddles the boundary contributes the part
    that still fits.
    """
    weights = np.zeros_like(credits)
    remaining = float(window)
    for i in range(len(credits) - 1, -1, -1):
        if remaining <= 0:
            break
        take = min(float(credits[i]), remaining)
        weights[i] = take
        remaining -= take
    return weights


def _validate_previous(previous: Optional[PreviousRecord], rule_set: RuleSet, warnings: list):
    if previous is None:
        return None
    try:
        gpa = float(previous.gpa)
        credits = float(previous.credits)
    except (TypeError, ValueError):
        warnings.append(InvalidPreviousRecordWarning("GPA and credits must be numbers"))
        return None

    if not (math.isfinite(gpa) and math.isfinite(credits)):
        warnings.append(InvalidPreviousRecordWarning("GPA and credits must be finite"))
        return None
    if credits <= 0:
        warnings.append(InvalidPreviousRecordWarning("credits must be positive"))
        return None
    if not 0 <= gpa <= rule_set.max_points:
        warnings.append(
            InvalidPreviousRecordWarning(f"GPA {gpa:g} is outside 0 to {rule_set.max_points:g}")
        )
        return None
    return gpa, credits


def aggregate(
    records: Iterable[CourseRecord],
    rule_set: RuleSet,
    previous: Optional[PreviousRecord] = None,
    strict: bool = True,
) -> Aggregation:
    """
    Sum quality points and credits per bucket.

    Returns ``Aggregation(by_category, units_attempted, warnings)`` where
    ``by_category`` maps every bucket key of the rule set to
    ``CategoryTotals``. Rows with invalid credits are left out of every sum
    and reported as warnings. With ``strict`` an unknown grade raises
    ``UnknownGradeError``; otherwise the row is skipped with a warning.
    """
    records = list(records)
    _check_ids(records)
    _check_categories(records, rule_set)

    warnings = []
    rows = _resolve(records, rule_set, strict, warnings)
    rows = apply_repeat_policy(rows, rule_set.repeat_policy)

    graded = [row for row in rows if row.counts_for_gpa]
    points = np.array([row.points for row in graded], dtype=float)
    credits = np.array([row.credits for row in graded], dtype=float)
    quality = points * credits

    by_category = {}
    by_category[OVERALL] = [float(quality.sum()), float(credits.sum())]
    for tag in rule_set.categories:
        mask = np.array([tag in row.record.categories for row in graded], dtype=bool)
        by_category[tag] = [float(quality[mask].sum()), float(credits[mask].sum())]

    if rule_set.recent_credit_window is not None:
        weights = _recent_weights(credits, rule_set.recent_credit_window)
        by_category[RECENT] = [float((points * weights).sum()), float(weights.sum())]

    if rule_set.report_unweighted:
        base = np.array([row.base_points for row in graded], dtype=float)
        by_category[UNWEIGHTED] = [float((base * credits).sum()), float(credits.sum())]

    prev = _validate_previous(previous, rule_set, warnings)
    if prev is not None:
        gpa, prev_credits = prev
        by_category[OVERALL][0] += gpa * prev_credits
        by_category[OVERALL][1] += prev_credits

    attempted = [
        row.credits for row in rows
        if row.counts_for_gpa or rule_set.count_excluded_in_attempted
    ]
    units_attempted = float(np.array(attempted, dtype=float).sum())

    totals = {key: CategoryTotals.from_sums(qp, cr) for key, (qp, cr) in by_category.items()}

    logger.debug(
        "Aggregated %d of %d records under %s: overall credits %.3f",
        len(graded), len(records), rule_set.id, totals[OVERALL].credits,
    )
    for w in warnings:
        logger.warning("%s", w.message)

    return Aggregation(totals, units_attempted, tuple(warnings))
