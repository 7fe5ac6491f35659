"""
gradepoint: a rules-driven GPA engine.

``calculate(records, rule_set_id, previous=None)`` turns course records into
per-bucket GPAs, credit totals and standing/eligibility verdicts under one of
the catalog's institution or program profiles.
"""

import logging

from .catalog import RULE_SETS, build_catalog, get_rule_set, list_rule_sets
from .compose import compose
from .aggregate import aggregate
from .engine import calculate, calculate_with
from .errors import (
    DuplicateRecordError,
    GradePointError,
    GradePointWarning,
    InvalidCreditsWarning,
    InvalidPreviousRecordWarning,
    UnknownCategoryError,
    UnknownGradeError,
    UnknownGradeWarning,
    UnknownRuleSetError,
)
from .models import CalculationResult, CategoryTotals, CourseRecord, PreviousRecord
from .planning import check_plan, plan_scenarios, required_average
from .rules import Band, EligibilityGate, RepeatPolicy, RuleSet, ThresholdTable
from .scales import GradeScale, points_for
from .standing import classify, evaluate
from .units import UNIT_SYSTEMS, convert_totals, convert_units

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Band",
    "CalculationResult",
    "CategoryTotals",
    "CourseRecord",
    "DuplicateRecordError",
    "EligibilityGate",
    "GradePointError",
    "GradePointWarning",
    "GradeScale",
    "InvalidCreditsWarning",
    "InvalidPreviousRecordWarning",
    "PreviousRecord",
    "RULE_SETS",
    "RepeatPolicy",
    "RuleSet",
    "ThresholdTable",
    "UNIT_SYSTEMS",
    "UnknownCategoryError",
    "UnknownGradeError",
    "UnknownGradeWarning",
    "UnknownRuleSetError",
    "aggregate",
    "build_catalog",
    "calculate",
    "calculate_with",
    "check_plan",
    "classify",
    "compose",
    "convert_totals",
    "convert_units",
    "evaluate",
    "get_rule_set",
    "list_rule_sets",
    "plan_scenarios",
    "points_for",
    "required_average",
]
