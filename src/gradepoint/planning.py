"""
Planning helpers: what it takes to reach a target GPA.

These sit on top of the engine; nothing here feeds back into a calculation.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .catalog import RULE_SETS, get_rule_set
from .config import OVERALL
from .engine import calculate_with
from .models import CourseRecord, PreviousRecord
from .rules import RuleSet, ThresholdTable
from .standing import classify


def required_average(current_gpa: Optional[float],
                     current_credits: float,
                     target_gpa: float,
                     planned_credits: float) -> Optional[float]:
    """
    Grade-point average needed over ``planned_credits`` for the cumulative
    GPA to land exactly on ``target_gpa``.

    Returns ``None`` when no credits are planned. A value at or below zero
    means the target is already secured; a value above the scale maximum
    means it cannot be reached with that load.
    """
    if current_credits < 0 or planned_credits < 0:
        raise ValueError("Credits must not be negative.")
    if planned_credits == 0:
        return None

    Ca = current_credits
    Cr = planned_credits
    Ma = current_gpa if current_gpa is not None else 0.0
    return (target_gpa * (Ca + Cr) - Ma * Ca) / Cr


def plan_scenarios(current_gpa: Optional[float],
                   current_credits: float,
                   target_gpa: float,
                   planned_credits: float,
                   max_points: float = 4.0,
                   multiples: Sequence[int] = (1, 2, 3, 4)) -> List[Dict]:
    """
    ``required_average`` for several multiples of the planned load, each
    flagged as achievable when it does not exceed ``max_points``.
    """
    rows = []
    for m in multiples:
        credits = planned_credits * m
        needed = required_average(current_gpa, current_credits, target_gpa, credits)
        rows.append({
            "planned_credits": credits,
            "required_average": needed,
            "achievable": needed is not None and needed <= max_points,
        })
    return rows


def _rank(table: ThresholdTable, label: str) -> int:
    """0 for the top band; the ``below`` label ranks after every band."""
    labels = [b.label for b in table.bands]
    if label in labels:
        return labels.index(label)
    return len(labels)


def check_plan(records: Iterable[CourseRecord],
               planned: Iterable[CourseRecord],
               rule_set_id: str,
               table_key: str = "standing",
               target_label: Optional[str] = None,
               previous: Optional[PreviousRecord] = None,
               catalog: Mapping[str, RuleSet] = RULE_SETS) -> Dict:
    """
    Run the engine on completed plus hypothetical courses and report whether
    the table ``table_key`` lands on ``target_label`` or a better band.

    ``target_label`` defaults to the table's top band.
    """
    rule_set = get_rule_set(rule_set_id, catalog)
    table = rule_set.table(table_key)
    labels = [b.label for b in table.bands]
    if target_label is None:
        target_label = labels[0]
    if target_label not in labels:
        raise ValueError(
            f"{target_label!r} is not a band of {table_key!r}; expected one of {labels}."
        )

    result = calculate_with(list(records) + list(planned), rule_set, previous=previous)
    final_gpa = result.by_category[table.basis].gpa
    final_label = classify(final_gpa, table)
    target_lower = table.bands[labels.index(target_label)].lower

    meets = final_gpa is not None and _rank(table, final_label) <= _rank(table, target_label)
    return {
        "final_gpa": final_gpa,
        "final_label": final_label,
        "target_label": target_label,
        "meets_target": meets,
        "delta_to_band": None if final_gpa is None else final_gpa - target_lower,
        "overall_gpa": result.by_category[OVERALL].gpa,
        "warnings": result.warnings,
    }
