"""
Standing / eligibility evaluator.

Maps bucket GPAs to threshold bands. A table's bands are ordered by lower
bound, best first, and the first band the GPA meets (``>=``) wins. The GPA is
compared at full precision: 3.9349 does not meet a 3.935 cutoff.
"""

from typing import Dict, Mapping, NamedTuple, Optional, Union

from .config import UNAVAILABLE
from .models import CategoryTotals
from .rules import Band, EligibilityGate, RuleSet, ThresholdTable


class Evaluation(NamedTuple):
    standing: str
    honors: Optional[str]
    eligibility: Dict[str, bool]
    tiers: Dict[str, str]


def _as_table(thresholds: Union[ThresholdTable, Mapping[str, float]]) -> ThresholdTable:
    if isinstance(thresholds, ThresholdTable):
        return thresholds
    bands = tuple(Band(label, float(lower)) for label, lower in thresholds.items())
    return ThresholdTable(key="adhoc", label="", bands=bands)


def classify(gpa: Optional[float], thresholds: Union[ThresholdTable, Mapping[str, float]]) -> Optional[str]:
    """
    Label of the first band ``gpa`` meets.

    ``thresholds`` is a ``ThresholdTable`` or a plain ``{label: lower}``
    mapping (any order). Returns ``UNAVAILABLE`` when ``gpa`` is ``None``,
    and the table's ``below`` label (``None`` for a mapping) when no band is
    met.
    """
    if gpa is None:
        return UNAVAILABLE
    table = _as_table(thresholds)
    for band in table.bands:
        if gpa >= band.lower:
            return band.label
    return table.below


def gate_passes(gate: EligibilityGate, by_category: Mapping[str, CategoryTotals]) -> bool:
    """True when every bucket the gate names has a GPA at or above its minimum."""
    for key, minimum in gate.minimums.items():
        gpa = by_category[key].gpa
        if gpa is None or gpa < minimum:
            return False
    return True


def evaluate(by_category: Mapping[str, CategoryTotals], rule_set: RuleSet) -> Evaluation:
    """Classify every table and gate of ``rule_set`` against the bucket totals."""
    def gpa_of(table: ThresholdTable):
        return by_category[table.basis].gpa

    standing = classify(gpa_of(rule_set.standing), rule_set.standing)
    honors = None
    if rule_set.honors is not None:
        honors = classify(gpa_of(rule_set.honors), rule_set.honors)

    eligibility = {gate.key: gate_passes(gate, by_category) for gate in rule_set.gates}
    tiers = {table.key: classify(gpa_of(table), table) for table in rule_set.tiers}
    return Evaluation(standing, honors, eligibility, tiers)
