"""Result composer: assembles the immutable ``CalculationResult``."""

from typing import Iterable, Mapping, Optional

from .models import CalculationResult, CategoryTotals
from .rules import RuleSet


def compose(
    by_category: Mapping[str, CategoryTotals],
    standing: str,
    eligibility: Mapping[str, bool],
    rule_set: RuleSet,
    units_attempted: float = 0.0,
    honors: Optional[str] = None,
    tiers: Optional[Mapping[str, str]] = None,
    warnings: Iterable = (),
) -> CalculationResult:
    """
    Build the result. Every bucket key the rule set declares is present,
    with ``gpa=None`` and zero credits where nothing was summed; keys come
    out in the rule set's declared order.
    """
    buckets = {}
    for key in rule_set.bucket_keys:
        buckets[key] = by_category.get(key) or CategoryTotals(gpa=None, credits=0.0)

    return CalculationResult(
        rule_set_id=rule_set.id,
        by_category=buckets,
        units_attempted=float(units_attempted),
        standing=standing,
        honors=honors,
        eligibility=dict(eligibility),
        tiers=dict(tiers or {}),
        warnings=tuple(warnings),
    )
