"""
Engine entry point.

``calculate`` is a pure function of its arguments: it looks the rule set up
in a read-only catalog, aggregates, evaluates and composes. Calling it again
on every input change is the intended use; nothing is cached between calls.
"""

import logging
from typing import Iterable, Mapping, Optional

from .aggregate import aggregate
from .catalog import RULE_SETS, get_rule_set
from .compose import compose
from .config import OVERALL
from .models import CalculationResult, CourseRecord, PreviousRecord
from .rules import RuleSet
from .standing import evaluate

logger = logging.getLogger(__name__)


def calculate_with(
    records: Iterable[CourseRecord],
    rule_set: RuleSet,
    previous: Optional[PreviousRecord] = None,
    strict: bool = True,
) -> CalculationResult:
    """Same as ``calculate`` for a ``RuleSet`` object that is not in the catalog."""
    agg = aggregate(records, rule_set, previous=previous, strict=strict)
    ev = evaluate(agg.by_category, rule_set)
    result = compose(
        agg.by_category,
        ev.standing,
        ev.eligibility,
        rule_set,
        units_attempted=agg.units_attempted,
        honors=ev.honors,
        tiers=ev.tiers,
        warnings=agg.warnings,
    )
    logger.debug(
        "%s: overall GPA %s over %.3f credits, standing %r",
        rule_set.id, result.by_category[OVERALL].gpa, result.by_category[OVERALL].credits,
        result.standing,
    )
    return result


def calculate(
    records: Iterable[CourseRecord],
    rule_set_id: str,
    previous: Optional[PreviousRecord] = None,
    strict: bool = True,
    catalog: Mapping[str, RuleSet] = RULE_SETS,
) -> CalculationResult:
    """
    Compute every GPA bucket and classification for ``records`` under the
    rule set registered as ``rule_set_id``.

    Raises ``UnknownRuleSetError`` for an id not in ``catalog``,
    ``UnknownGradeError`` (strict mode), ``UnknownCategoryError`` and
    ``DuplicateRecordError``. Invalid credits and an unusable previous record
    are reported on ``result.warnings`` instead.
    """
    rule_set = get_rule_set(rule_set_id, catalog)
    return calculate_with(records, rule_set, previous=previous, strict=strict)
