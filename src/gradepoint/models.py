"""
Value types that flow through the engine.

Everything here is created fresh per calculation and is immutable.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .config import OVERALL


def _as_tags(categories) -> Tuple[str, ...]:
    if categories is None:
        return ()
    if isinstance(categories, str):
        return (categories,) if categories else ()
    return tuple(c for c in categories if c)


@dataclass(frozen=True)
class CourseRecord:
    """
    One attempted course.

    ``credits`` is kept as given (it may be ``None`` or NaN for a blank row);
    the aggregator decides whether the row contributes. ``course_key`` is the
    caller's stable identity for repeat handling, e.g. a catalogue number.
    Records without one are never merged with other attempts.
    """

    id: str
    grade: str
    credits: Optional[float]
    categories: Tuple[str, ...] = ()
    name: str = ""
    exclude_from_gpa: bool = False
    course_key: Optional[str] = None
    honors: bool = False
    course_type: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "categories", _as_tags(self.categories))

    @property
    def weighting(self) -> Optional[str]:
        """
        Course type used for bonus points ("honors", "ap", ...). An explicit
        ``course_type`` wins; ``honors=True`` is shorthand for "honors".
        """
        if self.course_type:
            return str(self.course_type).strip().lower()
        return "honors" if self.honors else None

    @property
    def credits_value(self) -> float:
        """Credits as a float, NaN when missing or not numeric."""
        try:
            return float(self.credits)
        except (TypeError, ValueError):
            return math.nan


@dataclass(frozen=True)
class PreviousRecord:
    """Pre-aggregated history folded into the overall bucket."""

    gpa: float
    credits: float


@dataclass(frozen=True)
class CategoryTotals:
    gpa: Optional[float]
    credits: float
    quality_points: float = 0.0

    @classmethod
    def from_sums(cls, quality_points: float, credits: float) -> "CategoryTotals":
        quality_points = float(quality_points)
        credits = float(credits)
        gpa = quality_points / credits if credits > 0 else None
        return cls(gpa=gpa, credits=credits, quality_points=quality_points)


@dataclass(frozen=True)
class CalculationResult:
    rule_set_id: str
    by_category: Mapping[str, CategoryTotals]
    units_attempted: float
    standing: str
    honors: Optional[str] = None
    eligibility: Mapping[str, bool] = field(default_factory=dict)
    tiers: Mapping[str, str] = field(default_factory=dict)
    warnings: Tuple[Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "by_category", MappingProxyType(dict(self.by_category)))
        object.__setattr__(self, "eligibility", MappingProxyType(dict(self.eligibility)))
        object.__setattr__(self, "tiers", MappingProxyType(dict(self.tiers)))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    @property
    def overall(self) -> CategoryTotals:
        return self.by_category[OVERALL]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_set_id": self.rule_set_id,
            "by_category": {
                key: {"gpa": t.gpa, "credits": t.credits, "quality_points": t.quality_points}
                for key, t in self.by_category.items()
            },
            "units_attempted": self.units_attempted,
            "standing": self.standing,
            "honors": self.honors,
            "eligibility": dict(self.eligibility),
            "tiers": dict(self.tiers),
            "warnings": [w.message for w in self.warnings],
        }
