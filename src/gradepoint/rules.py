"""
Rule-set schema.

A ``RuleSet`` is the whole description of how one institution or program
computes and classifies GPAs: its scale, category taxonomy, credit bounds,
repeat policy and threshold tables. Institution differences are expressed
only through these values; the aggregator and evaluator never branch on a
rule-set id.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .config import OVERALL, RECENT, UNWEIGHTED
from .scales import GradeScale


class RepeatPolicy(Enum):
    """
    How repeated attempts of the same course (same ``course_key``) count.

    INCLUDE_ALL_ATTEMPTS: every attempt counts (AMCAS, LSAC)
    REPLACE_WITH_LATEST: only the most recent graded attempt counts
    REPLACE_WITH_HIGHEST: only the best graded attempt counts
    """
    INCLUDE_ALL_ATTEMPTS = "includeAllAttempts"
    REPLACE_WITH_LATEST = "replaceWithLatest"
    REPLACE_WITH_HIGHEST = "replaceWithHighest"


@dataclass(frozen=True)
class Band:
    label: str
    lower: float


@dataclass(frozen=True)
class ThresholdTable:
    """
    Ordered GPA bands for one classification.

    ``basis`` is the bucket whose GPA is classified. Bands are kept in
    descending order of their lower bound; ``below`` is returned when the
    GPA meets none of them.
    """
    key: str
    label: str
    bands: Tuple[Band, ...]
    basis: str = OVERALL
    below: Optional[str] = None

    def __post_init__(self):
        ordered = tuple(sorted(self.bands, key=lambda b: b.lower, reverse=True))
        if len({b.lower for b in ordered}) != len(ordered):
            raise ValueError(f"Threshold table {self.key!r} repeats a lower bound.")
        object.__setattr__(self, "bands", ordered)


@dataclass(frozen=True)
class EligibilityGate:
    """
    A yes/no threshold. Every bucket in ``minimums`` must have a GPA at or
    above its minimum.
    """
    key: str
    label: str
    minimums: Mapping[str, float]

    def __post_init__(self):
        if not self.minimums:
            raise ValueError(f"Gate {self.key!r} has no minimums.")
        object.__setattr__(self, "minimums", MappingProxyType(dict(self.minimums)))


@dataclass(frozen=True)
class RuleSet:
    id: str
    name: str
    scale: GradeScale
    category_axes: Mapping[str, Tuple[str, ...]]
    standing: ThresholdTable
    min_credits: float = 0.5
    max_credits: float = 20.0
    unit_system: str = "semester"
    repeat_policy: RepeatPolicy = RepeatPolicy.INCLUDE_ALL_ATTEMPTS
    honors: Optional[ThresholdTable] = None
    gates: Tuple[EligibilityGate, ...] = ()
    tiers: Tuple[ThresholdTable, ...] = ()
    # P/NP and other non-GPA rows still count towards units attempted
    count_excluded_in_attempted: bool = True
    # Extra grade points per course type, e.g. {"honors": 0.5, "ap": 1.0}
    course_type_bonus: Mapping[str, float] = field(default_factory=dict)
    bonus_cap: Optional[float] = None
    bonus_on_failing: bool = False
    # Adds an "unweighted" bucket: overall without bonuses or previous record
    report_unweighted: bool = False
    recent_credit_window: Optional[float] = None

    def __post_init__(self):
        axes = {axis: tuple(tags) for axis, tags in dict(self.category_axes).items()}
        object.__setattr__(self, "category_axes", MappingProxyType(axes))
        object.__setattr__(self, "gates", tuple(self.gates))
        object.__setattr__(self, "tiers", tuple(self.tiers))
        bonus = {str(k).strip().lower(): float(v) for k, v in dict(self.course_type_bonus).items()}
        object.__setattr__(self, "course_type_bonus", MappingProxyType(bonus))

        if any(v < 0 for v in bonus.values()):
            raise ValueError(f"Rule set {self.id!r} has a negative course-type bonus.")
        if self.bonus_cap is not None and self.bonus_cap < self.scale.max_points:
            raise ValueError(f"Rule set {self.id!r} caps bonus points below the scale maximum.")

        seen = set()
        for tag in (t for tags in axes.values() for t in tags):
            if tag in (OVERALL, RECENT, UNWEIGHTED):
                raise ValueError(f"Rule set {self.id!r} uses reserved category {tag!r}.")
            if tag in seen:
                raise ValueError(f"Rule set {self.id!r} declares {tag!r} twice.")
            seen.add(tag)

        if not 0 < self.min_credits <= self.max_credits:
            raise ValueError(f"Rule set {self.id!r} has invalid credit bounds.")
        if self.recent_credit_window is not None and self.recent_credit_window <= 0:
            raise ValueError(f"Rule set {self.id!r} has a non-positive recent window.")

        known = set(self.bucket_keys)
        for table in self.tables:
            if table.basis not in known:
                raise ValueError(
                    f"Table {table.key!r} in {self.id!r} classifies unknown bucket {table.basis!r}."
                )
        for gate in self.gates:
            missing = set(gate.minimums) - known
            if missing:
                raise ValueError(
                    f"Gate {gate.key!r} in {self.id!r} refers to unknown buckets {sorted(missing)}."
                )

    @property
    def categories(self) -> Tuple[str, ...]:
        """Every declared category tag, axis by axis."""
        return tuple(t for tags in self.category_axes.values() for t in tags)

    @property
    def bucket_keys(self) -> Tuple[str, ...]:
        keys = (OVERALL,) + self.categories
        if self.recent_credit_window is not None:
            keys += (RECENT,)
        if self.report_unweighted:
            keys += (UNWEIGHTED,)
        return keys

    @property
    def tables(self) -> Tuple[ThresholdTable, ...]:
        extra = (self.honors,) if self.honors is not None else ()
        return (self.standing,) + extra + self.tiers

    @property
    def max_points(self) -> float:
        """Highest grade-point value a course can earn, bonuses included."""
        best = self.scale.max_points + max(self.course_type_bonus.values(), default=0.0)
        if self.bonus_cap is not None:
            best = min(best, self.bonus_cap)
        return best

    def weighted_points(self, points: float, course_type: Optional[str]) -> float:
        """
        ``points`` plus the bonus for ``course_type``, capped at ``bonus_cap``.
        Types without a bonus (regular, or unknown) earn none, and a zero
        grade earns none unless ``bonus_on_failing`` is set.
        """
        bonus = self.course_type_bonus.get(course_type, 0.0) if course_type else 0.0
        if bonus == 0 or (points <= 0 and not self.bonus_on_failing):
            return points
        points += bonus
        if self.bonus_cap is not None:
            points = min(points, self.bonus_cap)
        return points

    def table(self, key: str) -> ThresholdTable:
        for t in self.tables:
            if t.key == key:
                return t
        raise KeyError(key)
