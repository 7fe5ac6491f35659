"""
Grade scale tables.

A scale is a direct lookup from a letter-grade token to its grade-point
value. Scales differ only in their tables; the lookup never interpolates.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping

from .errors import UnknownGradeError

# Tokens recognised by every scale that earn credit (or record an attempt)
# without grade points.
DEFAULT_NON_GPA = frozenset({"P", "NP", "CR", "NC", "W", "I", "IP", "AU"})


def normalise_token(token) -> str:
    if token is None:
        return ""
    return str(token).strip().upper()


@dataclass(frozen=True)
class GradeScale:
    name: str
    points: Mapping[str, float]
    non_gpa: FrozenSet[str] = field(default=DEFAULT_NON_GPA)

    def __post_init__(self):
        table = {normalise_token(k): float(v) for k, v in dict(self.points).items()}
        if not table:
            raise ValueError(f"Scale {self.name!r} has no grades.")
        if any(v < 0 for v in table.values()):
            raise ValueError(f"Scale {self.name!r} has a negative grade-point value.")
        overlap = set(table) & set(self.non_gpa)
        if overlap:
            raise ValueError(
                f"Scale {self.name!r} lists {sorted(overlap)} as both graded and non-GPA."
            )
        object.__setattr__(self, "points", MappingProxyType(table))
        object.__setattr__(self, "non_gpa", frozenset(normalise_token(t) for t in self.non_gpa))

    @property
    def max_points(self) -> float:
        return max(self.points.values())

    @property
    def grades(self):
        """Graded tokens, best first."""
        return tuple(sorted(self.points, key=lambda g: -self.points[g]))

    def is_graded(self, token) -> bool:
        return normalise_token(token) in self.points

    def is_non_gpa(self, token) -> bool:
        return normalise_token(token) in self.non_gpa

    def recognises(self, token) -> bool:
        t = normalise_token(token)
        return t in self.points or t in self.non_gpa


def points_for(scale: GradeScale, grade) -> float:
    """
    Grade-point value of ``grade`` on ``scale``.

    Raises ``UnknownGradeError`` for tokens without a grade-point value,
    including the scale's non-GPA tokens (P, W, ...), which carry none.
    """
    token = normalise_token(grade)
    try:
        return scale.points[token]
    except KeyError:
        raise UnknownGradeError(grade, scale.name) from None


# ------------------------
# Scale tables
# ------------------------

# Registrar-style plus/minus scale, A+ capped at 4.0
STANDARD_PLUS_MINUS = GradeScale(
    name="Standard 4.0 (plus/minus)",
    points={
        "A+": 4.0, "A": 4.0, "A-": 3.7,
        "B+": 3.3, "B": 3.0, "B-": 2.7,
        "C+": 2.3, "C": 2.0, "C-": 1.7,
        "D+": 1.3, "D": 1.0, "D-": 0.7,
        "F": 0.0,
    },
)

# UCLA awards no extra value for A+
UCLA = GradeScale(
    name="UCLA 4.0",
    points=dict(STANDARD_PLUS_MINUS.points),
)

# PA programs commonly stop at D (no D-)
NO_D_MINUS = GradeScale(
    name="4.0 (no D-)",
    points={g: p for g, p in STANDARD_PLUS_MINUS.points.items() if g != "D-"},
)

# LSAC CAS conversion, A+ = 4.33 and thirds elsewhere
LSAC = GradeScale(
    name="LSAC 4.33",
    points={
        "A+": 4.33, "A": 4.0, "A-": 3.67,
        "B+": 3.33, "B": 3.0, "B-": 2.67,
        "C+": 2.33, "C": 2.0, "C-": 1.67,
        "D+": 1.33, "D": 1.0, "D-": 0.67,
        "F": 0.0,
    },
)
