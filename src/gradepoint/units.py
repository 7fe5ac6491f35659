"""
Unit converter.

Credit systems are linear multiples of one semester credit hour, so a
conversion is a single ratio. Results are not rounded.
"""

from types import MappingProxyType

from .models import CategoryTotals

# Semester credits per unit of each system
UNIT_SYSTEMS = MappingProxyType({
    "semester": 1.0,
    "quarter": 2.0 / 3.0,
    "ects": 0.5,
    "uk": 0.25,  # CATS
})


def _factor(system: str) -> float:
    try:
        return UNIT_SYSTEMS[system]
    except KeyError:
        raise ValueError(
            f"Unknown unit system {system!r}; expected one of {', '.join(UNIT_SYSTEMS)}."
        ) from None


def convert_units(value: float, from_system: str, to_system: str) -> float:
    """convert_units(180, "quarter", "semester") -> 120.0 (to float precision)."""
    return float(value) * _factor(from_system) / _factor(to_system)


def convert_totals(totals: CategoryTotals, from_system: str, to_system: str) -> CategoryTotals:
    """
    Re-express a bucket's credits (and quality points) in another system.

    The GPA is a ratio of the two and is carried over unchanged.
    """
    return CategoryTotals(
        gpa=totals.gpa,
        credits=convert_units(totals.credits, from_system, to_system),
        quality_points=convert_units(totals.quality_points, from_system, to_system),
    )
