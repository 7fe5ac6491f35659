"""
Errors and non-fatal annotations raised or reported by the engine.

Fatal conditions derive from ``GradePointError`` and are raised to the
caller. Conditions the engine can step around (a row with bad credits, an
unusable previous record) derive from ``GradePointWarning``; those are never
raised, they are collected on ``CalculationResult.warnings``.
"""

from typing import Iterable, Optional


class GradePointError(Exception):
    """Base class for fatal engine errors."""


class UnknownGradeError(GradePointError, KeyError):
    def __init__(self, grade, scale_name: str):
        self.grade = grade
        self.scale_name = scale_name
        super().__init__(f"Grade {grade!r} is not on the {scale_name} scale.")

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.args[0]


class UnknownRuleSetError(GradePointError, KeyError):
    def __init__(self, rule_set_id, available: Iterable[str] = ()):
        self.rule_set_id = rule_set_id
        self.available = tuple(available)
        msg = f"Unknown rule set {rule_set_id!r}."
        if self.available:
            msg += f" Available: {', '.join(self.available)}."
        super().__init__(msg)

    def __str__(self) -> str:
        return self.args[0]


class UnknownCategoryError(GradePointError, KeyError):
    def __init__(self, record_id, category, rule_set_id: str):
        self.record_id = record_id
        self.category = category
        self.rule_set_id = rule_set_id
        super().__init__(
            f"Record {record_id!r} is tagged {category!r}, "
            f"which rule set {rule_set_id!r} does not declare."
        )

    def __str__(self) -> str:
        return self.args[0]


class DuplicateRecordError(GradePointError, ValueError):
    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__(f"Record id {record_id!r} appears more than once.")


# ------------------------
# Non-fatal annotations
# ------------------------

class GradePointWarning(UserWarning):
    """
    Base class for annotations returned alongside a result.

    ``record_id`` is ``None`` when the annotation is not about a course row.
    """

    def __init__(self, message: str, record_id: Optional[str] = None):
        self.record_id = record_id
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.args == other.args
            and self.record_id == other.record_id
        )

    def __hash__(self):
        return hash((type(self), self.args, self.record_id))


class InvalidCreditsWarning(GradePointWarning):
    def __init__(self, record_id, credits, min_credits: float, max_credits: float):
        self.credits = credits
        self.min_credits = min_credits
        self.max_credits = max_credits
        super().__init__(
            f"Record {record_id!r} has credits {credits!r} outside "
            f"[{min_credits:g}, {max_credits:g}]; it was left out of every total.",
            record_id=record_id,
        )


class UnknownGradeWarning(GradePointWarning):
    def __init__(self, record_id, grade, scale_name: str):
        self.grade = grade
        super().__init__(
            f"Record {record_id!r} has grade {grade!r}, which is not on the "
            f"{scale_name} scale; it was treated as incomplete.",
            record_id=record_id,
        )


class InvalidPreviousRecordWarning(GradePointWarning):
    def __init__(self, reason: str):
        super().__init__(f"Previous record ignored: {reason}.")
