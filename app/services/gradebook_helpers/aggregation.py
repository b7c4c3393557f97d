# /app/services/gradebook_helpers/aggregation.py

"""
The gradebook aggregation engine.

`aggregate` recomputes an entry's total and letter grade from its component
lists, from scratch, every time. It keeps no state and performs no I/O.

The total is a straight sum of raw marks across assignments, tests, exams
and rubric lines. Per-line `weight` values are carried for display only and
are NOT applied. Grade bands are evaluated against that raw total, not a
percentage, so the class convention must keep component scales consistent
(for example, everything out of 100 combined).
"""

from typing import Iterable, Optional

from ...models.common import LetterGrade
from ...models.gradebook_model import AggregateResult, GradebookComponents

# Evaluated top-down; the first threshold the total reaches wins.
GRADE_THRESHOLDS = (
    (90, LetterGrade.A),
    (80, LetterGrade.B),
    (70, LetterGrade.C),
    (60, LetterGrade.D),
)


def grade_for_total(total_marks: float) -> LetterGrade:
    for threshold, grade in GRADE_THRESHOLDS:
        if total_marks >= threshold:
            return grade
    return LetterGrade.F


def _sum_marks(lines: Iterable) -> float:
    return sum((line.marks or 0) for line in lines)


def total_marks(components: GradebookComponents) -> float:
    return (
        _sum_marks(components.assignments)
        + _sum_marks(components.tests)
        + _sum_marks(components.exams)
        + _sum_marks(components.rubrics)
    )


def aggregate(components: GradebookComponents, previous_grade: Optional[str] = None) -> AggregateResult:
    """
    Returns `(total_marks, final_grade)` for a set of component lists.

    The grade stays unset only while the entry has never had a component:
    no components and no grade computed before. Once a grade has been
    assigned, emptying every list yields a total of 0 and an F.
    """
    total = total_marks(components)
    if components.is_empty() and previous_grade is None:
        return AggregateResult(total_marks=total, final_grade=None)
    return AggregateResult(total_marks=total, final_grade=grade_for_total(total))
