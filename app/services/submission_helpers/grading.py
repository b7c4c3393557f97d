# /app/services/submission_helpers/grading.py

from typing import List, Optional

from ...core.errors import EmptySubmissionError, OutOfRangeError
from ...models.assignment_model import RubricLine


def check_marks_in_range(marks_awarded: float, total_marks: float) -> None:
    """Marks must lie in [0, total_marks], both ends included. NaN never does."""
    if not (0 <= marks_awarded <= total_marks):
        raise OutOfRangeError(
            f"Marks awarded ({marks_awarded:g}) must be between 0 and the assignment total ({total_marks:g})."
        )


def check_not_empty(content: Optional[str], attachments: Optional[List[str]]) -> None:
    if not (content and content.strip()) and not attachments:
        raise EmptySubmissionError("A submission needs text content or at least one attachment.")


def serialize_rubric(lines: Optional[List[RubricLine]]) -> Optional[List[dict]]:
    if lines is None:
        return None
    return [line.model_dump() for line in lines]
