# /app/services/submission_service.py

"""
Business logic for the submission workflow.

    submitted --> graded

A submission record is created only when a student hands in work; edits
before grading mutate that same `submitted` record. Whether grading an
already graded submission overwrites it or is refused is a policy
(`ALLOW_REGRADE`), as is whether late work on an assignment that forbids it
is refused or only flagged (`LATE_SUBMISSION_POLICY`).
"""

import logging
from typing import List, Optional

from ..core.clock import utcnow
from ..core.config import settings
from ..core.deps import Actor, require_role
from ..core.errors import (
    AlreadyPastDueError, ConflictError, InvalidTransitionError, PermissionDeniedError,
)
from ..models import assignment_model
from ..models.common import AssignmentStatus, Role, SubmissionStatus
from .database_service import DatabaseService
from .submission_helpers import grading
from .submission_helpers.lateness import lateness
from . import assignment_service, enrollment_service

logger = logging.getLogger(__name__)


# --- Student Side ---

def submit(
    assignment_id: str,
    data: assignment_model.SubmissionCreate,
    db: DatabaseService,
    actor: Actor,
    now=None,
    late_policy: Optional[str] = None,
):
    """
    Records a student's submission for a published assignment.

    Raises EmptySubmissionError when there is neither text nor an attachment,
    and AlreadyPastDueError when the due date has passed, the assignment
    forbids late work and the late policy is "strict".
    """
    require_role(actor, [Role.STUDENT], "submit work")
    grading.check_not_empty(data.content, data.attachments)

    assignment = db.get("assignment", assignment_id)
    if assignment.status != AssignmentStatus.PUBLISHED.value:
        raise InvalidTransitionError(
            f"Assignment {assignment_id} is '{assignment.status}' and does not accept submissions."
        )
    if not enrollment_service.is_student_enrolled(db, actor.id, assignment.class_id):
        raise PermissionDeniedError(f"Student {actor.id} is not enrolled in class {assignment.class_id}.")

    now = now or utcnow()
    policy = late_policy or settings.LATE_SUBMISSION_POLICY
    is_late, late_days = lateness(assignment.due_date, now)
    if is_late and not assignment.allow_late_submissions:
        if policy == "strict":
            raise AlreadyPastDueError(f"Assignment {assignment_id} was due and does not accept late submissions.")
        logger.warning(
            "Accepting late submission from %s for %s (%d day(s) late) under lenient policy",
            actor.id, assignment_id, late_days,
        )

    if db.first("submission", {"assignment_id": assignment_id, "student_id": actor.id}):
        raise ConflictError(
            f"Student {actor.id} has already submitted to assignment {assignment_id}; update it instead."
        )

    submission = db.create("submission", {
        "assignment_id": assignment_id,
        "student_id": actor.id,
        "content": data.content,
        "attachments": list(data.attachments),
        "submitted_at": now,
        "is_late": is_late,
        "late_days": late_days,
        "status": SubmissionStatus.SUBMITTED.value,
    })
    logger.info("Submission %s received for assignment %s", submission.id, assignment_id)
    return submission


def update_submission(
    submission_id: str,
    data: assignment_model.SubmissionUpdate,
    db: DatabaseService,
    actor: Actor,
    now=None,
):
    """Replaces the content of an ungraded submission in place."""
    submission = db.get("submission", submission_id)
    if actor.role != Role.STUDENT or submission.student_id != actor.id:
        raise PermissionDeniedError("Only the student who submitted this work may change it.")
    if submission.status == SubmissionStatus.GRADED.value:
        raise InvalidTransitionError(f"Submission {submission_id} has been graded and can no longer be edited.")
    grading.check_not_empty(data.content, data.attachments)

    assignment = db.get("assignment", submission.assignment_id)
    if assignment.status == AssignmentStatus.CLOSED.value:
        raise InvalidTransitionError(f"Assignment {assignment.id} is closed.")

    now = now or utcnow()
    is_late, late_days = lateness(assignment.due_date, now)
    return db.update("submission", submission_id, {
        "content": data.content,
        "attachments": list(data.attachments),
        "resubmission_count": submission.resubmission_count + 1,
        "last_resubmitted_at": now,
        "is_late": submission.is_late or is_late,
        "late_days": max(submission.late_days, late_days),
    })


# --- Teacher Side ---

def grade(
    submission_id: str,
    request: assignment_model.GradeRequest,
    db: DatabaseService,
    actor: Actor,
    now=None,
    allow_regrade: Optional[bool] = None,
):
    """
    Grades a submission. `marks_awarded` must lie within 0 and the
    assignment's total marks, otherwise OutOfRangeError.
    """
    submission = db.get("submission", submission_id)
    assignment = db.get("assignment", submission.assignment_id)
    assignment_service.check_can_teach(db, actor, assignment.class_id, assignment.subject_id)

    if allow_regrade is None:
        allow_regrade = settings.ALLOW_REGRADE
    if submission.status == SubmissionStatus.GRADED.value:
        if not allow_regrade:
            raise InvalidTransitionError(f"Submission {submission_id} is already graded.")
        logger.warning(
            "Overwriting grade on submission %s (was %s, now %s)",
            submission_id, submission.marks_awarded, request.marks_awarded,
        )

    grading.check_marks_in_range(request.marks_awarded, assignment.total_marks)

    graded = db.update("submission", submission_id, {
        "marks_awarded": request.marks_awarded,
        "feedback": request.feedback,
        "rubric_lines": grading.serialize_rubric(request.rubric_lines),
        "status": SubmissionStatus.GRADED.value,
        "graded_by": actor.id,
        "graded_at": now or utcnow(),
    })
    logger.info("Submission %s graded %s/%s by %s", submission_id, request.marks_awarded, assignment.total_marks, actor.id)
    return graded


def list_submissions(assignment_id: str, db: DatabaseService, actor: Actor) -> List:
    """All submissions for an assignment; students only see their own."""
    assignment = db.get("assignment", assignment_id)
    if actor.role == Role.STUDENT:
        return db.list("submission", {"assignment_id": assignment_id, "student_id": actor.id})
    assignment_service.check_can_teach(db, actor, assignment.class_id, assignment.subject_id)
    return db.list("submission", {"assignment_id": assignment_id}, order_by="submitted_at")
