# /app/services/assignment_service.py

"""
Business logic for the assignment lifecycle.

    draft --> published --> closed

An assignment is created as a draft by a teacher approved on its
{class, subject} pair, becomes visible to students when published, and stops
accepting submissions once closed. Both moves are one-way and are gated on
the owning teacher (administrators may act on any assignment).
"""

import logging
from typing import List

from ..core.deps import Actor, require_role
from ..core.errors import InvalidTransitionError, OutOfRangeError, PermissionDeniedError
from ..models import assignment_model
from ..models.common import AssignmentStatus, Role, SubmissionStatus
from .database_service import DatabaseService
from . import enrollment_service

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    AssignmentStatus.DRAFT: {AssignmentStatus.PUBLISHED},
    AssignmentStatus.PUBLISHED: {AssignmentStatus.CLOSED},
    AssignmentStatus.CLOSED: set(),
}


def check_can_teach(db: DatabaseService, actor: Actor, class_id: str, subject_id: str) -> None:
    """Admins always pass; teachers need an approved link on the pair."""
    require_role(actor, [Role.ADMIN, Role.TEACHER], "manage coursework")
    if actor.is_admin:
        return
    if not enrollment_service.is_teacher_approved(db, actor.id, class_id, subject_id):
        raise PermissionDeniedError(
            f"Teacher {actor.id} is not approved to teach subject {subject_id} in class {class_id}."
        )


def _check_owner(assignment, actor: Actor) -> None:
    if actor.is_admin:
        return
    if actor.role != Role.TEACHER or assignment.created_by != actor.id:
        raise PermissionDeniedError(f"Only the teacher who set assignment {assignment.id} may change it.")


def _check_total_covers_awarded(db: DatabaseService, assignment_id: str, new_total: float) -> None:
    """The total cannot drop below marks already awarded on this assignment."""
    graded = db.list("submission", {"assignment_id": assignment_id, "status": SubmissionStatus.GRADED.value})
    highest = max((s.marks_awarded for s in graded if s.marks_awarded is not None), default=None)
    if highest is not None and new_total < highest:
        raise OutOfRangeError(
            f"Total marks ({new_total:g}) cannot be below the {highest:g} already awarded on assignment {assignment_id}."
        )


# --- CRUD ---

def create_assignment(data: assignment_model.AssignmentCreate, db: DatabaseService, actor: Actor):
    db.get("class", data.class_id)
    db.get("subject", data.subject_id)
    check_can_teach(db, actor, data.class_id, data.subject_id)

    record = data.model_dump()
    record["assignment_type"] = data.assignment_type.value
    record["status"] = AssignmentStatus.DRAFT.value
    record["created_by"] = actor.id
    assignment = db.create("assignment", record)
    logger.info("Assignment %s created as draft by %s", assignment.id, actor.id)
    return assignment


def update_assignment(assignment_id: str, update: assignment_model.AssignmentUpdate, db: DatabaseService, actor: Actor):
    assignment = db.get("assignment", assignment_id)
    _check_owner(assignment, actor)
    if assignment.status == AssignmentStatus.CLOSED.value:
        raise InvalidTransitionError(f"Assignment {assignment_id} is closed and can no longer be edited.")

    update_data = update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No update data provided.")
    if update_data.get("assignment_type") is not None:
        update_data["assignment_type"] = update.assignment_type.value
    if update_data.get("total_marks") is not None:
        _check_total_covers_awarded(db, assignment_id, update_data["total_marks"])
    return db.update("assignment", assignment_id, update_data)


def delete_assignment(assignment_id: str, db: DatabaseService, actor: Actor) -> None:
    """Hard delete; the assignment's submissions go with it."""
    assignment = db.get("assignment", assignment_id)
    _check_owner(assignment, actor)
    db.delete("assignment", assignment_id)
    logger.info("Assignment %s deleted by %s", assignment_id, actor.id)


def list_assignments(db: DatabaseService, class_id: str = None, subject_id: str = None, status: str = None) -> List:
    filters = {}
    if class_id:
        filters["class_id"] = class_id
    if subject_id:
        filters["subject_id"] = subject_id
    if status:
        filters["status"] = AssignmentStatus(status).value
    return db.list("assignment", filters, order_by="due_date")


def list_assignments_for_student(db: DatabaseService, student_id: str) -> List:
    """Published, visible assignments of every class the student is approved in."""
    class_ids = enrollment_service.approved_class_ids_for_student(db, student_id)
    if not class_ids:
        return []
    assignments = db.list(
        "assignment",
        {"class_id": class_ids, "status": AssignmentStatus.PUBLISHED.value},
        order_by="due_date",
    )
    return [a for a in assignments if a.visible_to_students]


# --- Lifecycle ---

def _transition(assignment_id: str, target: AssignmentStatus, db: DatabaseService, actor: Actor):
    assignment = db.get("assignment", assignment_id)
    _check_owner(assignment, actor)
    current = AssignmentStatus(assignment.status)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransitionError(
            f"Assignment {assignment_id} cannot move from '{current.value}' to '{target.value}'."
        )
    updated = db.update("assignment", assignment_id, {"status": target.value})
    logger.info("Assignment %s %s -> %s by %s", assignment_id, current.value, target.value, actor.id)
    return updated


def publish_assignment(assignment_id: str, db: DatabaseService, actor: Actor):
    return _transition(assignment_id, AssignmentStatus.PUBLISHED, db, actor)


def close_assignment(assignment_id: str, db: DatabaseService, actor: Actor):
    return _transition(assignment_id, AssignmentStatus.CLOSED, db, actor)
