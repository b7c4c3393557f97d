# /app/services/enrollment_service.py

"""
This service module is the business logic layer for linking subjects,
teachers and students to a class.

It owns the approval workflow for StudentLinks and TeacherLinks, the
uniqueness rules for every link kind, and the role gating around them. It
orchestrates the pure helpers in `enrollment_helpers` and persists through
the `DatabaseService` Entity Store.
"""

import logging
from typing import List, Optional

from ..core.clock import utcnow
from ..core.config import settings
from ..core.deps import Actor, require_role
from ..core.errors import (
    ConflictError, DuplicateLinkError, InvalidTransitionError, NotFoundError, PermissionDeniedError,
)
from ..models.common import EnrollmentType, LinkKind, LinkStatus, Role
from .database_service import DatabaseService
from .enrollment_helpers import availability, transitions

logger = logging.getLogger(__name__)

_STORE_KIND = {
    LinkKind.SUBJECT: "subject_link",
    LinkKind.TEACHER: "teacher_link",
    LinkKind.STUDENT: "student_link",
}


# --- Proposal ---

def propose_link(
    db: DatabaseService,
    actor: Actor,
    kind: LinkKind,
    class_id: str,
    target_id: str,
    *,
    subject_id: Optional[str] = None,
    initial_status: Optional[LinkStatus] = None,
    enrollment_type: EnrollmentType = EnrollmentType.NEW,
    is_lead_teacher: bool = False,
    enforce_single_lead: Optional[bool] = None,
):
    """
    Creates a link between a class and a subject, teacher or student.

    `target_id` is the subject, teacher or student being linked; a teacher
    link also needs the `subject_id` it is scoped to. Teacher and student
    links need an explicit `initial_status`: both the admin "add" flow
    (approved) and the self-service "request" flow (pending) exist.

    Raises DuplicateLinkError if the pair is already linked, whatever the
    existing link's status.
    """
    kind = LinkKind(kind)
    class_ = db.get("class", class_id)

    if kind == LinkKind.SUBJECT:
        return _propose_subject_link(db, actor, class_, target_id)

    if initial_status is None:
        raise ValueError("An explicit initial status is required for teacher and student links.")
    initial_status = LinkStatus(initial_status)
    if kind == LinkKind.TEACHER:
        if not subject_id:
            raise ValueError("A teacher link needs the subject it is scoped to.")
        if enforce_single_lead is None:
            enforce_single_lead = settings.ENFORCE_SINGLE_LEAD_TEACHER
        return _propose_teacher_link(
            db, actor, class_, subject_id, target_id, initial_status, is_lead_teacher, enforce_single_lead
        )
    return _propose_student_link(db, actor, class_, target_id, initial_status, EnrollmentType(enrollment_type))


def _check_self_service(actor: Actor, role: Role, target_id: str, initial_status: LinkStatus, what: str) -> None:
    if actor.is_admin:
        return
    if actor.role != role or actor.id != target_id:
        raise PermissionDeniedError(f"You can only request {what} for yourself.")
    if initial_status != LinkStatus.PENDING:
        raise PermissionDeniedError(f"Self-service {what} requests must start as pending.")


def _propose_subject_link(db: DatabaseService, actor: Actor, class_, subject_id: str):
    require_role(actor, [Role.ADMIN], "add subjects to a class")
    db.get("subject", subject_id)
    if db.first("subject_link", {"class_id": class_.id, "subject_id": subject_id}):
        raise DuplicateLinkError(f"Subject {subject_id} is already linked to class {class_.code}.")
    link = _create_link(db, "subject_link", {
        "class_id": class_.id, "subject_id": subject_id, "added_by": actor.id,
    })
    logger.info("Subject %s linked to class %s by %s", subject_id, class_.id, actor.id)
    return link


def _propose_teacher_link(
    db: DatabaseService, actor: Actor, class_, subject_id: str, teacher_id: str,
    initial_status: LinkStatus, is_lead_teacher: bool, enforce_single_lead: bool,
):
    _check_self_service(actor, Role.TEACHER, teacher_id, initial_status, "a teaching assignment")
    db.get_user_with_role(teacher_id, Role.TEACHER.value)
    subject_link = db.first("subject_link", {"class_id": class_.id, "subject_id": subject_id})
    if subject_link is None:
        raise NotFoundError(f"Subject {subject_id} is not taught in class {class_.code}.")

    existing = list(subject_link.teachers)
    if any(t.teacher_id == teacher_id for t in existing):
        raise DuplicateLinkError(
            f"Teacher {teacher_id} is already linked to subject {subject_id} in class {class_.code}."
        )
    if is_lead_teacher and enforce_single_lead:
        if any(t.is_lead_teacher and t.status != LinkStatus.REJECTED.value for t in existing):
            raise ConflictError(f"Subject {subject_id} in class {class_.code} already has a lead teacher.")

    link = _create_link(db, "teacher_link", {
        "subject_link_id": subject_link.id,
        "class_id": class_.id,
        "subject_id": subject_id,
        "teacher_id": teacher_id,
        "status": initial_status.value,
        "is_lead_teacher": is_lead_teacher,
        "assigned_by": actor.id,
        "approved_at": utcnow() if initial_status == LinkStatus.APPROVED else None,
    })
    logger.info(
        "Teacher %s proposed for subject %s in class %s as %s",
        teacher_id, subject_id, class_.id, initial_status.value,
    )
    return link


def _propose_student_link(
    db: DatabaseService, actor: Actor, class_, student_id: str,
    initial_status: LinkStatus, enrollment_type: EnrollmentType,
):
    _check_self_service(actor, Role.STUDENT, student_id, initial_status, "enrollment")
    db.get_user_with_role(student_id, Role.STUDENT.value)
    if db.first("student_link", {"class_id": class_.id, "student_id": student_id}):
        raise DuplicateLinkError(f"Student {student_id} is already linked to class {class_.code}.")
    link = _create_link(db, "student_link", {
        "class_id": class_.id,
        "student_id": student_id,
        "status": initial_status.value,
        "enrollment_type": enrollment_type.value,
        "enrollment_date": utcnow(),
        "enrolled_by": actor.id,
    })
    logger.info("Student %s proposed for class %s as %s", student_id, class_.id, initial_status.value)
    return link


def _create_link(db: DatabaseService, store_kind: str, record: dict):
    # Two concurrent proposals can both pass the pre-check; the unique
    # constraint catches the second one.
    try:
        return db.create(store_kind, record)
    except DuplicateLinkError:
        raise
    except ConflictError as e:
        raise DuplicateLinkError(e.message) from e


# --- Decision & Removal ---

def decide_link(db: DatabaseService, actor: Actor, kind: LinkKind, link_id: str, new_status: LinkStatus):
    """
    Approves or rejects a pending link. Decided links are final.
    Approving a teacher link stamps its `approved_at`.
    """
    require_role(actor, [Role.ADMIN], "approve or reject links")
    kind = LinkKind(kind)
    if kind == LinkKind.SUBJECT:
        raise InvalidTransitionError("Subject links carry no approval status.")

    store_kind = _STORE_KIND[kind]
    link = db.get(store_kind, link_id)
    new_status = LinkStatus(new_status)
    try:
        transitions.check_decision(link.status, new_status)
    except InvalidTransitionError:
        logger.debug("Rejected decision %s -> %s on %s", link.status, new_status.value, link_id)
        raise

    patch = {"status": new_status.value}
    if kind == LinkKind.TEACHER and new_status == LinkStatus.APPROVED:
        patch["approved_at"] = utcnow()
    updated = db.update(store_kind, link_id, patch)
    logger.info("Link %s %s by %s", link_id, new_status.value, actor.id)
    return updated


def remove_link(db: DatabaseService, actor: Actor, kind: LinkKind, link_id: str, class_id: Optional[str] = None) -> bool:
    """
    Deletes a link of any status. Removing a link that is already gone is not
    an error; the return value tells whether anything was deleted.
    With `class_id`, a link belonging to another class counts as absent.
    Removing a subject link also removes its teacher links.
    """
    require_role(actor, [Role.ADMIN], "remove links")
    store_kind = _STORE_KIND[LinkKind(kind)]
    link = db.find(store_kind, link_id)
    if link is None or (class_id is not None and link.class_id != class_id):
        logger.debug("Link %s already absent; nothing to remove", link_id)
        return False
    db.delete(store_kind, link_id)
    logger.info("Link %s removed by %s", link_id, actor.id)
    return True


def list_pending_links(db: DatabaseService, actor: Actor, kind: LinkKind, class_id: Optional[str] = None) -> List:
    """The review queue of links still waiting for a decision."""
    require_role(actor, [Role.ADMIN], "review pending links")
    kind = LinkKind(kind)
    if kind == LinkKind.SUBJECT:
        return []
    filters = {"status": LinkStatus.PENDING.value}
    if class_id:
        filters["class_id"] = class_id
    return db.list(_STORE_KIND[kind], filters)


# --- Queries Used by Other Services ---

def is_teacher_approved(db: DatabaseService, teacher_id: str, class_id: str, subject_id: str) -> bool:
    return db.first("teacher_link", {
        "class_id": class_id,
        "subject_id": subject_id,
        "teacher_id": teacher_id,
        "status": LinkStatus.APPROVED.value,
    }) is not None


def is_student_enrolled(db: DatabaseService, student_id: str, class_id: str) -> bool:
    return db.first("student_link", {
        "class_id": class_id,
        "student_id": student_id,
        "status": LinkStatus.APPROVED.value,
    }) is not None


def approved_class_ids_for_student(db: DatabaseService, student_id: str) -> List[str]:
    links = db.list("student_link", {"student_id": student_id, "status": LinkStatus.APPROVED.value})
    return [link.class_id for link in links]


# --- Availability (re-exported for the routers) ---

available_students = availability.available_students
available_teachers = availability.available_teachers
available_subjects = availability.available_subjects
