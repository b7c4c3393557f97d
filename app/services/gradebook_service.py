# /app/services/gradebook_service.py

"""
This service module is the business logic layer for gradebook entries.

Every write that touches a component list (assignments, tests, exams,
rubrics) runs the aggregation engine over the complete, updated lists and
persists the recomputed `total_marks` and `final_grade` in the same write.
Derived values sent by a client are never stored.
"""

import logging
from typing import Dict, List, Optional

from pydantic import TypeAdapter

from ..core.clock import utcnow
from ..core.deps import Actor
from ..core.errors import ConflictError, NotFoundError, PermissionDeniedError
from ..models import gradebook_model
from ..models.common import ComponentKind, Role, Term
from ..models.gradebook_model import GradebookComponents
from .database_service import DatabaseService
from .gradebook_helpers import aggregation, analytics
from . import assignment_service, enrollment_service

logger = logging.getLogger(__name__)

COMPONENT_MODELS = {
    ComponentKind.ASSIGNMENTS: gradebook_model.AssignmentComponent,
    ComponentKind.TESTS: gradebook_model.ClassTestComponent,
    ComponentKind.EXAMS: gradebook_model.ExamComponent,
    ComponentKind.RUBRICS: gradebook_model.RubricComponent,
}


# --- Pure Helpers ---

def aggregate_entry(entry) -> gradebook_model.AggregateResult:
    """Recomputes total and grade for a stored entry (or any object with the four lists)."""
    components = GradebookComponents.model_validate(entry, from_attributes=True)
    return aggregation.aggregate(components, previous_grade=getattr(entry, "final_grade", None))


def _components_record(components: GradebookComponents) -> Dict:
    return components.model_dump(mode="json")


def _recomputed_record(components: GradebookComponents, previous_grade: Optional[str]) -> Dict:
    result = aggregation.aggregate(components, previous_grade=previous_grade)
    record = _components_record(components)
    record["total_marks"] = result.total_marks
    record["final_grade"] = result.final_grade.value if result.final_grade else None
    return record


# --- CRUD ---

def create_entry(data: gradebook_model.GradebookEntryCreate, db: DatabaseService, actor: Actor):
    db.get("class", data.class_id)
    db.get("subject", data.subject_id)
    db.get_user_with_role(data.student_id, Role.STUDENT.value)
    assignment_service.check_can_teach(db, actor, data.class_id, data.subject_id)
    if not enrollment_service.is_student_enrolled(db, data.student_id, data.class_id):
        raise NotFoundError(f"Student {data.student_id} has no approved enrollment in class {data.class_id}.")

    key = {
        "student_id": data.student_id,
        "class_id": data.class_id,
        "subject_id": data.subject_id,
        "academic_year": data.academic_year,
        "term": data.term.value,
    }
    if db.first("gradebook_entry", key):
        raise ConflictError(
            f"A gradebook entry already exists for student {data.student_id}, subject {data.subject_id}, "
            f"{data.academic_year} {data.term.value}."
        )

    components = GradebookComponents.model_validate(data.model_dump(include=set(GradebookComponents.model_fields)))
    record = {**key, **_recomputed_record(components, previous_grade=None)}
    record["remarks"] = data.remarks
    record["teacher_id"] = actor.id if actor.role == Role.TEACHER else None
    entry = db.create("gradebook_entry", record)
    logger.info("Gradebook entry %s created (total=%s grade=%s)", entry.id, entry.total_marks, entry.final_grade)
    return entry


def _get_for_teaching(entry_id: str, db: DatabaseService, actor: Actor):
    entry = db.get("gradebook_entry", entry_id)
    assignment_service.check_can_teach(db, actor, entry.class_id, entry.subject_id)
    return entry


def update_entry(entry_id: str, update: gradebook_model.GradebookEntryUpdate, db: DatabaseService, actor: Actor):
    """
    Replaces whichever component lists are present and/or the remarks.
    Any component change triggers a full recompute.
    """
    entry = _get_for_teaching(entry_id, db, actor)
    update_data = update.model_dump(exclude_unset=True)

    for derived in ("total_marks", "final_grade"):
        if derived in update_data:
            logger.debug("Ignoring client-supplied %s on gradebook entry %s", derived, entry_id)
            update_data.pop(derived)
    if not update_data:
        raise ValueError("No update data provided.")

    patch = {}
    if "remarks" in update_data:
        patch["remarks"] = update_data.pop("remarks")

    if update_data:
        components = GradebookComponents.model_validate(entry, from_attributes=True)
        for kind_name in update_data:
            setattr(components, kind_name, getattr(update, kind_name) or [])
        patch.update(_recomputed_record(components, previous_grade=entry.final_grade))

    updated = db.update("gradebook_entry", entry_id, patch)
    logger.info("Gradebook entry %s updated (total=%s grade=%s)", entry_id, updated.total_marks, updated.final_grade)
    return updated


def add_component_item(entry_id: str, kind: ComponentKind, item: Dict, db: DatabaseService, actor: Actor):
    """Appends one line item to a component list and recomputes."""
    kind = ComponentKind(kind)
    entry = _get_for_teaching(entry_id, db, actor)
    line = TypeAdapter(COMPONENT_MODELS[kind]).validate_python(item)

    components = GradebookComponents.model_validate(entry, from_attributes=True)
    getattr(components, kind.value).append(line)
    return db.update("gradebook_entry", entry_id, _recomputed_record(components, entry.final_grade))


def remove_component_item(entry_id: str, kind: ComponentKind, index: int, db: DatabaseService, actor: Actor):
    """Removes the line item at `index` from a component list and recomputes."""
    kind = ComponentKind(kind)
    entry = _get_for_teaching(entry_id, db, actor)

    components = GradebookComponents.model_validate(entry, from_attributes=True)
    lines = getattr(components, kind.value)
    if index < 0 or index >= len(lines):
        raise NotFoundError(f"Gradebook entry {entry_id} has no {kind.value} item at position {index}.")
    del lines[index]
    return db.update("gradebook_entry", entry_id, _recomputed_record(components, entry.final_grade))


def publish_entry(entry_id: str, db: DatabaseService, actor: Actor):
    _get_for_teaching(entry_id, db, actor)
    return db.update("gradebook_entry", entry_id, {"is_published": True, "published_at": utcnow()})


def get_entry(entry_id: str, db: DatabaseService, actor: Actor):
    entry = db.get("gradebook_entry", entry_id)
    if actor.role == Role.STUDENT and (entry.student_id != actor.id or not entry.is_published):
        # Unpublished entries are invisible to students rather than forbidden.
        raise NotFoundError(f"Gradebook entry with ID {entry_id} not found.")
    return entry


def list_entries(db: DatabaseService, actor: Actor, filters: Optional[Dict] = None) -> List:
    filters = {k: v for k, v in (filters or {}).items() if v is not None}
    if actor.role == Role.STUDENT:
        filters.update({"student_id": actor.id, "is_published": True})
    return db.list("gradebook_entry", filters)


# --- Analytics ---

def class_summary(
    class_id: str,
    subject_id: str,
    academic_year: str,
    term: Term,
    db: DatabaseService,
    actor: Actor,
) -> gradebook_model.ClassGradeSummary:
    """
    Computes the class statistics for one subject and term and writes each
    student's position in class back to their entry.
    """
    if actor.role == Role.STUDENT:
        raise PermissionDeniedError("Students cannot view class-wide gradebook summaries.")
    assignment_service.check_can_teach(db, actor, class_id, subject_id)
    term = Term(term)

    entries = db.list("gradebook_entry", {
        "class_id": class_id,
        "subject_id": subject_id,
        "academic_year": academic_year,
        "term": term.value,
    })
    stats = analytics.calculate_class_statistics(entries)

    for entry in entries:
        position = stats["positions"].get(entry.student_id)
        if position is not None and entry.position_in_class != position:
            db.update("gradebook_entry", entry.id, {"position_in_class": position})

    return gradebook_model.ClassGradeSummary(
        class_id=class_id,
        subject_id=subject_id,
        academic_year=academic_year,
        term=term,
        **stats,
    )
