# /app/services/class_service.py

"""
This service module acts as the business logic layer for classes, subjects,
users and prefects.

It serves as a facade, orchestrating calls to the lower-level `crud` helper
and the `DatabaseService`, and applying the role gating: only administrators
create or change classes and subjects. Linking subjects, teachers and
students to a class lives in `enrollment_service`.
"""

import logging
from typing import Dict, List

import pandas as pd

from ..core.clock import utcnow
from ..core.config import settings
from ..core.deps import Actor, require_role
from ..core.errors import DuplicateLinkError, NotFoundError
from ..models import class_model
from ..models.common import LinkStatus, Role
from .class_helpers import crud
from .database_service import DatabaseService
from . import enrollment_service

logger = logging.getLogger(__name__)


# --- Facade Methods for Class CRUD ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService, actor: Actor):
    require_role(actor, [Role.ADMIN], "create classes")
    new_class = crud.create_class(class_data=class_data, db=db)
    logger.info("Class %s (%s) created by %s", new_class.id, new_class.code, actor.id)
    return new_class


def update_class(class_id: str, class_update: class_model.ClassUpdate, db: DatabaseService, actor: Actor):
    require_role(actor, [Role.ADMIN], "edit classes")
    return crud.update_class(class_id=class_id, class_update=class_update, db=db)


def delete_class_by_id(class_id: str, db: DatabaseService, actor: Actor) -> None:
    require_role(actor, [Role.ADMIN], "delete classes")
    crud.delete_class_by_id(class_id=class_id, db=db)


def get_class_details_by_id(class_id: str, db: DatabaseService):
    """Returns the class with its subject (and teacher), student and prefect links loaded."""
    return db.get("class", class_id)


def get_all_classes_with_summary(db: DatabaseService) -> List[Dict]:
    """Retrieves all classes and enriches them with approved and pending student counts."""
    all_classes = db.list("class", order_by="name")
    if not all_classes:
        return []

    links = [{"class_id": l.class_id, "status": l.status} for l in db.list("student_link")]
    links_df = pd.DataFrame(links)

    counts = {}
    if not links_df.empty:
        counts = links_df.groupby(['class_id', 'status']).size().to_dict()

    summary_list = []
    for cls in all_classes:
        summary_list.append({
            "id": cls.id,
            "name": cls.name,
            "code": cls.code,
            "level": cls.level,
            "stream": cls.stream,
            "is_active": cls.is_active,
            "student_count": int(counts.get((cls.id, LinkStatus.APPROVED.value), 0)),
            "pending_count": int(counts.get((cls.id, LinkStatus.PENDING.value), 0)),
        })
    return summary_list


def export_roster_as_csv(class_id: str, db: DatabaseService) -> str:
    """Generates a CSV export of a class roster, one row per student link."""
    class_details = db.get("class", class_id)

    export_data = []
    for link in class_details.students:
        student = link.student
        export_data.append({
            'Student Name': f"{student.first_name} {student.last_name}",
            'Student Email': student.email,
            'Status': link.status,
            'Enrollment Type': link.enrollment_type,
            'Enrollment Date': link.enrollment_date.date().isoformat(),
            'Class Code': class_details.code,
        })

    columns = ['Student Name', 'Student Email', 'Status', 'Enrollment Type', 'Enrollment Date', 'Class Code']
    df = pd.DataFrame(export_data, columns=columns)
    return df.to_csv(index=False)


# --- Subjects & Users ---

def create_subject(subject_data: class_model.SubjectCreate, db: DatabaseService, actor: Actor):
    require_role(actor, [Role.ADMIN], "create subjects")
    return crud.create_subject(subject_data=subject_data, db=db)


def update_subject(subject_id: str, subject_update: class_model.SubjectUpdate, db: DatabaseService, actor: Actor):
    require_role(actor, [Role.ADMIN], "edit subjects")
    return crud.update_subject(subject_id=subject_id, subject_update=subject_update, db=db)


def delete_subject(subject_id: str, db: DatabaseService, actor: Actor) -> None:
    """Only a subject no class, teacher, assignment or gradebook entry refers to can go."""
    require_role(actor, [Role.ADMIN], "delete subjects")
    crud.delete_subject(subject_id=subject_id, db=db)


def create_user(user_data: class_model.UserCreate, db: DatabaseService, actor: Actor):
    require_role(actor, [Role.ADMIN], "register users")
    return crud.create_user(user_data=user_data, db=db)


# --- Prefects ---

def assign_prefect(
    class_id: str,
    student_id: str,
    position: str,
    db: DatabaseService,
    actor: Actor,
    enforce_unique_position: bool = None,
):
    """
    Gives an enrolled student a prefect position in a class. The student must
    hold an approved enrollment in that class.
    """
    require_role(actor, [Role.ADMIN], "assign prefects")
    db.get("class", class_id)
    if not enrollment_service.is_student_enrolled(db, student_id, class_id):
        raise NotFoundError(f"Student {student_id} has no approved enrollment in class {class_id}.")

    position = position.strip()
    if enforce_unique_position is None:
        enforce_unique_position = settings.ENFORCE_UNIQUE_PREFECT_POSITION
    if enforce_unique_position:
        held = db.list("prefect", {"class_id": class_id, "student_id": student_id})
        if any(p.position.lower() == position.lower() for p in held):
            raise DuplicateLinkError(f"Student {student_id} already holds '{position}' in class {class_id}.")

    prefect = db.create("prefect", {
        "class_id": class_id,
        "student_id": student_id,
        "position": position,
        "assigned_at": utcnow(),
        "assigned_by": actor.id,
    })
    logger.info("Student %s made '%s' in class %s", student_id, position, class_id)
    return prefect


def remove_prefect(prefect_id: str, db: DatabaseService, actor: Actor, class_id: str = None) -> bool:
    """
    Idempotent: removing an absent prefect record is not an error. With
    `class_id`, a prefect record of another class counts as absent.
    """
    require_role(actor, [Role.ADMIN], "remove prefects")
    prefect = db.find("prefect", prefect_id)
    if prefect is None or (class_id is not None and prefect.class_id != class_id):
        return False
    db.delete("prefect", prefect_id)
    return True
