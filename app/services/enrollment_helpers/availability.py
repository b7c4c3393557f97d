# /app/services/enrollment_helpers/availability.py

"""
Candidate lists for the "add to class" pickers.

Exclusion ignores link status: a pending or rejected link still
blocks a second proposal for the same pair, so those entities are never
offered again until the old link is removed.
"""

from typing import List

from ...core.errors import NotFoundError
from ...models.common import Role
from ..database_service import DatabaseService


def available_students(db: DatabaseService, class_id: str) -> List:
    db.get("class", class_id)
    linked = {link.student_id for link in db.list("student_link", {"class_id": class_id})}
    students = db.list("user", {"role": Role.STUDENT.value}, order_by="last_name")
    return [s for s in students if s.id not in linked]


def available_teachers(db: DatabaseService, class_id: str, subject_id: str) -> List:
    subject_link = db.first("subject_link", {"class_id": class_id, "subject_id": subject_id})
    if subject_link is None:
        raise NotFoundError(f"Subject {subject_id} is not taught in class {class_id}.")
    linked = {link.teacher_id for link in subject_link.teachers}
    teachers = db.list("user", {"role": Role.TEACHER.value}, order_by="last_name")
    return [t for t in teachers if t.id not in linked]


def available_subjects(db: DatabaseService, class_id: str) -> List:
    db.get("class", class_id)
    linked = {link.subject_id for link in db.list("subject_link", {"class_id": class_id})}
    subjects = db.list("subject", order_by="name")
    return [s for s in subjects if s.id not in linked]
