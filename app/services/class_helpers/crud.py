# /app/services/class_helpers/crud.py

import logging
from typing import Dict

from ...core.errors import ConflictError, InvalidTransitionError
from ...models import class_model
from ..database_service import DatabaseService
from ...db.models.class_models import Class

logger = logging.getLogger(__name__)


# --- CLASS-RELATED CORE BUSINESS LOGIC ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService) -> Class:
    """Creates a new class record. A clashing code raises ConflictError."""
    new_class_record = class_data.model_dump()
    new_class_record['is_active'] = True
    return db.create("class", new_class_record)


def update_class(class_id: str, class_update: class_model.ClassUpdate, db: DatabaseService) -> Class:
    """
    Applies a partial update. The class code is fixed at creation, so a patch
    that tries to change it is rejected outright.
    """
    update_data = class_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No update data provided.")

    existing = db.get("class", class_id)
    new_code = update_data.pop('code', None)
    if new_code is not None and new_code != existing.code:
        raise InvalidTransitionError(f"The code of class {existing.code} cannot be changed.")
    return db.update("class", class_id, update_data)


def delete_class_by_id(class_id: str, db: DatabaseService) -> None:
    # Subject, teacher and student links plus prefects go with the class.
    db.delete("class", class_id)
    logger.info("Class %s deleted", class_id)


# --- SUBJECT & USER CORE BUSINESS LOGIC ---

def create_subject(subject_data: class_model.SubjectCreate, db: DatabaseService):
    record = subject_data.model_dump()
    record['is_active'] = True
    return db.create("subject", record)


def update_subject(subject_id: str, subject_update: class_model.SubjectUpdate, db: DatabaseService):
    update_data = subject_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No update data provided.")
    return db.update("subject", subject_id, update_data)


# Kinds whose records point at a subject; any of them blocks its deletion.
SUBJECT_REFERENCES = ("subject_link", "teacher_link", "assignment", "gradebook_entry")


def delete_subject(subject_id: str, db: DatabaseService) -> None:
    db.get("subject", subject_id)
    for kind in SUBJECT_REFERENCES:
        if db.first(kind, {"subject_id": subject_id}):
            raise ConflictError(f"Subject {subject_id} is still referenced by a {kind} and cannot be deleted.")
    db.delete("subject", subject_id)
    logger.info("Subject %s deleted", subject_id)


def create_user(user_data: class_model.UserCreate, db: DatabaseService):
    record: Dict = user_data.model_dump()
    record['role'] = user_data.role.value
    record['email'] = user_data.email.strip().lower()
    record['is_active'] = True
    return db.create("user", record)
