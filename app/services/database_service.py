# /app/services/database_service.py

"""
The Entity Store facade.

Every service talks to persistence exclusively through `DatabaseService`,
which exposes five CRUD primitives keyed by entity kind and id:
`get`, `list`, `create`, `update` and `delete`. Missing ids raise
`NotFoundError`; uniqueness breaches raise `ConflictError`.

The facade owns id generation (kind-prefixed, like `cls_1a2b3c4d5e6f`) and
delegates the actual queries to `EntityRepositorySQL`. One instance lives for
one request and one database session, which is what gives each entity its
single writer.
"""

import uuid
from typing import Any, Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError
from ..db.database import get_db
from ..db.models.assignment_models import Assignment, Submission
from ..db.models.class_models import Class, Prefect, StudentLink, SubjectLink, TeacherLink
from ..db.models.gradebook_models import GradebookEntry
from ..db.models.user_subject_models import Subject, User
from .database_helpers.entity_repository_sql import EntityRepositorySQL

# kind -> (ORM model, id prefix)
ENTITY_KINDS = {
    "user": (User, "usr"),
    "subject": (Subject, "sub"),
    "class": (Class, "cls"),
    "subject_link": (SubjectLink, "sl"),
    "teacher_link": (TeacherLink, "tl"),
    "student_link": (StudentLink, "stl"),
    "prefect": (Prefect, "pf"),
    "assignment": (Assignment, "asg"),
    "submission": (Submission, "smb"),
    "gradebook_entry": (GradebookEntry, "gbe"),
}


def _model_for(kind: str):
    try:
        return ENTITY_KINDS[kind][0]
    except KeyError:
        raise ValueError(f"Unknown entity kind '{kind}'.")


def new_id(kind: str) -> str:
    """Generates a fresh kind-prefixed identifier."""
    prefix = ENTITY_KINDS[kind][1]
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class DatabaseService:
    def __init__(self, db_session: Session):
        self.session = db_session
        self.repo = EntityRepositorySQL(db_session)

    # --- ENTITY STORE PRIMITIVES ---

    def find(self, kind: str, entity_id: str) -> Optional[Any]:
        """Like `get`, but returns None instead of raising."""
        if not entity_id:
            return None
        return self.repo.get(_model_for(kind), entity_id)

    def get(self, kind: str, entity_id: str) -> Any:
        entity = self.find(kind, entity_id)
        if entity is None:
            raise NotFoundError(f"{kind.replace('_', ' ').capitalize()} with ID {entity_id} not found.")
        return entity

    def list(self, kind: str, filters: Optional[Dict[str, Any]] = None, order_by: Optional[str] = None) -> List[Any]:
        return self.repo.list(_model_for(kind), filters, order_by=order_by)

    def create(self, kind: str, value: Dict) -> Any:
        record = dict(value)
        record.setdefault("id", new_id(kind))
        return self.repo.add(_model_for(kind), record)

    def update(self, kind: str, entity_id: str, patch: Dict) -> Any:
        entity = self.get(kind, entity_id)
        if not patch:
            return entity
        return self.repo.update(entity, patch)

    def delete(self, kind: str, entity_id: str) -> None:
        entity = self.get(kind, entity_id)
        self.repo.delete(entity)

    # --- CONVENIENCE LOOKUPS (built on the primitives) ---

    def first(self, kind: str, filters: Dict[str, Any]) -> Optional[Any]:
        matches = self.list(kind, filters)
        return matches[0] if matches else None

    def get_user_with_role(self, user_id: str, role: str) -> User:
        """Fetches a user and checks their role; a wrong role counts as not found."""
        user = self.find("user", user_id)
        if user is None or user.role != role:
            raise NotFoundError(f"{role.capitalize()} with ID {user_id} not found.")
        return user


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a request-scoped DatabaseService instance."""
    yield DatabaseService(db_session=db)
