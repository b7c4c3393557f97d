# /app/services/database_helpers/entity_repository_sql.py

"""
This module contains the raw SQLAlchemy queries behind the Entity Store. It is
the direct interface to the database for every entity kind, and it is the
place where database-level uniqueness violations are turned into
`ConflictError`s.

The repository is generic: it knows how to get, list, create,
update and delete any mapped model, keyed by primary key. Which model a
"kind" refers to is decided one level up, in `DatabaseService`.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...core.errors import ConflictError

logger = logging.getLogger(__name__)


class EntityRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get(self, model: Type, entity_id: str) -> Optional[Any]:
        """Fetches a single row by primary key, or None."""
        return self.db.get(model, entity_id)

    def list(self, model: Type, filters: Optional[Dict[str, Any]] = None, order_by: Optional[str] = None) -> List[Any]:
        """
        Returns all rows whose columns equal every value in `filters`.
        A list value matches any of its members.
        """
        query = self.db.query(model)
        for column_name, value in (filters or {}).items():
            column = getattr(model, column_name)
            if isinstance(value, (list, tuple, set)):
                query = query.filter(column.in_(list(value)))
            else:
                query = query.filter(column == value)
        if order_by:
            query = query.order_by(getattr(model, order_by))
        return query.all()

    def add(self, model: Type, record: Dict) -> Any:
        """Creates a new row. A unique-constraint breach becomes a ConflictError."""
        new_row = model(**record)
        self.db.add(new_row)
        self._commit(f"{model.__name__} {record.get('id')}")
        self.db.refresh(new_row)
        return new_row

    def update(self, row: Any, data: Dict) -> Any:
        for key, value in data.items():
            setattr(row, key, value)
        self._commit(f"{type(row).__name__} {row.id}")
        self.db.refresh(row)
        return row

    def delete(self, row: Any) -> None:
        # Cascades declared on the model relationships remove owned links.
        self.db.delete(row)
        self._commit(f"{type(row).__name__} {row.id}")

    def _commit(self, label: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.debug("Integrity error while writing %s: %s", label, e.orig)
            raise ConflictError(f"Write to {label} violates a uniqueness or reference constraint.") from e
