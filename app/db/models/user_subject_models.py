# /app/db/models/user_subject_models.py

"""
This module defines the SQLAlchemy ORM models for the `User` and `Subject`
entities. Teachers and students are both users, told apart by `role`.
"""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class User(Base):
    """
    SQLAlchemy model representing any person in the school: an administrator,
    a teacher or a student.
    """
    id = Column(String, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, index=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Subject(Base):
    """
    SQLAlchemy model representing a subject from the school's catalogue.
    A subject is taught in a class through a `SubjectLink`.
    """
    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    code = Column(String, unique=True, index=True, nullable=False)
    description = Column(String, nullable=True)
    category = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
