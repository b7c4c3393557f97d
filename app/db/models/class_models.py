# /app/db/models/class_models.py

"""
This module defines the SQLAlchemy ORM models for a `Class` and the link
records that attach subjects, teachers, students and prefects to it.

Every link kind is unique per pair of entities, enforced at the database level
by a `UniqueConstraint`. The approval status of a link is a plain string
column; which values it may move between is decided by the enrollment
service, not by the model.
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Class(Base):
    """
    SQLAlchemy model representing a class (form/stream) in the school.

    Deleting a class deletes all of its links and prefects through the
    cascade options below.
    """
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    code = Column(String, unique=True, index=True, nullable=False)
    level = Column(String, nullable=False)
    stream = Column(String, nullable=True)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    subjects = relationship("SubjectLink", back_populates="class_", cascade="all, delete-orphan")
    students = relationship("StudentLink", back_populates="class_", cascade="all, delete-orphan")
    prefects = relationship("Prefect", back_populates="class_", cascade="all, delete-orphan")


class SubjectLink(Base):
    """A subject taught in a class. Owns the teacher links for that subject."""
    __tablename__ = "class_subjects"
    __table_args__ = (
        UniqueConstraint("class_id", "subject_id", name="uq_class_subjects_class_subject"),
    )

    id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id"), nullable=False, index=True)
    added_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    class_ = relationship("Class", back_populates="subjects")
    subject = relationship("Subject")
    teachers = relationship("TeacherLink", back_populates="subject_link", cascade="all, delete-orphan")


class TeacherLink(Base):
    """
    A teacher assigned to one subject of one class, with its own approval
    status. `approved_at` is written only when the link enters `approved`.
    """
    __tablename__ = "class_subject_teachers"
    __table_args__ = (
        UniqueConstraint("subject_link_id", "teacher_id", name="uq_class_subject_teachers_link_teacher"),
    )

    id = Column(String, primary_key=True, index=True)
    subject_link_id = Column(String, ForeignKey("class_subjects.id"), nullable=False, index=True)
    # Denormalised so that approval checks can filter on {class, subject, teacher} directly.
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id"), nullable=False, index=True)
    teacher_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")
    is_lead_teacher = Column(Boolean, nullable=False, default=False)
    assigned_by = Column(String, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    subject_link = relationship("SubjectLink", back_populates="teachers")
    teacher = relationship("User")


class StudentLink(Base):
    """A student's enrollment in a class, with its own approval status."""
    __tablename__ = "class_students"
    __table_args__ = (
        UniqueConstraint("class_id", "student_id", name="uq_class_students_class_student"),
    )

    id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")
    enrollment_type = Column(String, nullable=False, default="new")
    enrollment_date = Column(DateTime(timezone=True), nullable=False)
    enrolled_by = Column(String, nullable=True)

    class_ = relationship("Class", back_populates="students")
    student = relationship("User")


class Prefect(Base):
    """A student holding a named leadership position in a class."""
    __tablename__ = "class_prefects"

    id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    position = Column(String, nullable=False)
    assigned_at = Column(DateTime(timezone=True), nullable=False)
    assigned_by = Column(String, nullable=True)

    class_ = relationship("Class", back_populates="prefects")
