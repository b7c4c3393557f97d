# /app/db/models/assignment_models.py

"""
This module defines the SQLAlchemy ORM models for the `Assignment` and
`Submission` entities. An assignment belongs to one subject of one class;
each student submits to it at most once and the submission is then graded
in place.
"""

from sqlalchemy import Column, String, Float, Integer, Boolean, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Assignment(Base):
    """
    SQLAlchemy model representing a piece of work set by a teacher.

    When an Assignment is deleted, all its Submission records are deleted too.
    """
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    instructions = Column(String, nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=False)
    total_marks = Column(Float, nullable=False)
    weighting = Column(Float, nullable=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id"), nullable=False, index=True)
    created_by = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    assignment_type = Column(String, nullable=False, default="homework")
    status = Column(String, index=True, nullable=False, default="draft")
    visible_to_students = Column(Boolean, nullable=False, default=True)
    allow_late_submissions = Column(Boolean, nullable=False, default=False)
    late_penalty = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    submissions = relationship("Submission", back_populates="assignment", cascade="all, delete-orphan")


class Submission(Base):
    """
    SQLAlchemy model representing one student's answer to an Assignment.
    Attachments are opaque references to blobs held elsewhere.
    """
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submissions_assignment_student"),
    )

    id = Column(String, primary_key=True, index=True)
    assignment_id = Column(String, ForeignKey("assignments.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(String, nullable=True)
    attachments = Column(JSON, nullable=False, default=list)
    submitted_at = Column(DateTime(timezone=True), nullable=False)
    is_late = Column(Boolean, nullable=False, default=False)
    late_days = Column(Integer, nullable=False, default=0)
    resubmission_count = Column(Integer, nullable=False, default=0)
    last_resubmitted_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String, index=True, nullable=False, default="submitted")

    marks_awarded = Column(Float, nullable=True)
    feedback = Column(String, nullable=True)
    rubric_lines = Column(JSON, nullable=True)
    graded_by = Column(String, nullable=True)
    graded_at = Column(DateTime(timezone=True), nullable=True)

    assignment = relationship("Assignment", back_populates="submissions")
