# /app/db/models/gradebook_models.py

"""
This module defines the SQLAlchemy ORM model for a `GradebookEntry`: one
student's marks for one subject of one class in one term.

The four component lists are stored as JSON. `total_marks` and `final_grade`
are derived columns; they are only ever written by the gradebook service
after a full recompute.
"""

from sqlalchemy import Column, String, Float, Integer, Boolean, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from ..base_class import Base


class GradebookEntry(Base):
    __tablename__ = "gradebook_entries"
    __table_args__ = (
        UniqueConstraint(
            "student_id", "class_id", "subject_id", "academic_year", "term",
            name="uq_gradebook_entries_student_class_subject_term",
        ),
    )

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id"), nullable=False, index=True)
    teacher_id = Column(String, ForeignKey("users.id"), nullable=True)
    academic_year = Column(String, nullable=False)
    term = Column(String, nullable=False)

    assignments = Column(JSON, nullable=False, default=list)
    tests = Column(JSON, nullable=False, default=list)
    exams = Column(JSON, nullable=False, default=list)
    rubrics = Column(JSON, nullable=False, default=list)

    total_marks = Column(Float, nullable=True)
    final_grade = Column(String, nullable=True)
    position_in_class = Column(Integer, nullable=True)
    remarks = Column(String, nullable=True)

    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
