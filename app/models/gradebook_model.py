# /app/models/gradebook_model.py

# --- Core Imports ---
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import EntityRef, LetterGrade, Term


# --- Component Line Items ---
# `weight` is stored with each line but is display-only: the aggregation is an
# unweighted sum of raw marks.

class AssignmentComponent(BaseModel):
    assignment_id: EntityRef
    marks: float = Field(0, allow_inf_nan=False)
    weight: Optional[float] = None
    feedback: Optional[str] = None

class ClassTestComponent(BaseModel):
    name: str
    marks: float = Field(0, allow_inf_nan=False)
    date: Optional[datetime] = None
    weight: Optional[float] = None

class ExamComponent(BaseModel):
    name: str
    marks: float = Field(0, allow_inf_nan=False)
    date: Optional[datetime] = None
    weight: Optional[float] = None

class RubricComponent(BaseModel):
    criteria: str
    marks: float = Field(0, allow_inf_nan=False)
    comment: Optional[str] = None


class GradebookComponents(BaseModel):
    """The four component lists that feed the aggregation engine."""
    model_config = ConfigDict(from_attributes=True)
    assignments: List[AssignmentComponent] = Field(default_factory=list)
    tests: List[ClassTestComponent] = Field(default_factory=list)
    exams: List[ExamComponent] = Field(default_factory=list)
    rubrics: List[RubricComponent] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.assignments or self.tests or self.exams or self.rubrics)


# --- Gradebook Entry Models ---

class GradebookEntryCreate(GradebookComponents):
    student_id: EntityRef
    class_id: EntityRef
    subject_id: EntityRef
    academic_year: str = Field(..., min_length=4, examples=["2025/2026"])
    term: Term
    remarks: Optional[str] = None

class GradebookEntryUpdate(BaseModel):
    """
    Partial update. Any component list that is present replaces the stored
    one. Derived totals sent by a client (e.g. a UI preview) are accepted but
    never persisted.
    """
    assignments: Optional[List[AssignmentComponent]] = None
    tests: Optional[List[ClassTestComponent]] = None
    exams: Optional[List[ExamComponent]] = None
    rubrics: Optional[List[RubricComponent]] = None
    remarks: Optional[str] = None
    total_marks: Optional[float] = None
    final_grade: Optional[LetterGrade] = None

class GradebookEntry(GradebookComponents):
    id: str
    student_id: str
    class_id: str
    subject_id: str
    teacher_id: Optional[str] = None
    academic_year: str
    term: Term
    total_marks: Optional[float] = None
    final_grade: Optional[LetterGrade] = None
    position_in_class: Optional[int] = None
    remarks: Optional[str] = None
    is_published: bool = False
    published_at: Optional[datetime] = None


# --- Aggregation & Analytics Models ---

class AggregateResult(BaseModel):
    total_marks: float
    final_grade: Optional[LetterGrade] = None

class ClassGradeSummary(BaseModel):
    class_id: str
    subject_id: str
    academic_year: str
    term: Term
    entry_count: int
    average_total: float
    median_total: float
    grade_distribution: Dict[str, int]
    positions: Dict[str, int] = Field(default_factory=dict, description="student_id -> position in class (1 = highest).")
