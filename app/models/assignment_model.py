# /app/models/assignment_model.py

# --- Core Imports ---
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import AssignmentStatus, AssignmentType, EntityRef, SubmissionStatus


# --- Assignment Models ---

class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    instructions: Optional[str] = None
    due_date: datetime
    total_marks: float = Field(..., gt=0)
    weighting: Optional[float] = Field(default=None, ge=0, le=100)
    class_id: EntityRef
    subject_id: EntityRef
    assignment_type: AssignmentType = AssignmentType.HOMEWORK
    visible_to_students: bool = True
    allow_late_submissions: bool = False
    late_penalty: float = Field(default=0, ge=0, le=100)

    @field_validator('due_date')
    @classmethod
    def due_date_must_carry_timezone(cls, v: datetime):
        if v.tzinfo is None:
            raise ValueError('due_date must include a timezone offset.')
        return v.astimezone(timezone.utc)

class AssignmentUpdate(BaseModel):
    """Partial update. The status moves only through publish/close."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    instructions: Optional[str] = None
    due_date: Optional[datetime] = None
    total_marks: Optional[float] = Field(default=None, gt=0)
    weighting: Optional[float] = Field(default=None, ge=0, le=100)
    assignment_type: Optional[AssignmentType] = None
    visible_to_students: Optional[bool] = None
    allow_late_submissions: Optional[bool] = None
    late_penalty: Optional[float] = Field(default=None, ge=0, le=100)

    @field_validator('due_date')
    @classmethod
    def due_date_must_carry_timezone(cls, v: Optional[datetime]):
        if v is not None and v.tzinfo is None:
            raise ValueError('due_date must include a timezone offset.')
        return v.astimezone(timezone.utc) if v is not None else v

class Assignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    description: str
    instructions: Optional[str] = None
    due_date: datetime
    total_marks: float
    weighting: Optional[float] = None
    class_id: str
    subject_id: str
    created_by: str
    assignment_type: AssignmentType
    status: AssignmentStatus
    visible_to_students: bool
    allow_late_submissions: bool
    late_penalty: float


# --- Submission Models ---

class SubmissionCreate(BaseModel):
    content: Optional[str] = None
    attachments: List[str] = Field(default_factory=list, description="Opaque references to uploaded files.")

class SubmissionUpdate(SubmissionCreate):
    pass

class RubricLine(BaseModel):
    criterion: str = Field(..., min_length=1)
    marks: float = Field(default=0, ge=0)
    comment: Optional[str] = None

class GradeRequest(BaseModel):
    # Range is checked against the assignment by the submission service,
    # so that the caller gets an `OutOfRangeError` rather than a schema error.
    marks_awarded: float
    feedback: Optional[str] = None
    rubric_lines: Optional[List[RubricLine]] = None

class Submission(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    assignment_id: str
    student_id: str
    content: Optional[str] = None
    attachments: List[str] = []
    submitted_at: datetime
    is_late: bool
    late_days: int
    resubmission_count: int
    last_resubmitted_at: Optional[datetime] = None
    status: SubmissionStatus
    marks_awarded: Optional[float] = None
    feedback: Optional[str] = None
    rubric_lines: Optional[List[RubricLine]] = None
    graded_by: Optional[str] = None
    graded_at: Optional[datetime] = None
