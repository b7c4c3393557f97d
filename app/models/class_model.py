# /app/models/class_model.py

# --- Core Imports ---
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import EntityRef, EnrollmentType, LinkStatus, Role


# --- User & Subject Models ---

class UserCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    role: Role

class User(UserCreate):
    model_config = ConfigDict(from_attributes=True)
    id: str
    is_active: bool = True

class SubjectCreate(BaseModel):
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None

class SubjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None

class Subject(SubjectCreate):
    model_config = ConfigDict(from_attributes=True)
    id: str
    is_active: bool = True


# --- Class Models ---

class ClassBase(BaseModel):
    name: str = Field(..., min_length=1, description="The display name of the class, e.g. 'Form 2 East'.")
    level: str = Field(..., min_length=1)
    stream: Optional[str] = None
    description: Optional[str] = None

class ClassCreate(ClassBase):
    code: str = Field(..., min_length=1, description="A unique code. It cannot be changed after creation.")

class ClassUpdate(BaseModel):
    """
    The model for updating a class. All fields are optional to allow for
    partial updates. `code` is accepted only so that an attempt to change it
    can be rejected with a clear error.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = None
    level: Optional[str] = Field(default=None, min_length=1)
    stream: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

class Class(ClassCreate):
    model_config = ConfigDict(from_attributes=True)
    id: str
    is_active: bool = True


# --- Link Models ---

class SubjectLinkCreate(BaseModel):
    subject: EntityRef

class TeacherLinkCreate(BaseModel):
    teacher: EntityRef
    status: Optional[LinkStatus] = Field(
        default=None,
        description="Initial status. Defaults to 'approved' for admins and 'pending' for everyone else."
    )
    is_lead_teacher: bool = False

class StudentLinkCreate(BaseModel):
    student: EntityRef
    status: Optional[LinkStatus] = Field(
        default=None,
        description="Initial status. Defaults to 'approved' for admins and 'pending' for everyone else."
    )
    enrollment_type: EnrollmentType = EnrollmentType.NEW

class LinkDecision(BaseModel):
    status: LinkStatus

class TeacherLink(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    subject_link_id: str
    class_id: str
    subject_id: str
    teacher_id: str
    status: LinkStatus
    is_lead_teacher: bool
    assigned_by: Optional[str] = None
    approved_at: Optional[datetime] = None

class SubjectLink(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    class_id: str
    subject_id: str
    teachers: List[TeacherLink] = []

class StudentLink(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    class_id: str
    student_id: str
    status: LinkStatus
    enrollment_type: EnrollmentType
    enrollment_date: datetime
    enrolled_by: Optional[str] = None

class PrefectCreate(BaseModel):
    student: EntityRef
    position: str = Field(..., min_length=1)

class Prefect(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    class_id: str
    student_id: str
    position: str
    assigned_at: datetime
    assigned_by: Optional[str] = None

class ClassDetails(Class):
    """The full representation of a class with all of its links."""
    subjects: List[SubjectLink] = []
    students: List[StudentLink] = []
    prefects: List[Prefect] = []

class ClassSummary(BaseModel):
    id: str
    name: str
    code: str
    level: str
    stream: Optional[str] = None
    is_active: bool
    student_count: int = Field(..., description="Students with an approved enrollment.")
    pending_count: int = Field(..., description="Enrollment requests awaiting a decision.")
