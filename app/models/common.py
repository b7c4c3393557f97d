# /app/models/common.py

# --- Core Imports ---
from enum import Enum
from typing import Any, Annotated

from pydantic import BeforeValidator


# --- Core Enumerations ---
class Role(str, Enum):
    ADMIN = "admin"; TEACHER = "teacher"; STUDENT = "student"

class LinkStatus(str, Enum):
    PENDING = "pending"; APPROVED = "approved"; REJECTED = "rejected"

class EnrollmentType(str, Enum):
    NEW = "new"; TRANSFER = "transfer"

class LinkKind(str, Enum):
    SUBJECT = "subject"; TEACHER = "teacher"; STUDENT = "student"

class AssignmentStatus(str, Enum):
    DRAFT = "draft"; PUBLISHED = "published"; CLOSED = "closed"

class AssignmentType(str, Enum):
    HOMEWORK = "homework"; CLASSWORK = "classwork"; TEST = "test"
    EXAM = "exam"; PROJECT = "project"

class SubmissionStatus(str, Enum):
    SUBMITTED = "submitted"; GRADED = "graded"

class Term(str, Enum):
    TERM_1 = "Term 1"; TERM_2 = "Term 2"; TERM_3 = "Term 3"

class LetterGrade(str, Enum):
    A = "A"; B = "B"; C = "C"; D = "D"; F = "F"

class ComponentKind(str, Enum):
    ASSIGNMENTS = "assignments"; TESTS = "tests"; EXAMS = "exams"; RUBRICS = "rubrics"


# --- Reference Normalization ---

def resolve_reference(value: Any) -> Any:
    """
    Collapses an entity reference to its plain id.

    Clients send references either as a bare id or as the embedded object they
    received earlier (`{"_id": ..., "name": ...}`). Anything else is passed
    through untouched so that pydantic reports the usual type error.
    """
    if isinstance(value, dict):
        for key in ("id", "_id"):
            if value.get(key):
                return str(value[key])
        raise ValueError("Embedded reference is missing an 'id' or '_id' field.")
    return value


# A reference that has already been resolved to an entity id.
EntityRef = Annotated[str, BeforeValidator(resolve_reference)]
