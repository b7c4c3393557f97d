# /app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# when Alembic runs its auto-generation scan and when tables are created
# at startup.

from .base_class import Base

from .models.user_subject_models import User, Subject
from .models.class_models import Class, SubjectLink, TeacherLink, StudentLink, Prefect
from .models.assignment_models import Assignment, Submission
from .models.gradebook_models import GradebookEntry
