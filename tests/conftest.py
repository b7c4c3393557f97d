# /tests/conftest.py

"""
Shared fixtures. Every test gets its own in-memory SQLite database with the
full schema, a DatabaseService bound to it, and a small seeded school: one
admin, two teachers, two students, one subject and one class.
"""

from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.clock import utcnow
from app.core.deps import Actor
from app.db.base import Base
from app.models.common import LinkKind, LinkStatus, Role
from app.services import enrollment_service
from app.services.database_service import DatabaseService


@pytest.fixture
def engine():
    # StaticPool keeps the single in-memory database alive across connections.
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_service(session_factory):
    """A fresh DatabaseService over a clean database for each test."""
    session = session_factory()
    try:
        yield DatabaseService(db_session=session)
    finally:
        session.close()


# --- Seeded Users ---

def _user(db_service, user_id, first, last, role):
    return db_service.create("user", {
        "id": user_id,
        "first_name": first,
        "last_name": last,
        "email": f"{first.lower()}.{last.lower()}@school.test",
        "role": role.value,
        "is_active": True,
    })


@pytest.fixture
def admin(db_service):
    user = _user(db_service, "usr_admin", "Grace", "Mwangi", Role.ADMIN)
    return Actor(id=user.id, role=Role.ADMIN)


@pytest.fixture
def teacher(db_service):
    user = _user(db_service, "usr_teacher", "Peter", "Otieno", Role.TEACHER)
    return Actor(id=user.id, role=Role.TEACHER)


@pytest.fixture
def other_teacher(db_service):
    user = _user(db_service, "usr_teacher2", "Mary", "Wanjiru", Role.TEACHER)
    return Actor(id=user.id, role=Role.TEACHER)


@pytest.fixture
def student(db_service):
    user = _user(db_service, "usr_student", "Alex", "Kamau", Role.STUDENT)
    return Actor(id=user.id, role=Role.STUDENT)


@pytest.fixture
def other_student(db_service):
    user = _user(db_service, "usr_student2", "Brenda", "Achieng", Role.STUDENT)
    return Actor(id=user.id, role=Role.STUDENT)


# --- Seeded Catalogue ---

@pytest.fixture
def subject(db_service):
    return db_service.create("subject", {"id": "sub_math", "name": "Mathematics", "code": "MATH", "is_active": True})


@pytest.fixture
def school_class(db_service):
    return db_service.create("class", {
        "id": "cls_f2e", "name": "Form 2 East", "code": "F2E", "level": "Form 2", "is_active": True,
    })


# --- Ready-Made Links & Coursework ---

@pytest.fixture
def subject_link(db_service, admin, school_class, subject):
    return enrollment_service.propose_link(db_service, admin, LinkKind.SUBJECT, school_class.id, subject.id)


@pytest.fixture
def approved_teacher(db_service, admin, teacher, school_class, subject, subject_link):
    """`teacher` holds an approved link on {school_class, subject}."""
    enrollment_service.propose_link(
        db_service, admin, LinkKind.TEACHER, school_class.id, teacher.id,
        subject_id=subject.id, initial_status=LinkStatus.APPROVED,
    )
    return teacher


@pytest.fixture
def enrolled_student(db_service, admin, student, school_class):
    """`student` holds an approved enrollment in school_class."""
    enrollment_service.propose_link(
        db_service, admin, LinkKind.STUDENT, school_class.id, student.id, initial_status=LinkStatus.APPROVED,
    )
    return student


@pytest.fixture
def published_assignment(db_service, approved_teacher, school_class, subject):
    """A published assignment out of 50 marks, due in three days, late work not allowed."""
    return db_service.create("assignment", {
        "title": "Quadratic Equations",
        "description": "Exercise 4.2, questions 1-10",
        "due_date": utcnow() + timedelta(days=3),
        "total_marks": 50,
        "class_id": school_class.id,
        "subject_id": subject.id,
        "created_by": approved_teacher.id,
        "assignment_type": "homework",
        "status": "published",
        "visible_to_students": True,
        "allow_late_submissions": False,
        "late_penalty": 0,
    })
