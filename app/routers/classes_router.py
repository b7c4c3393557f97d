# /app/routers/classes_router.py

"""
Endpoints for classes and everything linked to them: subjects, teachers,
students and prefects.

The router only translates HTTP into service calls. Domain errors raised by
the services are turned into responses by the exception handlers registered
in `app.main`.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import StreamingResponse

from ..core.deps import Actor, get_current_actor
from ..models import class_model
from ..models.common import LinkKind
from ..services import class_service, enrollment_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.enrollment_helpers.transitions import default_initial_status

router = APIRouter()


# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[class_model.ClassSummary], summary="Get All Classes with Enrollment Counts")
def get_all_classes(db: DatabaseService = Depends(get_db_service)):
    return class_service.get_all_classes_with_summary(db=db)

@router.post("", response_model=class_model.Class, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_new_class(
    class_create: class_model.ClassCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return class_service.create_class(class_data=class_create, db=db, actor=actor)


# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=class_model.ClassDetails, summary="Get a Single Class with All Links")
def get_class_by_id(class_id: str, db: DatabaseService = Depends(get_db_service)):
    return class_service.get_class_details_by_id(class_id=class_id, db=db)

@router.patch("/{class_id}", response_model=class_model.Class, summary="Update a Class")
def update_class_details(
    class_id: str,
    class_update: class_model.ClassUpdate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return class_service.update_class(class_id=class_id, class_update=class_update, db=db, actor=actor)

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class")
def delete_class(class_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    class_service.delete_class_by_id(class_id=class_id, db=db, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{class_id}/export", summary="Export Class Roster as CSV", response_class=StreamingResponse)
def export_class_roster_csv(class_id: str, db: DatabaseService = Depends(get_db_service)):
    csv_string = class_service.export_roster_as_csv(class_id=class_id, db=db)
    class_details = class_service.get_class_details_by_id(class_id, db)
    file_name = f"roster_{class_details.code.replace(' ', '_').lower()}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})


# --- SUBJECT LINK ENDPOINTS ---

@router.post("/{class_id}/subjects", response_model=class_model.SubjectLink, status_code=status.HTTP_201_CREATED, summary="Add a Subject to a Class")
def add_subject(
    class_id: str,
    body: class_model.SubjectLinkCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return enrollment_service.propose_link(db, actor, LinkKind.SUBJECT, class_id, body.subject)

@router.get("/{class_id}/subjects/available", response_model=List[class_model.Subject], summary="Subjects Not Yet Linked to the Class")
def get_available_subjects(class_id: str, db: DatabaseService = Depends(get_db_service)):
    return enrollment_service.available_subjects(db, class_id)

@router.delete("/{class_id}/subjects/{link_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Subject from a Class")
def remove_subject(class_id: str, link_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    enrollment_service.remove_link(db, actor, LinkKind.SUBJECT, link_id, class_id=class_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- TEACHER LINK ENDPOINTS ---

@router.post("/{class_id}/subjects/{subject_id}/teachers", response_model=class_model.TeacherLink, status_code=status.HTTP_201_CREATED, summary="Assign a Teacher to a Class Subject")
def assign_teacher(
    class_id: str,
    subject_id: str,
    body: class_model.TeacherLinkCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return enrollment_service.propose_link(
        db, actor, LinkKind.TEACHER, class_id, body.teacher,
        subject_id=subject_id,
        initial_status=default_initial_status(actor, body.status),
        is_lead_teacher=body.is_lead_teacher,
    )

@router.get("/{class_id}/subjects/{subject_id}/teachers/available", response_model=List[class_model.User], summary="Teachers Not Yet Linked to the Class Subject")
def get_available_teachers(class_id: str, subject_id: str, db: DatabaseService = Depends(get_db_service)):
    return enrollment_service.available_teachers(db, class_id, subject_id)


# --- STUDENT LINK ENDPOINTS ---

@router.post("/{class_id}/students", response_model=class_model.StudentLink, status_code=status.HTTP_201_CREATED, summary="Enroll a Student (or Request Enrollment)")
def add_student(
    class_id: str,
    body: class_model.StudentLinkCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return enrollment_service.propose_link(
        db, actor, LinkKind.STUDENT, class_id, body.student,
        initial_status=default_initial_status(actor, body.status),
        enrollment_type=body.enrollment_type,
    )

@router.get("/{class_id}/students/available", response_model=List[class_model.User], summary="Students Not Yet Linked to the Class")
def get_available_students(class_id: str, db: DatabaseService = Depends(get_db_service)):
    return enrollment_service.available_students(db, class_id)


# --- LINK DECISIONS (shared by teacher and student links) ---

@router.get("/links/{kind}/pending", summary="Links Awaiting a Decision")
def get_pending_links(
    kind: LinkKind,
    class_id: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    links = enrollment_service.list_pending_links(db, actor, kind, class_id=class_id)
    model = class_model.TeacherLink if kind == LinkKind.TEACHER else class_model.StudentLink
    return [model.model_validate(link) for link in links]

@router.patch("/links/{kind}/{link_id}", summary="Approve or Reject a Link")
def decide_link(
    kind: LinkKind,
    link_id: str,
    body: class_model.LinkDecision,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    link = enrollment_service.decide_link(db, actor, kind, link_id, body.status)
    model = class_model.TeacherLink if kind == LinkKind.TEACHER else class_model.StudentLink
    return model.model_validate(link)

@router.delete("/links/{kind}/{link_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Link (idempotent)")
def remove_link(kind: LinkKind, link_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    enrollment_service.remove_link(db, actor, kind, link_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- PREFECT ENDPOINTS ---

@router.post("/{class_id}/prefects", response_model=class_model.Prefect, status_code=status.HTTP_201_CREATED, summary="Assign a Prefect Position")
def assign_prefect(
    class_id: str,
    body: class_model.PrefectCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return class_service.assign_prefect(class_id, body.student, body.position, db=db, actor=actor)

@router.delete("/{class_id}/prefects/{prefect_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Prefect (idempotent)")
def remove_prefect(class_id: str, prefect_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    class_service.remove_prefect(prefect_id, db=db, actor=actor, class_id=class_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
