# /app/routers/assignments_router.py

"""
Endpoints for assignments, their publish/close lifecycle, and the submissions
made against them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import Actor, get_current_actor
from ..models import assignment_model
from ..models.common import AssignmentStatus
from ..services import assignment_service, submission_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


# --- Assignment Collection ---

@router.get("", response_model=List[assignment_model.Assignment], summary="List Assignments")
def list_assignments(
    class_id: Optional[str] = None,
    subject_id: Optional[str] = None,
    status: Optional[AssignmentStatus] = None,
    db: DatabaseService = Depends(get_db_service),
):
    return assignment_service.list_assignments(db, class_id=class_id, subject_id=subject_id, status=status)

@router.get("/mine", response_model=List[assignment_model.Assignment], summary="Published Assignments for the Calling Student")
def list_my_assignments(db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    return assignment_service.list_assignments_for_student(db, actor.id)

@router.post("", response_model=assignment_model.Assignment, status_code=status.HTTP_201_CREATED, summary="Create a Draft Assignment")
def create_assignment(
    body: assignment_model.AssignmentCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return assignment_service.create_assignment(body, db=db, actor=actor)


# --- Individual Assignment ---

@router.get("/{assignment_id}", response_model=assignment_model.Assignment, summary="Get an Assignment")
def get_assignment(assignment_id: str, db: DatabaseService = Depends(get_db_service)):
    return db.get("assignment", assignment_id)

@router.patch("/{assignment_id}", response_model=assignment_model.Assignment, summary="Update an Assignment")
def update_assignment(
    assignment_id: str,
    body: assignment_model.AssignmentUpdate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return assignment_service.update_assignment(assignment_id, body, db=db, actor=actor)

@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Assignment")
def delete_assignment(assignment_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    assignment_service.delete_assignment(assignment_id, db=db, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{assignment_id}/publish", response_model=assignment_model.Assignment, summary="Publish a Draft Assignment")
def publish_assignment(assignment_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    return assignment_service.publish_assignment(assignment_id, db=db, actor=actor)

@router.post("/{assignment_id}/close", response_model=assignment_model.Assignment, summary="Close a Published Assignment")
def close_assignment(assignment_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    return assignment_service.close_assignment(assignment_id, db=db, actor=actor)


# --- Submissions Sub-Resource ---

@router.post("/{assignment_id}/submissions", response_model=assignment_model.Submission, status_code=status.HTTP_201_CREATED, summary="Submit Work")
def submit_work(
    assignment_id: str,
    body: assignment_model.SubmissionCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return submission_service.submit(assignment_id, body, db=db, actor=actor)

@router.get("/{assignment_id}/submissions", response_model=List[assignment_model.Submission], summary="List Submissions")
def list_submissions(assignment_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    return submission_service.list_submissions(assignment_id, db=db, actor=actor)
