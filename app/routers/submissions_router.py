# /app/routers/submissions_router.py

from fastapi import APIRouter, Depends

from ..core.deps import Actor, get_current_actor
from ..models import assignment_model
from ..services import submission_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("/{submission_id}", response_model=assignment_model.Submission, summary="Get a Submission")
def get_submission(submission_id: str, db: DatabaseService = Depends(get_db_service)):
    return db.get("submission", submission_id)

@router.put("/{submission_id}", response_model=assignment_model.Submission, summary="Edit an Ungraded Submission")
def update_submission(
    submission_id: str,
    body: assignment_model.SubmissionUpdate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return submission_service.update_submission(submission_id, body, db=db, actor=actor)

@router.patch("/{submission_id}/grade", response_model=assignment_model.Submission, summary="Grade a Submission")
def grade_submission(
    submission_id: str,
    body: assignment_model.GradeRequest,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return submission_service.grade(submission_id, body, db=db, actor=actor)
