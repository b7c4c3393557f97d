# /app/routers/subjects_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import Actor, get_current_actor
from ..models import class_model
from ..services import class_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[class_model.Subject], summary="Get All Subjects")
def get_all_subjects(db: DatabaseService = Depends(get_db_service)):
    return db.list("subject", order_by="name")

@router.post("", response_model=class_model.Subject, status_code=status.HTTP_201_CREATED, summary="Create a Subject")
def create_subject(
    subject_create: class_model.SubjectCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return class_service.create_subject(subject_data=subject_create, db=db, actor=actor)

@router.get("/{subject_id}", response_model=class_model.Subject, summary="Get a Subject")
def get_subject(subject_id: str, db: DatabaseService = Depends(get_db_service)):
    return db.get("subject", subject_id)

@router.patch("/{subject_id}", response_model=class_model.Subject, summary="Update a Subject")
def update_subject(
    subject_id: str,
    subject_update: class_model.SubjectUpdate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return class_service.update_subject(subject_id=subject_id, subject_update=subject_update, db=db, actor=actor)

@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Subject")
def delete_subject(subject_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    class_service.delete_subject(subject_id=subject_id, db=db, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
