# /app/routers/gradebook_router.py

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status

from ..core.deps import Actor, get_current_actor
from ..models import gradebook_model
from ..models.common import ComponentKind, Term
from ..services import gradebook_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[gradebook_model.GradebookEntry], summary="List Gradebook Entries")
def list_entries(
    class_id: Optional[str] = None,
    subject_id: Optional[str] = None,
    student_id: Optional[str] = None,
    academic_year: Optional[str] = None,
    term: Optional[Term] = None,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    filters = {
        "class_id": class_id,
        "subject_id": subject_id,
        "student_id": student_id,
        "academic_year": academic_year,
        "term": term.value if term else None,
    }
    return gradebook_service.list_entries(db, actor, filters)

@router.post("", response_model=gradebook_model.GradebookEntry, status_code=status.HTTP_201_CREATED, summary="Create a Gradebook Entry")
def create_entry(
    body: gradebook_model.GradebookEntryCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return gradebook_service.create_entry(body, db=db, actor=actor)

@router.get("/summary", response_model=gradebook_model.ClassGradeSummary, summary="Class Statistics and Positions")
def get_class_summary(
    class_id: str,
    subject_id: str,
    academic_year: str,
    term: Term,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return gradebook_service.class_summary(class_id, subject_id, academic_year, term, db=db, actor=actor)

@router.get("/{entry_id}", response_model=gradebook_model.GradebookEntry, summary="Get a Gradebook Entry")
def get_entry(entry_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    return gradebook_service.get_entry(entry_id, db=db, actor=actor)

@router.patch("/{entry_id}", response_model=gradebook_model.GradebookEntry, summary="Update Components or Remarks")
def update_entry(
    entry_id: str,
    body: gradebook_model.GradebookEntryUpdate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return gradebook_service.update_entry(entry_id, body, db=db, actor=actor)

@router.post("/{entry_id}/publish", response_model=gradebook_model.GradebookEntry, summary="Publish a Gradebook Entry")
def publish_entry(entry_id: str, db: DatabaseService = Depends(get_db_service), actor: Actor = Depends(get_current_actor)):
    return gradebook_service.publish_entry(entry_id, db=db, actor=actor)

@router.post("/{entry_id}/{kind}", response_model=gradebook_model.GradebookEntry, summary="Add a Component Line Item")
def add_component_item(
    entry_id: str,
    kind: ComponentKind,
    item: Dict[str, Any],
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return gradebook_service.add_component_item(entry_id, kind, item, db=db, actor=actor)

@router.delete("/{entry_id}/{kind}/{index}", response_model=gradebook_model.GradebookEntry, summary="Remove a Component Line Item")
def remove_component_item(
    entry_id: str,
    kind: ComponentKind,
    index: int,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return gradebook_service.remove_component_item(entry_id, kind, index, db=db, actor=actor)
