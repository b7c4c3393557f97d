# /app/routers/users_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..core.deps import Actor, get_current_actor
from ..models import class_model
from ..models.common import Role
from ..services import class_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[class_model.User], summary="List Users, Optionally by Role")
def list_users(role: Optional[Role] = None, db: DatabaseService = Depends(get_db_service)):
    filters = {"role": role.value} if role else None
    return db.list("user", filters, order_by="last_name")

@router.post("", response_model=class_model.User, status_code=status.HTTP_201_CREATED, summary="Register a User")
def create_user(
    user_create: class_model.UserCreate,
    db: DatabaseService = Depends(get_db_service),
    actor: Actor = Depends(get_current_actor),
):
    return class_service.create_user(user_data=user_create, db=db, actor=actor)
