from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loom.api.deps import get_current_user_id
from loom.data.database import get_db
from loom.domain.schemas import UserCreate, UserRead
from loom.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead)
def register_user(
    payload: UserCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return UserService(db).register_user(user_id, payload)


@router.get("/me", response_model=UserRead)
def get_me(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return UserService(db).get_user(user_id)
