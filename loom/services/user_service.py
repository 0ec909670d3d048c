from sqlalchemy.orm import Session

from loom.data.models.user import UserModel
from loom.domain.errors import NotFound
from loom.domain.schemas import UserCreate, UserRead
from loom.repos.user_repo import UserRepo
from loom.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register_user(self, user_id: str, payload: UserCreate) -> UserRead:
        """Creates the caller's profile, or updates it when it already exists."""
        user = self.repo.get_user(user_id)
        if user is None:
            user = UserModel(id=user_id)
            logger.info(f"Registering user {user_id} as {payload.role}")
        user.display_name = payload.display_name
        user.email = payload.email
        user.role = payload.role
        saved = self.repo.save_user(user)
        return UserRead.model_validate(saved)

    def get_user(self, user_id: str) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User profile not found", context={"userId": user_id})
        return UserRead.model_validate(user)
