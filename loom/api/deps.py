# loom/api/deps.py
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError
from sqlalchemy.orm import Session

from loom.data.database import get_db
from loom.data.models.user import UserModel
from loom.domain.errors import FailedPrecondition, Unauthenticated
from loom.repos.user_repo import UserRepo
from loom.services.notification_service import NotificationService
from loom.utils import settings
from loom.utils.logging import get_logger

logger = get_logger(__name__)

bearer = HTTPBearer(auto_error=False)


def verify_token(token: str) -> str:
    """Decodes a caller identity token and returns its uid (the ``sub`` claim)."""
    try:
        payload = jwt.decode(
            token, settings.AUTH_SECRET_KEY, algorithms=[settings.AUTH_ALGORITHM]
        )
    except PyJWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise Unauthenticated("Invalid identity token")

    uid = payload.get("sub")
    if not uid:
        raise Unauthenticated("Identity token has no subject")
    return str(uid)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> str:
    if credentials is None:
        raise Unauthenticated("You must be logged in")
    return verify_token(credentials.credentials)


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> UserModel:
    """The caller's profile, for routes that depend on the caller's role."""
    user = UserRepo(db).get_user(user_id)
    if not user:
        raise FailedPrecondition("Complete your profile first", context={"userId": user_id})
    return user


def get_notification_service() -> NotificationService:
    return NotificationService()
