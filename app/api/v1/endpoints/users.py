from fastapi import APIRouter, Depends, status
from typing import Any
import logging

from app.schemas.user import User, UserCreate
from app.storage import Storage
from app.core import security
from app.core.exceptions import NotFoundError, ValidationError
from app.api.deps import get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(*, storage: Storage = Depends(get_storage), user_in: UserCreate) -> Any:
    """
    Register a new operator or management user.
    """
    logger.info(f"Registration attempt for username: {user_in.username}, role: {user_in.role}")
    if storage.get_user_by_username(user_in.username):
        raise ValidationError(
            "The username is already taken.",
            errors=[{"field": "username", "message": "The username is already taken."}],
        )

    data = user_in.model_dump(exclude={"password"})
    data["hashed_password"] = security.get_password_hash(user_in.password)
    return storage.create_user(data)

@router.get("/{user_id}", response_model=User)
def get_user(user_id: int, storage: Storage = Depends(get_storage)) -> Any:
    user = storage.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
