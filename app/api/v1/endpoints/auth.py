from fastapi import APIRouter, Depends
from typing import Any, Optional
import logging

from app.schemas.user import User, UserLogin
from app.storage import Storage
from app.storage.records import User as UserRecord
from app.core import security
from app.core.exceptions import AuthenticationError
from app.api.deps import get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

def authenticate_user(storage: Storage, username: str, password: str) -> Optional[UserRecord]:
    user = storage.get_user_by_username(username)
    if not user:
        logger.warning(f"Login attempt with non-existent username: {username}")
        return None
    if not security.verify_password(password, user.hashed_password):
        logger.warning(f"Login attempt with incorrect password for username: {username}")
        return None
    return user

@router.post("/login", response_model=User)
def login(
    *,
    storage: Storage = Depends(get_storage),
    login_data: UserLogin
) -> Any:
    """
    Check username and password and return the user record (without password).
    No session or token is issued.
    """
    user = authenticate_user(storage, login_data.username, login_data.password)
    if not user:
        raise AuthenticationError("Invalid credentials")
    logger.info(f"User {user.id} ({user.username}) logged in")
    return user
