import logging

from app.core.security import get_password_hash
from app.storage.base import Storage

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "username": "operator",
        "password": "password",
        "name": "John Operator",
        "role": "operator",
        "operator_id": "12275",
    },
    {
        "username": "manager",
        "password": "password",
        "name": "Jane Manager",
        "role": "management",
    },
]


def seed_demo_users(storage: Storage) -> int:
    """Create the demo operator and manager on an empty store. Returns how many were added."""
    if storage.count_users():
        logger.info("Users already present, skipping demo seed")
        return 0
    for user in DEMO_USERS:
        data = {k: v for k, v in user.items() if k != "password"}
        data["hashed_password"] = get_password_hash(user["password"])
        storage.create_user(data)
    logger.info(f"Seeded {len(DEMO_USERS)} demo users")
    return len(DEMO_USERS)
