import logging

from app.core.config import Settings
from app.storage.base import InstructionFilters, ProductionEntryFilters, Storage
from app.storage.memory import MemStorage
from app.storage.seed import seed_demo_users

logger = logging.getLogger(__name__)

__all__ = [
    "InstructionFilters",
    "MemStorage",
    "ProductionEntryFilters",
    "Storage",
    "create_storage",
]


def create_storage(settings: Settings) -> Storage:
    """Build the configured backend and seed demo users if enabled."""
    if settings.STORAGE_BACKEND == "sql":
        from app.db.database import engine, init_db
        from app.storage.sql import SqlStorage

        init_db(engine)
        storage: Storage = SqlStorage(engine)
    else:
        storage = MemStorage()
    logger.info(f"Using {storage.backend} storage")

    if settings.SEED_DEMO_USERS:
        seed_demo_users(storage)
    return storage
