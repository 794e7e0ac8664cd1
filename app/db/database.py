from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
from app.db.base import Base
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def make_engine(url: str, **kwargs) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, **kwargs)


engine = make_engine(settings.DATABASE_URL)

def init_db(bind: Optional[Engine] = None):
    """
    Initialize database by creating all tables.
    This function imports all models to ensure they are registered with SQLAlchemy.
    """
    try:
        from app.db.models.production import User, ProductionEntry, ProductionDetail, Instruction  # noqa: F401

        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Database error during initialization: {str(e)}")
        raise
