import logging
import threading
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional

from sqlalchemy import func, or_
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, selectinload, sessionmaker

from app.core.reference import ALL_PROCESSES, ALL_STATIONS
from app.db.models.production import (
    Instruction as DBInstruction,
    ProductionDetail as DBProductionDetail,
    ProductionEntry as DBProductionEntry,
    User as DBUser,
)
from app.storage.base import (
    InstructionFilters,
    ProductionEntryFilters,
    Storage,
    as_utc,
    utcnow,
)
from app.storage.records import (
    Instruction,
    ProductionDetail,
    ProductionEntry,
    ProductionEntryWithDetails,
    User,
)

logger = logging.getLogger(__name__)


def _user_record(row: DBUser) -> User:
    return User(
        id=row.id,
        username=row.username,
        hashed_password=row.hashed_password,
        name=row.name,
        role=row.role,
        operator_id=row.operator_id,
    )


def _detail_record(row: DBProductionDetail) -> ProductionDetail:
    return ProductionDetail(id=row.id, entry_id=row.entry_id, model=row.model, quantity=row.quantity)


def _entry_fields(row: DBProductionEntry) -> dict:
    return dict(
        id=row.id,
        user_id=row.user_id,
        operator_id=row.operator_id,
        process=row.process,
        station=row.station,
        time=row.time,
        # SQLite hands back naive datetimes; everything is stored as UTC
        created_at=as_utc(row.created_at),
    )


def _entry_with_details(row: DBProductionEntry) -> ProductionEntryWithDetails:
    return ProductionEntryWithDetails(
        **_entry_fields(row), details=[_detail_record(d) for d in row.details]
    )


def _instruction_record(row: DBInstruction) -> Instruction:
    return Instruction(
        id=row.id,
        user_id=row.user_id,
        type=row.type,
        target_process=row.target_process,
        target_station=row.target_station,
        details=row.details,
        created_at=as_utc(row.created_at),
    )


def _target_clause(column, wanted: Optional[str], broadcast: str):
    if not wanted or wanted == broadcast:
        return None
    return or_(column == wanted, column == broadcast)


class SqlStorage(Storage):
    """
    SQLAlchemy backed store with the same semantics as MemStorage.

    Ids come from the tables' autoincrement keys. One session is opened per
    operation.
    """

    backend = "sql"

    def __init__(self, engine: Engine, clock: Optional[Callable[[], datetime]] = None):
        self._session_factory = sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)
        self._clock = clock or utcnow
        self._stamp_lock = threading.Lock()
        self._last_stamp: Optional[datetime] = None

    def _session(self) -> Session:
        return self._session_factory()

    def _stamp(self) -> datetime:
        with self._stamp_lock:
            now = as_utc(self._clock())
            if self._last_stamp is not None and now < self._last_stamp:
                now = self._last_stamp
            self._last_stamp = now
            return now

    def _add(self, row):
        with self._session() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return row

    # Users

    def create_user(self, data: Mapping[str, Any]) -> User:
        row = self._add(DBUser(
            username=data["username"],
            hashed_password=data["hashed_password"],
            name=data["name"],
            role=data["role"],
            operator_id=data.get("operator_id"),
        ))
        logger.info(f"Created user {row.id} ({row.username}, role={row.role})")
        return _user_record(row)

    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            row = db.get(DBUser, user_id)
            return _user_record(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            row = db.query(DBUser).filter(DBUser.username == username).order_by(DBUser.id).first()
            return _user_record(row) if row else None

    def count_users(self) -> int:
        with self._session() as db:
            return db.query(func.count(DBUser.id)).scalar() or 0

    # Production entries

    def create_production_entry(self, data: Mapping[str, Any]) -> ProductionEntry:
        row = self._add(DBProductionEntry(
            user_id=data["user_id"],
            operator_id=data["operator_id"],
            process=data["process"],
            station=data["station"],
            time=data["time"],
            created_at=self._stamp(),
        ))
        logger.info(f"Created production entry {row.id}: {row.process}/{row.station} at {row.time}")
        return ProductionEntry(**_entry_fields(row))

    def add_production_detail(self, data: Mapping[str, Any]) -> ProductionDetail:
        row = self._add(DBProductionDetail(
            entry_id=data["entry_id"],
            model=data["model"],
            quantity=data["quantity"],
        ))
        logger.info(f"Added detail {row.id} to entry {row.entry_id}: {row.model} x {row.quantity}")
        return _detail_record(row)

    def get_production_entries(
        self, filters: Optional[ProductionEntryFilters] = None
    ) -> List[ProductionEntryWithDetails]:
        with self._session() as db:
            query = db.query(DBProductionEntry).options(selectinload(DBProductionEntry.details))
            if filters is not None:
                if filters.user_id is not None:
                    query = query.filter(DBProductionEntry.user_id == filters.user_id)
                if filters.process:
                    query = query.filter(DBProductionEntry.process == filters.process)
                if filters.station:
                    query = query.filter(DBProductionEntry.station == filters.station)
                if filters.start_date:
                    query = query.filter(DBProductionEntry.created_at >= as_utc(filters.start_date))
                if filters.end_date:
                    query = query.filter(DBProductionEntry.created_at <= as_utc(filters.end_date))
            rows = query.order_by(DBProductionEntry.id).all()
            return [_entry_with_details(row) for row in rows]

    def get_production_entry_by_id(self, entry_id: int) -> Optional[ProductionEntryWithDetails]:
        with self._session() as db:
            row = (
                db.query(DBProductionEntry)
                .options(selectinload(DBProductionEntry.details))
                .filter(DBProductionEntry.id == entry_id)
                .first()
            )
            return _entry_with_details(row) if row else None

    # Instructions

    def create_instruction(self, data: Mapping[str, Any]) -> Instruction:
        row = self._add(DBInstruction(
            user_id=data["user_id"],
            type=data["type"],
            target_process=data["target_process"],
            target_station=data["target_station"],
            details=data.get("details"),
            created_at=self._stamp(),
        ))
        logger.info(f"Created instruction {row.id} ({row.type}) for {row.target_process}/{row.target_station}")
        return _instruction_record(row)

    def get_instructions(self, filters: Optional[InstructionFilters] = None) -> List[Instruction]:
        with self._session() as db:
            query = db.query(DBInstruction)
            if filters is not None:
                for clause in (
                    _target_clause(DBInstruction.target_process, filters.target_process, ALL_PROCESSES),
                    _target_clause(DBInstruction.target_station, filters.target_station, ALL_STATIONS),
                ):
                    if clause is not None:
                        query = query.filter(clause)
            rows = query.order_by(DBInstruction.created_at.desc(), DBInstruction.id.desc()).all()
            return [_instruction_record(row) for row in rows]
