import itertools
import logging
import threading
from dataclasses import asdict
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from app.storage.base import (
    InstructionFilters,
    ProductionEntryFilters,
    Storage,
    as_utc,
    entry_matches,
    instruction_matches,
    newest_first,
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


class MemStorage(Storage):
    """
    Process-local store.

    Each entity type is kept as an ordered log plus an index by id. A single
    lock serialises writes and reads, since FastAPI runs sync handlers on a
    thread pool.
    """

    backend = "memory"

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._lock = threading.Lock()
        self._clock = clock or utcnow
        self._last_stamp: Optional[datetime] = None

        self._users: List[User] = []
        self._users_by_id: Dict[int, User] = {}
        self._entries: List[ProductionEntry] = []
        self._entries_by_id: Dict[int, ProductionEntry] = {}
        self._details: Dict[int, List[ProductionDetail]] = {}
        self._instructions: List[Instruction] = []

        self._user_ids = itertools.count(1)
        self._entry_ids = itertools.count(1)
        self._detail_ids = itertools.count(1)
        self._instruction_ids = itertools.count(1)

    def _stamp(self) -> datetime:
        # createdAt never goes backwards, even if the wall clock does
        now = as_utc(self._clock())
        if self._last_stamp is not None and now < self._last_stamp:
            now = self._last_stamp
        self._last_stamp = now
        return now

    def _with_details(self, entry: ProductionEntry) -> ProductionEntryWithDetails:
        return ProductionEntryWithDetails(**asdict(entry), details=list(self._details.get(entry.id, [])))

    # Users

    def create_user(self, data: Mapping[str, Any]) -> User:
        with self._lock:
            user = User(
                id=next(self._user_ids),
                username=data["username"],
                hashed_password=data["hashed_password"],
                name=data["name"],
                role=data["role"],
                operator_id=data.get("operator_id"),
            )
            self._users.append(user)
            self._users_by_id[user.id] = user
        logger.info(f"Created user {user.id} ({user.username}, role={user.role})")
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users_by_id.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users if u.username == username), None)

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    # Production entries

    def create_production_entry(self, data: Mapping[str, Any]) -> ProductionEntry:
        with self._lock:
            entry = ProductionEntry(
                id=next(self._entry_ids),
                user_id=data["user_id"],
                operator_id=data["operator_id"],
                process=data["process"],
                station=data["station"],
                time=data["time"],
                created_at=self._stamp(),
            )
            self._entries.append(entry)
            self._entries_by_id[entry.id] = entry
            self._details[entry.id] = []
        logger.info(f"Created production entry {entry.id}: {entry.process}/{entry.station} at {entry.time}")
        return entry

    def add_production_detail(self, data: Mapping[str, Any]) -> ProductionDetail:
        with self._lock:
            detail = ProductionDetail(
                id=next(self._detail_ids),
                entry_id=data["entry_id"],
                model=data["model"],
                quantity=data["quantity"],
            )
            self._details.setdefault(detail.entry_id, []).append(detail)
        logger.info(f"Added detail {detail.id} to entry {detail.entry_id}: {detail.model} x {detail.quantity}")
        return detail

    def get_production_entries(
        self, filters: Optional[ProductionEntryFilters] = None
    ) -> List[ProductionEntryWithDetails]:
        with self._lock:
            entries = self._entries
            if filters is not None:
                entries = [e for e in entries if entry_matches(e, filters)]
            return [self._with_details(e) for e in entries]

    def get_production_entry_by_id(self, entry_id: int) -> Optional[ProductionEntryWithDetails]:
        with self._lock:
            entry = self._entries_by_id.get(entry_id)
            if entry is None:
                return None
            return self._with_details(entry)

    # Instructions

    def create_instruction(self, data: Mapping[str, Any]) -> Instruction:
        with self._lock:
            instruction = Instruction(
                id=next(self._instruction_ids),
                user_id=data["user_id"],
                type=data["type"],
                target_process=data["target_process"],
                target_station=data["target_station"],
                details=data.get("details"),
                created_at=self._stamp(),
            )
            self._instructions.append(instruction)
        logger.info(
            f"Created instruction {instruction.id} ({instruction.type}) for "
            f"{instruction.target_process}/{instruction.target_station}"
        )
        return instruction

    def get_instructions(self, filters: Optional[InstructionFilters] = None) -> List[Instruction]:
        with self._lock:
            instructions = self._instructions
            if filters is not None:
                instructions = [i for i in instructions if instruction_matches(i, filters)]
            return newest_first(instructions)
