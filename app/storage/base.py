"""
Storage interface and the filter semantics shared by every backend.

Stores are append-only: there is no update or delete. Lookups return None
when nothing matches; the HTTP layer turns that into a 404. Stores trust
their input, validation happens in the request schemas.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from app.core.reference import ALL_PROCESSES, ALL_STATIONS
from app.storage.records import (
    Instruction,
    ProductionDetail,
    ProductionEntry,
    ProductionEntryWithDetails,
    User,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalise to an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class ProductionEntryFilters:
    user_id: Optional[int] = None
    process: Optional[str] = None
    station: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass
class InstructionFilters:
    target_process: Optional[str] = None
    target_station: Optional[str] = None


def entry_matches(entry: ProductionEntry, filters: ProductionEntryFilters) -> bool:
    """All given predicates ANDed; date bounds are inclusive on both ends."""
    if filters.user_id is not None and entry.user_id != filters.user_id:
        return False
    if filters.process and entry.process != filters.process:
        return False
    if filters.station and entry.station != filters.station:
        return False
    if filters.start_date and entry.created_at < as_utc(filters.start_date):
        return False
    if filters.end_date and entry.created_at > as_utc(filters.end_date):
        return False
    return True


def target_matches(wanted: Optional[str], target: str, broadcast: str) -> bool:
    """
    Broadcast matching for one target dimension.

    A query for the broadcast value matches everything, and an instruction
    sent to the broadcast value matches any query.
    """
    if not wanted or wanted == broadcast:
        return True
    return target == wanted or target == broadcast


def instruction_matches(instruction: Instruction, filters: InstructionFilters) -> bool:
    return (
        target_matches(filters.target_process, instruction.target_process, ALL_PROCESSES)
        and target_matches(filters.target_station, instruction.target_station, ALL_STATIONS)
    )


def newest_first(instructions: List[Instruction]) -> List[Instruction]:
    return sorted(instructions, key=lambda i: (i.created_at, i.id), reverse=True)


class Storage(ABC):
    """Operations every storage backend provides."""

    backend = "abstract"

    # Users
    @abstractmethod
    def create_user(self, data: Mapping[str, Any]) -> User:
        """Store a user. Duplicate usernames are accepted."""

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """First user created with this username, or None."""

    @abstractmethod
    def count_users(self) -> int:
        ...

    # Production entries
    @abstractmethod
    def create_production_entry(self, data: Mapping[str, Any]) -> ProductionEntry:
        ...

    @abstractmethod
    def add_production_detail(self, data: Mapping[str, Any]) -> ProductionDetail:
        """Append a detail to data["entry_id"]. The caller checks the entry exists."""

    @abstractmethod
    def get_production_entries(
        self, filters: Optional[ProductionEntryFilters] = None
    ) -> List[ProductionEntryWithDetails]:
        ...

    @abstractmethod
    def get_production_entry_by_id(self, entry_id: int) -> Optional[ProductionEntryWithDetails]:
        ...

    # Instructions
    @abstractmethod
    def create_instruction(self, data: Mapping[str, Any]) -> Instruction:
        ...

    @abstractmethod
    def get_instructions(self, filters: Optional[InstructionFilters] = None) -> List[Instruction]:
        """Matching instructions, most recent first."""
