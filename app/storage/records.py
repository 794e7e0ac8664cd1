"""Immutable records handed out by the storage backends."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class User:
    id: int
    username: str
    hashed_password: str
    name: str
    role: str  # operator, management
    operator_id: Optional[str] = None


@dataclass(frozen=True)
class ProductionEntry:
    id: int
    user_id: int
    operator_id: str
    process: str
    station: str
    time: str
    created_at: datetime


@dataclass(frozen=True)
class ProductionDetail:
    id: int
    entry_id: int
    model: str
    quantity: float


@dataclass(frozen=True)
class ProductionEntryWithDetails(ProductionEntry):
    details: List[ProductionDetail] = field(default_factory=list)


@dataclass(frozen=True)
class Instruction:
    id: int
    user_id: int
    type: str
    target_process: str
    target_station: str
    created_at: datetime
    details: Optional[str] = None
