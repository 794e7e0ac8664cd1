from pydantic import Field, field_validator, model_validator
from typing import List
from datetime import datetime

from app.core.reference import MODELS, PROCESSES, TIMES, stations_for
from app.schemas.common import CamelModel


# Production Entry Schemas
class ProductionEntryBase(CamelModel):
    user_id: int
    operator_id: str = Field(..., min_length=1)
    process: str
    station: str
    time: str  # Shift checkpoint, e.g. "9.45am"

    @field_validator("process")
    @classmethod
    def known_process(cls, v: str) -> str:
        if v not in PROCESSES:
            raise ValueError(f"Unknown process '{v}'")
        return v

    @field_validator("time")
    @classmethod
    def known_time(cls, v: str) -> str:
        if v not in TIMES:
            raise ValueError(f"Unknown time '{v}'")
        return v

    @model_validator(mode="after")
    def station_belongs_to_process(self):
        valid = stations_for(self.process)
        if self.station not in valid:
            raise ValueError(f"Station '{self.station}' is not valid for {self.process} (expected one of {', '.join(valid)})")
        return self


class ProductionEntryCreate(ProductionEntryBase):
    pass


class ProductionEntry(CamelModel):
    id: int
    user_id: int
    operator_id: str
    process: str
    station: str
    time: str
    created_at: datetime


# Production Detail Schemas
class ProductionDetailCreate(CamelModel):
    model: str
    quantity: float = Field(..., ge=0.1, allow_inf_nan=False)  # Fractional quantities allowed, e.g. 12.5

    @field_validator("model")
    @classmethod
    def known_model(cls, v: str) -> str:
        if v not in MODELS:
            raise ValueError(f"Unknown model '{v}'")
        return v


class ProductionDetail(CamelModel):
    id: int
    entry_id: int
    model: str
    quantity: float


class ProductionEntryWithDetails(ProductionEntry):
    details: List[ProductionDetail] = []


# Summary Schemas
class TimeTotal(CamelModel):
    time: str
    quantity: float


class ModelTotal(CamelModel):
    model: str
    quantity: float


class ProcessTotal(CamelModel):
    process: str
    quantity: float


class ProductionSummary(CamelModel):
    total_quantity: float
    entry_count: int
    detail_count: int
    by_time: List[TimeTotal]
    by_model: List[ModelTotal]
    by_process: List[ProcessTotal]
