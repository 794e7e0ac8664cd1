from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime

from app.core.reference import ALL_PROCESSES, ALL_STATIONS, PROCESSES, stations_for
from app.schemas.common import CamelModel


class InstructionBase(CamelModel):
    user_id: int  # Sender, normally a management user
    type: str = Field(..., min_length=1)  # Known kinds or free text for custom messages
    target_process: str
    target_station: str
    details: Optional[str] = None

    @field_validator("target_process")
    @classmethod
    def known_target_process(cls, v: str) -> str:
        if v != ALL_PROCESSES and v not in PROCESSES:
            raise ValueError(f"Unknown target process '{v}'")
        return v

    @model_validator(mode="after")
    def station_in_scope(self):
        if self.target_station != ALL_STATIONS and self.target_station not in stations_for(self.target_process):
            raise ValueError(f"Station '{self.target_station}' is not valid for {self.target_process}")
        return self


class InstructionCreate(InstructionBase):
    pass


class Instruction(InstructionBase):
    id: int
    created_at: datetime
