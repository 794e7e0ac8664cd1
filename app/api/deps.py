from datetime import datetime
from typing import Optional

from fastapi import Query, Request

from app.storage import InstructionFilters, ProductionEntryFilters, Storage


def get_storage(request: Request) -> Storage:
    """The store created by create_app, shared by every request of this app."""
    return request.app.state.storage


def get_entry_filters(
    user_id: Optional[int] = Query(None, alias="userId"),
    process: Optional[str] = Query(None),
    station: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
) -> ProductionEntryFilters:
    return ProductionEntryFilters(
        user_id=user_id,
        process=process or None,
        station=station or None,
        start_date=start_date,
        end_date=end_date,
    )


def get_instruction_filters(
    target_process: Optional[str] = Query(None, alias="targetProcess"),
    target_station: Optional[str] = Query(None, alias="targetStation"),
) -> InstructionFilters:
    return InstructionFilters(
        target_process=target_process or None,
        target_station=target_station or None,
    )
