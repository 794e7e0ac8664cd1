from fastapi import APIRouter
from typing import Any

from app.core.reference import reference_data
from app.schemas.reference import ReferenceData

router = APIRouter()

@router.get("", response_model=ReferenceData)
def get_reference_data() -> Any:
    """Processes, models, shift times, stations per process and instruction types"""
    return reference_data()
