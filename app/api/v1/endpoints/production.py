from fastapi import APIRouter, Body, Depends, status
from typing import Any, List
import logging

import pydantic

from app.schemas.production import (
    ProductionDetail,
    ProductionDetailCreate,
    ProductionEntry,
    ProductionEntryCreate,
    ProductionEntryWithDetails,
    ProductionSummary,
)
from app.storage import ProductionEntryFilters, Storage
from app.storage.summary import summarize_production
from app.core.exceptions import NotFoundError, ValidationError, field_errors
from app.api.deps import get_entry_filters, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ProductionEntry, status_code=status.HTTP_201_CREATED)
def create_production_entry(
    *,
    storage: Storage = Depends(get_storage),
    entry_in: ProductionEntryCreate
) -> Any:
    """Record an operator submission for a process/station/shift time"""
    return storage.create_production_entry(entry_in.model_dump())


@router.post("/{entry_id}/details", response_model=ProductionDetail, status_code=status.HTTP_201_CREATED)
def add_production_detail(
    entry_id: int,
    payload: Any = Body(None),
    storage: Storage = Depends(get_storage),
) -> Any:
    """
    Attach a model/quantity line to an existing entry.

    The entry is looked up before the body is validated, so a missing entry
    is always reported as 404.
    """
    if storage.get_production_entry_by_id(entry_id) is None:
        raise NotFoundError("Production entry not found")

    try:
        detail_in = ProductionDetailCreate.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid production detail data", errors=field_errors(e.errors()))

    data = detail_in.model_dump()
    data["entry_id"] = entry_id
    return storage.add_production_detail(data)


@router.get("", response_model=List[ProductionEntryWithDetails])
def list_production_entries(
    filters: ProductionEntryFilters = Depends(get_entry_filters),
    storage: Storage = Depends(get_storage),
) -> Any:
    """Entries with their details, in creation order"""
    return storage.get_production_entries(filters)


@router.get("/summary", response_model=ProductionSummary)
def production_summary(
    filters: ProductionEntryFilters = Depends(get_entry_filters),
    storage: Storage = Depends(get_storage),
) -> Any:
    """Output totals per shift time, model and process for the matching entries"""
    return summarize_production(storage.get_production_entries(filters))


@router.get("/{entry_id}", response_model=ProductionEntryWithDetails)
def get_production_entry(entry_id: int, storage: Storage = Depends(get_storage)) -> Any:
    entry = storage.get_production_entry_by_id(entry_id)
    if not entry:
        raise NotFoundError("Production entry not found")
    return entry
