from fastapi import APIRouter, Depends, status
from typing import Any, List
import logging

from app.schemas.instruction import Instruction, InstructionCreate
from app.storage import InstructionFilters, Storage
from app.api.deps import get_instruction_filters, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Instruction, status_code=status.HTTP_201_CREATED)
def create_instruction(
    *,
    storage: Storage = Depends(get_storage),
    instruction_in: InstructionCreate
) -> Any:
    """Send an instruction to a process/station scope"""
    sender = storage.get_user(instruction_in.user_id)
    if sender is None or sender.role != "management":
        # not enforced, operators only ever read instructions
        logger.warning(f"Instruction sent by user {instruction_in.user_id}, who is not a known management user")
    return storage.create_instruction(instruction_in.model_dump())


@router.get("", response_model=List[Instruction])
def list_instructions(
    filters: InstructionFilters = Depends(get_instruction_filters),
    storage: Storage = Depends(get_storage),
) -> Any:
    """
    Instructions visible to the given scope, most recent first.

    Instructions sent to "All Processes" / "All Stations" match every scope,
    and querying with those values returns everything. Operators poll this.
    """
    return storage.get_instructions(filters)
