# =============================================================================
# app/routers/transfers.py - Transfer Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import CurrentUser
from core.models.transactions import TransferCreate, TransferResponse
from core.services.transfer_service import TransferService

router = APIRouter()


@router.get("", response_model=list[TransferResponse])
async def list_transfers(
    user: CurrentUser,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
):
    return TransferService.list_transfers(user.id, limit=limit)


@router.post("", response_model=TransferResponse, status_code=201)
async def create_transfer(body: TransferCreate, user: CurrentUser):
    """
    Move money between two of the caller's active accounts.

    Rejected when source and destination are the same account or when the
    source balance does not cover the amount.
    """
    return TransferService.create_transfer(user.id, body)
