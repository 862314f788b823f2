# =============================================================================
# app/routers/accounts.py - Bank Account Endpoints
# =============================================================================
# CRUD for bank accounts plus balance adjustments and the banks catalog.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.dependencies import CurrentUser
from core.models.accounts import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    BalanceAdjustment,
    BankInfo,
)
from core.services.account_service import AccountService

router = APIRouter()

AccountId = Annotated[UUID, Path(description="Account UUID")]


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    user: CurrentUser,
    include_inactive: Annotated[bool, Query(alias="includeInactive")] = False,
):
    """List the caller's accounts, oldest first. Soft-deleted ones are hidden by default."""
    return AccountService.list_accounts(user.id, include_inactive=include_inactive)


@router.get("/banks", response_model=list[BankInfo])
async def list_banks():
    """Default banks catalog."""
    return AccountService.list_banks()


@router.post("", response_model=AccountResponse, status_code=201)
async def create_account(body: AccountCreate, user: CurrentUser):
    return AccountService.create_account(user.id, body)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(account_id: AccountId, user: CurrentUser):
    return AccountService.get_account(account_id, user.id)


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_account(account_id: AccountId, body: AccountUpdate, user: CurrentUser):
    """Partial update; only fields present in the body are written."""
    return AccountService.update_account(account_id, user.id, body)


@router.delete("/{account_id}", response_model=AccountResponse)
async def delete_account(account_id: AccountId, user: CurrentUser):
    """
    Soft-delete an account.

    The account and its payment methods are flagged inactive; history stays.
    """
    return AccountService.delete_account(account_id, user.id)


@router.post("/{account_id}/balance", response_model=AccountResponse)
async def adjust_balance(account_id: AccountId, body: BalanceAdjustment, user: CurrentUser):
    """Add to or subtract from the balance of an active account."""
    return AccountService.adjust_balance(account_id, user.id, body)
