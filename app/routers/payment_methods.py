# =============================================================================
# app/routers/payment_methods.py - Payment Method Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.dependencies import CurrentUser
from core.models.accounts import PaymentMethodCreate, PaymentMethodResponse, PaymentMethodUpdate
from core.services.payment_method_service import PaymentMethodService

router = APIRouter()

MethodId = Annotated[UUID, Path(description="Payment method UUID")]


@router.get("", response_model=list[PaymentMethodResponse])
async def list_payment_methods(
    user: CurrentUser,
    account_id: Annotated[UUID | None, Query(alias="accountId")] = None,
):
    """Active payment methods, optionally of one account."""
    return PaymentMethodService.list_methods(user.id, account_id=account_id)


@router.post("", response_model=PaymentMethodResponse, status_code=201)
async def create_payment_method(body: PaymentMethodCreate, user: CurrentUser):
    """
    Create a payment method.

    credit_card and debit_card methods must reference one of the caller's cards.
    """
    return PaymentMethodService.create_method(user.id, body)


@router.get("/{method_id}", response_model=PaymentMethodResponse)
async def get_payment_method(method_id: MethodId, user: CurrentUser):
    return PaymentMethodService.get_method(method_id, user.id)


@router.patch("/{method_id}", response_model=PaymentMethodResponse)
async def update_payment_method(method_id: MethodId, body: PaymentMethodUpdate, user: CurrentUser):
    return PaymentMethodService.update_method(method_id, user.id, body)


@router.delete("/{method_id}", response_model=PaymentMethodResponse)
async def delete_payment_method(method_id: MethodId, user: CurrentUser):
    return PaymentMethodService.delete_method(method_id, user.id)
