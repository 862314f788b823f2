# =============================================================================
# core/services/payment_method_service.py - Payment Method Business Logic
# =============================================================================
# Payment methods hang off an active account; card-backed methods also
# reference one of the user's cards.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import BusinessRuleError, ResourceNotFoundError
from core.models.accounts import CARD_PAYMENT_TYPES, PaymentMethodCreate, PaymentMethodUpdate
from core.services.account_service import AccountService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

TABLE = "payment_methods"


class PaymentMethodService:
    """Service for payment method operations."""

    @staticmethod
    def list_methods(user_id: UUID | str, account_id: UUID | str | None = None) -> list[dict[str, Any]]:
        """List active payment methods, optionally for one account."""
        client = SupabaseClient.get_client()
        query = (
            client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("is_active", True)
        )
        if account_id:
            query = query.eq("account_id", str(account_id))

        response = SupabaseClient.execute(
            query.order("created_at", desc=False),
            code="PAYMENT_METHODS_LIST_FAILED",
            message="Failed to list payment methods",
        )
        return response.data or []

    @staticmethod
    def get_method(method_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        method = SupabaseClient.fetch_row(TABLE, method_id, user_id=user_id)
        if not method:
            raise ResourceNotFoundError("Payment method", str(method_id))
        return method

    @staticmethod
    def _check_card(card_id: UUID | str | None, method_type: str, user_id: UUID | str) -> None:
        if method_type not in CARD_PAYMENT_TYPES:
            return
        if card_id is None:
            raise BusinessRuleError(
                "Card-backed payment methods need a card",
                code="CARD_REQUIRED",
                suggestion="Send cardId for credit_card and debit_card methods",
            )
        if not SupabaseClient.fetch_row("cards", card_id, user_id=user_id):
            raise ResourceNotFoundError("Card", str(card_id))

    @staticmethod
    def create_method(user_id: UUID | str, data: PaymentMethodCreate) -> dict[str, Any]:
        """
        Create a payment method.

        Raises:
            ResourceNotFoundError: Account or card missing / not owned
            InactiveAccountError: Account is soft-deleted
        """
        AccountService.get_active_account(data.account_id, user_id)
        PaymentMethodService._check_card(data.card_id, data.type, user_id)

        payload = data.model_dump(mode="json")
        payload["user_id"] = str(user_id)
        payload["is_active"] = True

        try:
            method = SupabaseClient.insert_row(TABLE, payload)
        except Exception as e:
            logger.error(f"Failed to create payment method: {e}")
            raise

        logger.info(f"Created payment method: {method['id']} ({data.type})")
        return method

    @staticmethod
    def update_method(
        method_id: UUID | str,
        user_id: UUID | str,
        data: PaymentMethodUpdate,
    ) -> dict[str, Any]:
        """Partially update a payment method, re-checking account and card rules."""
        method = PaymentMethodService.get_method(method_id, user_id)
        updates = data.model_dump(mode="json", exclude_unset=True)
        if not updates:
            return method

        if updates.get("account_id"):
            AccountService.get_active_account(updates["account_id"], user_id)

        merged = {**method, **updates}
        if "type" in updates or "card_id" in updates:
            PaymentMethodService._check_card(merged.get("card_id"), merged["type"], user_id)

        updated = SupabaseClient.update_row(TABLE, method_id, updates, user_id=user_id)
        logger.info(f"Updated payment method: {method_id}")
        return updated or merged

    @staticmethod
    def delete_method(method_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """Soft-delete a payment method."""
        PaymentMethodService.get_method(method_id, user_id)
        updated = SupabaseClient.update_row(TABLE, method_id, {"is_active": False}, user_id=user_id)
        logger.info(f"Deactivated payment method: {method_id}")
        return updated
