# =============================================================================
# core/services/account_service.py - Bank Account Business Logic
# =============================================================================
# Handles account CRUD, soft deletion and balance adjustments.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import InactiveAccountError, ResourceNotFoundError
from core.models.accounts import AccountCreate, AccountUpdate, BalanceAdjustment
from lib.catalogs import DEFAULT_BANKS
from lib.supabase_client import SupabaseClient
from lib.utils import quantize_money, to_decimal

logger = logging.getLogger(__name__)

TABLE = "bank_accounts"


class AccountService:
    """
    Service for bank account operations.

    Every query is scoped to the caller's user_id.
    """

    @staticmethod
    def list_accounts(user_id: UUID | str, include_inactive: bool = False) -> list[dict[str, Any]]:
        """
        List the user's accounts, oldest first.

        Args:
            user_id: Owner
            include_inactive: Also return soft-deleted accounts
        """
        client = SupabaseClient.get_client()
        query = client.table(TABLE).select("*").eq("user_id", str(user_id))
        if not include_inactive:
            query = query.eq("is_active", True)

        response = SupabaseClient.execute(
            query.order("created_at", desc=False),
            code="ACCOUNTS_LIST_FAILED",
            message="Failed to list accounts",
        )
        return response.data or []

    @staticmethod
    def get_account(account_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Get an account by ID.

        Raises:
            ResourceNotFoundError: If missing or owned by another user
        """
        account = SupabaseClient.fetch_row(TABLE, account_id, user_id=user_id)
        if not account:
            raise ResourceNotFoundError("Account", str(account_id))
        return account

    @staticmethod
    def get_active_account(account_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Get an account that must still be active.

        Raises:
            ResourceNotFoundError: If missing or owned by another user
            InactiveAccountError: If the account was soft-deleted
        """
        account = AccountService.get_account(account_id, user_id)
        if not account.get("is_active", True):
            raise InactiveAccountError(str(account_id))
        return account

    @staticmethod
    def create_account(user_id: UUID | str, data: AccountCreate) -> dict[str, Any]:
        """Create an account for the user."""
        payload = data.model_dump()
        payload["user_id"] = str(user_id)
        payload["is_active"] = True

        try:
            account = SupabaseClient.insert_row(TABLE, payload)
        except Exception as e:
            logger.error(f"Failed to create account: {e}")
            raise

        logger.info(f"Created account: {account['id']} for user: {user_id}")
        return account

    @staticmethod
    def update_account(
        account_id: UUID | str,
        user_id: UUID | str,
        data: AccountUpdate,
    ) -> dict[str, Any]:
        """
        Partially update an account.

        Only fields present in the request are written; an empty update
        returns the stored row unchanged.
        """
        account = AccountService.get_account(account_id, user_id)

        updates = data.model_dump(exclude_unset=True)
        if not updates:
            return account

        updated = SupabaseClient.update_row(TABLE, account_id, updates, user_id=user_id)
        logger.info(f"Updated account: {account_id} fields={sorted(updates)}")
        return updated or {**account, **updates}

    @staticmethod
    def delete_account(account_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Soft-delete an account and deactivate its payment methods.

        Returns:
            The deactivated account row
        """
        AccountService.get_account(account_id, user_id)
        updated = SupabaseClient.update_row(TABLE, account_id, {"is_active": False}, user_id=user_id)

        client = SupabaseClient.get_client()
        SupabaseClient.execute(
            client.table("payment_methods")
            .update({"is_active": False})
            .eq("account_id", str(account_id))
            .eq("user_id", str(user_id)),
            code="PAYMENT_METHODS_DEACTIVATE_FAILED",
            message="Failed to deactivate payment methods of account",
            details={"account_id": str(account_id)},
        )

        logger.info(f"Deactivated account: {account_id}")
        return updated

    @staticmethod
    def adjust_balance(
        account_id: UUID | str,
        user_id: UUID | str,
        adjustment: BalanceAdjustment,
    ) -> dict[str, Any]:
        """Add to or subtract from an active account's balance."""
        account = AccountService.get_active_account(account_id, user_id)
        return AccountService.apply_delta(
            account,
            adjustment.amount if adjustment.operation == "add" else -adjustment.amount,
            user_id,
        )

    @staticmethod
    def apply_delta(account: dict[str, Any], delta: Any, user_id: UUID | str) -> dict[str, Any]:
        """Write balance + delta (rounded to cents) for an already-loaded account."""
        new_balance = quantize_money(to_decimal(account.get("balance")) + to_decimal(delta))
        updated = SupabaseClient.update_row(
            TABLE,
            account["id"],
            {"balance": float(new_balance)},
            user_id=user_id,
        )
        logger.info(f"Balance of account {account['id']} -> {new_balance}")
        return updated or {**account, "balance": float(new_balance)}

    @staticmethod
    def list_banks() -> list[dict[str, Any]]:
        """Default banks catalog."""
        return DEFAULT_BANKS
