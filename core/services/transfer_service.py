# =============================================================================
# core/services/transfer_service.py - Account Transfers
# =============================================================================
# A transfer debits one account, credits another and records a row in
# `transfers`. There is no database transaction around the three writes;
# each one is a separate request to the backend.
# =============================================================================

import logging
from datetime import date
from typing import Any
from uuid import UUID

from app.exceptions import InsufficientBalanceError, SameAccountTransferError
from core.models.transactions import TransferCreate
from core.services.account_service import AccountService
from lib.supabase_client import SupabaseClient
from lib.utils import to_decimal

logger = logging.getLogger(__name__)

TABLE = "transfers"


def to_view(row: dict[str, Any]) -> dict[str, Any]:
    """Shape a transfers row into the TransferResponse field set."""
    return {
        "id": row["id"],
        "from_account_id": row["from_account_id"],
        "to_account_id": row["to_account_id"],
        "amount": row["amount"],
        "description": row.get("description") or "",
        "payment_method": row.get("payment_method"),
        "date": row.get("transfer_date"),
        "created_at": row.get("created_at"),
    }


class TransferService:
    """Service for transfers between the user's own accounts."""

    @staticmethod
    def list_transfers(user_id: UUID | str, limit: int | None = None) -> list[dict[str, Any]]:
        """Transfers newest first."""
        client = SupabaseClient.get_client()
        query = (
            client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("transfer_date", desc=True)
            .order("created_at", desc=True)
        )
        if limit:
            query = query.limit(limit)

        response = SupabaseClient.execute(
            query,
            code="TRANSFERS_LIST_FAILED",
            message="Failed to list transfers",
        )
        return [to_view(row) for row in response.data or []]

    @staticmethod
    def create_transfer(user_id: UUID | str, data: TransferCreate) -> dict[str, Any]:
        """
        Move money between two accounts.

        Raises:
            SameAccountTransferError: Source equals destination
            ResourceNotFoundError / InactiveAccountError: Bad account
            InsufficientBalanceError: Source balance below amount
        """
        if data.from_account_id == data.to_account_id:
            raise SameAccountTransferError(str(data.from_account_id))

        source = AccountService.get_active_account(data.from_account_id, user_id)
        target = AccountService.get_active_account(data.to_account_id, user_id)

        amount = to_decimal(data.amount)
        balance = to_decimal(source.get("balance"))
        if balance < amount:
            raise InsufficientBalanceError(str(data.from_account_id), float(balance), data.amount)

        AccountService.apply_delta(source, -amount, user_id)
        AccountService.apply_delta(target, amount, user_id)

        description = data.description or f"Transferência {source['name']} → {target['name']}"
        payload = {
            "user_id": str(user_id),
            "from_account_id": str(data.from_account_id),
            "to_account_id": str(data.to_account_id),
            "amount": data.amount,
            "description": description,
            "payment_method": data.payment_method,
            "transfer_date": (data.date or date.today()).isoformat(),
        }

        try:
            row = SupabaseClient.insert_row(TABLE, payload)
        except Exception as e:
            logger.error(f"Transfer recorded balances but failed to insert row: {e}")
            raise

        logger.info(
            f"Transfer {row['id']}: {data.amount} from {data.from_account_id} to {data.to_account_id}"
        )
        return to_view(row)
