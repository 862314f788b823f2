# =============================================================================
# core/services/transaction_service.py - Transaction Business Logic
# =============================================================================
# Income and expense entries. Rows store category_id / payment_method_id and
# transaction_date; the view-model exposes category name, payment method
# label and date. The free-form payment method label is kept in the notes
# column as JSON: {"paymentMethod": "pix"}.
# =============================================================================

import json
import logging
from datetime import date
from typing import Any
from uuid import UUID

from app.exceptions import ResourceNotFoundError
from core.models.transactions import (
    UNCATEGORIZED,
    CategoryCreate,
    TransactionCreate,
    TransactionUpdate,
)
from core.services.account_service import AccountService
from core.services.category_service import CategoryService
from lib.aggregations import frame_to_csv, transactions_frame
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

TABLE = "transactions"
ENTRY_TYPES = ["income", "expense"]


# =============================================================================
# Row <-> View Helpers
# =============================================================================

def encode_notes(payment_method: str | None) -> str | None:
    """Serialize the payment method label for the notes column."""
    if not payment_method:
        return None
    return json.dumps({"paymentMethod": payment_method}, ensure_ascii=False)


def decode_notes(notes: Any) -> str | None:
    """Read the payment method label back from notes; non-JSON notes yield None."""
    if not notes:
        return None
    try:
        parsed = json.loads(notes)
    except (TypeError, ValueError):
        return None
    if isinstance(parsed, dict):
        return parsed.get("paymentMethod")
    return None


def to_view(
    row: dict[str, Any],
    category_names: dict[str, str],
    method_names: dict[str, str],
) -> dict[str, Any]:
    """Shape a transactions row into the TransactionResponse field set."""
    category_id = row.get("category_id")
    method_id = row.get("payment_method_id")

    payment_method = method_names.get(str(method_id)) if method_id else None
    if payment_method is None:
        payment_method = decode_notes(row.get("notes"))

    return {
        "id": row["id"],
        "type": row["type"],
        "description": row.get("description", ""),
        "amount": row.get("amount", 0),
        "category": category_names.get(str(category_id), UNCATEGORIZED) if category_id else UNCATEGORIZED,
        "date": row.get("transaction_date"),
        "account_id": row.get("account_id"),
        "payment_method": payment_method,
        "card_id": row.get("card_id"),
        "installments": row.get("installments"),
        "created_at": row.get("created_at"),
    }


class TransactionService:
    """Service for income/expense transactions."""

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @staticmethod
    def _method_names(user_id: UUID | str) -> dict[str, str]:
        client = SupabaseClient.get_client()
        response = SupabaseClient.execute(
            client.table("payment_methods").select("id,name").eq("user_id", str(user_id)),
            code="PAYMENT_METHODS_LIST_FAILED",
            message="Failed to load payment methods",
        )
        return {str(m["id"]): m["name"] for m in response.data or []}

    @staticmethod
    def _views(user_id: UUID | str, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if not rows:
            return []
        category_names = CategoryService.names_by_id(user_id)
        method_names = TransactionService._method_names(user_id)
        return [to_view(row, category_names, method_names) for row in rows]

    @staticmethod
    def _resolve_category(user_id: UUID | str, name: str | None, entry_type: str) -> str | None:
        if not name:
            return None
        category = CategoryService.get_or_create(user_id, CategoryCreate(name=name, type=entry_type))
        return str(category["id"])

    @staticmethod
    def _get_row(transaction_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        row = SupabaseClient.fetch_row(TABLE, transaction_id, user_id=user_id)
        if not row:
            raise ResourceNotFoundError("Transaction", str(transaction_id))
        return row

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def list_transactions(
        user_id: UUID | str,
        transaction_type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        account_id: UUID | str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        List transaction views newest first.

        Args:
            transaction_type: "income" or "expense"; both when omitted
            date_from / date_to: Inclusive transaction_date window
            account_id: Only this account
            category: Category name (exact match on the view)
            limit: Max rows returned
        """
        client = SupabaseClient.get_client()
        query = client.table(TABLE).select("*").eq("user_id", str(user_id))

        if transaction_type:
            query = query.eq("type", transaction_type)
        else:
            query = query.in_("type", ENTRY_TYPES)
        if date_from:
            query = query.gte("transaction_date", date_from.isoformat())
        if date_to:
            query = query.lte("transaction_date", date_to.isoformat())
        if account_id:
            query = query.eq("account_id", str(account_id))

        query = query.order("transaction_date", desc=True).order("created_at", desc=True)
        if limit and not category:
            query = query.limit(limit)

        response = SupabaseClient.execute(
            query,
            code="TRANSACTIONS_LIST_FAILED",
            message="Failed to list transactions",
        )
        views = TransactionService._views(user_id, response.data or [])

        if category:
            views = [v for v in views if v["category"] == category]
            if limit:
                views = views[:limit]
        return views

    @staticmethod
    def get_transaction(transaction_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        row = TransactionService._get_row(transaction_id, user_id)
        return TransactionService._views(user_id, [row])[0]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @staticmethod
    def create_transaction(user_id: UUID | str, data: TransactionCreate) -> dict[str, Any]:
        """
        Register an income or expense.

        The category name is resolved (or created) first; the account must
        be an active account of the user.
        """
        AccountService.get_active_account(data.account_id, user_id)
        category_id = TransactionService._resolve_category(user_id, data.category, data.type)

        payload = {
            "user_id": str(user_id),
            "type": data.type,
            "description": data.description,
            "amount": data.amount,
            "category_id": category_id,
            "account_id": str(data.account_id),
            "transaction_date": data.date.isoformat(),
            "installments": data.installments,
            "current_installment": 1,
            "is_installment": data.installments > 1,
            "notes": encode_notes(data.payment_method),
        }

        try:
            row = SupabaseClient.insert_row(TABLE, payload)
        except Exception as e:
            logger.error(f"Failed to create transaction: {e}")
            raise

        logger.info(f"Created {data.type} transaction: {row['id']} amount={data.amount}")
        return TransactionService._views(user_id, [row])[0]

    @staticmethod
    def update_transaction(
        transaction_id: UUID | str,
        user_id: UUID | str,
        data: TransactionUpdate,
    ) -> dict[str, Any]:
        """
        Partially update a transaction.

        A new category name is resolved against the new type when the type
        changes too, else against the stored type.
        """
        row = TransactionService._get_row(transaction_id, user_id)
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            return TransactionService._views(user_id, [row])[0]

        updates: dict[str, Any] = {}
        for key in ("type", "description", "amount"):
            if key in fields:
                updates[key] = fields[key]
        if "date" in fields and fields["date"] is not None:
            updates["transaction_date"] = fields["date"].isoformat()
        if "account_id" in fields and fields["account_id"] is not None:
            AccountService.get_active_account(fields["account_id"], user_id)
            updates["account_id"] = str(fields["account_id"])
        if "category" in fields:
            entry_type = fields.get("type") or row["type"]
            updates["category_id"] = TransactionService._resolve_category(user_id, fields["category"], entry_type)
        if "payment_method" in fields:
            updates["notes"] = encode_notes(fields["payment_method"])
        if fields.get("installments") is not None:
            updates["installments"] = fields["installments"]
            updates["is_installment"] = fields["installments"] > 1

        updated = SupabaseClient.update_row(TABLE, transaction_id, updates, user_id=user_id)
        logger.info(f"Updated transaction: {transaction_id} fields={sorted(updates)}")
        return TransactionService._views(user_id, [updated or {**row, **updates}])[0]

    @staticmethod
    def delete_transaction(transaction_id: UUID | str, user_id: UUID | str) -> None:
        """Hard-delete a transaction."""
        TransactionService._get_row(transaction_id, user_id)
        SupabaseClient.delete_row(TABLE, transaction_id, user_id=user_id)
        logger.info(f"Deleted transaction: {transaction_id}")

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    @staticmethod
    def export_csv(user_id: UUID | str, **filters: Any) -> str:
        """Filtered transactions as CSV text (Tipo, Descrição, Categoria, Data, Valor)."""
        views = TransactionService.list_transactions(user_id, **filters)
        logger.info(f"Exporting {len(views)} transactions for user: {user_id}")
        return frame_to_csv(transactions_frame(views))
