# =============================================================================
# app/routers/transactions.py - Transaction Endpoints
# =============================================================================
# Income/expense CRUD, filtered listing and CSV export.
# =============================================================================

from datetime import date
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import StreamingResponse

from app.dependencies import CurrentUser
from core.models.transactions import TransactionCreate, TransactionResponse, TransactionUpdate
from core.services.transaction_service import TransactionService

router = APIRouter()

TransactionId = Annotated[UUID, Path(description="Transaction UUID")]


def transaction_filters(
    type: Annotated[Literal["income", "expense"] | None, Query()] = None,
    date_from: Annotated[date | None, Query(alias="dateFrom")] = None,
    date_to: Annotated[date | None, Query(alias="dateTo")] = None,
    account_id: Annotated[UUID | None, Query(alias="accountId")] = None,
    category: Annotated[str | None, Query(description="Category name")] = None,
) -> dict:
    """Shared query filters for listing and export."""
    return {
        "transaction_type": type,
        "date_from": date_from,
        "date_to": date_to,
        "account_id": account_id,
        "category": category,
    }


Filters = Annotated[dict, Depends(transaction_filters)]


@router.get("", response_model=list[TransactionResponse])
async def list_transactions(
    user: CurrentUser,
    filters: Filters,
    limit: Annotated[int | None, Query(ge=1, le=1000)] = None,
):
    """Transactions newest first."""
    return TransactionService.list_transactions(user.id, limit=limit, **filters)


@router.get("/export")
async def export_transactions(user: CurrentUser, filters: Filters):
    """
    Download the filtered transactions as CSV.

    Columns: Tipo, Descrição, Categoria, Data, Valor.
    """
    csv_text = TransactionService.export_csv(user.id, **filters)
    filename = f"transacoes_{date.today().isoformat()}.csv"

    return StreamingResponse(
        iter([csv_text]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
        }
    )


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(body: TransactionCreate, user: CurrentUser):
    """
    Register an income or expense.

    The category name is created for the caller if it doesn't exist yet.
    """
    return TransactionService.create_transaction(user.id, body)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(transaction_id: TransactionId, user: CurrentUser):
    return TransactionService.get_transaction(transaction_id, user.id)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(transaction_id: TransactionId, body: TransactionUpdate, user: CurrentUser):
    return TransactionService.update_transaction(transaction_id, user.id, body)


@router.delete("/{transaction_id}", status_code=204)
async def delete_transaction(transaction_id: TransactionId, user: CurrentUser):
    TransactionService.delete_transaction(transaction_id, user.id)
