# =============================================================================
# core/models/transactions.py - Category, Transaction & Transfer Schemas
# =============================================================================
# - Categories: user-owned or default (user_id IS NULL)
# - Transactions: income/expense entries against an account
# - Transfers: movement of money between two of the user's accounts
#
# Transactions reference categories by id in the database, but clients send
# and receive the category *name*; TransactionService resolves it.
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator

from .common import CamelModel, PatchModel, require_text


class CategoryType(str, Enum):
    """Which transaction types a category applies to."""
    INCOME = "income"
    EXPENSE = "expense"
    BOTH = "both"


class TransactionType(str, Enum):
    """Stored transaction types. Transfers live in their own table."""
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


EntryType = Literal["income", "expense"]

UNCATEGORIZED = "Sem categoria"


# =============================================================================
# Categories
# =============================================================================

class CategoryCreate(CamelModel):
    """Get-or-create request for a category."""

    name: str = Field(..., max_length=80)
    type: CategoryType = CategoryType.EXPENSE
    icon: str | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_text(v, "name")


class CategoryResponse(CamelModel):
    id: UUID
    name: str
    type: CategoryType
    icon: str | None = None
    color: str | None = None
    is_default: bool = False
    user_id: UUID | None = None


# =============================================================================
# Transactions
# =============================================================================

class TransactionCreate(CamelModel):
    """
    Schema for registering an income or expense.

    Example:
        {
            "type": "expense",
            "description": "Mercado",
            "amount": 152.30,
            "category": "Alimentação",
            "date": "2025-03-14",
            "accountId": "550e8400-...",
            "paymentMethod": "pix"
        }
    """

    type: EntryType
    description: str = Field(..., max_length=255)
    amount: float = Field(..., gt=0)
    category: str | None = Field(default=None, description="Category name; created if missing")
    date: dt.date
    account_id: UUID
    payment_method: str | None = Field(default=None, description="Free-form label kept in notes")
    installments: int = Field(default=1, ge=1, le=120)

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, v: str) -> str:
        return require_text(v, "description")


class TransactionUpdate(PatchModel):
    """Partial update; only provided fields are written."""

    non_nullable = ("type", "description", "amount", "date", "installments")

    type: EntryType | None = None
    description: str | None = Field(default=None, max_length=255)
    amount: float | None = Field(default=None, gt=0)
    category: str | None = None
    date: dt.date | None = None
    account_id: UUID | None = None
    payment_method: str | None = None
    installments: int | None = Field(default=None, ge=1, le=120)

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "description")


class TransactionResponse(CamelModel):
    """
    Transaction view-model.

    category falls back to "Sem categoria"; paymentMethod is the linked
    payment method's name, or the label stored in notes.
    """

    id: UUID
    type: TransactionType
    description: str
    amount: float
    category: str = UNCATEGORIZED
    date: dt.date
    account_id: UUID | None = None
    payment_method: str | None = None
    card_id: UUID | None = None
    installments: int | None = None
    created_at: dt.datetime | None = None


# =============================================================================
# Transfers
# =============================================================================

class TransferCreate(CamelModel):
    """
    Schema for moving money between two accounts.

    Source and destination must differ; TransferService enforces it along
    with ownership and balance checks.
    """

    from_account_id: UUID
    to_account_id: UUID
    amount: float = Field(..., gt=0)
    description: str | None = Field(default=None, max_length=255)
    payment_method: str | None = Field(default=None, description="pix, ted, ...")
    date: dt.date | None = Field(default=None, description="Defaults to today")


class TransferResponse(CamelModel):
    id: UUID
    from_account_id: UUID
    to_account_id: UUID
    amount: float
    description: str
    payment_method: str | None = None
    date: dt.date
    created_at: dt.datetime | None = None
