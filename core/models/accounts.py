# =============================================================================
# core/models/accounts.py - Account & Payment Method Schemas
# =============================================================================
# These models define the API contract for:
# - bank accounts (checking, savings, wallet, ...)
# - payment methods linked to an account (and optionally a card)
# - the default banks catalog
#
# Accounts are never hard-deleted; deleting flips is_active to false.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from .common import CamelModel, PatchModel, require_text


class AccountType(str, Enum):
    """Kinds of bank account."""
    CHECKING = "checking"
    SAVINGS = "savings"
    WALLET = "wallet"
    INVESTMENT = "investment"
    OTHER = "other"


class PaymentMethodType(str, Enum):
    """How money leaves (or enters) an account."""
    PIX = "pix"
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    OTHER = "other"


CARD_PAYMENT_TYPES = {PaymentMethodType.CREDIT_CARD.value, PaymentMethodType.DEBIT_CARD.value}


# =============================================================================
# Accounts
# =============================================================================

class AccountCreate(CamelModel):
    """
    Schema for creating a bank account.

    Example:
        {
            "name": "Nubank",
            "type": "checking",
            "bank": "nubank",
            "balance": 1250.50
        }
    """

    name: str = Field(..., max_length=120, description="Display name")
    type: AccountType = Field(default=AccountType.CHECKING)
    bank: str | None = Field(default=None, description="Id from the default banks catalog")
    icon: str = Field(default="🏦")
    color: str = Field(default="#3B82F6")

    # Checking accounts may start overdrawn, so negatives are allowed
    balance: float = Field(default=0.0, description="Opening balance")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_text(v, "name")


class AccountUpdate(PatchModel):
    """Partial update; only provided fields are written."""

    non_nullable = ("name", "type", "icon", "color", "balance", "is_active")

    name: str | None = Field(default=None, max_length=120)
    type: AccountType | None = None
    bank: str | None = None
    icon: str | None = None
    color: str | None = None
    balance: float | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "name")


class BalanceAdjustment(CamelModel):
    """Add to or subtract from an account balance."""

    amount: float = Field(..., gt=0)
    operation: Literal["add", "subtract"]


class AccountResponse(CamelModel):
    """Account as returned to clients."""

    id: UUID
    name: str
    type: AccountType
    bank: str | None = None
    icon: str | None = None
    color: str | None = None
    balance: float = 0.0
    is_active: bool = True
    created_at: datetime | None = None
    user_id: UUID | None = None


class BankInfo(CamelModel):
    """Entry of the default banks catalog."""

    id: str
    name: str
    icon: str
    color: str


# =============================================================================
# Payment Methods
# =============================================================================

class PaymentMethodCreate(CamelModel):
    """
    Schema for creating a payment method.

    Card-backed methods (credit_card, debit_card) must reference a card.
    """

    name: str = Field(..., max_length=120)
    type: PaymentMethodType
    account_id: UUID
    card_id: UUID | None = None
    icon: str = Field(default="💳")
    color: str = Field(default="#6B7280")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_text(v, "name")

    @model_validator(mode="after")
    def _card_required_for_card_types(self) -> "PaymentMethodCreate":
        if self.type in CARD_PAYMENT_TYPES and self.card_id is None:
            raise ValueError("card_id is required for credit_card and debit_card methods")
        return self


class PaymentMethodUpdate(PatchModel):
    """Partial update; only provided fields are written."""

    non_nullable = ("name", "type", "account_id", "icon", "color", "is_active")

    name: str | None = Field(default=None, max_length=120)
    type: PaymentMethodType | None = None
    account_id: UUID | None = None
    card_id: UUID | None = None
    icon: str | None = None
    color: str | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "name")


class PaymentMethodResponse(CamelModel):
    """Payment method as returned to clients."""

    id: UUID
    name: str
    type: PaymentMethodType
    account_id: UUID
    card_id: UUID | None = None
    icon: str | None = None
    color: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    user_id: UUID | None = None
