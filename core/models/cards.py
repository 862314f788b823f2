# =============================================================================
# core/models/cards.py - Card Schemas
# =============================================================================
# Credit and debit cards issued by a provider from the static catalog.
#
# Validation rules enforced here (before any database call):
# - lastFourDigits, when given, is exactly 4 numeric characters
# - creditLimit is non-negative; debit cards carry no limit
# - dueDay and closingDay fall within 1..31
# - alias is non-blank
# - providerId exists in the catalog and supports the card type
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from lib.catalogs import get_card_provider, provider_supports

from .common import CamelModel, PatchModel, require_text


class CardType(str, Enum):
    """Card network role."""
    CREDIT = "credit"
    DEBIT = "debit"


LAST_FOUR_PATTERN = r"^[0-9]{4}$"


class CardProvider(CamelModel):
    """Entry of the card providers catalog."""

    id: str
    name: str
    icon: str
    color: str
    popular_brands: list[str] = Field(default_factory=list)
    supported_types: list[CardType] = Field(default_factory=list)


class CardCreate(CamelModel):
    """
    Schema for registering a card.

    Example:
        {
            "providerId": "nubank",
            "alias": "Roxinho",
            "lastFourDigits": "1234",
            "type": "credit",
            "creditLimit": 5000,
            "dueDay": 10,
            "closingDay": 3
        }
    """

    provider_id: str
    account_id: UUID | None = None
    alias: str = Field(..., max_length=80)
    last_four_digits: str | None = Field(default=None, pattern=LAST_FOUR_PATTERN)
    type: CardType = Field(default=CardType.CREDIT)
    credit_limit: float | None = Field(default=None, ge=0)
    current_balance: float | None = Field(default=None, description="Positive = owed")
    due_day: int | None = Field(default=None, ge=1, le=31)
    closing_day: int | None = Field(default=None, ge=1, le=31)

    @field_validator("alias")
    @classmethod
    def _alias_not_blank(cls, v: str) -> str:
        return require_text(v, "alias")

    @field_validator("provider_id")
    @classmethod
    def _known_provider(cls, v: str) -> str:
        if get_card_provider(v) is None:
            raise ValueError(f"unknown card provider: {v}")
        return v

    @model_validator(mode="after")
    def _type_rules(self) -> "CardCreate":
        if not provider_supports(self.provider_id, self.type):
            raise ValueError(f"provider {self.provider_id} does not issue {self.type} cards")
        if self.type == CardType.DEBIT.value and self.credit_limit is not None:
            raise ValueError("debit cards have no credit limit")
        return self


class CardUpdate(PatchModel):
    """
    Partial update.

    Type and provider are fixed after creation; the debit-has-no-limit rule
    is checked against the stored card in CardService.
    """

    non_nullable = ("alias", "is_active")

    alias: str | None = Field(default=None, max_length=80)
    credit_limit: float | None = Field(default=None, ge=0)
    current_balance: float | None = None
    due_day: int | None = Field(default=None, ge=1, le=31)
    closing_day: int | None = Field(default=None, ge=1, le=31)
    account_id: UUID | None = None
    is_active: bool | None = None

    @field_validator("alias")
    @classmethod
    def _alias_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "alias")


class CardResponse(CamelModel):
    """Card as returned to clients."""

    id: UUID
    provider_id: str
    account_id: UUID | None = None
    alias: str
    last_four_digits: str | None = None
    type: CardType
    is_active: bool = True
    credit_limit: float | None = None
    current_balance: float | None = None
    due_day: int | None = None
    closing_day: int | None = None
    created_at: datetime | None = None
    user_id: UUID | None = None
