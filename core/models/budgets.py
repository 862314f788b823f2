# =============================================================================
# core/models/budgets.py - Budget & Goal Schemas
# =============================================================================
# Budgets cap monthly spending per category (month as "YYYY-MM").
# Goals track progress towards a savings target.
# =============================================================================

import datetime as dt
from enum import Enum
from uuid import UUID

from pydantic import Field, computed_field, field_validator

from lib.utils import MONTH_REGEX

from .common import CamelModel, PatchModel, require_text


# =============================================================================
# Budgets
# =============================================================================

class BudgetStatus(str, Enum):
    """Spending status of a budget within its month."""
    OK = "ok"
    WARNING = "warning"
    EXCEEDED = "exceeded"


class BudgetCreate(CamelModel):
    """
    Schema for creating a monthly budget.

    Example:
        {"category": "Alimentação", "amount": 800, "month": "2025-03"}
    """

    category: str = Field(..., max_length=80)
    description: str = Field(default="", max_length=255)
    amount: float = Field(..., gt=0)
    month: str = Field(..., pattern=MONTH_REGEX, description="YYYY-MM")

    @field_validator("category")
    @classmethod
    def _category_not_blank(cls, v: str) -> str:
        return require_text(v, "category")


class BudgetUpdate(PatchModel):
    non_nullable = ("category", "description", "amount", "month")

    category: str | None = Field(default=None, max_length=80)
    description: str | None = Field(default=None, max_length=255)
    amount: float | None = Field(default=None, gt=0)
    month: str | None = Field(default=None, pattern=MONTH_REGEX)

    @field_validator("category")
    @classmethod
    def _category_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "category")


class BudgetResponse(CamelModel):
    id: UUID
    category: str
    description: str = ""
    amount: float
    month: str
    created_at: dt.datetime | None = None
    user_id: UUID | None = None


class BudgetAnalysisItem(CamelModel):
    """One budget measured against the month's expenses."""

    budget_id: UUID
    category: str
    description: str = ""
    budgeted: float
    spent: float
    remaining: float
    percentage: float
    status: BudgetStatus


class BudgetAnalysis(CamelModel):
    """All budgets of a month with totals and alert counts."""

    month: str
    items: list[BudgetAnalysisItem] = Field(default_factory=list)
    total_budgeted: float = 0.0
    total_spent: float = 0.0
    total_remaining: float = 0.0
    exceeded_count: int = 0
    warning_count: int = 0


# =============================================================================
# Goals
# =============================================================================

class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class GoalCreate(CamelModel):
    """
    Schema for creating a financial goal.

    Example:
        {"name": "Reserva de emergência", "targetAmount": 10000, "targetDate": "2025-12-31"}
    """

    name: str = Field(..., max_length=120)
    description: str = Field(default="", max_length=500)
    target_amount: float = Field(..., gt=0)
    current_amount: float = Field(default=0.0, ge=0)
    target_date: dt.date | None = None
    status: GoalStatus = GoalStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_text(v, "name")


class GoalUpdate(PatchModel):
    non_nullable = ("name", "description", "target_amount", "current_amount", "status")

    name: str | None = Field(default=None, max_length=120)
    description: str | None = Field(default=None, max_length=500)
    target_amount: float | None = Field(default=None, gt=0)
    current_amount: float | None = Field(default=None, ge=0)
    target_date: dt.date | None = None
    status: GoalStatus | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "name")


class GoalResponse(CamelModel):
    """Goal view-model with raw (uncapped) progress percentage."""

    id: UUID
    name: str
    description: str | None = ""
    target_amount: float
    current_amount: float = 0.0
    target_date: dt.date | None = None
    status: GoalStatus = GoalStatus.ACTIVE
    created_at: dt.datetime | None = None
    user_id: UUID | None = None

    @computed_field
    @property
    def progress(self) -> float:
        if self.target_amount <= 0:
            return 0.0
        return round(self.current_amount / self.target_amount * 100, 2)
