# =============================================================================
# core/models/dashboard.py - Dashboard & Report Schemas
# =============================================================================
# Read models produced by aggregating transactions:
# - DashboardSummary: one month at a glance
# - FinancialReport: totals and per-category lines for a date range
# - SavedReportResponse: a report persisted to financial_reports
# =============================================================================

import datetime as dt
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from .common import CamelModel, require_text
from .transactions import TransactionResponse


class CategoryBreakdownItem(CamelModel):
    """Share of the month's expenses spent in one category."""

    category: str
    amount: float
    percentage: float
    count: int = 0


class DashboardSummary(CamelModel):
    """
    Monthly dashboard.

    Invariants:
    - savings == monthly_income - monthly_expenses
    - sum(expenses_by_category.percentage) == 100.0 when expenses > 0
    """

    month: str
    total_balance: float
    monthly_income: float
    monthly_expenses: float
    savings: float
    savings_rate: float
    recent_transactions: list[TransactionResponse] = Field(default_factory=list)
    expenses_by_category: list[CategoryBreakdownItem] = Field(default_factory=list)


class ReportCategoryLine(CamelModel):
    category: str
    income: float = 0.0
    expense: float = 0.0
    total: float = 0.0


class FinancialReport(CamelModel):
    """Totals for a date range, with per-category lines sorted by total desc."""

    period_start: dt.date
    period_end: dt.date
    total_income: float
    total_expense: float
    net_total: float
    transaction_count: int
    categories: list[ReportCategoryLine] = Field(default_factory=list)


class ReportSaveRequest(CamelModel):
    title: str = Field(..., max_length=160)
    period_start: dt.date
    period_end: dt.date

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        return require_text(v, "title")

    @model_validator(mode="after")
    def _ordered_period(self) -> "ReportSaveRequest":
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class SavedReportResponse(CamelModel):
    id: UUID
    title: str
    period_start: dt.date
    period_end: dt.date
    total_income: float
    total_expense: float
    net_total: float
    line_count: int = 0
    created_at: dt.datetime | None = None
