# =============================================================================
# app/routers/dashboard.py - Dashboard & Report Endpoints
# =============================================================================
# `router` is mounted at /dashboard, `reports_router` at /reports.
# =============================================================================

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import CurrentUser
from app.exceptions import BusinessRuleError
from core.models.budgets import MONTH_REGEX
from core.models.dashboard import (
    DashboardSummary,
    FinancialReport,
    ReportSaveRequest,
    SavedReportResponse,
)
from core.services.dashboard_service import DashboardService

router = APIRouter()
reports_router = APIRouter()


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    user: CurrentUser,
    month: Annotated[str | None, Query(pattern=MONTH_REGEX, description="YYYY-MM")] = None,
):
    """
    Monthly dashboard (default: current month).

    Includes total balance of active accounts, income, expenses, savings,
    savings rate, the five latest transactions and the expense breakdown.
    """
    return DashboardService.get_summary(user.id, month=month)


@reports_router.get("", response_model=FinancialReport)
async def get_report(
    user: CurrentUser,
    period_start: Annotated[date, Query(alias="periodStart")],
    period_end: Annotated[date, Query(alias="periodEnd")],
):
    """Totals and per-category lines for a date range."""
    if period_end < period_start:
        raise BusinessRuleError(
            "periodEnd must not be before periodStart",
            code="INVALID_PERIOD",
        )
    return DashboardService.build_report(user.id, period_start, period_end)


@reports_router.post("", response_model=SavedReportResponse, status_code=201)
async def save_report(body: ReportSaveRequest, user: CurrentUser):
    """Persist a report with one line per transaction. Empty periods are rejected."""
    return DashboardService.save_report(user.id, body)


@reports_router.get("/saved", response_model=list[SavedReportResponse])
async def list_saved_reports(user: CurrentUser):
    return DashboardService.list_reports(user.id)
