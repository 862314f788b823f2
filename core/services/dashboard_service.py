# =============================================================================
# core/services/dashboard_service.py - Dashboard & Financial Reports
# =============================================================================
# Read-side aggregation over transactions:
# - monthly summary (balances, income/expenses, savings, category shares)
# - date-range reports, optionally persisted with one line per transaction
# =============================================================================

import logging
from datetime import date
from typing import Any
from uuid import UUID

from app.config import settings
from app.exceptions import EmptyReportError
from core.models.dashboard import ReportSaveRequest
from core.services.account_service import AccountService
from core.services.transaction_service import TransactionService
from lib.aggregations import category_breakdown, report_totals, summarize
from lib.supabase_client import SupabaseClient
from lib.utils import current_month, month_bounds, quantize_money, sum_money

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class DashboardService:
    """Service for the dashboard and financial reports."""

    @staticmethod
    def get_summary(user_id: UUID | str, month: str | None = None) -> dict[str, Any]:
        """
        Monthly dashboard.

        Args:
            user_id: Owner
            month: "YYYY-MM", defaults to the current month

        Returns:
            dict matching DashboardSummary. income - expenses == savings
            holds on the returned floats since all three are cent-exact.
        """
        month = month or current_month()
        start, end = month_bounds(month)

        accounts = AccountService.list_accounts(user_id)
        total_balance = quantize_money(sum_money(a.get("balance") for a in accounts))

        transactions = TransactionService.list_transactions(user_id, date_from=start, date_to=end)
        totals = summarize(transactions, month)
        breakdown = category_breakdown(
            transactions,
            month,
            top_n=settings.DASHBOARD_TOP_CATEGORIES,
        )
        recent = TransactionService.list_transactions(user_id, limit=RECENT_LIMIT)

        return {
            "month": month,
            "total_balance": float(total_balance),
            "monthly_income": float(totals["income"]),
            "monthly_expenses": float(totals["expenses"]),
            "savings": float(totals["savings"]),
            "savings_rate": totals["savings_rate"],
            "recent_transactions": recent,
            "expenses_by_category": [
                {**item, "amount": float(item["amount"])} for item in breakdown
            ],
        }

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    @staticmethod
    def _report_for(user_id: UUID | str, period_start: date, period_end: date):
        transactions = TransactionService.list_transactions(
            user_id,
            date_from=period_start,
            date_to=period_end,
        )
        return transactions, report_totals(transactions)

    @staticmethod
    def build_report(user_id: UUID | str, period_start: date, period_end: date) -> dict[str, Any]:
        """Totals and per-category lines for [period_start, period_end]."""
        _, totals = DashboardService._report_for(user_id, period_start, period_end)
        return {
            "period_start": period_start,
            "period_end": period_end,
            "total_income": float(totals["total_income"]),
            "total_expense": float(totals["total_expense"]),
            "net_total": float(totals["net_total"]),
            "transaction_count": totals["transaction_count"],
            "categories": [
                {key: float(value) if key != "category" else value for key, value in line.items()}
                for line in totals["categories"]
            ],
        }

    @staticmethod
    def save_report(user_id: UUID | str, request: ReportSaveRequest) -> dict[str, Any]:
        """
        Persist a report header plus one line per transaction.

        Raises:
            EmptyReportError: No transactions in the period
        """
        transactions, totals = DashboardService._report_for(
            user_id, request.period_start, request.period_end
        )
        if not transactions:
            raise EmptyReportError(request.period_start.isoformat(), request.period_end.isoformat())

        header = {
            "user_id": str(user_id),
            "title": request.title,
            "period_start": request.period_start.isoformat(),
            "period_end": request.period_end.isoformat(),
            "total_income": float(totals["total_income"]),
            "total_expense": float(totals["total_expense"]),
            "net_total": float(totals["net_total"]),
            "filters": None,
        }

        try:
            report = SupabaseClient.insert_row("financial_reports", header)
        except Exception as e:
            logger.error(f"Failed to save report header: {e}")
            raise

        lines = [
            {
                "report_id": report["id"],
                "user_id": str(user_id),
                "transaction_id": str(t["id"]),
                "type": t["type"],
                "amount": float(t["amount"]),
                "category": t["category"],
                "description": t["description"],
                "transaction_date": str(t["date"]),
            }
            for t in transactions
        ]
        SupabaseClient.insert_rows("financial_report_lines", lines)

        logger.info(f"Saved report {report['id']} with {len(lines)} lines")
        return {**report, "line_count": len(lines)}

    @staticmethod
    def list_reports(user_id: UUID | str) -> list[dict[str, Any]]:
        """Saved report headers, newest first."""
        client = SupabaseClient.get_client()
        response = SupabaseClient.execute(
            client.table("financial_reports")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True),
            code="REPORTS_LIST_FAILED",
            message="Failed to list reports",
        )
        return response.data or []
