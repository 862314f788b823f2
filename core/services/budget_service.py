# =============================================================================
# core/services/budget_service.py - Budgets & Goals
# =============================================================================
# Budgets: monthly spending caps per category name.
# Goals: savings targets with progress (see GoalResponse.progress).
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.config import settings
from app.exceptions import ResourceNotFoundError
from core.models.budgets import BudgetCreate, BudgetUpdate, GoalCreate, GoalUpdate
from core.services.transaction_service import TransactionService
from lib.aggregations import analyze_budgets
from lib.supabase_client import SupabaseClient
from lib.utils import current_month, month_bounds

logger = logging.getLogger(__name__)

BUDGETS_TABLE = "budgets"
GOALS_TABLE = "financial_goals"


class BudgetService:
    """Service for monthly budgets."""

    @staticmethod
    def list_budgets(user_id: UUID | str, month: str | None = None) -> list[dict[str, Any]]:
        """Budgets ordered by month desc, category asc."""
        client = SupabaseClient.get_client()
        query = client.table(BUDGETS_TABLE).select("*").eq("user_id", str(user_id))
        if month:
            query = query.eq("month", month)

        response = SupabaseClient.execute(
            query.order("month", desc=True).order("category", desc=False),
            code="BUDGETS_LIST_FAILED",
            message="Failed to list budgets",
        )
        return response.data or []

    @staticmethod
    def get_budget(budget_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        budget = SupabaseClient.fetch_row(BUDGETS_TABLE, budget_id, user_id=user_id)
        if not budget:
            raise ResourceNotFoundError("Budget", str(budget_id))
        return budget

    @staticmethod
    def create_budget(user_id: UUID | str, data: BudgetCreate) -> dict[str, Any]:
        payload = data.model_dump()
        payload["user_id"] = str(user_id)

        try:
            budget = SupabaseClient.insert_row(BUDGETS_TABLE, payload)
        except Exception as e:
            logger.error(f"Failed to create budget: {e}")
            raise

        logger.info(f"Created budget: {budget['id']} {data.category} {data.month}")
        return budget

    @staticmethod
    def update_budget(budget_id: UUID | str, user_id: UUID | str, data: BudgetUpdate) -> dict[str, Any]:
        budget = BudgetService.get_budget(budget_id, user_id)
        updates = data.model_dump(exclude_unset=True)
        if not updates:
            return budget

        updated = SupabaseClient.update_row(BUDGETS_TABLE, budget_id, updates, user_id=user_id)
        logger.info(f"Updated budget: {budget_id}")
        return updated or {**budget, **updates}

    @staticmethod
    def delete_budget(budget_id: UUID | str, user_id: UUID | str) -> None:
        BudgetService.get_budget(budget_id, user_id)
        SupabaseClient.delete_row(BUDGETS_TABLE, budget_id, user_id=user_id)
        logger.info(f"Deleted budget: {budget_id}")

    @staticmethod
    def analyze(user_id: UUID | str, month: str | None = None) -> dict[str, Any]:
        """
        Budget analysis for a month (defaults to the current one).

        Status thresholds: exceeded at 100%, warning at
        settings.BUDGET_WARNING_PERCENT.
        """
        month = month or current_month()
        start, end = month_bounds(month)

        budgets = BudgetService.list_budgets(user_id, month)
        expenses = TransactionService.list_transactions(
            user_id,
            transaction_type="expense",
            date_from=start,
            date_to=end,
        )
        analysis = analyze_budgets(budgets, expenses, month, settings.BUDGET_WARNING_PERCENT)

        logger.debug(
            f"Budget analysis {month}: {len(analysis['items'])} budgets, "
            f"{analysis['exceeded_count']} exceeded"
        )
        return analysis


class GoalService:
    """Service for financial goals."""

    @staticmethod
    def list_goals(user_id: UUID | str) -> list[dict[str, Any]]:
        """Goals newest first."""
        client = SupabaseClient.get_client()
        response = SupabaseClient.execute(
            client.table(GOALS_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True),
            code="GOALS_LIST_FAILED",
            message="Failed to list goals",
        )
        return response.data or []

    @staticmethod
    def get_goal(goal_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        goal = SupabaseClient.fetch_row(GOALS_TABLE, goal_id, user_id=user_id)
        if not goal:
            raise ResourceNotFoundError("Goal", str(goal_id))
        return goal

    @staticmethod
    def create_goal(user_id: UUID | str, data: GoalCreate) -> dict[str, Any]:
        payload = data.model_dump(mode="json")
        payload["user_id"] = str(user_id)

        try:
            goal = SupabaseClient.insert_row(GOALS_TABLE, payload)
        except Exception as e:
            logger.error(f"Failed to create goal: {e}")
            raise

        logger.info(f"Created goal: {goal['id']} target={data.target_amount}")
        return goal

    @staticmethod
    def update_goal(goal_id: UUID | str, user_id: UUID | str, data: GoalUpdate) -> dict[str, Any]:
        goal = GoalService.get_goal(goal_id, user_id)
        updates = data.model_dump(mode="json", exclude_unset=True)
        if not updates:
            return goal

        updated = SupabaseClient.update_row(GOALS_TABLE, goal_id, updates, user_id=user_id)
        logger.info(f"Updated goal: {goal_id}")
        return updated or {**goal, **updates}

    @staticmethod
    def delete_goal(goal_id: UUID | str, user_id: UUID | str) -> None:
        GoalService.get_goal(goal_id, user_id)
        SupabaseClient.delete_row(GOALS_TABLE, goal_id, user_id=user_id)
        logger.info(f"Deleted goal: {goal_id}")
