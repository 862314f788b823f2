# =============================================================================
# app/routers/budgets.py - Budget & Goal Endpoints
# =============================================================================
# Two routers: `router` is mounted at /budgets, `goals_router` at /goals.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.dependencies import CurrentUser
from core.models.budgets import (
    MONTH_REGEX,
    BudgetAnalysis,
    BudgetCreate,
    BudgetResponse,
    BudgetUpdate,
    GoalCreate,
    GoalResponse,
    GoalUpdate,
)
from core.services.budget_service import BudgetService, GoalService

router = APIRouter()
goals_router = APIRouter()

Month = Annotated[str | None, Query(pattern=MONTH_REGEX, description="YYYY-MM")]
BudgetId = Annotated[UUID, Path(description="Budget UUID")]
GoalId = Annotated[UUID, Path(description="Goal UUID")]


# =============================================================================
# Budgets
# =============================================================================

@router.get("", response_model=list[BudgetResponse])
async def list_budgets(user: CurrentUser, month: Month = None):
    """Budgets by month (newest first) then category."""
    return BudgetService.list_budgets(user.id, month=month)


@router.get("/analysis", response_model=BudgetAnalysis)
async def analyze_budgets(user: CurrentUser, month: Month = None):
    """
    Spent vs budgeted for every budget of a month (default: current month).

    Status is `exceeded` from 100%, `warning` from the configured threshold.
    """
    return BudgetService.analyze(user.id, month=month)


@router.post("", response_model=BudgetResponse, status_code=201)
async def create_budget(body: BudgetCreate, user: CurrentUser):
    return BudgetService.create_budget(user.id, body)


@router.patch("/{budget_id}", response_model=BudgetResponse)
async def update_budget(budget_id: BudgetId, body: BudgetUpdate, user: CurrentUser):
    return BudgetService.update_budget(budget_id, user.id, body)


@router.delete("/{budget_id}", status_code=204)
async def delete_budget(budget_id: BudgetId, user: CurrentUser):
    BudgetService.delete_budget(budget_id, user.id)


# =============================================================================
# Goals
# =============================================================================

@goals_router.get("", response_model=list[GoalResponse])
async def list_goals(user: CurrentUser):
    return GoalService.list_goals(user.id)


@goals_router.post("", response_model=GoalResponse, status_code=201)
async def create_goal(body: GoalCreate, user: CurrentUser):
    return GoalService.create_goal(user.id, body)


@goals_router.patch("/{goal_id}", response_model=GoalResponse)
async def update_goal(goal_id: GoalId, body: GoalUpdate, user: CurrentUser):
    return GoalService.update_goal(goal_id, user.id, body)


@goals_router.delete("/{goal_id}", status_code=204)
async def delete_goal(goal_id: GoalId, user: CurrentUser):
    GoalService.delete_goal(goal_id, user.id)
