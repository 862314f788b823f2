# =============================================================================
# app/routers/wellness.py - Health Tracking Endpoints
# =============================================================================
# Mounted at /wellness (/health serves the liveness and readiness checks).
# Sub-resources: weight-logs, activities, sleep-logs, goals and the summary.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.dependencies import CurrentUser
from core.models.wellness import (
    ActivityCreate,
    ActivityResponse,
    ActivityUpdate,
    HealthGoalCreate,
    HealthGoalResponse,
    HealthGoalUpdate,
    HealthSummary,
    SleepLogCreate,
    SleepLogResponse,
    SleepLogUpdate,
    WeightLogCreate,
    WeightLogResponse,
    WeightLogUpdate,
)
from core.services.wellness_service import HISTORY_DAYS, WellnessService

router = APIRouter()

RowId = Annotated[UUID, Path(description="Row UUID")]
HistoryDays = Annotated[int, Query(ge=1, le=3650, description="How many days back to list")]


@router.get("/summary", response_model=HealthSummary)
async def get_summary(user: CurrentUser):
    """Weight, 7-day activity and 7-day sleep stats plus insights."""
    return WellnessService.get_summary(user.id)


# =============================================================================
# Weight Logs
# =============================================================================

@router.get("/weight-logs", response_model=list[WeightLogResponse])
async def list_weight_logs(user: CurrentUser):
    return WellnessService.list_weight_logs(user.id)


@router.post("/weight-logs", response_model=WeightLogResponse, status_code=201)
async def create_weight_log(body: WeightLogCreate, user: CurrentUser):
    return WellnessService.create_weight_log(user.id, body)


@router.patch("/weight-logs/{row_id}", response_model=WeightLogResponse)
async def update_weight_log(row_id: RowId, body: WeightLogUpdate, user: CurrentUser):
    return WellnessService.update_weight_log(row_id, user.id, body)


@router.delete("/weight-logs/{row_id}", status_code=204)
async def delete_weight_log(row_id: RowId, user: CurrentUser):
    WellnessService.delete_weight_log(row_id, user.id)


# =============================================================================
# Activities
# =============================================================================

@router.get("/activities", response_model=list[ActivityResponse])
async def list_activities(user: CurrentUser, days: HistoryDays = HISTORY_DAYS):
    return WellnessService.list_activities(user.id, days=days)


@router.get("/activities/types")
async def list_activity_types():
    """Activity types with their Portuguese labels."""
    return WellnessService.list_activity_types()


@router.post("/activities", response_model=ActivityResponse, status_code=201)
async def create_activity(body: ActivityCreate, user: CurrentUser):
    return WellnessService.create_activity(user.id, body)


@router.patch("/activities/{row_id}", response_model=ActivityResponse)
async def update_activity(row_id: RowId, body: ActivityUpdate, user: CurrentUser):
    return WellnessService.update_activity(row_id, user.id, body)


@router.delete("/activities/{row_id}", status_code=204)
async def delete_activity(row_id: RowId, user: CurrentUser):
    WellnessService.delete_activity(row_id, user.id)


# =============================================================================
# Sleep Logs
# =============================================================================

@router.get("/sleep-logs", response_model=list[SleepLogResponse])
async def list_sleep_logs(user: CurrentUser, days: HistoryDays = HISTORY_DAYS):
    return WellnessService.list_sleep_logs(user.id, days=days)


@router.post("/sleep-logs", response_model=SleepLogResponse, status_code=201)
async def create_sleep_log(body: SleepLogCreate, user: CurrentUser):
    """Log a night; the duration wraps past midnight when wakeTime <= bedtime."""
    return WellnessService.create_sleep_log(user.id, body)


@router.patch("/sleep-logs/{row_id}", response_model=SleepLogResponse)
async def update_sleep_log(row_id: RowId, body: SleepLogUpdate, user: CurrentUser):
    return WellnessService.update_sleep_log(row_id, user.id, body)


@router.delete("/sleep-logs/{row_id}", status_code=204)
async def delete_sleep_log(row_id: RowId, user: CurrentUser):
    WellnessService.delete_sleep_log(row_id, user.id)


# =============================================================================
# Goals
# =============================================================================

@router.get("/goals", response_model=list[HealthGoalResponse])
async def list_goals(user: CurrentUser):
    return WellnessService.list_goals(user.id)


@router.post("/goals", response_model=HealthGoalResponse, status_code=201)
async def create_goal(body: HealthGoalCreate, user: CurrentUser):
    return WellnessService.create_goal(user.id, body)


@router.patch("/goals/{row_id}", response_model=HealthGoalResponse)
async def update_goal(row_id: RowId, body: HealthGoalUpdate, user: CurrentUser):
    return WellnessService.update_goal(row_id, user.id, body)


@router.delete("/goals/{row_id}", response_model=HealthGoalResponse)
async def delete_goal(row_id: RowId, user: CurrentUser):
    """Deactivate a goal; it no longer counts towards the summary."""
    return WellnessService.delete_goal(row_id, user.id)
