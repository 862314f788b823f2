# =============================================================================
# core/services/wellness_service.py - Health Tracking Business Logic
# =============================================================================
# CRUD for health_weight_logs, health_activities, health_sleep_logs and
# health_goals, plus the summary built by lib/wellness_stats.py.
#
# Every table carries user_id. Goals are soft-deleted (is_active = false);
# the log tables are hard-deleted.
# =============================================================================

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from app.exceptions import ResourceNotFoundError
from core.models.wellness import (
    ACTIVITY_LABELS,
    ActivityCreate,
    ActivityUpdate,
    HealthGoalCreate,
    HealthGoalUpdate,
    SleepLogCreate,
    SleepLogUpdate,
    WeightLogCreate,
    WeightLogUpdate,
)
from lib.supabase_client import SupabaseClient
from lib.wellness_stats import (
    activity_stats,
    build_insights,
    sleep_minutes,
    sleep_stats,
    weight_stats,
)

logger = logging.getLogger(__name__)

WEIGHT_LOGS = "health_weight_logs"
ACTIVITIES = "health_activities"
SLEEP_LOGS = "health_sleep_logs"
GOALS = "health_goals"

# Activities and nights older than this are not loaded for the summary
HISTORY_DAYS = 90


def _select(
    table: str,
    user_id: UUID | str,
    order: str,
    since: tuple[str, date] | None = None,
    active_only: bool = False,
) -> list[dict[str, Any]]:
    client = SupabaseClient.get_client()
    query = client.table(table).select("*").eq("user_id", str(user_id))
    if since:
        query = query.gte(since[0], since[1].isoformat())
    if active_only:
        query = query.eq("is_active", True)

    response = SupabaseClient.execute(
        query.order(order, desc=True),
        code=f"{table.upper()}_LIST_FAILED",
        message=f"Failed to list {table}",
    )
    return response.data or []


def _get(table: str, resource: str, row_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
    row = SupabaseClient.fetch_row(table, row_id, user_id=user_id)
    if not row:
        raise ResourceNotFoundError(resource, str(row_id))
    return row


def _update(
    table: str,
    resource: str,
    row_id: UUID | str,
    user_id: UUID | str,
    updates: dict[str, Any],
) -> dict[str, Any]:
    row = _get(table, resource, row_id, user_id)
    if not updates:
        return row
    updated = SupabaseClient.update_row(table, row_id, updates, user_id=user_id)
    logger.info(f"Updated {table} row: {row_id}")
    return updated or {**row, **updates}


def _delete(table: str, resource: str, row_id: UUID | str, user_id: UUID | str) -> None:
    _get(table, resource, row_id, user_id)
    SupabaseClient.delete_row(table, row_id, user_id=user_id)
    logger.info(f"Deleted {table} row: {row_id}")


class WellnessService:
    """Service for the health tracking module."""

    # =========================================================================
    # Weight Logs
    # =========================================================================

    @staticmethod
    def list_weight_logs(user_id: UUID | str) -> list[dict[str, Any]]:
        """Every weigh-in, newest first."""
        return _select(WEIGHT_LOGS, user_id, "recorded_at")

    @staticmethod
    def create_weight_log(user_id: UUID | str, data: WeightLogCreate) -> dict[str, Any]:
        payload = data.model_dump(mode="json")
        payload["recorded_at"] = payload["recorded_at"] or datetime.now(timezone.utc).isoformat()
        payload["user_id"] = str(user_id)

        row = SupabaseClient.insert_row(WEIGHT_LOGS, payload)
        logger.info(f"Logged weight {data.weight} kg: {row['id']}")
        return row

    @staticmethod
    def update_weight_log(log_id: UUID | str, user_id: UUID | str, data: WeightLogUpdate) -> dict[str, Any]:
        return _update(WEIGHT_LOGS, "Weight log", log_id, user_id, data.model_dump(mode="json", exclude_unset=True))

    @staticmethod
    def delete_weight_log(log_id: UUID | str, user_id: UUID | str) -> None:
        _delete(WEIGHT_LOGS, "Weight log", log_id, user_id)

    # =========================================================================
    # Activities
    # =========================================================================

    @staticmethod
    def list_activities(
        user_id: UUID | str,
        days: int = HISTORY_DAYS,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """Activities of the last `days` days, newest first."""
        since = (today or date.today()) - timedelta(days=days)
        return _select(ACTIVITIES, user_id, "activity_date", since=("activity_date", since))

    @staticmethod
    def create_activity(user_id: UUID | str, data: ActivityCreate) -> dict[str, Any]:
        payload = data.model_dump(mode="json")
        payload["activity_date"] = payload["activity_date"] or date.today().isoformat()
        payload["user_id"] = str(user_id)

        row = SupabaseClient.insert_row(ACTIVITIES, payload)
        logger.info(f"Logged {data.activity_type} activity ({data.duration_minutes} min): {row['id']}")
        return row

    @staticmethod
    def update_activity(activity_id: UUID | str, user_id: UUID | str, data: ActivityUpdate) -> dict[str, Any]:
        return _update(ACTIVITIES, "Activity", activity_id, user_id, data.model_dump(mode="json", exclude_unset=True))

    @staticmethod
    def delete_activity(activity_id: UUID | str, user_id: UUID | str) -> None:
        _delete(ACTIVITIES, "Activity", activity_id, user_id)

    @staticmethod
    def list_activity_types() -> list[dict[str, str]]:
        return [{"id": kind.value, "label": label} for kind, label in ACTIVITY_LABELS.items()]

    # =========================================================================
    # Sleep Logs
    # =========================================================================

    @staticmethod
    def list_sleep_logs(
        user_id: UUID | str,
        days: int = HISTORY_DAYS,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """Nights of the last `days` days, newest first."""
        since = (today or date.today()) - timedelta(days=days)
        return _select(SLEEP_LOGS, user_id, "sleep_date", since=("sleep_date", since))

    @staticmethod
    def create_sleep_log(user_id: UUID | str, data: SleepLogCreate) -> dict[str, Any]:
        payload = data.model_dump(mode="json")
        payload["sleep_date"] = payload["sleep_date"] or (date.today() - timedelta(days=1)).isoformat()
        payload["duration_minutes"] = sleep_minutes(data.bedtime, data.wake_time)
        payload["user_id"] = str(user_id)

        row = SupabaseClient.insert_row(SLEEP_LOGS, payload)
        logger.info(f"Logged sleep of {payload['duration_minutes']} min: {row['id']}")
        return row

    @staticmethod
    def update_sleep_log(log_id: UUID | str, user_id: UUID | str, data: SleepLogUpdate) -> dict[str, Any]:
        """
        Partially update a night.

        Changing either bedtime or wakeTime recomputes the duration against
        the stored value of the other one.
        """
        row = _get(SLEEP_LOGS, "Sleep log", log_id, user_id)
        updates = data.model_dump(mode="json", exclude_unset=True)
        if "bedtime" in updates or "wake_time" in updates:
            updates["duration_minutes"] = sleep_minutes(
                updates.get("bedtime", row["bedtime"]),
                updates.get("wake_time", row["wake_time"]),
            )
        return _update(SLEEP_LOGS, "Sleep log", log_id, user_id, updates)

    @staticmethod
    def delete_sleep_log(log_id: UUID | str, user_id: UUID | str) -> None:
        _delete(SLEEP_LOGS, "Sleep log", log_id, user_id)

    # =========================================================================
    # Goals
    # =========================================================================

    @staticmethod
    def list_goals(user_id: UUID | str) -> list[dict[str, Any]]:
        """Active goals, newest first."""
        return _select(GOALS, user_id, "created_at", active_only=True)

    @staticmethod
    def create_goal(user_id: UUID | str, data: HealthGoalCreate) -> dict[str, Any]:
        payload = data.model_dump(mode="json")
        payload["user_id"] = str(user_id)
        payload["is_active"] = True

        row = SupabaseClient.insert_row(GOALS, payload)
        logger.info(f"Created {data.goal_type} goal: {row['id']}")
        return row

    @staticmethod
    def update_goal(goal_id: UUID | str, user_id: UUID | str, data: HealthGoalUpdate) -> dict[str, Any]:
        return _update(GOALS, "Health goal", goal_id, user_id, data.model_dump(mode="json", exclude_unset=True))

    @staticmethod
    def delete_goal(goal_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """Soft-delete a goal."""
        return _update(GOALS, "Health goal", goal_id, user_id, {"is_active": False})

    # =========================================================================
    # Summary
    # =========================================================================

    @staticmethod
    def get_summary(user_id: UUID | str, today: date | None = None) -> dict[str, Any]:
        """Weight, activity and sleep stats with the insights derived from them."""
        today = today or date.today()
        goals = WellnessService.list_goals(user_id)
        weight = weight_stats(WellnessService.list_weight_logs(user_id), goals, today)
        activity = activity_stats(WellnessService.list_activities(user_id, today=today), goals, today)
        sleep = sleep_stats(WellnessService.list_sleep_logs(user_id, today=today), today)

        return {
            "weight": weight,
            "activity": activity,
            "sleep": sleep,
            "insights": build_insights(weight, activity, sleep),
        }
