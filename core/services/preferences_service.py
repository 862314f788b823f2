# =============================================================================
# core/services/preferences_service.py - User Preferences
# =============================================================================
# user_preferences holds at most one row per user (unique user_id). The row
# is created with defaults the first time it is read.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from core.models.preferences import HubId, PreferencesUpdate, TasksViewMode, Theme
from core.services.task_service import TaskService
from lib.supabase_client import SupabaseClient, SupabaseClientError, is_unique_violation

logger = logging.getLogger(__name__)

TABLE = "user_preferences"

DEFAULT_PREFERENCES = {
    "theme": Theme.SYSTEM.value,
    "last_active_hub": HubId.FINANCE.value,
    "tasks_view_mode": TasksViewMode.KANBAN.value,
    "tasks_adaptive_width": False,
    "tasks_adaptive_width_list": False,
    "active_project_id": None,
    "active_board_id": None,
}


class PreferencesService:
    """Service for the per-user preferences row."""

    @staticmethod
    def _fetch(user_id: UUID | str) -> dict[str, Any] | None:
        client = SupabaseClient.get_client()
        response = SupabaseClient.execute(
            client.table(TABLE).select("*").eq("user_id", str(user_id)).limit(1),
            code="PREFERENCES_FETCH_FAILED",
            message="Failed to load preferences",
        )
        rows = response.data or []
        return rows[0] if rows else None

    @staticmethod
    def get_preferences(user_id: UUID | str) -> dict[str, Any]:
        """
        Return the caller's preferences, creating the default row if needed.

        Two first requests racing each other both try the insert; the loser
        hits the unique user_id constraint and reads the winner's row.
        """
        existing = PreferencesService._fetch(user_id)
        if existing:
            return existing

        try:
            created = SupabaseClient.insert_row(TABLE, {**DEFAULT_PREFERENCES, "user_id": str(user_id)})
        except SupabaseClientError as e:
            if is_unique_violation(e):
                logger.warning(f"Preferences for user {user_id} created concurrently, reloading")
                return PreferencesService._fetch(user_id) or {}
            logger.error(f"Failed to create preferences: {e}")
            raise

        logger.info(f"Created default preferences for user {user_id}")
        return created

    @staticmethod
    def update_preferences(user_id: UUID | str, data: PreferencesUpdate) -> dict[str, Any]:
        """
        Partially update the caller's preferences.

        Raises:
            ResourceNotFoundError: activeProjectId / activeBoardId is not the caller's
        """
        current = PreferencesService.get_preferences(user_id)
        updates = data.model_dump(mode="json", exclude_unset=True)
        if not updates:
            return current

        if updates.get("active_project_id"):
            TaskService.get_project(updates["active_project_id"], user_id)
        if updates.get("active_board_id"):
            TaskService.get_board(updates["active_board_id"], user_id)

        client = SupabaseClient.get_client()
        response = SupabaseClient.execute(
            client.table(TABLE).update(updates).eq("user_id", str(user_id)),
            code="PREFERENCES_UPDATE_FAILED",
            message="Failed to update preferences",
        )
        rows = response.data or []
        logger.debug(f"Updated preferences for user {user_id}: {sorted(updates)}")
        return rows[0] if rows else {**current, **updates}
