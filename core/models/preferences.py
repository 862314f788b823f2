# =============================================================================
# core/models/preferences.py - User Preference Schemas
# =============================================================================
# One row per user in user_preferences: theme, the hub opened last and the
# task board view settings.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from .common import CamelModel, PatchModel


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class HubId(str, Enum):
    FINANCE = "finance"
    TASKS = "tasks"


class TasksViewMode(str, Enum):
    KANBAN = "kanban"
    LIST = "list"
    METRICS = "metrics"


class PreferencesUpdate(PatchModel):
    """
    Partial update of the caller's preferences.

    activeProjectId / activeBoardId may be cleared with null; the other
    fields always hold a value.
    """

    non_nullable = (
        "theme", "last_active_hub", "tasks_view_mode",
        "tasks_adaptive_width", "tasks_adaptive_width_list",
    )

    theme: Theme | None = None
    last_active_hub: HubId | None = None
    tasks_view_mode: TasksViewMode | None = None
    tasks_adaptive_width: bool | None = None
    tasks_adaptive_width_list: bool | None = None
    active_project_id: UUID | None = None
    active_board_id: UUID | None = None


class PreferencesResponse(CamelModel):
    id: UUID
    user_id: UUID
    theme: Theme = Theme.SYSTEM
    last_active_hub: HubId = HubId.FINANCE
    tasks_view_mode: TasksViewMode = TasksViewMode.KANBAN
    tasks_adaptive_width: bool = False
    tasks_adaptive_width_list: bool = False
    active_project_id: UUID | None = None
    active_board_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
