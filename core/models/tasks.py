# =============================================================================
# core/models/tasks.py - Task Board Schemas
# =============================================================================
# Workspace hierarchy: project -> boards -> columns -> tasks (+ comments).
#
# Priority and type accept Portuguese/English aliases ("urgente", "história")
# and fall back to medium/task for unknown values, so imported or legacy
# rows never fail validation.
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Any, Literal
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from lib.task_board import normalize_priority, normalize_type

from .common import CamelModel, PatchModel, require_text


class TaskPriority(str, Enum):
    LOWEST = "lowest"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    HIGHEST = "highest"


class TaskType(str, Enum):
    TASK = "task"
    BUG = "bug"
    STORY = "story"
    EPIC = "epic"


class ColumnCategory(str, Enum):
    """Workflow stage a column represents; drives auto start/end dates."""
    BACKLOG = "backlog"
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    REVIEW = "review"
    DONE = "done"


# =============================================================================
# Embedded JSON items
# =============================================================================

class ChecklistItem(CamelModel):
    id: str | None = None
    title: str
    done: bool = False


class AttachmentMeta(CamelModel):
    id: str | None = None
    name: str = "Anexo"
    url: str
    type: str | None = None


def _to_items(value: Any, model: type[CamelModel]) -> list[Any]:
    """Keep only well-formed dict entries of a JSON array column."""
    if not isinstance(value, list):
        return []
    items = []
    for entry in value:
        if isinstance(entry, dict):
            try:
                items.append(model.model_validate(entry))
            except ValueError:
                continue
    return items


# =============================================================================
# Tasks
# =============================================================================

class TaskCreate(CamelModel):
    """
    Schema for creating a task.

    Omitted board/column default to the user's first board and its first
    column. Omitted assignee defaults to the caller.
    """

    title: str = Field(..., max_length=255)
    description: str | None = None
    board_id: UUID | None = None
    column_id: UUID | None = None
    key: str | None = Field(default=None, max_length=32, description="Custom issue key")
    type: TaskType = TaskType.TASK
    priority: TaskPriority = TaskPriority.MEDIUM
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    labels: list[str] = Field(default_factory=list)
    checklist: list[ChecklistItem] = Field(default_factory=list)
    attachments: list[AttachmentMeta] = Field(default_factory=list)
    assignee_id: UUID | None = None
    story_points: float | None = Field(default=None, ge=0)
    estimate_hours: float | None = Field(default=None, ge=0)
    is_blocked: bool = False
    blocked_reason: str | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        return require_text(v, "title")

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, v: Any) -> str:
        return normalize_priority(v)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> str:
        return normalize_type(v)


class TaskUpdate(PatchModel):
    """Partial update; moving to another column applies the auto-date rule."""

    non_nullable = (
        "title", "board_id", "column_id", "type", "priority",
        "labels", "checklist", "attachments", "is_blocked",
    )

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    board_id: UUID | None = None
    column_id: UUID | None = None
    key: str | None = Field(default=None, max_length=32)
    type: TaskType | None = None
    priority: TaskPriority | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    labels: list[str] | None = None
    checklist: list[ChecklistItem] | None = None
    attachments: list[AttachmentMeta] | None = None
    assignee_id: UUID | None = None
    story_points: float | None = Field(default=None, ge=0)
    estimate_hours: float | None = Field(default=None, ge=0)
    is_blocked: bool | None = None
    blocked_reason: str | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "title")

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, v: Any) -> str | None:
        return None if v is None else normalize_priority(v)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> str | None:
        return None if v is None else normalize_type(v)


class TaskMove(CamelModel):
    """Drop a task at target_index of target_column_id (index among the other tasks)."""

    target_column_id: UUID
    target_index: int = Field(..., ge=0)


class CommentCreate(CamelModel):
    body: str = Field(..., max_length=5000)
    attachments: list[AttachmentMeta] = Field(default_factory=list)

    @field_validator("body")
    @classmethod
    def _body_not_blank(cls, v: str) -> str:
        return require_text(v, "body")


class CommentResponse(CamelModel):
    id: UUID
    task_id: UUID
    user_id: UUID
    body: str
    attachments: list[AttachmentMeta] = Field(default_factory=list)
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @field_validator("attachments", mode="before")
    @classmethod
    def _clean_attachments(cls, v: Any) -> list[Any]:
        return _to_items(v, AttachmentMeta)


class TaskResponse(CamelModel):
    """
    Task view-model.

    The database column due_date is exposed as endDate.
    """

    id: UUID
    key: str | None = None
    project_id: UUID | None = None
    board_id: UUID
    column_id: UUID
    user_id: UUID | None = None
    title: str
    description: str | None = None
    type: TaskType = TaskType.TASK
    priority: TaskPriority = TaskPriority.MEDIUM
    reporter_id: UUID | None = None
    assignee_id: UUID | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    labels: list[str] = Field(default_factory=list)
    checklist: list[ChecklistItem] = Field(default_factory=list)
    attachments: list[AttachmentMeta] = Field(default_factory=list)
    is_blocked: bool = False
    blocked_reason: str | None = None
    story_points: float | None = None
    estimate_hours: float | None = None
    sort_order: float = 0
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    comments: list[CommentResponse] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _from_row(cls, data: Any) -> Any:
        if isinstance(data, dict) and "due_date" in data and "end_date" not in data:
            data = {**data, "end_date": data["due_date"]}
        return data

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, v: Any) -> str:
        return normalize_priority(v)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> str:
        return normalize_type(v)

    @field_validator("labels", mode="before")
    @classmethod
    def _labels_list(cls, v: Any) -> list[str]:
        return list(v or [])

    @field_validator("checklist", mode="before")
    @classmethod
    def _clean_checklist(cls, v: Any) -> list[Any]:
        return _to_items(v, ChecklistItem)

    @field_validator("attachments", mode="before")
    @classmethod
    def _clean_attachments(cls, v: Any) -> list[Any]:
        return _to_items(v, AttachmentMeta)


# =============================================================================
# Columns, Boards, Projects
# =============================================================================

class ColumnCreate(CamelModel):
    name: str = Field(..., max_length=80)
    category: ColumnCategory = ColumnCategory.TODO
    color: str | None = None
    wip_limit: int | None = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_text(v, "name")


class RenameRequest(CamelModel):
    """Rename a board or a column."""

    name: str = Field(..., max_length=120)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_text(v, "name")


class ColumnReorder(CamelModel):
    direction: Literal["left", "right"]


class ColumnResponse(CamelModel):
    id: UUID
    board_id: UUID
    name: str
    slug: str
    category: ColumnCategory = ColumnCategory.TODO
    color: str | None = None
    wip_limit: int | None = None
    position: float = 0
    tasks: list[TaskResponse] = Field(default_factory=list)


class BoardCreate(CamelModel):
    name: str = Field(..., max_length=120)
    description: str | None = None
    project_id: UUID | None = Field(default=None, description="Defaults to the first project")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_text(v, "name")


class BoardResponse(CamelModel):
    id: UUID
    project_id: UUID
    name: str
    description: str | None = None
    is_default: bool = False
    sort_order: float = 0
    columns: list[ColumnResponse] = Field(default_factory=list)


class ProjectResponse(CamelModel):
    id: UUID
    name: str
    code: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None
    is_favorite: bool = False
    sort_order: float = 0
    boards: list[BoardResponse] = Field(default_factory=list)


# =============================================================================
# Filters & Metrics
# =============================================================================

class TaskFilters(CamelModel):
    """Client-side style filters applied to a board's tasks."""

    search: str | None = None
    priority: TaskPriority | None = None
    label: str | None = None
    assignee_id: UUID | None = None
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    sort_by: Literal["sort_order", "priority", "due_date", "created_at"] = "sort_order"


class ColumnAge(CamelModel):
    name: str
    count: int
    average_days: float


class PriorityCount(CamelModel):
    priority: TaskPriority
    label: str
    count: int


class TaskRef(CamelModel):
    id: UUID
    title: str
    column_name: str


class TimelineEntry(TaskRef):
    start_date: dt.date | None = None
    end_date: dt.date | None = None


class TaskMetrics(CamelModel):
    total_tasks: int
    completed_tasks: int
    average_lead_time_days: float
    column_ages: list[ColumnAge] = Field(default_factory=list)
    priority_distribution: list[PriorityCount] = Field(default_factory=list)
    started_last_7_days: int = 0
    completed_last_7_days: int = 0
    in_progress_without_start: list[TaskRef] = Field(default_factory=list)
    done_without_end: list[TaskRef] = Field(default_factory=list)
    timeline: list[TimelineEntry] = Field(default_factory=list)
