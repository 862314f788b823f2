# =============================================================================
# lib/task_board.py - Kanban Ordering, Filtering & Metrics
# =============================================================================
# Pure helpers for the task board. They operate on task row dicts as stored
# in the `tasks` table (snake_case, due_date for the end date) and column
# dicts carrying a `tasks` list.
#
# Ordering uses fractional sort orders:
# - dropping between two tasks takes the midpoint
# - dropping at the top / bottom takes next - 100 / prev + 100
# - an empty column starts at 1000
# - when neighbours are closer than 1 apart the column is renumbered to
#   multiples of 1000 before the midpoint is taken
# =============================================================================

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

import pandas as pd

from lib.utils import parse_date

# =============================================================================
# Priority & Type Normalization
# =============================================================================

PRIORITY_VALUES = ("lowest", "low", "medium", "high", "highest")
PRIORITY_ALIASES = {
    "urgente": "highest",
    "urgent": "highest",
    "critical": "highest",
    "critica": "highest",
    "crítica": "highest",
    "alta": "high",
    "alto": "high",
    "media": "medium",
    "média": "medium",
    "medio": "medium",
    "médio": "medium",
    "baixa": "low",
    "baixo": "low",
    "baixissima": "lowest",
    "baixíssima": "lowest",
    "muito baixa": "lowest",
}
PRIORITY_LABELS = {
    "lowest": "Muito baixa",
    "low": "Baixa",
    "medium": "Média",
    "high": "Alta",
    "highest": "Urgente",
}
# Highest first
PRIORITY_ORDER = ("highest", "high", "medium", "low", "lowest")
PRIORITY_RANK = {priority: rank for rank, priority in enumerate(PRIORITY_ORDER)}

TYPE_VALUES = ("task", "bug", "story", "epic")
TYPE_ALIASES = {
    "tarefa": "task",
    "historia": "story",
    "história": "story",
    "epico": "epic",
    "épico": "epic",
}


def _enum_value(value: Any) -> str | None:
    if value is None:
        return None
    return str(getattr(value, "value", value)).strip().lower()


def normalize_priority(value: Any) -> str:
    """Map a priority or alias to a canonical value; unknown -> medium."""
    normalized = _enum_value(value)
    if not normalized:
        return "medium"
    if normalized in PRIORITY_VALUES:
        return normalized
    return PRIORITY_ALIASES.get(normalized, "medium")


def normalize_type(value: Any) -> str:
    """Map a task type or alias to a canonical value; unknown -> task."""
    normalized = _enum_value(value)
    if not normalized:
        return "task"
    if normalized in TYPE_VALUES:
        return normalized
    return TYPE_ALIASES.get(normalized, "task")


# =============================================================================
# Fractional Ordering
# =============================================================================

SORT_STEP = 1000
EDGE_STEP = 100


@dataclass
class MovePlan:
    """Where a dropped task lands, plus any renumbering needed first."""
    sort_order: float
    renumbered: list[dict[str, Any]] = field(default_factory=list)


def _sort_value(task: dict[str, Any]) -> float:
    return float(task.get("sort_order") or 0)


def renumber(tasks: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Assign (i + 1) * 1000 in current order; returns [{id, sort_order}]."""
    ordered = sorted(tasks, key=_sort_value)
    return [
        {"id": task["id"], "sort_order": (index + 1) * SORT_STEP}
        for index, task in enumerate(ordered)
    ]


def sort_order_between(previous: float | None, following: float | None) -> float:
    """Sort order for a slot between two neighbours (either may be missing)."""
    if previous is None and following is None:
        return float(SORT_STEP)
    if previous is None:
        return following - EDGE_STEP
    if following is None:
        return previous + EDGE_STEP
    return (previous + following) / 2


def plan_move(column_tasks: list[dict[str, Any]], task_id: str, target_index: int) -> MovePlan:
    """
    Compute the new sort order for task_id dropped at target_index.

    Args:
        column_tasks: Current tasks of the destination column (may include
            the moving task when reordering within a column)
        task_id: The task being moved
        target_index: Position among the *other* tasks of the column

    Returns:
        MovePlan with the new sort order and, when the neighbours were too
        close, the renumbered orders of the other tasks
    """
    others = sorted((t for t in column_tasks if str(t["id"]) != str(task_id)), key=_sort_value)
    index = max(0, min(target_index, len(others)))
    orders = [_sort_value(t) for t in others]

    renumbered: list[dict[str, Any]] = []
    if 0 < index < len(orders) and abs(orders[index - 1] - orders[index]) < 1:
        renumbered = renumber(others)
        orders = [float(r["sort_order"]) for r in renumbered]

    previous = orders[index - 1] if index > 0 else None
    following = orders[index] if index < len(orders) else None
    return MovePlan(sort_order=sort_order_between(previous, following), renumbered=renumbered)


def reorder_columns(columns: list[dict[str, Any]], column_id: str, direction: str) -> list[dict[str, Any]] | None:
    """
    Swap a column one step left or right.

    Returns:
        [{id, position}] for every column with positions (i + 1) * 1000,
        or None when the column is missing or already at the edge
    """
    ordered = sorted(columns, key=lambda c: float(c.get("position") or 0))
    ids = [str(c["id"]) for c in ordered]
    if str(column_id) not in ids:
        return None

    current = ids.index(str(column_id))
    target = current - 1 if direction == "left" else current + 1
    if target < 0 or target >= len(ordered):
        return None

    moving = ordered.pop(current)
    ordered.insert(target, moving)
    return [
        {"id": column["id"], "position": (index + 1) * SORT_STEP}
        for index, column in enumerate(ordered)
    ]


# =============================================================================
# Filtering & Sorting
# =============================================================================

def filter_tasks(
    tasks: Iterable[dict[str, Any]],
    search: str | None = None,
    priority: str | None = None,
    label: str | None = None,
    assignee_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[dict[str, Any]]:
    """
    Filter tasks the way the board's filter bar does.

    Tasks without a start (or end) date are not excluded by the date window.
    """
    needle = (search or "").strip().lower()
    label_needle = (label or "").strip().lower()
    wanted_priority = normalize_priority(priority) if priority else None

    result = []
    for task in tasks:
        if needle:
            title = (task.get("title") or "").lower()
            description = (task.get("description") or "").lower()
            if needle not in title and needle not in description:
                continue
        if wanted_priority and normalize_priority(task.get("priority")) != wanted_priority:
            continue
        if label_needle and not any(label_needle in (item or "").lower() for item in task.get("labels") or []):
            continue
        if assignee_id and str(task.get("assignee_id")) != str(assignee_id):
            continue
        start = parse_date(task.get("start_date"))
        if date_from and start and start < date_from:
            continue
        end = parse_date(task.get("due_date"))
        if date_to and end and end > date_to:
            continue
        result.append(task)
    return result


def sort_tasks(tasks: Iterable[dict[str, Any]], by: str = "sort_order") -> list[dict[str, Any]]:
    """
    Sort tasks by one of: sort_order, priority (highest first), due_date
    (missing last) or created_at (newest first).
    """
    items = list(tasks)
    if by == "priority":
        return sorted(items, key=lambda t: (PRIORITY_RANK[normalize_priority(t.get("priority"))], _sort_value(t)))
    if by == "due_date":
        return sorted(
            items,
            key=lambda t: (parse_date(t.get("due_date")) is None, parse_date(t.get("due_date")) or date.min, _sort_value(t)),
        )
    if by == "created_at":
        return sorted(items, key=lambda t: str(t.get("created_at") or ""), reverse=True)
    return sorted(items, key=_sort_value)


# =============================================================================
# Metrics
# =============================================================================

def _days_since(value: Any, today: date) -> int:
    parsed = parse_date(value)
    if parsed is None:
        return 0
    return max(0, (today - parsed).days)


def _within_last_week(value: Any, today: date) -> bool:
    parsed = parse_date(value)
    # Dates ahead of today count as well
    return parsed is not None and (today - parsed).days <= 7


TIMELINE_SIZE = 4


def compute_metrics(columns: list[dict[str, Any]], today: date) -> dict[str, Any]:
    """
    Board metrics.

    Args:
        columns: Column dicts (id, name, category) each with a `tasks` list
        today: Reference date for ages and 7-day windows
    """
    tasks = [task for column in columns for task in column.get("tasks", [])]
    column_by_id = {str(column["id"]): column for column in columns}

    def ref(task: dict[str, Any]) -> dict[str, Any]:
        column = column_by_id.get(str(task.get("column_id")))
        return {
            "id": task["id"],
            "title": task.get("title", ""),
            "column_name": column["name"] if column else "Coluna",
        }

    def in_category(task: dict[str, Any], category: str) -> bool:
        column = column_by_id.get(str(task.get("column_id")))
        return column is not None and column.get("category") == category

    completed = sum(len(c.get("tasks", [])) for c in columns if c.get("category") == "done")
    lead_time = (
        sum(_days_since(t.get("created_at"), today) for t in tasks) / len(tasks) if tasks else 0.0
    )

    column_ages = []
    for column in columns:
        column_tasks = column.get("tasks", [])
        if not column_tasks:
            column_ages.append({"name": column["name"], "count": 0, "average_days": 0.0})
            continue
        total_days = sum(_days_since(t.get("updated_at") or t.get("created_at"), today) for t in column_tasks)
        column_ages.append({
            "name": column["name"],
            "count": len(column_tasks),
            "average_days": round(total_days / len(column_tasks), 1),
        })

    distribution = [
        {
            "priority": priority,
            "label": PRIORITY_LABELS[priority],
            "count": sum(1 for t in tasks if normalize_priority(t.get("priority")) == priority),
        }
        for priority in PRIORITY_ORDER
    ]

    # Most recent activity first, keyed on the end date when there is one
    dated = [t for t in tasks if parse_date(t.get("start_date")) or parse_date(t.get("due_date"))]
    dated.sort(key=lambda t: parse_date(t.get("due_date")) or parse_date(t.get("start_date")), reverse=True)
    timeline = [
        {**ref(t), "start_date": parse_date(t.get("start_date")), "end_date": parse_date(t.get("due_date"))}
        for t in dated[:TIMELINE_SIZE]
    ]

    return {
        "total_tasks": len(tasks),
        "completed_tasks": completed,
        "average_lead_time_days": round(lead_time, 1),
        "column_ages": column_ages,
        "priority_distribution": distribution,
        "started_last_7_days": sum(1 for t in tasks if _within_last_week(t.get("start_date"), today)),
        "completed_last_7_days": sum(1 for t in tasks if _within_last_week(t.get("due_date"), today)),
        "in_progress_without_start": [
            ref(t) for t in tasks if in_category(t, "in_progress") and not t.get("start_date")
        ],
        "done_without_end": [
            ref(t) for t in tasks if in_category(t, "done") and not t.get("due_date")
        ],
        "timeline": timeline,
    }


# =============================================================================
# CSV Export
# =============================================================================

TASK_CSV_COLUMNS = [
    "Project", "Board", "Column", "Key", "Title", "Description", "Type",
    "Priority", "AssigneeId", "ReporterId", "StartDate", "DueDate", "Labels",
    "StoryPoints", "EstimateHours", "IsBlocked", "BlockedReason", "Checklist",
    "Comments",
]


def _checklist_text(checklist: Any) -> str:
    if not isinstance(checklist, list):
        return ""
    items = [i for i in checklist if isinstance(i, dict) and i.get("title")]
    return " | ".join(f"{i['title']}{' (done)' if i.get('done') else ''}" for i in items)


def tasks_frame(entries: Iterable[tuple[str, str, str, dict[str, Any]]]) -> pd.DataFrame:
    """
    Build the task export DataFrame.

    Args:
        entries: (project_name, board_name, column_name, task_row) tuples;
            task_row may carry a `comments` list of comment rows
    """
    records = []
    for project_name, board_name, column_name, task in entries:
        comments = task.get("comments") or []
        records.append({
            "Project": project_name,
            "Board": board_name,
            "Column": column_name,
            "Key": task.get("key") or "",
            "Title": task.get("title") or "",
            "Description": task.get("description") or "",
            "Type": normalize_type(task.get("type")),
            "Priority": PRIORITY_LABELS[normalize_priority(task.get("priority"))],
            "AssigneeId": task.get("assignee_id") or "",
            "ReporterId": task.get("reporter_id") or "",
            "StartDate": task.get("start_date") or "",
            "DueDate": task.get("due_date") or "",
            "Labels": ", ".join(task.get("labels") or []),
            "StoryPoints": task.get("story_points") if task.get("story_points") is not None else "",
            "EstimateHours": task.get("estimate_hours") if task.get("estimate_hours") is not None else "",
            "IsBlocked": "Yes" if task.get("is_blocked") else "No",
            "BlockedReason": task.get("blocked_reason") or "",
            "Checklist": _checklist_text(task.get("checklist")),
            "Comments": " || ".join(f"{c.get('user_id')}: {c.get('body')}" for c in comments),
        })
    return pd.DataFrame.from_records(records, columns=TASK_CSV_COLUMNS)
