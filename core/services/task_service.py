# =============================================================================
# core/services/task_service.py - Task Board Business Logic
# =============================================================================
# Workspace hierarchy: task_projects -> task_boards -> task_columns -> tasks
# (+ task_comments). Only projects and tasks carry user_id; boards are owned
# through their project and columns through their board.
#
# Ordering math and metrics live in lib/task_board.py; this module does the
# reads and writes around them.
# =============================================================================

import logging
import random
import time
from datetime import date
from typing import Any
from uuid import UUID, uuid4

from app.exceptions import (
    BusinessRuleError,
    LastBoardError,
    ResourceNotFoundError,
    WorkspaceCreationError,
)
from core.models.tasks import (
    BoardCreate,
    ColumnCreate,
    CommentCreate,
    TaskCreate,
    TaskFilters,
    TaskMove,
    TaskUpdate,
)
from lib.aggregations import frame_to_csv
from lib.supabase_client import SupabaseClient, SupabaseClientError, is_unique_violation
from lib.task_board import (
    SORT_STEP,
    compute_metrics,
    filter_tasks,
    plan_move,
    renumber,
    reorder_columns,
    sort_tasks,
    tasks_frame,
)
from lib.utils import slugify

logger = logging.getLogger(__name__)

PROJECTS = "task_projects"
BOARDS = "task_boards"
COLUMNS = "task_columns"
TASKS = "tasks"
COMMENTS = "task_comments"

DEFAULT_PROJECT_CODE = "AUR"
MAX_CODE_ATTEMPTS = 5
DEFAULT_COLUMN_COLOR = "#64748B"

DEFAULT_PROJECT = {
    "name": "Projeto Pessoal",
    "description": "Projeto padrão para o módulo de tarefas",
    "color": "#2563EB",
    "icon": "📋",
    "is_favorite": True,
}
DEFAULT_BOARD = {
    "name": "Kanban Principal",
    "description": "Fluxo padrão (A Fazer → Fazendo → Aguardando → Concluído)",
}
DEFAULT_COLUMNS = [
    ("A Fazer", "todo", "#64748B"),
    ("Fazendo", "in_progress", "#2563EB"),
    ("Aguardando", "waiting", "#F59E0B"),
    ("Concluído", "done", "#16A34A"),
]


def _select(table: str, code: str, **filters: Any) -> list[dict[str, Any]]:
    """
    SELECT * with equality / IN filters and an optional order.

    Keyword filters: `<column>=value` for eq, `<column>__in=[...]` for in_,
    `order=<column>` for ascending order.
    """
    client = SupabaseClient.get_client()
    order = filters.pop("order", None)
    query = client.table(table).select("*")
    for key, value in filters.items():
        if key.endswith("__in"):
            query = query.in_(key[:-4], [str(v) for v in value])
        else:
            query = query.eq(key, str(value))
    if order:
        query = query.order(order, desc=False)

    response = SupabaseClient.execute(query, code=code, message=f"Failed to read {table}")
    return response.data or []


def _auto_dates(category: str | None, start_date: Any, due_date: Any) -> dict[str, str]:
    """Start date for in_progress columns, end date for done columns, when unset."""
    today = date.today().isoformat()
    dates = {}
    if category == "in_progress" and not start_date:
        dates["start_date"] = today
    if category == "done" and not due_date:
        dates["due_date"] = today
    return dates


def _with_ids(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{**item, "id": item.get("id") or uuid4().hex} for item in items]


class TaskService:
    """Service for the kanban workspace."""

    # =========================================================================
    # Ownership
    # =========================================================================

    @staticmethod
    def get_project(project_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        project = SupabaseClient.fetch_row(PROJECTS, project_id, user_id=user_id)
        if not project:
            raise ResourceNotFoundError("Project", str(project_id))
        return project

    @staticmethod
    def get_board(board_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        board = SupabaseClient.fetch_row(BOARDS, board_id)
        if not board or not SupabaseClient.fetch_row(PROJECTS, board["project_id"], user_id=user_id):
            raise ResourceNotFoundError("Board", str(board_id))
        return board

    @staticmethod
    def get_column(column_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        column = SupabaseClient.fetch_row(COLUMNS, column_id)
        if not column:
            raise ResourceNotFoundError("Column", str(column_id))
        try:
            TaskService.get_board(column["board_id"], user_id)
        except ResourceNotFoundError:
            raise ResourceNotFoundError("Column", str(column_id))
        return column

    @staticmethod
    def get_task(task_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        task = SupabaseClient.fetch_row(TASKS, task_id, user_id=user_id)
        if not task:
            raise ResourceNotFoundError("Task", str(task_id))
        return task

    # =========================================================================
    # Workspace
    # =========================================================================

    @staticmethod
    def _create_columns(board_id: str) -> list[dict[str, Any]]:
        rows = [
            {
                "board_id": board_id,
                "name": name,
                "slug": slugify(name),
                "category": category,
                "color": color,
                "position": (index + 1) * SORT_STEP,
            }
            for index, (name, category, color) in enumerate(DEFAULT_COLUMNS)
        ]
        return SupabaseClient.insert_rows(COLUMNS, rows)

    @staticmethod
    def create_default_workspace(user_id: UUID | str) -> dict[str, Any]:
        """
        Create "Projeto Pessoal" with its "Kanban Principal" board.

        The project code starts as AUR; on a unique violation a random
        3-digit suffix is tried, up to 5 attempts overall.

        Raises:
            WorkspaceCreationError: Every code attempt collided
        """
        code = DEFAULT_PROJECT_CODE
        for attempt in range(MAX_CODE_ATTEMPTS):
            if attempt > 0:
                code = f"{DEFAULT_PROJECT_CODE}{random.randint(100, 999)}"
            try:
                project = SupabaseClient.insert_row(
                    PROJECTS,
                    {**DEFAULT_PROJECT, "user_id": str(user_id), "code": code},
                )
            except SupabaseClientError as e:
                if is_unique_violation(e):
                    logger.warning(f"Project code {code} taken, retrying")
                    continue
                logger.error(f"Failed to create default project: {e}")
                raise
            break
        else:
            raise WorkspaceCreationError(MAX_CODE_ATTEMPTS)

        board = SupabaseClient.insert_row(
            BOARDS,
            {**DEFAULT_BOARD, "project_id": project["id"], "is_default": True, "sort_order": SORT_STEP},
        )
        TaskService._create_columns(board["id"])

        logger.info(f"Created default workspace for user {user_id}: project {project['id']} ({code})")
        return project

    @staticmethod
    def _projects(user_id: UUID | str) -> list[dict[str, Any]]:
        projects = _select(PROJECTS, "PROJECTS_LIST_FAILED", user_id=user_id, order="sort_order")
        if not projects:
            TaskService.create_default_workspace(user_id)
            projects = _select(PROJECTS, "PROJECTS_LIST_FAILED", user_id=user_id, order="sort_order")
        return projects

    @staticmethod
    def _columns_with_tasks(board_ids: list[str], user_id: UUID | str) -> list[dict[str, Any]]:
        """Columns of the boards, each with its ordered tasks and their comments."""
        if not board_ids:
            return []
        columns = _select(COLUMNS, "COLUMNS_LIST_FAILED", board_id__in=board_ids, order="position")
        tasks = _select(
            TASKS, "TASKS_LIST_FAILED", user_id=user_id, board_id__in=board_ids, order="sort_order"
        )
        comments = []
        if tasks:
            comments = _select(
                COMMENTS, "COMMENTS_LIST_FAILED", task_id__in=[t["id"] for t in tasks], order="created_at"
            )

        comments_by_task: dict[str, list[dict[str, Any]]] = {}
        for comment in comments:
            comments_by_task.setdefault(str(comment["task_id"]), []).append(comment)

        tasks_by_column: dict[str, list[dict[str, Any]]] = {}
        for task in tasks:
            task["comments"] = comments_by_task.get(str(task["id"]), [])
            tasks_by_column.setdefault(str(task["column_id"]), []).append(task)

        for column in columns:
            column["tasks"] = tasks_by_column.get(str(column["id"]), [])
        return columns

    @staticmethod
    def get_workspace(user_id: UUID | str) -> list[dict[str, Any]]:
        """
        Full workspace tree, creating the default workspace on first use.

        Returns:
            Projects (by sort_order) -> boards (sort_order) -> columns
            (position) -> tasks (sort_order) with comments
        """
        projects = TaskService._projects(user_id)
        boards = _select(
            BOARDS, "BOARDS_LIST_FAILED", project_id__in=[p["id"] for p in projects], order="sort_order"
        )
        columns = TaskService._columns_with_tasks([b["id"] for b in boards], user_id)

        columns_by_board: dict[str, list[dict[str, Any]]] = {}
        for column in columns:
            columns_by_board.setdefault(str(column["board_id"]), []).append(column)

        boards_by_project: dict[str, list[dict[str, Any]]] = {}
        for board in boards:
            board["columns"] = columns_by_board.get(str(board["id"]), [])
            boards_by_project.setdefault(str(board["project_id"]), []).append(board)

        for project in projects:
            project["boards"] = boards_by_project.get(str(project["id"]), [])
        return projects

    @staticmethod
    def get_board_tree(board_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """One board with its columns, tasks and comments."""
        board = TaskService.get_board(board_id, user_id)
        board["columns"] = TaskService._columns_with_tasks([str(board["id"])], user_id)
        return board

    @staticmethod
    def _default_board(user_id: UUID | str) -> dict[str, Any]:
        """First board of the first project."""
        for project in TaskService._projects(user_id):
            boards = _select(BOARDS, "BOARDS_LIST_FAILED", project_id=project["id"], order="sort_order")
            if boards:
                return boards[0]
        raise BusinessRuleError(
            "No board available",
            code="NO_BOARD",
            suggestion="Create a board first",
        )

    # =========================================================================
    # Tasks
    # =========================================================================

    @staticmethod
    def list_tasks(board_id: UUID | str, user_id: UUID | str, filters: TaskFilters) -> list[dict[str, Any]]:
        """Board tasks after the filter bar's filters and the chosen sort."""
        TaskService.get_board(board_id, user_id)
        tasks = _select(TASKS, "TASKS_LIST_FAILED", user_id=user_id, board_id=board_id, order="sort_order")
        filtered = filter_tasks(
            tasks,
            search=filters.search,
            priority=filters.priority,
            label=filters.label,
            assignee_id=filters.assignee_id,
            date_from=filters.date_from,
            date_to=filters.date_to,
        )
        return sort_tasks(filtered, filters.sort_by)

    @staticmethod
    def create_task(user_id: UUID | str, data: TaskCreate) -> dict[str, Any]:
        """
        Create a task.

        Defaults: first board when board_id is omitted, first column of the
        board when column_id is omitted, assignee and reporter = caller.
        """
        board = TaskService.get_board(data.board_id, user_id) if data.board_id else TaskService._default_board(user_id)
        columns = _select(COLUMNS, "COLUMNS_LIST_FAILED", board_id=board["id"], order="position")
        if not columns:
            raise BusinessRuleError(
                "Board has no columns",
                code="NO_COLUMNS",
                suggestion="Create a column before adding tasks",
            )

        column = columns[0]
        if data.column_id:
            column = next((c for c in columns if str(c["id"]) == str(data.column_id)), None)
            if column is None:
                raise ResourceNotFoundError("Column", str(data.column_id))

        column_tasks = _select(TASKS, "TASKS_LIST_FAILED", column_id=column["id"])
        sort_order = plan_move(column_tasks, "", len(column_tasks)).sort_order

        fields = data.model_dump(mode="json")
        payload = {
            "user_id": str(user_id),
            "board_id": str(board["id"]),
            "column_id": str(column["id"]),
            "title": fields["title"],
            "description": fields["description"],
            "type": fields["type"],
            "priority": fields["priority"],
            "start_date": fields["start_date"],
            "due_date": fields["end_date"],
            "labels": fields["labels"],
            "checklist": _with_ids(fields["checklist"]),
            "attachments": _with_ids(fields["attachments"]),
            "assignee_id": fields["assignee_id"] or str(user_id),
            "reporter_id": str(user_id),
            "story_points": fields["story_points"],
            "estimate_hours": fields["estimate_hours"],
            "is_blocked": fields["is_blocked"],
            "blocked_reason": fields["blocked_reason"],
            "sort_order": sort_order,
        }
        payload.update(_auto_dates(column.get("category"), payload["start_date"], payload["due_date"]))

        try:
            task = SupabaseClient.insert_row(TASKS, payload)
        except Exception as e:
            logger.error(f"Failed to create task: {e}")
            raise

        # The backend assigns a generated key on insert; a custom one replaces it
        custom_key = (data.key or "").strip()
        if custom_key:
            task = SupabaseClient.update_row(TASKS, task["id"], {"key": custom_key}, user_id=user_id) or task

        logger.info(f"Created task: {task['id']} in column {column['id']}")
        return {**task, "comments": []}

    @staticmethod
    def update_task(task_id: UUID | str, user_id: UUID | str, data: TaskUpdate) -> dict[str, Any]:
        """
        Partially update a task.

        When the (new or current) column is in_progress / done and the task
        has no start / end date yet, today's date is filled in.
        """
        task = TaskService.get_task(task_id, user_id)
        fields = data.model_dump(mode="json", exclude_unset=True)
        if not fields:
            return task

        if "end_date" in fields:
            fields["due_date"] = fields.pop("end_date")
        if "key" in fields and fields["key"] is not None:
            fields["key"] = fields["key"].strip()
        for key in ("checklist", "attachments"):
            if fields.get(key) is not None:
                fields[key] = _with_ids(fields[key])

        if fields.get("column_id"):
            column = TaskService.get_column(fields["column_id"], user_id)
            fields["board_id"] = str(column["board_id"])
        else:
            fields.pop("column_id", None)
            column = SupabaseClient.fetch_row(COLUMNS, task["column_id"])
            if fields.get("board_id"):
                TaskService.get_board(fields["board_id"], user_id)

        fields.update(_auto_dates(
            column.get("category") if column else None,
            fields.get("start_date") or task.get("start_date"),
            fields.get("due_date") or task.get("due_date"),
        ))

        updated = SupabaseClient.update_row(TASKS, task_id, fields, user_id=user_id)
        logger.info(f"Updated task: {task_id} fields={sorted(fields)}")
        return updated or {**task, **fields}

    @staticmethod
    def delete_task(task_id: UUID | str, user_id: UUID | str) -> None:
        TaskService.get_task(task_id, user_id)
        SupabaseClient.delete_row(TASKS, task_id, user_id=user_id)
        logger.info(f"Deleted task: {task_id}")

    @staticmethod
    def _write_orders(orders: list[dict[str, Any]], user_id: UUID | str) -> None:
        for entry in orders:
            SupabaseClient.update_row(TASKS, entry["id"], {"sort_order": entry["sort_order"]}, user_id=user_id)

    @staticmethod
    def move_task(task_id: UUID | str, user_id: UUID | str, move: TaskMove) -> dict[str, Any]:
        """
        Drop a task at target_index of a column.

        The destination column is renumbered first when the neighbours are
        less than 1 apart; after a cross-column move the source column is
        renumbered to multiples of 1000.
        """
        task = TaskService.get_task(task_id, user_id)
        target = TaskService.get_column(move.target_column_id, user_id)
        source_column_id = str(task["column_id"])

        column_tasks = _select(
            TASKS, "TASKS_LIST_FAILED", user_id=user_id, column_id=target["id"], order="sort_order"
        )
        plan = plan_move(column_tasks, str(task_id), move.target_index)
        if plan.renumbered:
            logger.debug(f"Renumbering column {target['id']} before move")
            TaskService._write_orders(plan.renumbered, user_id)

        payload = {
            "board_id": str(target["board_id"]),
            "column_id": str(target["id"]),
            "sort_order": plan.sort_order,
        }
        payload.update(_auto_dates(target.get("category"), task.get("start_date"), task.get("due_date")))
        updated = SupabaseClient.update_row(TASKS, task_id, payload, user_id=user_id)

        if source_column_id != str(target["id"]):
            remaining = _select(
                TASKS, "TASKS_LIST_FAILED", user_id=user_id, column_id=source_column_id, order="sort_order"
            )
            TaskService._write_orders(renumber(t for t in remaining if str(t["id"]) != str(task_id)), user_id)

        logger.info(f"Moved task {task_id} to column {target['id']} @ {plan.sort_order}")
        return updated or {**task, **payload}

    # =========================================================================
    # Comments
    # =========================================================================

    @staticmethod
    def list_comments(task_id: UUID | str, user_id: UUID | str) -> list[dict[str, Any]]:
        TaskService.get_task(task_id, user_id)
        return _select(COMMENTS, "COMMENTS_LIST_FAILED", task_id=task_id, order="created_at")

    @staticmethod
    def add_comment(task_id: UUID | str, user_id: UUID | str, data: CommentCreate) -> dict[str, Any]:
        TaskService.get_task(task_id, user_id)
        comment = SupabaseClient.insert_row(
            COMMENTS,
            {
                "task_id": str(task_id),
                "user_id": str(user_id),
                "body": data.body,
                "attachments": _with_ids(data.model_dump(mode="json")["attachments"]),
            },
        )
        logger.info(f"Added comment {comment['id']} to task {task_id}")
        return comment

    # =========================================================================
    # Boards
    # =========================================================================

    @staticmethod
    def create_board(user_id: UUID | str, data: BoardCreate) -> dict[str, Any]:
        """Create a board (in the first project by default) with the default columns."""
        if data.project_id:
            project = TaskService.get_project(data.project_id, user_id)
        else:
            project = TaskService._projects(user_id)[0]

        siblings = _select(BOARDS, "BOARDS_LIST_FAILED", project_id=project["id"])
        last = max((float(b.get("sort_order") or 0) for b in siblings), default=0)

        board = SupabaseClient.insert_row(
            BOARDS,
            {
                "project_id": str(project["id"]),
                "name": data.name,
                "description": data.description,
                "is_default": False,
                "sort_order": last + SORT_STEP,
            },
        )
        board["columns"] = TaskService._create_columns(board["id"])
        logger.info(f"Created board {board['id']} in project {project['id']}")
        return board

    @staticmethod
    def rename_board(board_id: UUID | str, user_id: UUID | str, name: str) -> dict[str, Any]:
        board = TaskService.get_board(board_id, user_id)
        updated = SupabaseClient.update_row(BOARDS, board_id, {"name": name})
        return updated or {**board, "name": name}

    @staticmethod
    def delete_board(board_id: UUID | str, user_id: UUID | str) -> None:
        """
        Delete a board.

        Raises:
            LastBoardError: The board is the only one of its project
        """
        board = TaskService.get_board(board_id, user_id)
        siblings = _select(BOARDS, "BOARDS_LIST_FAILED", project_id=board["project_id"])
        if len(siblings) <= 1:
            raise LastBoardError(str(board_id))

        SupabaseClient.delete_row(BOARDS, board_id)
        logger.info(f"Deleted board: {board_id}")

    # =========================================================================
    # Columns
    # =========================================================================

    @staticmethod
    def create_column(board_id: UUID | str, user_id: UUID | str, data: ColumnCreate) -> dict[str, Any]:
        """Append a column; slug from the name, or coluna-<ms timestamp>."""
        TaskService.get_board(board_id, user_id)
        columns = _select(COLUMNS, "COLUMNS_LIST_FAILED", board_id=board_id)
        last = max((float(c.get("position") or 0) for c in columns), default=0)

        column = SupabaseClient.insert_row(
            COLUMNS,
            {
                "board_id": str(board_id),
                "name": data.name,
                "slug": slugify(data.name) or f"coluna-{int(time.time() * 1000)}",
                "category": data.category,
                "color": data.color or DEFAULT_COLUMN_COLOR,
                "wip_limit": data.wip_limit,
                "position": last + SORT_STEP,
            },
        )
        logger.info(f"Created column {column['id']} on board {board_id}")
        return {**column, "tasks": []}

    @staticmethod
    def rename_column(column_id: UUID | str, user_id: UUID | str, name: str) -> dict[str, Any]:
        column = TaskService.get_column(column_id, user_id)
        updated = SupabaseClient.update_row(COLUMNS, column_id, {"name": name})
        return updated or {**column, "name": name}

    @staticmethod
    def reorder_column(column_id: UUID | str, user_id: UUID | str, direction: str) -> list[dict[str, Any]]:
        """
        Move a column one step left/right.

        Returns:
            The board's columns in their new order (unchanged when the
            column is already at that edge)
        """
        column = TaskService.get_column(column_id, user_id)
        columns = _select(COLUMNS, "COLUMNS_LIST_FAILED", board_id=column["board_id"], order="position")

        positions = reorder_columns(columns, str(column_id), direction)
        if positions is None:
            return columns

        for entry in positions:
            SupabaseClient.update_row(COLUMNS, entry["id"], {"position": entry["position"]})
        logger.info(f"Moved column {column_id} {direction}")
        return _select(COLUMNS, "COLUMNS_LIST_FAILED", board_id=column["board_id"], order="position")

    # =========================================================================
    # Metrics & Export
    # =========================================================================

    @staticmethod
    def get_metrics(board_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        board = TaskService.get_board_tree(board_id, user_id)
        return compute_metrics(board["columns"], date.today())

    @staticmethod
    def export_csv(
        user_id: UUID | str,
        board_id: UUID | str | None = None,
        project_id: UUID | str | None = None,
    ) -> str:
        """
        Tasks of one board, or of every board of a project, as CSV.

        Raises:
            BusinessRuleError: Neither board_id nor project_id given
        """
        if board_id:
            board = TaskService.get_board(board_id, user_id)
            project = TaskService.get_project(board["project_id"], user_id)
            boards = [board]
        elif project_id:
            project = TaskService.get_project(project_id, user_id)
            boards = _select(BOARDS, "BOARDS_LIST_FAILED", project_id=project_id, order="sort_order")
        else:
            raise BusinessRuleError(
                "Nothing to export",
                code="EXPORT_SCOPE_REQUIRED",
                suggestion="Pass boardId or projectId",
            )

        columns = TaskService._columns_with_tasks([str(b["id"]) for b in boards], user_id)
        board_names = {str(b["id"]): b["name"] for b in boards}
        entries = [
            (project["name"], board_names[str(column["board_id"])], column["name"], task)
            for column in columns
            for task in column["tasks"]
        ]

        logger.info(f"Exporting {len(entries)} tasks for user: {user_id}")
        return frame_to_csv(tasks_frame(entries))
