# =============================================================================
# app/routers/tasks.py - Task Board Endpoints
# =============================================================================
# Workspace tree, tasks (CRUD, move, comments), boards, columns, metrics
# and CSV export. Fixed paths are declared before /{task_id}.
# =============================================================================

from datetime import date
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Path, Query
from fastapi.responses import StreamingResponse

from app.dependencies import CurrentUser
from core.models.tasks import (
    BoardCreate,
    BoardResponse,
    ColumnCreate,
    ColumnReorder,
    ColumnResponse,
    CommentCreate,
    CommentResponse,
    ProjectResponse,
    RenameRequest,
    TaskCreate,
    TaskFilters,
    TaskMetrics,
    TaskMove,
    TaskPriority,
    TaskResponse,
    TaskUpdate,
)
from core.services.task_service import TaskService

router = APIRouter()

TaskId = Annotated[UUID, Path(description="Task UUID")]
BoardId = Annotated[UUID, Path(description="Board UUID")]
ColumnId = Annotated[UUID, Path(description="Column UUID")]


# =============================================================================
# Workspace
# =============================================================================

@router.get("/workspace", response_model=list[ProjectResponse])
async def get_workspace(user: CurrentUser):
    """
    Projects -> boards -> columns -> tasks (with comments).

    The first call for a user creates the default workspace: project
    "Projeto Pessoal" with board "Kanban Principal" and four columns.
    """
    return TaskService.get_workspace(user.id)


@router.get("/export")
async def export_tasks(
    user: CurrentUser,
    board_id: Annotated[UUID | None, Query(alias="boardId")] = None,
    project_id: Annotated[UUID | None, Query(alias="projectId")] = None,
):
    """Download the tasks of a board, or of a whole project, as CSV."""
    csv_text = TaskService.export_csv(user.id, board_id=board_id, project_id=project_id)
    scope = str(board_id or project_id)[:8]
    filename = f"tarefas_{scope}_{date.today().isoformat()}.csv"

    return StreamingResponse(
        iter([csv_text]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
        }
    )


# =============================================================================
# Boards
# =============================================================================

@router.post("/boards", response_model=BoardResponse, status_code=201)
async def create_board(body: BoardCreate, user: CurrentUser):
    return TaskService.create_board(user.id, body)


@router.get("/boards/{board_id}", response_model=BoardResponse)
async def get_board(board_id: BoardId, user: CurrentUser):
    return TaskService.get_board_tree(board_id, user.id)


@router.patch("/boards/{board_id}", response_model=BoardResponse)
async def rename_board(board_id: BoardId, body: RenameRequest, user: CurrentUser):
    return TaskService.rename_board(board_id, user.id, body.name)


@router.delete("/boards/{board_id}", status_code=204)
async def delete_board(board_id: BoardId, user: CurrentUser):
    """Delete a board. The only board of a project cannot be deleted."""
    TaskService.delete_board(board_id, user.id)


@router.get("/boards/{board_id}/tasks", response_model=list[TaskResponse])
async def list_board_tasks(
    board_id: BoardId,
    user: CurrentUser,
    search: str | None = None,
    priority: TaskPriority | None = None,
    label: str | None = None,
    assignee_id: Annotated[UUID | None, Query(alias="assigneeId")] = None,
    date_from: Annotated[date | None, Query(alias="dateFrom")] = None,
    date_to: Annotated[date | None, Query(alias="dateTo")] = None,
    sort_by: Annotated[
        Literal["sort_order", "priority", "due_date", "created_at"], Query(alias="sortBy")
    ] = "sort_order",
):
    """Tasks of a board after filtering and sorting."""
    filters = TaskFilters(
        search=search,
        priority=priority,
        label=label,
        assignee_id=assignee_id,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
    )
    return TaskService.list_tasks(board_id, user.id, filters)


@router.get("/boards/{board_id}/metrics", response_model=TaskMetrics)
async def get_board_metrics(board_id: BoardId, user: CurrentUser):
    return TaskService.get_metrics(board_id, user.id)


# =============================================================================
# Columns
# =============================================================================

@router.post("/boards/{board_id}/columns", response_model=ColumnResponse, status_code=201)
async def create_column(board_id: BoardId, body: ColumnCreate, user: CurrentUser):
    return TaskService.create_column(board_id, user.id, body)


@router.patch("/columns/{column_id}", response_model=ColumnResponse)
async def rename_column(column_id: ColumnId, body: RenameRequest, user: CurrentUser):
    return TaskService.rename_column(column_id, user.id, body.name)


@router.post("/columns/{column_id}/reorder", response_model=list[ColumnResponse])
async def reorder_column(column_id: ColumnId, body: ColumnReorder, user: CurrentUser):
    """Move a column one step left or right; returns the board's columns in order."""
    return TaskService.reorder_column(column_id, user.id, body.direction)


# =============================================================================
# Tasks
# =============================================================================

@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(body: TaskCreate, user: CurrentUser):
    return TaskService.create_task(user.id, body)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: TaskId, user: CurrentUser):
    return TaskService.get_task(task_id, user.id)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: TaskId, body: TaskUpdate, user: CurrentUser):
    return TaskService.update_task(task_id, user.id, body)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: TaskId, user: CurrentUser):
    TaskService.delete_task(task_id, user.id)


@router.post("/{task_id}/move", response_model=TaskResponse)
async def move_task(task_id: TaskId, body: TaskMove, user: CurrentUser):
    """
    Drop a task at a position of a column.

    targetIndex counts the other tasks of the destination column.
    """
    return TaskService.move_task(task_id, user.id, body)


@router.get("/{task_id}/comments", response_model=list[CommentResponse])
async def list_comments(task_id: TaskId, user: CurrentUser):
    return TaskService.list_comments(task_id, user.id)


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(task_id: TaskId, body: CommentCreate, user: CurrentUser):
    return TaskService.add_comment(task_id, user.id, body)
