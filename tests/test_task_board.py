# =============================================================================
# tests/test_task_board.py - Kanban Helper Tests
# =============================================================================
# Tests for lib/task_board.py:
# - Fractional sort orders and renumbering
# - Column reordering
# - Filter bar and sort comparators
# - Board metrics
# - Task CSV export
# =============================================================================

from datetime import date

import pytest

from lib.aggregations import frame_to_csv
from lib.task_board import (
    compute_metrics,
    filter_tasks,
    normalize_priority,
    plan_move,
    renumber,
    reorder_columns,
    sort_order_between,
    sort_tasks,
    tasks_frame,
)


def task(task_id, sort_order=0, **fields):
    return {"id": task_id, "sort_order": sort_order, "title": task_id, **fields}


# =============================================================================
# Ordering
# =============================================================================

class TestSortOrderBetween:
    """Tests for sort_order_between."""

    def test_empty_column(self):
        assert sort_order_between(None, None) == 1000

    def test_top(self):
        assert sort_order_between(None, 1000) == 900

    def test_bottom(self):
        assert sort_order_between(3000, None) == 3100

    def test_midpoint(self):
        assert sort_order_between(1000, 2000) == 1500


class TestPlanMove:
    """Tests for plan_move."""

    def test_drop_between_neighbours(self):
        tasks = [task("a", 1000), task("b", 2000), task("c", 3000)]

        plan = plan_move(tasks, "x", 1)

        assert plan.sort_order == 1500
        assert plan.renumbered == []

    def test_drop_at_top_and_bottom(self):
        tasks = [task("a", 1000), task("b", 2000)]

        assert plan_move(tasks, "x", 0).sort_order == 900
        assert plan_move(tasks, "x", 2).sort_order == 2100

    def test_index_clamped(self):
        assert plan_move([task("a", 1000)], "x", 99).sort_order == 1100

    def test_moving_task_excluded_from_neighbours(self):
        """Reordering within a column ignores the task's own slot."""
        tasks = [task("a", 1000), task("b", 2000), task("c", 3000)]

        plan = plan_move(tasks, "a", 1)

        assert plan.sort_order == 2500

    def test_close_neighbours_renumbered(self):
        tasks = [task("a", 1000), task("b", 1000.4), task("c", 1000.8)]

        plan = plan_move(tasks, "x", 1)

        assert [r["sort_order"] for r in plan.renumbered] == [1000, 2000, 3000]
        assert plan.sort_order == 1500

    def test_renumber_keeps_order(self):
        result = renumber([task("b", 5), task("a", 1)])
        assert result == [{"id": "a", "sort_order": 1000}, {"id": "b", "sort_order": 2000}]


class TestReorderColumns:
    """Tests for reorder_columns."""

    columns = [
        {"id": "todo", "position": 1000},
        {"id": "doing", "position": 2000},
        {"id": "done", "position": 3000},
    ]

    def test_move_right(self):
        result = reorder_columns(self.columns, "todo", "right")
        assert [c["id"] for c in result] == ["doing", "todo", "done"]
        assert [c["position"] for c in result] == [1000, 2000, 3000]

    def test_move_left(self):
        result = reorder_columns(self.columns, "done", "left")
        assert [c["id"] for c in result] == ["todo", "done", "doing"]

    @pytest.mark.parametrize("column_id, direction", [("todo", "left"), ("done", "right"), ("nope", "left")])
    def test_edges_and_missing(self, column_id, direction):
        assert reorder_columns(self.columns, column_id, direction) is None


# =============================================================================
# Filtering & Sorting
# =============================================================================

class TestFilterTasks:
    """Tests for filter_tasks."""

    tasks = [
        task("t1", 1, title="Pagar IPVA", priority="alta", labels=["Carro"], assignee_id="u1",
             start_date="2025-03-01", due_date="2025-03-10"),
        task("t2", 2, title="Revisar orçamento", description="planilha do IPVA", priority="low",
             labels=["finanças"], assignee_id="u2"),
        task("t3", 3, title="Trocar óleo", priority="highest", labels=[], assignee_id="u1",
             start_date="2025-02-01", due_date="2025-04-20"),
    ]

    def test_search_title_and_description(self):
        assert [t["id"] for t in filter_tasks(self.tasks, search="ipva")] == ["t1", "t2"]

    def test_priority_alias(self):
        assert [t["id"] for t in filter_tasks(self.tasks, priority="high")] == ["t1"]

    def test_label_substring(self):
        assert [t["id"] for t in filter_tasks(self.tasks, label="car")] == ["t1"]

    def test_assignee(self):
        assert [t["id"] for t in filter_tasks(self.tasks, assignee_id="u1")] == ["t1", "t3"]

    def test_date_window_keeps_undated(self):
        result = filter_tasks(self.tasks, date_from=date(2025, 2, 15), date_to=date(2025, 3, 31))
        assert [t["id"] for t in result] == ["t1", "t2"]


class TestSortTasks:
    """Tests for sort_tasks."""

    def test_priority_highest_first(self):
        tasks = [task("a", 1, priority="low"), task("b", 2, priority="urgente"), task("c", 3, priority="medium")]
        assert [t["id"] for t in sort_tasks(tasks, "priority")] == ["b", "c", "a"]

    def test_due_date_missing_last(self):
        tasks = [task("a", 1), task("b", 2, due_date="2025-05-01"), task("c", 3, due_date="2025-01-01")]
        assert [t["id"] for t in sort_tasks(tasks, "due_date")] == ["c", "b", "a"]

    def test_created_at_newest_first(self):
        tasks = [task("a", created_at="2025-01-01T00:00:00"), task("b", created_at="2025-02-01T00:00:00")]
        assert [t["id"] for t in sort_tasks(tasks, "created_at")] == ["b", "a"]

    def test_default_sort_order(self):
        assert [t["id"] for t in sort_tasks([task("a", 20), task("b", 10)])] == ["b", "a"]


def test_normalize_priority_handles_none():
    assert normalize_priority(None) == "medium"


# =============================================================================
# Metrics
# =============================================================================

class TestComputeMetrics:
    """Tests for compute_metrics."""

    today = date(2025, 3, 20)

    def columns(self):
        return [
            {"id": "c1", "name": "A Fazer", "category": "todo", "tasks": [
                task("t1", created_at="2025-03-10", priority="high"),
            ]},
            {"id": "c2", "name": "Fazendo", "category": "in_progress", "tasks": [
                task("t2", created_at="2025-03-18", column_id="c2", start_date="2025-03-15"),
                task("t3", created_at="2025-03-20", column_id="c2"),
            ]},
            {"id": "c3", "name": "Concluído", "category": "done", "tasks": [
                task("t4", created_at="2025-03-01", column_id="c3", due_date="2025-03-13"),
                task("t5", created_at="2025-03-12", column_id="c3"),
            ]},
            {"id": "c4", "name": "Vazia", "category": "review", "tasks": []},
        ]

    def test_totals(self):
        metrics = compute_metrics(self.columns(), self.today)

        assert metrics["total_tasks"] == 5
        assert metrics["completed_tasks"] == 2
        # (10 + 2 + 0 + 19 + 8) / 5
        assert metrics["average_lead_time_days"] == 7.8

    def test_column_ages(self):
        ages = {a["name"]: a for a in compute_metrics(self.columns(), self.today)["column_ages"]}

        assert ages["Fazendo"]["count"] == 2
        assert ages["Fazendo"]["average_days"] == 1.0
        assert ages["Vazia"] == {"name": "Vazia", "count": 0, "average_days": 0.0}

    def test_priority_distribution_order(self):
        distribution = compute_metrics(self.columns(), self.today)["priority_distribution"]

        assert [d["priority"] for d in distribution] == ["highest", "high", "medium", "low", "lowest"]
        assert distribution[1]["count"] == 1
        assert distribution[2]["count"] == 4
        assert distribution[0]["label"] == "Urgente"

    def test_last_seven_days_window(self):
        metrics = compute_metrics(self.columns(), self.today)

        assert metrics["started_last_7_days"] == 1
        assert metrics["completed_last_7_days"] == 1

    def test_future_dates_count_in_window(self):
        columns = self.columns()
        columns[0]["tasks"].append(task("t6", column_id="c1", start_date="2025-03-25", due_date="2025-04-30"))

        metrics = compute_metrics(columns, self.today)

        assert metrics["started_last_7_days"] == 2
        assert metrics["completed_last_7_days"] == 2

    def test_old_dates_fall_outside_window(self):
        columns = self.columns()
        columns[0]["tasks"].append(task("t6", column_id="c1", start_date="2025-03-12"))

        assert compute_metrics(columns, self.today)["started_last_7_days"] == 1

    def test_timeline_latest_first(self):
        columns = self.columns()
        columns[0]["tasks"] += [
            task("t6", column_id="c1", start_date="2025-03-01"),
            task("t7", column_id="c1", start_date="2025-02-01", due_date="2025-03-19"),
            task("t8", column_id="c1", due_date="2025-01-10"),
        ]

        timeline = compute_metrics(columns, self.today)["timeline"]

        assert [entry["id"] for entry in timeline] == ["t7", "t2", "t4", "t6"]
        assert timeline[0]["end_date"] == date(2025, 3, 19)
        assert timeline[1]["start_date"] == date(2025, 3, 15)
        assert timeline[1]["end_date"] is None
        assert timeline[1]["column_name"] == "Fazendo"

    def test_flags(self):
        metrics = compute_metrics(self.columns(), self.today)

        assert [r["id"] for r in metrics["in_progress_without_start"]] == ["t3"]
        assert [r["id"] for r in metrics["done_without_end"]] == ["t5"]
        assert metrics["done_without_end"][0]["column_name"] == "Concluído"

    def test_empty_board(self):
        metrics = compute_metrics([], self.today)
        assert metrics["total_tasks"] == 0
        assert metrics["average_lead_time_days"] == 0.0


# =============================================================================
# Export
# =============================================================================

class TestTasksFrame:
    """Tests for the task CSV export."""

    def test_row_content(self):
        row = task(
            "t1",
            key="AUR-1",
            title="Pagar IPVA",
            type="história",
            priority="alta",
            labels=["carro", "taxas"],
            is_blocked=True,
            checklist=[{"title": "Boleto", "done": True}, {"title": "Comprovante"}],
            comments=[{"user_id": "u1", "body": "Feito"}],
        )

        df = tasks_frame([("Projeto Pessoal", "Kanban Principal", "Fazendo", row)])
        record = df.iloc[0]

        assert record["Key"] == "AUR-1"
        assert record["Type"] == "story"
        assert record["Priority"] == "Alta"
        assert record["Labels"] == "carro, taxas"
        assert record["IsBlocked"] == "Yes"
        assert record["Checklist"] == "Boleto (done) | Comprovante"
        assert record["Comments"] == "u1: Feito"

    def test_header(self):
        header = frame_to_csv(tasks_frame([])).strip()
        assert header.startswith("Project,Board,Column,Key,Title")
        assert header.endswith("Checklist,Comments")
