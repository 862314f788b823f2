# =============================================================================
# lib/aggregations.py - Transaction Aggregation
# =============================================================================
# Pure functions that turn transaction view dicts into dashboard numbers.
# Input dicts carry at least: type, amount, category, date.
#
# Money is summed as Decimal and rounded to cents once per total, so
# income - expenses == savings holds exactly on the returned values.
#
# Category percentages use largest-remainder rounding at one decimal place:
# the shares always add up to exactly 100.0 when the total is positive.
#
# Usage:
#   from lib.aggregations import summarize, category_breakdown
#   summary = summarize(transactions, "2025-03")
# =============================================================================

import io
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Iterable

import pandas as pd

from lib.utils import month_of, quantize_money, sum_money, to_decimal

OTHER_CATEGORY = "Outros"
UNCATEGORIZED = "Sem categoria"

# Percentages are distributed in tenths of a percent
_TENTHS_TOTAL = 1000

TRANSACTION_CSV_COLUMNS = ["Tipo", "Descrição", "Categoria", "Data", "Valor"]
TYPE_LABELS = {"income": "Receita", "expense": "Despesa", "transfer": "Transferência"}


def _in_month(transactions: Iterable[dict[str, Any]], month: str | None) -> list[dict[str, Any]]:
    if month is None:
        return list(transactions)
    return [t for t in transactions if month_of(t.get("date")) == month]


def _of_type(transactions: Iterable[dict[str, Any]], kind: str) -> list[dict[str, Any]]:
    return [t for t in transactions if t.get("type") == kind]


# =============================================================================
# Percentages
# =============================================================================

def largest_remainder_percentages(amounts: list[Any]) -> list[float]:
    """
    Split 100% across amounts at one decimal, summing to exactly 100.0.

    Each share is floored to a tenth of a percent; the tenths still missing
    go to the entries with the largest remainders (earlier entries win ties).

    Example:
        largest_remainder_percentages([1, 1, 1])  # [33.4, 33.3, 33.3]
    """
    values = [to_decimal(a) for a in amounts]
    total = sum(values, Decimal("0"))
    if total <= 0:
        return [0.0 for _ in values]

    raw = [v * _TENTHS_TOTAL / total for v in values]
    floors = [int(r.to_integral_value(rounding=ROUND_FLOOR)) for r in raw]
    missing = _TENTHS_TOTAL - sum(floors)

    by_remainder = sorted(range(len(raw)), key=lambda i: (-(raw[i] - floors[i]), i))
    for i in by_remainder[:missing]:
        floors[i] += 1

    return [tenths / 10 for tenths in floors]


# =============================================================================
# Monthly Summary
# =============================================================================

def summarize(transactions: Iterable[dict[str, Any]], month: str | None = None) -> dict[str, Any]:
    """
    Income, expenses, savings and savings rate for a month.

    Args:
        transactions: Transaction view dicts
        month: "YYYY-MM"; None aggregates everything given

    Returns:
        dict with Decimal income/expenses/savings and float savings_rate
        (percent of income, 0 when there is no income)
    """
    scoped = _in_month(transactions, month)
    income = sum_money(t.get("amount") for t in _of_type(scoped, "income"))
    expenses = sum_money(t.get("amount") for t in _of_type(scoped, "expense"))
    savings = income - expenses

    savings_rate = 0.0
    if income > 0:
        savings_rate = float((savings / income * 100).quantize(Decimal("0.1")))

    return {
        "income": income,
        "expenses": expenses,
        "savings": savings,
        "savings_rate": savings_rate,
    }


def category_breakdown(
    transactions: Iterable[dict[str, Any]],
    month: str | None = None,
    top_n: int | None = None,
    kind: str = "expense",
) -> list[dict[str, Any]]:
    """
    Group one transaction type by category, largest first.

    Categories beyond top_n are folded into "Outros" before percentages are
    assigned, so the shares still total 100.0.

    Returns:
        List of {"category", "amount" (Decimal), "percentage", "count"}
    """
    scoped = _of_type(_in_month(transactions, month), kind)

    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for t in scoped:
        name = t.get("category") or UNCATEGORIZED
        totals[name] = totals.get(name, Decimal("0")) + to_decimal(t.get("amount"))
        counts[name] = counts.get(name, 0) + 1

    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    groups = [
        {"category": name, "amount": quantize_money(amount), "count": counts[name]}
        for name, amount in ranked
    ]

    if top_n is not None and len(groups) > top_n:
        head, tail = groups[:top_n], groups[top_n:]
        head.append({
            "category": OTHER_CATEGORY,
            "amount": quantize_money(sum((g["amount"] for g in tail), Decimal("0"))),
            "count": sum(g["count"] for g in tail),
        })
        groups = head

    percentages = largest_remainder_percentages([g["amount"] for g in groups])
    for group, percentage in zip(groups, percentages):
        group["percentage"] = percentage
    return groups


# =============================================================================
# Budgets
# =============================================================================

def budget_status(percentage: float, warning_percent: float = 80.0) -> str:
    """exceeded at >= 100%, warning at >= warning_percent, else ok."""
    if percentage >= 100:
        return "exceeded"
    if percentage >= warning_percent:
        return "warning"
    return "ok"


def analyze_budgets(
    budgets: Iterable[dict[str, Any]],
    transactions: Iterable[dict[str, Any]],
    month: str,
    warning_percent: float = 80.0,
) -> dict[str, Any]:
    """
    Measure each budget of a month against that month's expenses.

    A budget's spent amount is the sum of the month's expenses whose category
    name matches the budget category (case-insensitive, trimmed).
    """
    expenses = _of_type(_in_month(transactions, month), "expense")
    spent_by_category: dict[str, Decimal] = {}
    for t in expenses:
        key = (t.get("category") or "").strip().lower()
        spent_by_category[key] = spent_by_category.get(key, Decimal("0")) + to_decimal(t.get("amount"))

    items = []
    for budget in budgets:
        if budget.get("month") != month:
            continue
        budgeted = quantize_money(to_decimal(budget.get("amount")))
        spent = quantize_money(spent_by_category.get(budget["category"].strip().lower(), Decimal("0")))
        percentage = float((spent / budgeted * 100).quantize(Decimal("0.1"))) if budgeted > 0 else 0.0
        items.append({
            "budget_id": budget["id"],
            "category": budget["category"],
            "description": budget.get("description") or "",
            "budgeted": budgeted,
            "spent": spent,
            "remaining": budgeted - spent,
            "percentage": percentage,
            "status": budget_status(percentage, warning_percent),
        })

    total_budgeted = sum((i["budgeted"] for i in items), Decimal("0"))
    total_spent = sum((i["spent"] for i in items), Decimal("0"))
    return {
        "month": month,
        "items": items,
        "total_budgeted": total_budgeted,
        "total_spent": total_spent,
        "total_remaining": total_budgeted - total_spent,
        "exceeded_count": sum(1 for i in items if i["status"] == "exceeded"),
        "warning_count": sum(1 for i in items if i["status"] == "warning"),
    }


# =============================================================================
# Reports
# =============================================================================

def report_totals(transactions: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """
    Totals and per-category lines for a set of transactions.

    Category lines carry income, expense and total (income + expense volume),
    sorted by total desc.
    """
    scoped = list(transactions)
    summary = summarize(scoped)

    lines: dict[str, dict[str, Decimal]] = {}
    for t in scoped:
        kind = t.get("type")
        if kind not in ("income", "expense"):
            continue
        name = t.get("category") or UNCATEGORIZED
        line = lines.setdefault(name, {"income": Decimal("0"), "expense": Decimal("0")})
        line[kind] += to_decimal(t.get("amount"))

    categories = [
        {
            "category": name,
            "income": quantize_money(line["income"]),
            "expense": quantize_money(line["expense"]),
            "total": quantize_money(line["income"] + line["expense"]),
        }
        for name, line in lines.items()
    ]
    categories.sort(key=lambda c: (-c["total"], c["category"]))

    return {
        "total_income": summary["income"],
        "total_expense": summary["expenses"],
        "net_total": summary["savings"],
        "transaction_count": sum(1 for t in scoped if t.get("type") in ("income", "expense")),
        "categories": categories,
    }


# =============================================================================
# CSV Export
# =============================================================================

def transactions_frame(transactions: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Build the export DataFrame (Tipo, Descrição, Categoria, Data, Valor)."""
    records = [
        {
            "Tipo": TYPE_LABELS.get(t.get("type"), t.get("type")),
            "Descrição": t.get("description", ""),
            "Categoria": t.get("category") or UNCATEGORIZED,
            "Data": str(t.get("date") or ""),
            "Valor": float(to_decimal(t.get("amount"))),
        }
        for t in transactions
    ]
    return pd.DataFrame.from_records(records, columns=TRANSACTION_CSV_COLUMNS)


def frame_to_csv(df: pd.DataFrame) -> str:
    """Serialize a DataFrame to CSV text without the index."""
    csv_buffer = io.StringIO()
    df.to_csv(csv_buffer, index=False)
    return csv_buffer.getvalue()
