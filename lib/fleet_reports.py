# =============================================================================
# lib/fleet_reports.py - Vehicle Cost Report
# =============================================================================
# Combines fuel, maintenance and fine rows into per-vehicle costs with
# pandas group-bys. Breakdown shares use the same largest-remainder split as
# the dashboard, so they sum to 100.0. Rows only need vehicle_id plus their
# amount column:
# - fuel_logs.valor_total
# - maintenance_events.custo
# - fines.valor
# =============================================================================

from typing import Any

import pandas as pd

from lib.aggregations import largest_remainder_percentages

COST_SOURCES = (
    ("abastecimentos", "valor_total"),
    ("manutencoes", "custo"),
    ("multas", "valor"),
)
COST_LABELS = {
    "abastecimentos": "Abastecimentos",
    "manutencoes": "Manutenções",
    "multas": "Multas",
}


def _sum_by_vehicle(rows: list[dict[str, Any]], amount_column: str) -> pd.Series:
    """Total of amount_column per vehicle_id (nulls count as zero)."""
    if not rows:
        return pd.Series(dtype="float64")
    df = pd.DataFrame(rows)
    if amount_column not in df.columns:
        return pd.Series(dtype="float64")
    df["vehicle_id"] = df["vehicle_id"].astype(str)
    amounts = pd.to_numeric(df[amount_column], errors="coerce").fillna(0.0)
    return amounts.groupby(df["vehicle_id"]).sum()


def build_cost_report(
    vehicles: list[dict[str, Any]],
    fuel_logs: list[dict[str, Any]],
    maintenance: list[dict[str, Any]],
    fines: list[dict[str, Any]],
    vehicle_id: str | None = None,
) -> dict[str, Any]:
    """
    Per-vehicle cost report.

    Args:
        vehicles: Vehicle rows (id, placa, modelo)
        fuel_logs / maintenance / fines: Cost rows
        vehicle_id: Restrict the report to one vehicle

    Returns:
        {"vehicles": [...sorted by total desc], "totals": {...}, "breakdown": [...]}
        Vehicles with no costs are included with zeros.
    """
    if vehicle_id is not None:
        vehicles = [v for v in vehicles if str(v["id"]) == str(vehicle_id)]

    frame = pd.DataFrame(
        [{"vehicle_id": str(v["id"]), "placa": v.get("placa", ""), "modelo": v.get("modelo", "")} for v in vehicles],
        columns=["vehicle_id", "placa", "modelo"],
    ).set_index("vehicle_id")

    for label, column in COST_SOURCES:
        rows = {"abastecimentos": fuel_logs, "manutencoes": maintenance, "multas": fines}[label]
        frame[label] = _sum_by_vehicle(rows, column).reindex(frame.index).fillna(0.0)

    labels = [label for label, _ in COST_SOURCES]
    frame[labels] = frame[labels].astype("float64").round(2)
    frame["total"] = frame[labels].sum(axis=1).round(2)
    frame = frame.sort_values(["total", "placa"], ascending=[False, True])

    totals = {label: round(float(frame[label].sum()), 2) for label in labels}
    totals["total"] = round(float(frame["total"].sum()), 2)

    breakdown = []
    if totals["total"] > 0:
        shares = largest_remainder_percentages([totals[label] for label in labels])
        breakdown = [
            {"categoria": COST_LABELS[label], "valor": totals[label], "percentual": share}
            for label, share in zip(labels, shares)
        ]

    return {
        "vehicles": frame.reset_index().to_dict(orient="records"),
        "totals": totals,
        "breakdown": breakdown,
    }
