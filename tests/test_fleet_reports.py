# =============================================================================
# tests/test_fleet_reports.py - Vehicle Cost Report Tests
# =============================================================================

import pytest

from lib.fleet_reports import build_cost_report

VEHICLES = [
    {"id": "v1", "placa": "ABC1D23", "modelo": "Fiat Strada"},
    {"id": "v2", "placa": "XYZ9K88", "modelo": "Honda CG"},
    {"id": "v3", "placa": "AAA0A00", "modelo": "Gol"},
]


class TestBuildCostReport:
    """Tests for build_cost_report."""

    def test_costs_per_vehicle(self):
        report = build_cost_report(
            VEHICLES,
            fuel_logs=[
                {"vehicle_id": "v1", "valor_total": 250.0},
                {"vehicle_id": "v1", "valor_total": "100.50"},
                {"vehicle_id": "v2", "valor_total": 80},
            ],
            maintenance=[
                {"vehicle_id": "v1", "custo": 400},
                {"vehicle_id": "v2", "custo": None},
            ],
            fines=[{"vehicle_id": "v2", "valor": 195.23}],
        )

        rows = {row["vehicle_id"]: row for row in report["vehicles"]}
        assert rows["v1"]["abastecimentos"] == 350.5
        assert rows["v1"]["manutencoes"] == 400.0
        assert rows["v1"]["total"] == 750.5
        assert rows["v2"]["total"] == 275.23
        assert rows["v3"]["total"] == 0.0

    def test_sorted_by_total_desc(self):
        report = build_cost_report(
            VEHICLES,
            fuel_logs=[{"vehicle_id": "v2", "valor_total": 10}],
            maintenance=[{"vehicle_id": "v1", "custo": 5}],
            fines=[],
        )

        assert [row["vehicle_id"] for row in report["vehicles"]] == ["v2", "v1", "v3"]

    def test_totals_and_breakdown(self):
        report = build_cost_report(
            VEHICLES,
            fuel_logs=[{"vehicle_id": "v1", "valor_total": 300}],
            maintenance=[{"vehicle_id": "v2", "custo": 100}],
            fines=[{"vehicle_id": "v3", "valor": 100}],
        )

        assert report["totals"] == {
            "abastecimentos": 300.0,
            "manutencoes": 100.0,
            "multas": 100.0,
            "total": 500.0,
        }
        shares = {entry["categoria"]: entry["percentual"] for entry in report["breakdown"]}
        assert shares == {"Abastecimentos": 60.0, "Manutenções": 20.0, "Multas": 20.0}

    def test_no_costs_has_empty_breakdown(self):
        report = build_cost_report(VEHICLES, [], [], [])

        assert report["totals"]["total"] == 0.0
        assert report["breakdown"] == []
        assert len(report["vehicles"]) == 3

    def test_single_vehicle_filter(self):
        report = build_cost_report(
            VEHICLES,
            fuel_logs=[{"vehicle_id": "v1", "valor_total": 10}, {"vehicle_id": "v2", "valor_total": 20}],
            maintenance=[],
            fines=[],
            vehicle_id="v2",
        )

        assert [row["vehicle_id"] for row in report["vehicles"]] == ["v2"]
        assert report["totals"]["total"] == pytest.approx(20.0)

    def test_costs_of_unknown_vehicles_ignored(self):
        report = build_cost_report(
            VEHICLES[:1],
            fuel_logs=[{"vehicle_id": "gone", "valor_total": 999}],
            maintenance=[],
            fines=[],
        )

        assert report["totals"]["total"] == 0.0

    def test_breakdown_shares_sum_to_hundred(self):
        report = build_cost_report(
            VEHICLES,
            fuel_logs=[{"vehicle_id": "v1", "valor_total": 100}],
            maintenance=[{"vehicle_id": "v2", "custo": 100}],
            fines=[{"vehicle_id": "v3", "valor": 100}],
        )

        shares = [entry["percentual"] for entry in report["breakdown"]]
        assert shares == [33.4, 33.3, 33.3]
        assert sum(shares) == pytest.approx(100.0)
