# =============================================================================
# tests/test_routes.py - HTTP Layer Tests
# =============================================================================
# End-to-end requests through FastAPI against the in-memory Supabase fake.
# Covers status codes, camelCase bodies and the error envelope.
# =============================================================================

from uuid import uuid4

import pytest

API = "/api/v1"


class TestHealthRoutes:
    """Health and root endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == f"{API}/health"
        assert response.json()["currency"] == "BRL"

    def test_health(self, client):
        response = client.get(f"{API}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_with_database(self, client):
        response = client.get(f"{API}/health/ready")

        assert response.json()["status"] == "ready"

    def test_ready_degraded(self, client, fake_db):
        fake_db.fail_tables["bank_accounts"] = "connection refused"

        response = client.get(f"{API}/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"


class TestAccountRoutes:
    """/accounts."""

    def test_create_and_list(self, client):
        response = client.post(f"{API}/accounts", json={"name": "Nubank", "bank": "nubank", "balance": 1250.5})

        assert response.status_code == 201
        created = response.json()
        assert created["isActive"] is True
        assert created["balance"] == 1250.5

        listed = client.get(f"{API}/accounts").json()
        assert [a["id"] for a in listed] == [created["id"]]

    def test_delete_is_soft(self, client, account_factory):
        account = account_factory("Inter")

        response = client.delete(f"{API}/accounts/{account['id']}")

        assert response.status_code == 200
        assert response.json()["isActive"] is False
        assert client.get(f"{API}/accounts").json() == []
        assert len(client.get(f"{API}/accounts", params={"includeInactive": True}).json()) == 1

    def test_unknown_account(self, client):
        response = client.get(f"{API}/accounts/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "ACCOUNT_NOT_FOUND"

    def test_validation_error_envelope(self, client):
        response = client.post(f"{API}/accounts", json={"balance": 10})

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert any(error["field"] == "name" for error in body["errors"])

    def test_backend_failure_is_502(self, client, fake_db):
        fake_db.fail_tables["bank_accounts"] = "connection refused"

        response = client.get(f"{API}/accounts")

        assert response.status_code == 502
        assert response.json()["code"] == "ACCOUNTS_LIST_FAILED"

    def test_banks_catalog(self, client):
        banks = client.get(f"{API}/accounts/banks").json()

        assert len(banks) > 0
        assert {"id", "name"} <= set(banks[0])


class TestTransactionRoutes:
    """/transactions and /transfers."""

    def test_create_and_export(self, client, account_factory):
        account = account_factory("Nubank")
        response = client.post(f"{API}/transactions", json={
            "type": "expense",
            "description": "Mercado",
            "amount": 152.3,
            "category": "Alimentação",
            "date": "2025-03-14",
            "accountId": account["id"],
        })

        assert response.status_code == 201
        assert response.json()["accountId"] == account["id"]

        export = client.get(f"{API}/transactions/export")
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=transacoes_" in export.headers["content-disposition"]
        assert "Mercado" in export.text

    def test_patch_with_nulls_rejected(self, client, account_factory, fake_db):
        account = account_factory("Nubank")
        created = client.post(f"{API}/transactions", json={
            "type": "income",
            "description": "Salário",
            "amount": 6500,
            "date": "2025-03-05",
            "accountId": account["id"],
        }).json()

        response = client.patch(f"{API}/transactions/{created['id']}", json={"type": None, "amount": None})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
        stored = fake_db.row("transactions", created["id"])
        assert stored["type"] == "income"
        assert stored["amount"] == 6500

    def test_partial_patch_keeps_other_fields(self, client, account_factory):
        account = account_factory("Nubank")
        created = client.post(f"{API}/transactions", json={
            "type": "expense",
            "description": "Mercado",
            "amount": 80,
            "date": "2025-03-05",
            "accountId": account["id"],
        }).json()

        response = client.patch(f"{API}/transactions/{created['id']}", json={"amount": 95.5})

        assert response.status_code == 200
        body = response.json()
        assert body["amount"] == 95.5
        assert body["type"] == "expense"
        assert body["description"] == "Mercado"

    def test_payment_method_null_account_rejected(self, client, account_factory):
        account = account_factory("Nubank")
        method = client.post(f"{API}/payment-methods", json={
            "name": "Pix Nubank",
            "type": "pix",
            "accountId": account["id"],
        })
        assert method.status_code == 201

        response = client.patch(f"{API}/payment-methods/{method.json()['id']}", json={"accountId": None})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_same_account_transfer(self, client, account_factory):
        account = account_factory("Nubank", balance=100)

        response = client.post(f"{API}/transfers", json={
            "fromAccountId": account["id"],
            "toAccountId": account["id"],
            "amount": 10,
        })

        assert response.status_code == 400
        assert response.json()["code"] == "SAME_ACCOUNT_TRANSFER"

    def test_transfer_moves_balances(self, client, account_factory):
        source = account_factory("Nubank", balance=100)
        target = account_factory("Inter", balance=0)

        response = client.post(f"{API}/transfers", json={
            "fromAccountId": source["id"],
            "toAccountId": target["id"],
            "amount": 40,
        })

        assert response.status_code == 201
        balances = {a["name"]: a["balance"] for a in client.get(f"{API}/accounts").json()}
        assert balances == {"Nubank": 60.0, "Inter": 40.0}


class TestDashboardRoutes:
    """/dashboard and /reports."""

    def test_invalid_month(self, client):
        response = client.get(f"{API}/dashboard", params={"month": "2025-13"})

        assert response.status_code == 422

    @pytest.mark.parametrize("path", ["/dashboard", "/budgets/analysis"])
    @pytest.mark.parametrize("month", ["0000-03", "٢٠٢٥-03"])
    def test_unusable_month_rejected(self, client, path, month):
        response = client.get(f"{API}{path}", params={"month": month})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_empty_month(self, client):
        response = client.get(f"{API}/dashboard", params={"month": "2025-03"})

        assert response.status_code == 200
        body = response.json()
        assert body["month"] == "2025-03"
        assert body["savingsRate"] == 0
        assert body["expensesByCategory"] == []

    def test_report_period_order(self, client):
        response = client.get(f"{API}/reports", params={"periodStart": "2025-03-31", "periodEnd": "2025-03-01"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PERIOD"


class TestTaskRoutes:
    """/tasks."""

    def test_workspace_and_task_lifecycle(self, client):
        workspace = client.get(f"{API}/tasks/workspace")
        assert workspace.status_code == 200
        projects = workspace.json()
        assert len(projects) == 1
        board = projects[0]["boards"][0]
        assert len(board["columns"]) == 4

        created = client.post(f"{API}/tasks", json={"title": "Pagar IPVA", "endDate": "2025-04-10"})
        assert created.status_code == 201
        task = created.json()
        assert task["endDate"] == "2025-04-10"
        assert task["boardId"] == board["id"]

        assert client.delete(f"{API}/tasks/{task['id']}").status_code == 204
        assert client.get(f"{API}/tasks/{task['id']}").status_code == 404

    def test_last_board_cannot_be_deleted(self, client):
        board = client.get(f"{API}/tasks/workspace").json()[0]["boards"][0]

        response = client.delete(f"{API}/tasks/boards/{board['id']}")

        assert response.status_code == 409
        assert response.json()["code"] == "LAST_BOARD"


class TestFleetRoutes:
    """/fleet."""

    def test_vehicle_and_counts(self, client):
        response = client.post(f"{API}/fleet/vehicles", json={"placa": "abc1d23", "modelo": "Fiat Strada"})

        assert response.status_code == 201
        assert response.json()["placa"] == "ABC1D23"

        counts = client.get(f"{API}/fleet/vehicles/status-counts").json()
        assert counts["total"] == 1
        assert counts["ativo"] == 1

    def test_fuel_log_for_unknown_vehicle(self, client):
        response = client.post(f"{API}/fleet/fuel-logs", json={
            "vehicleId": str(uuid4()),
            "litros": 10,
            "valorTotal": 55,
        })

        assert response.status_code == 404
        assert response.json()["code"] == "VEHICLE_NOT_FOUND"


class TestWellnessRoutes:
    """/wellness."""

    def test_sleep_log_duration(self, client):
        response = client.post(f"{API}/wellness/sleep-logs", json={
            "sleepDate": "2025-03-19",
            "bedtime": "2025-03-19T23:15:00Z",
            "wakeTime": "2025-03-20T06:45:00Z",
            "quality": "normal",
        })

        assert response.status_code == 201
        assert response.json()["durationMinutes"] == 450

    def test_weight_out_of_range(self, client):
        response = client.post(f"{API}/wellness/weight-logs", json={"weight": 0})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_summary_without_data(self, client):
        response = client.get(f"{API}/wellness/summary")

        assert response.status_code == 200
        body = response.json()
        assert body["weight"] is None
        assert body["activity"]["weeklyGoal"] == 150
        assert body["insights"][0]["type"] == "activity"

    def test_unknown_goal(self, client):
        response = client.patch(f"{API}/wellness/goals/{uuid4()}", json={"targetValue": 70})

        assert response.status_code == 404
        assert response.json()["code"] == "HEALTH_GOAL_NOT_FOUND"


class TestPreferenceRoutes:
    """/preferences."""

    def test_get_and_patch(self, client):
        defaults = client.get(f"{API}/preferences")
        assert defaults.status_code == 200
        assert defaults.json()["theme"] == "system"

        response = client.patch(f"{API}/preferences", json={"theme": "dark", "lastActiveHub": "tasks"})

        assert response.status_code == 200
        assert response.json()["theme"] == "dark"
        assert response.json()["lastActiveHub"] == "tasks"
        assert response.json()["id"] == defaults.json()["id"]

    @pytest.mark.parametrize("body", [{"theme": None}, {"theme": "sepia"}])
    def test_bad_theme_rejected(self, client, body):
        response = client.patch(f"{API}/preferences", json=body)

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
