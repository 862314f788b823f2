# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request/response schemas to ensure:
# - Valid data is accepted and parsed correctly (camelCase or snake_case)
# - Invalid data raises ValidationError
# - Models serialize with camelCase keys
# - Aliases and defaults are applied
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from core.models import (
    AccountCreate,
    BalanceAdjustment,
    BudgetCreate,
    CardCreate,
    GoalResponse,
    PaymentMethodCreate,
    PaymentMethodUpdate,
    ReportSaveRequest,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    VehicleCreate,
    VehicleUpdate,
)


# =============================================================================
# Account Model Tests
# =============================================================================

class TestAccountCreate:
    """Tests for AccountCreate."""

    def test_defaults(self):
        """Only the name is required."""
        account = AccountCreate(name="Nubank")

        assert account.type == "checking"
        assert account.balance == 0.0
        assert account.icon == "🏦"

    def test_negative_opening_balance_allowed(self):
        """Checking accounts may start overdrawn."""
        account = AccountCreate(name="Conta", balance=-120.5)
        assert account.balance == -120.5

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            AccountCreate(name="   ")

    def test_name_is_trimmed(self):
        assert AccountCreate(name="  Itaú  ").name == "Itaú"


class TestBalanceAdjustment:
    """Tests for BalanceAdjustment."""

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            BalanceAdjustment(amount=0, operation="add")

    def test_unknown_operation_rejected(self):
        with pytest.raises(ValidationError):
            BalanceAdjustment(amount=10, operation="multiply")


class TestPaymentMethodCreate:
    """Tests for PaymentMethodCreate."""

    def test_card_types_require_card(self):
        """credit_card / debit_card methods must reference a card."""
        with pytest.raises(ValidationError):
            PaymentMethodCreate(name="Cartão", type="credit_card", account_id=uuid4())

    def test_card_type_with_card(self):
        method = PaymentMethodCreate(
            name="Cartão", type="debit_card", account_id=uuid4(), card_id=uuid4()
        )
        assert method.type == "debit_card"

    def test_pix_without_card(self):
        method = PaymentMethodCreate.model_validate(
            {"name": "Pix", "type": "pix", "accountId": str(uuid4())}
        )
        assert method.card_id is None


# =============================================================================
# Card Model Tests
# =============================================================================

class TestCardCreate:
    """Tests for CardCreate validation rules."""

    def test_valid_credit_card(self):
        card = CardCreate.model_validate({
            "providerId": "nubank",
            "alias": "Roxinho",
            "lastFourDigits": "1234",
            "creditLimit": 5000,
            "dueDay": 10,
            "closingDay": 3,
        })

        assert card.type == "credit"
        assert card.last_four_digits == "1234"

    @pytest.mark.parametrize("digits", ["123", "12345", "12a4", "١٢٣٤", "１２３４"])
    def test_last_four_digits_must_be_four_numbers(self, digits):
        with pytest.raises(ValidationError):
            CardCreate(provider_id="nubank", alias="X", last_four_digits=digits)

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            CardCreate(provider_id="acme", alias="X")

    def test_debit_card_cannot_have_limit(self):
        with pytest.raises(ValidationError):
            CardCreate(provider_id="itau", alias="Débito", type="debit", credit_limit=100)

    @pytest.mark.parametrize("day", [0, 32])
    def test_due_day_range(self, day):
        with pytest.raises(ValidationError):
            CardCreate(provider_id="nubank", alias="X", due_day=day)

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            CardCreate(provider_id="nubank", alias="X", credit_limit=-1)


# =============================================================================
# Transaction Model Tests
# =============================================================================

class TestTransactionCreate:
    """Tests for TransactionCreate."""

    def test_camel_case_payload(self):
        account_id = uuid4()
        txn = TransactionCreate.model_validate({
            "type": "expense",
            "description": "Mercado",
            "amount": 152.30,
            "category": "Alimentação",
            "date": "2025-03-14",
            "accountId": str(account_id),
            "paymentMethod": "pix",
        })

        assert txn.account_id == account_id
        assert txn.date == date(2025, 3, 14)
        assert txn.installments == 1

    def test_transfer_type_rejected(self):
        """Transfers have their own endpoint."""
        with pytest.raises(ValidationError):
            TransactionCreate(
                type="transfer", description="x", amount=1, date=date.today(), account_id=uuid4()
            )

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            TransactionCreate(
                type="income", description="x", amount=0, date=date.today(), account_id=uuid4()
            )

    def test_response_serializes_camel_case(self):
        response = TransactionResponse(
            id=uuid4(),
            type="income",
            description="Salário",
            amount=6500,
            date=date(2025, 3, 5),
            payment_method="ted",
        )

        dumped = response.model_dump(by_alias=True)
        assert dumped["paymentMethod"] == "ted"
        assert dumped["category"] == "Sem categoria"


# =============================================================================
# Budget & Goal Model Tests
# =============================================================================

class TestBudgetCreate:
    """Tests for BudgetCreate."""

    @pytest.mark.parametrize("month", ["2025-3", "2025-13", "25-03", "2025/03", "0000-03", "٢٠٢٥-03"])
    def test_invalid_month(self, month):
        with pytest.raises(ValidationError):
            BudgetCreate(category="Lazer", amount=100, month=month)

    def test_valid_budget(self):
        budget = BudgetCreate(category=" Lazer ", amount=300, month="2025-12")
        assert budget.category == "Lazer"
        assert budget.description == ""


class TestGoalResponse:
    """Tests for the computed goal progress."""

    def test_progress_is_uncapped(self):
        goal = GoalResponse(id=uuid4(), name="Viagem", target_amount=1000, current_amount=1500)
        assert goal.progress == 150.0

    def test_progress_serialized(self):
        goal = GoalResponse(id=uuid4(), name="Reserva", target_amount=3000, current_amount=1000)
        assert goal.model_dump(by_alias=True)["progress"] == 33.33


class TestReportSaveRequest:
    """Tests for ReportSaveRequest."""

    def test_period_must_be_ordered(self):
        with pytest.raises(ValidationError):
            ReportSaveRequest(title="Março", period_start=date(2025, 3, 31), period_end=date(2025, 3, 1))

    def test_single_day_period(self):
        request = ReportSaveRequest(title="Dia", period_start=date(2025, 3, 1), period_end=date(2025, 3, 1))
        assert request.period_start == request.period_end


# =============================================================================
# Task Model Tests
# =============================================================================

class TestTaskModels:
    """Tests for task schemas."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("urgente", "highest"), ("Alta", "high"), ("média", "medium"), ("whatever", "medium")],
    )
    def test_priority_aliases(self, raw, expected):
        assert TaskCreate(title="T", priority=raw).priority == expected

    def test_type_aliases(self):
        assert TaskCreate(title="T", type="história").type == "story"
        assert TaskCreate(title="T", type="chore").type == "task"

    def test_response_maps_due_date_to_end_date(self):
        task = TaskResponse.model_validate({
            "id": str(uuid4()),
            "board_id": str(uuid4()),
            "column_id": str(uuid4()),
            "title": "Pagar IPVA",
            "due_date": "2025-04-10",
            "priority": "urgente",
            "labels": None,
            "checklist": [{"title": "Boleto"}, "junk"],
        })

        assert task.end_date == date(2025, 4, 10)
        assert task.priority == "highest"
        assert task.labels == []
        assert len(task.checklist) == 1
        assert task.model_dump(by_alias=True)["endDate"] == date(2025, 4, 10)


# =============================================================================
# Vehicle Model Tests
# =============================================================================

class TestVehicleCreate:
    """Tests for VehicleCreate."""

    def test_plate_normalized_and_tags_split(self):
        vehicle = VehicleCreate(placa=" abc1d23 ", modelo="Fiat Strada", tags="frota, carga,,")

        assert vehicle.placa == "ABC1D23"
        assert vehicle.tags == ["frota", "carga"]
        assert vehicle.status == "ativo"

    def test_blank_plate_rejected(self):
        with pytest.raises(ValidationError):
            VehicleCreate(placa="  ", modelo="Gol")


# =============================================================================
# Partial Update Tests
# =============================================================================

class TestPartialUpdates:
    """Explicit nulls on NOT NULL columns are rejected; omitted fields are fine."""

    def test_omitted_fields_stay_unset(self):
        update = TransactionUpdate.model_validate({"description": "Feira"})

        assert update.model_dump(exclude_unset=True) == {"description": "Feira"}

    @pytest.mark.parametrize("payload", [
        {"type": None},
        {"amount": None},
        {"type": None, "amount": None},
        {"date": None},
        {"description": None},
    ])
    def test_transaction_required_columns_not_nullable(self, payload):
        with pytest.raises(ValidationError, match="cannot be null"):
            TransactionUpdate.model_validate(payload)

    def test_payment_method_account_not_nullable(self):
        with pytest.raises(ValidationError, match="account_id cannot be null"):
            PaymentMethodUpdate.model_validate({"accountId": None})

    def test_nullable_columns_can_be_cleared(self):
        vehicle = VehicleUpdate.model_validate({"renavam": None, "localAtual": None})
        task = TaskUpdate.model_validate({"assigneeId": None, "endDate": None})

        assert vehicle.model_dump(exclude_unset=True) == {"renavam": None, "local_atual": None}
        assert task.model_dump(exclude_unset=True) == {"assignee_id": None, "end_date": None}

    def test_task_column_not_nullable(self):
        with pytest.raises(ValidationError):
            TaskUpdate.model_validate({"columnId": None})
