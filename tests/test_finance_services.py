# =============================================================================
# tests/test_finance_services.py - Finance Service Tests
# =============================================================================
# This module contains tests for:
# - Accounts (soft delete, balance adjustments, ownership)
# - Payment methods and cards
# - Categories (own vs default, get-or-create)
# - Transactions (view mapping, filters, CSV export)
# - Transfers (balance moves and rejections)
# - Budgets, goals, dashboard and reports
#
# Tests run against the in-memory Supabase fake from tests/fakes.py.
# =============================================================================

from datetime import date
from uuid import uuid4

import pytest

from app.exceptions import (
    BusinessRuleError,
    EmptyReportError,
    InactiveAccountError,
    InsufficientBalanceError,
    ResourceNotFoundError,
    SameAccountTransferError,
)
from core.models import (
    AccountCreate,
    BalanceAdjustment,
    BudgetCreate,
    CardCreate,
    CardUpdate,
    CategoryCreate,
    GoalCreate,
    PaymentMethodCreate,
    ReportSaveRequest,
    TransactionCreate,
    TransactionUpdate,
    TransferCreate,
)
from core.services import (
    AccountService,
    BudgetService,
    CardService,
    CategoryService,
    DashboardService,
    GoalService,
    PaymentMethodService,
    TransactionService,
    TransferService,
)
from core.services.transaction_service import decode_notes, encode_notes


def add_transaction(user_id, account, kind="expense", amount=10.0, category=None, day=None, **extra):
    return TransactionService.create_transaction(
        user_id,
        TransactionCreate(
            type=kind,
            description=extra.pop("description", "Compra"),
            amount=amount,
            category=category,
            date=day or date(2025, 3, 10),
            account_id=account["id"],
            **extra,
        ),
    )


# =============================================================================
# Accounts
# =============================================================================

class TestAccountService:
    """Tests for AccountService."""

    def test_create_and_list(self, fake_db, user_id, account_factory):
        account_factory(owner=str(uuid4()))
        AccountService.create_account(user_id, AccountCreate(name="Nubank", bank="nubank", balance=10))

        accounts = AccountService.list_accounts(user_id)

        assert [a["name"] for a in accounts] == ["Nubank"]
        assert accounts[0]["is_active"] is True

    def test_soft_delete_deactivates_methods(self, fake_db, user_id, account_factory):
        account = account_factory(name="Itaú")
        method = PaymentMethodService.create_method(
            user_id, PaymentMethodCreate(name="Pix", type="pix", account_id=account["id"])
        )

        deleted = AccountService.delete_account(account["id"], user_id)

        assert deleted["is_active"] is False
        assert fake_db.row("payment_methods", method["id"])["is_active"] is False
        assert AccountService.list_accounts(user_id) == []
        assert len(AccountService.list_accounts(user_id, include_inactive=True)) == 1

    def test_other_users_account_not_found(self, fake_db, user_id, account_factory):
        account = account_factory(owner=str(uuid4()))

        with pytest.raises(ResourceNotFoundError):
            AccountService.get_account(account["id"], user_id)

    def test_adjust_balance(self, fake_db, user_id, account_factory):
        account = account_factory(balance=100.10)

        AccountService.adjust_balance(account["id"], user_id, BalanceAdjustment(amount=0.2, operation="add"))
        updated = AccountService.adjust_balance(
            account["id"], user_id, BalanceAdjustment(amount=50, operation="subtract")
        )

        assert updated["balance"] == 50.3

    def test_adjust_inactive_account_rejected(self, fake_db, user_id, account_factory):
        account = account_factory(is_active=False)

        with pytest.raises(InactiveAccountError):
            AccountService.adjust_balance(account["id"], user_id, BalanceAdjustment(amount=1, operation="add"))

    def test_banks_catalog(self):
        banks = AccountService.list_banks()
        assert any(bank["id"] == "nubank" for bank in banks)


# =============================================================================
# Payment Methods & Cards
# =============================================================================

class TestPaymentMethodService:
    """Tests for PaymentMethodService."""

    def test_inactive_account_rejected(self, fake_db, user_id, account_factory):
        account = account_factory(is_active=False)

        with pytest.raises(InactiveAccountError):
            PaymentMethodService.create_method(
                user_id, PaymentMethodCreate(name="Pix", type="pix", account_id=account["id"])
            )

    def test_card_must_belong_to_user(self, fake_db, user_id, account_factory):
        account = account_factory()
        foreign_card = fake_db.seed("cards", [{"user_id": str(uuid4()), "alias": "X", "type": "credit"}])[0]

        with pytest.raises(ResourceNotFoundError):
            PaymentMethodService.create_method(
                user_id,
                PaymentMethodCreate(
                    name="Cartão", type="credit_card", account_id=account["id"], card_id=foreign_card["id"]
                ),
            )

    def test_list_filters_by_account(self, fake_db, user_id, account_factory):
        first, second = account_factory(name="A"), account_factory(name="B")
        PaymentMethodService.create_method(user_id, PaymentMethodCreate(name="Pix A", type="pix", account_id=first["id"]))
        PaymentMethodService.create_method(user_id, PaymentMethodCreate(name="Pix B", type="pix", account_id=second["id"]))

        methods = PaymentMethodService.list_methods(user_id, account_id=second["id"])

        assert [m["name"] for m in methods] == ["Pix B"]

    def test_soft_delete(self, fake_db, user_id, account_factory):
        account = account_factory()
        method = PaymentMethodService.create_method(
            user_id, PaymentMethodCreate(name="Dinheiro", type="cash", account_id=account["id"])
        )

        PaymentMethodService.delete_method(method["id"], user_id)

        assert PaymentMethodService.list_methods(user_id) == []


class TestCardService:
    """Tests for CardService."""

    def test_create_and_filter_by_provider(self, fake_db, user_id):
        CardService.create_card(user_id, CardCreate(provider_id="nubank", alias="Roxinho"))
        CardService.create_card(user_id, CardCreate(provider_id="itau", alias="Laranja", type="debit"))

        cards = CardService.list_cards(user_id, provider_id="itau")

        assert [c["alias"] for c in cards] == ["Laranja"]
        assert cards[0]["type"] == "debit"

    def test_debit_card_limit_update_rejected(self, fake_db, user_id):
        card = CardService.create_card(user_id, CardCreate(provider_id="inter", alias="Débito", type="debit"))

        with pytest.raises(BusinessRuleError) as exc_info:
            CardService.update_card(card["id"], user_id, CardUpdate(credit_limit=500))
        assert exc_info.value.code == "DEBIT_CARD_LIMIT"

    def test_soft_delete(self, fake_db, user_id):
        card = CardService.create_card(user_id, CardCreate(provider_id="nubank", alias="Roxinho"))

        CardService.delete_card(card["id"], user_id)

        assert CardService.list_cards(user_id) == []
        assert fake_db.row("cards", card["id"])["is_active"] is False


# =============================================================================
# Categories
# =============================================================================

class TestCategoryService:
    """Tests for CategoryService."""

    def test_own_and_default_categories(self, fake_db, user_id):
        fake_db.seed("categories", [
            {"user_id": None, "name": "Salário", "type": "income", "is_default": True},
            {"user_id": None, "name": "Outros", "type": "both", "is_default": True},
            {"user_id": user_id, "name": "Academia", "type": "expense", "is_default": False},
            {"user_id": str(uuid4()), "name": "Alheia", "type": "expense", "is_default": False},
        ])

        names = [c["name"] for c in CategoryService.list_categories(user_id, "expense")]

        assert names == ["Academia", "Outros"]

    def test_get_or_create_prefers_existing(self, fake_db, user_id):
        default = fake_db.seed("categories", [{"user_id": None, "name": "Mercado", "type": "expense"}])[0]

        found = CategoryService.get_or_create(user_id, CategoryCreate(name="Mercado"))
        created = CategoryService.get_or_create(user_id, CategoryCreate(name="Pets"))

        assert found["id"] == default["id"]
        assert created["user_id"] == user_id
        assert len(fake_db.rows("categories")) == 2


# =============================================================================
# Transactions
# =============================================================================

class TestTransactionService:
    """Tests for TransactionService."""

    def test_notes_round_trip(self):
        assert decode_notes(encode_notes("Cartão Nubank")) == "Cartão Nubank"
        assert encode_notes(None) is None
        assert decode_notes("texto livre") is None

    def test_create_returns_view(self, fake_db, user_id, account_factory):
        account = account_factory()

        view = add_transaction(user_id, account, amount=42.5, category="Mercado", payment_method="pix")

        assert view["category"] == "Mercado"
        assert view["payment_method"] == "pix"
        assert view["date"] == "2025-03-10"
        row = fake_db.row("transactions", view["id"])
        assert row["transaction_date"] == "2025-03-10"
        assert row["is_installment"] is False

    def test_transactions_do_not_touch_balance(self, fake_db, user_id, account_factory):
        account = account_factory(balance=100)

        add_transaction(user_id, account, amount=30)

        assert fake_db.row("bank_accounts", account["id"])["balance"] == 100

    def test_inactive_account_rejected(self, fake_db, user_id, account_factory):
        account = account_factory(is_active=False)

        with pytest.raises(InactiveAccountError):
            add_transaction(user_id, account)

    def test_uncategorized_and_method_name(self, fake_db, user_id, account_factory):
        account = account_factory()
        method = fake_db.seed("payment_methods", [{"user_id": user_id, "name": "Pix Itaú", "is_active": True}])[0]
        row = fake_db.seed("transactions", [{
            "user_id": user_id,
            "type": "expense",
            "description": "Avulsa",
            "amount": 5,
            "account_id": account["id"],
            "payment_method_id": method["id"],
            "transaction_date": "2025-03-02",
        }])[0]

        view = TransactionService.get_transaction(row["id"], user_id)

        assert view["category"] == "Sem categoria"
        assert view["payment_method"] == "Pix Itaú"

    def test_list_filters_and_order(self, fake_db, user_id, account_factory):
        account = account_factory()
        add_transaction(user_id, account, "income", 1000, "Salário", date(2025, 3, 1))
        add_transaction(user_id, account, "expense", 50, "Mercado", date(2025, 3, 15))
        add_transaction(user_id, account, "expense", 70, "Lazer", date(2025, 4, 2))
        fake_db.seed("transactions", [{"user_id": user_id, "type": "transfer", "amount": 1, "transaction_date": "2025-03-20"}])

        march = TransactionService.list_transactions(user_id, date_from=date(2025, 3, 1), date_to=date(2025, 3, 31))
        expenses = TransactionService.list_transactions(user_id, transaction_type="expense")
        lazer = TransactionService.list_transactions(user_id, category="Lazer")

        assert [t["description"] for t in march] == ["Compra", "Compra"]
        assert [t["date"] for t in march] == ["2025-03-15", "2025-03-01"]
        assert {t["type"] for t in expenses} == {"expense"}
        assert [t["amount"] for t in lazer] == [70]

    def test_update_recategorizes_with_new_type(self, fake_db, user_id, account_factory):
        account = account_factory()
        view = add_transaction(user_id, account, category="Mercado")

        updated = TransactionService.update_transaction(
            view["id"], user_id, TransactionUpdate(type="income", category="Reembolso", date=date(2025, 3, 12))
        )

        assert updated["type"] == "income"
        assert updated["category"] == "Reembolso"
        assert updated["date"] == "2025-03-12"
        created = next(c for c in fake_db.rows("categories") if c["name"] == "Reembolso")
        assert created["type"] == "income"

    def test_delete(self, fake_db, user_id, account_factory):
        view = add_transaction(user_id, account_factory())

        TransactionService.delete_transaction(view["id"], user_id)

        with pytest.raises(ResourceNotFoundError):
            TransactionService.get_transaction(view["id"], user_id)

    def test_export_csv(self, fake_db, user_id, account_factory):
        account = account_factory()
        add_transaction(user_id, account, amount=12.5, category="Padaria", description="Pão")

        csv_text = TransactionService.export_csv(user_id)

        assert csv_text.splitlines()[1] == "Despesa,Pão,Padaria,2025-03-10,12.5"


# =============================================================================
# Transfers
# =============================================================================

class TestTransferService:
    """Tests for TransferService."""

    def test_transfer_moves_money(self, fake_db, user_id, account_factory):
        source = account_factory(name="Nubank", balance=500)
        target = account_factory(name="Poupança", balance=10.05)

        transfer = TransferService.create_transfer(
            user_id,
            TransferCreate(from_account_id=source["id"], to_account_id=target["id"], amount=200.10, date=date(2025, 3, 3)),
        )

        assert fake_db.row("bank_accounts", source["id"])["balance"] == 299.9
        assert fake_db.row("bank_accounts", target["id"])["balance"] == 210.15
        assert transfer["description"] == "Transferência Nubank → Poupança"
        assert transfer["date"] == "2025-03-03"

    def test_same_account_rejected(self, fake_db, user_id, account_factory):
        account = account_factory(balance=100)

        with pytest.raises(SameAccountTransferError):
            TransferService.create_transfer(
                user_id, TransferCreate(from_account_id=account["id"], to_account_id=account["id"], amount=1)
            )

    def test_insufficient_balance(self, fake_db, user_id, account_factory):
        source, target = account_factory(balance=10), account_factory()

        with pytest.raises(InsufficientBalanceError):
            TransferService.create_transfer(
                user_id, TransferCreate(from_account_id=source["id"], to_account_id=target["id"], amount=10.01)
            )

        assert fake_db.rows("transfers") == []
        assert fake_db.row("bank_accounts", source["id"])["balance"] == 10

    def test_exact_balance_allowed(self, fake_db, user_id, account_factory):
        source, target = account_factory(balance=10), account_factory()

        TransferService.create_transfer(
            user_id, TransferCreate(from_account_id=source["id"], to_account_id=target["id"], amount=10)
        )

        assert fake_db.row("bank_accounts", source["id"])["balance"] == 0.0

    def test_inactive_destination_rejected(self, fake_db, user_id, account_factory):
        source, target = account_factory(balance=100), account_factory(is_active=False)

        with pytest.raises(InactiveAccountError):
            TransferService.create_transfer(
                user_id, TransferCreate(from_account_id=source["id"], to_account_id=target["id"], amount=1)
            )

    def test_list_newest_first(self, fake_db, user_id, account_factory):
        source, target = account_factory(balance=100), account_factory()
        for day in (1, 5, 3):
            TransferService.create_transfer(
                user_id,
                TransferCreate(from_account_id=source["id"], to_account_id=target["id"], amount=1, date=date(2025, 3, day)),
            )

        transfers = TransferService.list_transfers(user_id, limit=2)

        assert [t["date"] for t in transfers] == ["2025-03-05", "2025-03-03"]


# =============================================================================
# Budgets, Goals & Dashboard
# =============================================================================

class TestBudgetService:
    """Tests for BudgetService and GoalService."""

    def test_analysis_uses_month_expenses(self, fake_db, user_id, account_factory):
        account = account_factory()
        BudgetService.create_budget(user_id, BudgetCreate(category="Mercado", amount=100, month="2025-03"))
        add_transaction(user_id, account, "expense", 85, "Mercado", date(2025, 3, 31))
        add_transaction(user_id, account, "expense", 500, "Mercado", date(2025, 4, 1))

        analysis = BudgetService.analyze(user_id, "2025-03")

        assert analysis["items"][0]["status"] == "warning"
        assert float(analysis["items"][0]["spent"]) == 85.0

    def test_goals_newest_first(self, fake_db, user_id):
        GoalService.create_goal(user_id, GoalCreate(name="Viagem", target_amount=5000))
        GoalService.create_goal(user_id, GoalCreate(name="Reserva", target_amount=10000))

        assert [g["name"] for g in GoalService.list_goals(user_id)] == ["Reserva", "Viagem"]

    def test_missing_budget(self, fake_db, user_id):
        with pytest.raises(ResourceNotFoundError):
            BudgetService.delete_budget(str(uuid4()), user_id)


class TestDashboardService:
    """Tests for DashboardService."""

    def test_summary(self, fake_db, user_id, account_factory):
        account = account_factory(balance=1000.10)
        account_factory(balance=-0.10)
        add_transaction(user_id, account, "income", 3000, "Salário", date(2025, 3, 5))
        add_transaction(user_id, account, "expense", 750, "Moradia", date(2025, 3, 6))
        add_transaction(user_id, account, "expense", 250, "Mercado", date(2025, 3, 7))
        add_transaction(user_id, account, "expense", 999, "Mercado", date(2025, 2, 7))

        summary = DashboardService.get_summary(user_id, "2025-03")

        assert summary["total_balance"] == 1000.0
        assert summary["monthly_income"] == 3000.0
        assert summary["monthly_expenses"] == 1000.0
        assert summary["savings"] == 2000.0
        assert summary["savings_rate"] == 66.7
        assert [c["category"] for c in summary["expenses_by_category"]] == ["Moradia", "Mercado"]
        assert [c["percentage"] for c in summary["expenses_by_category"]] == [75.0, 25.0]
        assert len(summary["recent_transactions"]) == 4

    def test_save_report_with_lines(self, fake_db, user_id, account_factory):
        account = account_factory()
        add_transaction(user_id, account, "income", 100, "Salário", date(2025, 3, 5))
        add_transaction(user_id, account, "expense", 40, "Mercado", date(2025, 3, 6))

        report = DashboardService.save_report(
            user_id,
            ReportSaveRequest(title="Março", period_start=date(2025, 3, 1), period_end=date(2025, 3, 31)),
        )

        assert report["line_count"] == 2
        assert report["net_total"] == 60.0
        lines = fake_db.rows("financial_report_lines")
        assert {line["report_id"] for line in lines} == {report["id"]}
        assert [r["title"] for r in DashboardService.list_reports(user_id)] == ["Março"]

    def test_empty_report_rejected(self, fake_db, user_id):
        with pytest.raises(EmptyReportError):
            DashboardService.save_report(
                user_id,
                ReportSaveRequest(title="Vazio", period_start=date(2025, 1, 1), period_end=date(2025, 1, 31)),
            )
        assert fake_db.rows("financial_reports") == []
