#!/usr/bin/env python3
# =============================================================================
# scripts/seed_demo.py - Demo Data Seeder
# =============================================================================
# Inserts a small, realistic data set for one user through the service layer:
# accounts, a card, payment methods, categories and a month of transactions.
#
# Usage:
#   python scripts/seed_demo.py <user-uuid>
#
# Prerequisites:
#   - SUPABASE_URL and SUPABASE_SERVICE_KEY set (.env file)
#   - The user exists in Supabase Auth
# =============================================================================

import os
import sys
from datetime import date, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.models.accounts import AccountCreate, PaymentMethodCreate
from core.models.cards import CardCreate
from core.models.transactions import CategoryCreate, TransactionCreate
from core.services.account_service import AccountService
from core.services.card_service import CardService
from core.services.category_service import CategoryService
from core.services.payment_method_service import PaymentMethodService
from core.services.transaction_service import TransactionService

ACCOUNTS = [
    AccountCreate(name="Conta Nubank", type="checking", bank="nubank", color="#8A05BE", balance=3200.00),
    AccountCreate(name="Poupança Itaú", type="savings", bank="itau", color="#EC7000", balance=8500.00),
    AccountCreate(name="Carteira", type="wallet", icon="👛", color="#16A34A", balance=150.00),
]

CATEGORIES = [
    ("Salário", "income"),
    ("Freelance", "income"),
    ("Alimentação", "expense"),
    ("Transporte", "expense"),
    ("Moradia", "expense"),
    ("Lazer", "expense"),
    ("Saúde", "expense"),
]

# (days ago, type, description, amount, category, payment method label)
TRANSACTIONS = [
    (28, "income", "Salário", 6500.00, "Salário", "ted"),
    (26, "expense", "Aluguel", 1800.00, "Moradia", "pix"),
    (24, "expense", "Mercado", 412.35, "Alimentação", "Cartão Nubank"),
    (20, "expense", "Uber", 38.90, "Transporte", "Cartão Nubank"),
    (18, "income", "Projeto site", 1200.00, "Freelance", "pix"),
    (15, "expense", "Farmácia", 87.40, "Saúde", "Cartão Nubank"),
    (12, "expense", "Cinema", 64.00, "Lazer", "pix"),
    (9, "expense", "Padaria", 23.50, "Alimentação", "Dinheiro"),
    (6, "expense", "Combustível", 250.00, "Transporte", "Cartão Nubank"),
    (3, "expense", "Restaurante", 132.80, "Alimentação", "Cartão Nubank"),
]


def main():
    """Seed demo data for the user given on the command line."""
    if len(sys.argv) < 2:
        print("Usage: python scripts/seed_demo.py <user-uuid>")
        sys.exit(1)
    user_id = sys.argv[1]

    print("=" * 60)
    print("Aurum Demo Seeder")
    print("=" * 60)

    accounts = [AccountService.create_account(user_id, account) for account in ACCOUNTS]
    checking = accounts[0]
    print(f"  accounts:         {len(accounts)}")

    card = CardService.create_card(
        user_id,
        CardCreate(
            provider_id="nubank",
            account_id=checking["id"],
            alias="Roxinho",
            last_four_digits="4242",
            type="credit",
            credit_limit=5000,
            due_day=10,
            closing_day=3,
        ),
    )
    print(f"  cards:            1 ({card['alias']})")

    methods = [
        PaymentMethodCreate(name="Pix", type="pix", account_id=checking["id"], icon="⚡"),
        PaymentMethodCreate(name="Dinheiro", type="cash", account_id=accounts[2]["id"], icon="💵"),
        PaymentMethodCreate(name="Cartão Nubank", type="credit_card", account_id=checking["id"], card_id=card["id"]),
    ]
    for method in methods:
        PaymentMethodService.create_method(user_id, method)
    print(f"  payment methods:  {len(methods)}")

    for name, kind in CATEGORIES:
        CategoryService.get_or_create(user_id, CategoryCreate(name=name, type=kind))
    print(f"  categories:       {len(CATEGORIES)}")

    today = date.today()
    for days_ago, kind, description, amount, category, method in TRANSACTIONS:
        TransactionService.create_transaction(
            user_id,
            TransactionCreate(
                type=kind,
                description=description,
                amount=amount,
                category=category,
                date=today - timedelta(days=days_ago),
                account_id=checking["id"],
                payment_method=method,
            ),
        )
    print(f"  transactions:     {len(TRANSACTIONS)}")

    print()
    print("Done.")


if __name__ == "__main__":
    main()
