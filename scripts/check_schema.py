#!/usr/bin/env python3
# =============================================================================
# scripts/check_schema.py - Backend Schema Probe
# =============================================================================
# Runs a `select * limit 1` against every table and view the API uses and
# reports which ones are reachable with the configured service key.
#
# Usage:
#   python scripts/check_schema.py
#
# Exit code is 1 when any table is missing or unreadable.
# =============================================================================

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from lib.supabase_client import SupabaseClient, SupabaseClientError

TABLES = [
    # Finance
    "bank_accounts",
    "cards",
    "payment_methods",
    "categories",
    "transactions",
    "transfers",
    "budgets",
    "financial_goals",
    "financial_reports",
    "financial_report_lines",
    # Task board
    "task_projects",
    "task_boards",
    "task_columns",
    "tasks",
    "task_comments",
    # Fleet
    "vehicles",
    "drivers",
    "fuel_logs",
    "odometer_readings",
    "maintenance_events",
    "fines",
    "documents",
    "v_vehicle_proximas_manutencoes",
    # Health tracking
    "health_weight_logs",
    "health_activities",
    "health_sleep_logs",
    "health_goals",
    # Settings
    "user_preferences",
]


def probe(table: str) -> str | None:
    """Return None when the table answers, else the error message."""
    client = SupabaseClient.get_client()
    try:
        SupabaseClient.execute(client.table(table).select("*").limit(1), code="PROBE_FAILED")
    except SupabaseClientError as e:
        return e.message
    return None


def main():
    print("=" * 60)
    print("Aurum Schema Check")
    print("=" * 60)

    failures = 0
    for table in TABLES:
        error = probe(table)
        if error is None:
            print(f"  OK      {table}")
        else:
            failures += 1
            print(f"  MISSING {table}: {error}")

    print()
    print(f"{len(TABLES) - failures}/{len(TABLES)} reachable")
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
