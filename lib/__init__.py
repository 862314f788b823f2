# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - aggregations.py: Monthly summaries, category shares, budgets, reports
# - task_board.py: Kanban ordering, filters, comparators and metrics
# - fleet_reports.py: Vehicle cost report
# - wellness_stats.py: Weight, activity and sleep stats with insights
# - catalogs.py: Static banks / card providers catalogs
# - utils.py: Shared utilities (money, dates, slugs, base error)
#
# Everything except supabase_client.py is pure and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError, is_unique_violation
from lib.utils import ApplicationError, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "is_unique_violation",
    # Utils
    "ApplicationError",
    "normalize_uuid",
]
