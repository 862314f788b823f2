# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - accounts.py / payment_methods.py / cards.py: Where money lives
# - categories.py / transactions.py / transfers.py: Money movements
# - budgets.py: Budgets and goals
# - dashboard.py: Monthly dashboard and financial reports
# - tasks.py: Kanban task board
# - vehicles.py: Vehicle fleet
# - wellness.py: Health tracking (weight, activities, sleep, goals)
# - preferences.py: Per-user preferences
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import accounts
from . import payment_methods
from . import cards
from . import categories
from . import transactions
from . import transfers
from . import budgets
from . import dashboard
from . import tasks
from . import vehicles
from . import wellness
from . import preferences

__all__ = [
    "health",
    "accounts",
    "payment_methods",
    "cards",
    "categories",
    "transactions",
    "transfers",
    "budgets",
    "dashboard",
    "tasks",
    "vehicles",
    "wellness",
    "preferences",
]
