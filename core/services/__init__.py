# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .account_service import AccountService
from .payment_method_service import PaymentMethodService
from .card_service import CardService
from .category_service import CategoryService
from .transaction_service import TransactionService
from .transfer_service import TransferService
from .budget_service import BudgetService, GoalService
from .dashboard_service import DashboardService
from .task_service import TaskService
from .vehicle_service import VehicleService
from .wellness_service import WellnessService
from .preferences_service import PreferencesService

__all__ = [
    "AccountService",
    "PaymentMethodService",
    "CardService",
    "CategoryService",
    "TransactionService",
    "TransferService",
    "BudgetService",
    "GoalService",
    "DashboardService",
    "TaskService",
    "VehicleService",
    "WellnessService",
    "PreferencesService",
]
