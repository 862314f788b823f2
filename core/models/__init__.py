# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: CamelModel base (camelCase on the wire)
# - accounts.py: bank accounts, payment methods, banks catalog
# - cards.py: cards and the card providers catalog
# - transactions.py: categories, transactions, transfers
# - budgets.py: monthly budgets and financial goals
# - dashboard.py: dashboard summary and financial reports
# - tasks.py: kanban workspace (projects, boards, columns, tasks)
# - vehicles.py: vehicle fleet
# - wellness.py: health tracking logs, goals and summary
# - preferences.py: per-user preferences
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import CamelModel

# -----------------------------------------------------------------------------
# Accounts & Payment Methods
# -----------------------------------------------------------------------------
from .accounts import (
    AccountCreate,
    AccountResponse,
    AccountType,
    AccountUpdate,
    BalanceAdjustment,
    BankInfo,
    PaymentMethodCreate,
    PaymentMethodResponse,
    PaymentMethodType,
    PaymentMethodUpdate,
)

# -----------------------------------------------------------------------------
# Cards
# -----------------------------------------------------------------------------
from .cards import (
    CardCreate,
    CardProvider,
    CardResponse,
    CardType,
    CardUpdate,
)

# -----------------------------------------------------------------------------
# Categories, Transactions & Transfers
# -----------------------------------------------------------------------------
from .transactions import (
    CategoryCreate,
    CategoryResponse,
    CategoryType,
    TransactionCreate,
    TransactionResponse,
    TransactionType,
    TransactionUpdate,
    TransferCreate,
    TransferResponse,
)

# -----------------------------------------------------------------------------
# Budgets & Goals
# -----------------------------------------------------------------------------
from .budgets import (
    BudgetAnalysis,
    BudgetAnalysisItem,
    BudgetCreate,
    BudgetResponse,
    BudgetStatus,
    BudgetUpdate,
    GoalCreate,
    GoalResponse,
    GoalStatus,
    GoalUpdate,
)

# -----------------------------------------------------------------------------
# Dashboard & Reports
# -----------------------------------------------------------------------------
from .dashboard import (
    CategoryBreakdownItem,
    DashboardSummary,
    FinancialReport,
    ReportCategoryLine,
    ReportSaveRequest,
    SavedReportResponse,
)

# -----------------------------------------------------------------------------
# Task Board
# -----------------------------------------------------------------------------
from .tasks import (
    BoardCreate,
    BoardResponse,
    ColumnCategory,
    ColumnCreate,
    ColumnReorder,
    ColumnResponse,
    CommentCreate,
    CommentResponse,
    ProjectResponse,
    RenameRequest,
    TaskCreate,
    TaskFilters,
    TaskMetrics,
    TaskMove,
    TaskPriority,
    TaskResponse,
    TaskType,
    TaskUpdate,
)

# -----------------------------------------------------------------------------
# Vehicle Fleet
# -----------------------------------------------------------------------------
from .vehicles import (
    DocumentCreate,
    DocumentResponse,
    DocumentType,
    DocumentUpdate,
    DriverCreate,
    DriverResponse,
    DriverUpdate,
    FineCreate,
    FineResponse,
    FineStatus,
    FineUpdate,
    FuelLogCreate,
    FuelLogResponse,
    FuelLogUpdate,
    MaintenanceCreate,
    MaintenanceResponse,
    MaintenanceStatus,
    MaintenanceUpdate,
    UpcomingMaintenance,
    VehicleCostReport,
    VehicleCreate,
    VehicleResponse,
    VehicleStatus,
    VehicleStatusCounts,
    VehicleUpdate,
)

# -----------------------------------------------------------------------------
# Health Tracking
# -----------------------------------------------------------------------------
from .wellness import (
    ActivityCreate,
    ActivityResponse,
    ActivityUpdate,
    HealthGoalCreate,
    HealthGoalResponse,
    HealthGoalUpdate,
    HealthSummary,
    SleepLogCreate,
    SleepLogResponse,
    SleepLogUpdate,
    WeightLogCreate,
    WeightLogResponse,
    WeightLogUpdate,
)

# -----------------------------------------------------------------------------
# Preferences
# -----------------------------------------------------------------------------
from .preferences import PreferencesResponse, PreferencesUpdate

__all__ = [
    "CamelModel",
    # Accounts
    "AccountCreate",
    "AccountResponse",
    "AccountType",
    "AccountUpdate",
    "BalanceAdjustment",
    "BankInfo",
    "PaymentMethodCreate",
    "PaymentMethodResponse",
    "PaymentMethodType",
    "PaymentMethodUpdate",
    # Cards
    "CardCreate",
    "CardProvider",
    "CardResponse",
    "CardType",
    "CardUpdate",
    # Transactions
    "CategoryCreate",
    "CategoryResponse",
    "CategoryType",
    "TransactionCreate",
    "TransactionResponse",
    "TransactionType",
    "TransactionUpdate",
    "TransferCreate",
    "TransferResponse",
    # Budgets & Goals
    "BudgetAnalysis",
    "BudgetAnalysisItem",
    "BudgetCreate",
    "BudgetResponse",
    "BudgetStatus",
    "BudgetUpdate",
    "GoalCreate",
    "GoalResponse",
    "GoalStatus",
    "GoalUpdate",
    # Dashboard
    "CategoryBreakdownItem",
    "DashboardSummary",
    "FinancialReport",
    "ReportCategoryLine",
    "ReportSaveRequest",
    "SavedReportResponse",
    # Tasks
    "BoardCreate",
    "BoardResponse",
    "ColumnCategory",
    "ColumnCreate",
    "ColumnReorder",
    "ColumnResponse",
    "CommentCreate",
    "CommentResponse",
    "ProjectResponse",
    "RenameRequest",
    "TaskCreate",
    "TaskFilters",
    "TaskMetrics",
    "TaskMove",
    "TaskPriority",
    "TaskResponse",
    "TaskType",
    "TaskUpdate",
    # Vehicles
    "DocumentCreate",
    "DocumentResponse",
    "DocumentType",
    "DocumentUpdate",
    "DriverCreate",
    "DriverResponse",
    "DriverUpdate",
    "FineCreate",
    "FineResponse",
    "FineStatus",
    "FineUpdate",
    "FuelLogCreate",
    "FuelLogResponse",
    "FuelLogUpdate",
    "MaintenanceCreate",
    "MaintenanceResponse",
    "MaintenanceStatus",
    "MaintenanceUpdate",
    "UpcomingMaintenance",
    "VehicleCostReport",
    "VehicleCreate",
    "VehicleResponse",
    "VehicleStatus",
    "VehicleStatusCounts",
    "VehicleUpdate",
    # Health tracking
    "ActivityCreate",
    "ActivityResponse",
    "ActivityUpdate",
    "HealthGoalCreate",
    "HealthGoalResponse",
    "HealthGoalUpdate",
    "HealthSummary",
    "SleepLogCreate",
    "SleepLogResponse",
    "SleepLogUpdate",
    "WeightLogCreate",
    "WeightLogResponse",
    "WeightLogUpdate",
    # Preferences
    "PreferencesResponse",
    "PreferencesUpdate",
]
