# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Aurum API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    AurumException,
    aurum_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    accounts,
    budgets,
    cards,
    categories,
    dashboard,
    health,
    payment_methods,
    preferences,
    tasks,
    transactions,
    transfers,
    vehicles,
    wellness,
)
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The Supabase client is created lazily on first use, so startup only
    logs the effective configuration.
    """
    logger.info(f"Starting Aurum API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if not settings.SUPABASE_JWT_SECRET:
        logger.info("SUPABASE_JWT_SECRET not set; only JWKS-signed tokens will verify")

    yield

    logger.info("Shutting down Aurum API")


# Create FastAPI application
app = FastAPI(
    title="Aurum API",
    description="""
## Personal Finance, Tasks & Fleet API

Aurum keeps personal finances, a kanban task board and a small vehicle fleet
on top of a hosted Supabase Postgres. Authentication is Supabase Auth: send
the user's access token as `Authorization: Bearer <token>`.

### Modules

| Module | What it covers |
|--------|----------------|
| **Accounts** | Bank accounts, balances, payment methods, cards |
| **Transactions** | Income/expenses, categories, transfers, CSV export |
| **Budgets & Goals** | Monthly category budgets, savings goals |
| **Dashboard** | Monthly summary, financial reports |
| **Tasks** | Projects, boards, columns, tasks, comments, metrics |
| **Fleet** | Vehicles, drivers, fuel, maintenance, fines, documents |

Request and response bodies use camelCase keys.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify Supabase tokens and read the caller's profile"},
        {"name": "Accounts", "description": "Bank accounts and the banks catalog"},
        {"name": "Payment Methods", "description": "Payment methods linked to accounts"},
        {"name": "Cards", "description": "Credit and debit cards, providers catalog"},
        {"name": "Categories", "description": "Transaction categories"},
        {"name": "Transactions", "description": "Income and expenses"},
        {"name": "Transfers", "description": "Transfers between accounts"},
        {"name": "Budgets", "description": "Monthly budgets and analysis"},
        {"name": "Goals", "description": "Financial goals"},
        {"name": "Dashboard", "description": "Monthly summary"},
        {"name": "Reports", "description": "Financial reports"},
        {"name": "Tasks", "description": "Kanban task board"},
        {"name": "Fleet", "description": "Vehicle fleet management"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(AurumException)
async def handle_aurum_exception(request: Request, exc: AurumException):
    """Handle domain exceptions (not found, business rules)."""
    return await aurum_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_error(request: Request, exc: SupabaseClientError):
    """Handle backend failures."""
    return await supabase_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(auth_routes.router, prefix=f"{API_PREFIX}/auth", tags=["Auth"])

# Health check endpoints
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])

# Finance
app.include_router(accounts.router, prefix=f"{API_PREFIX}/accounts", tags=["Accounts"])
app.include_router(payment_methods.router, prefix=f"{API_PREFIX}/payment-methods", tags=["Payment Methods"])
app.include_router(cards.router, prefix=f"{API_PREFIX}/cards", tags=["Cards"])
app.include_router(categories.router, prefix=f"{API_PREFIX}/categories", tags=["Categories"])
app.include_router(transactions.router, prefix=f"{API_PREFIX}/transactions", tags=["Transactions"])
app.include_router(transfers.router, prefix=f"{API_PREFIX}/transfers", tags=["Transfers"])
app.include_router(budgets.router, prefix=f"{API_PREFIX}/budgets", tags=["Budgets"])
app.include_router(budgets.goals_router, prefix=f"{API_PREFIX}/goals", tags=["Goals"])
app.include_router(dashboard.router, prefix=f"{API_PREFIX}/dashboard", tags=["Dashboard"])
app.include_router(dashboard.reports_router, prefix=f"{API_PREFIX}/reports", tags=["Reports"])

# Task board
app.include_router(tasks.router, prefix=f"{API_PREFIX}/tasks", tags=["Tasks"])

# Vehicle fleet
app.include_router(vehicles.router, prefix=f"{API_PREFIX}/fleet", tags=["Fleet"])

# Health tracking
app.include_router(wellness.router, prefix=f"{API_PREFIX}/wellness", tags=["Wellness"])

# Per-user settings
app.include_router(preferences.router, prefix=f"{API_PREFIX}/preferences", tags=["Preferences"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Aurum API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
        "currency": settings.DEFAULT_CURRENCY,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
