# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase singleton for an in-memory fake
# - Provides a TestClient authenticated as a fixed user
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from uuid import UUID

import pytest

from tests.fakes import FakeSupabase

USER_ID = UUID("11111111-1111-4111-8111-111111111111")
OTHER_USER_ID = UUID("22222222-2222-4222-8222-222222222222")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def user_id():
    """The authenticated user's id."""
    return str(USER_ID)


@pytest.fixture
def other_user_id():
    """A second user, for ownership checks."""
    return str(OTHER_USER_ID)


@pytest.fixture
def fake_db(monkeypatch):
    """In-memory Supabase client installed as the singleton."""
    from lib.supabase_client import SupabaseClient

    fake = FakeSupabase()
    monkeypatch.setattr(SupabaseClient, "_instance", fake)
    return fake


@pytest.fixture
def client(fake_db):
    """TestClient whose requests are authenticated as USER_ID."""
    from fastapi.testclient import TestClient

    from app.auth.dependencies import get_current_user
    from app.auth.models import AuthUser
    from app.main import app

    app.dependency_overrides[get_current_user] = lambda: AuthUser(
        id=USER_ID, email="ana@example.com", role="authenticated"
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def account_factory(fake_db, user_id):
    """Insert bank_accounts rows directly."""
    def make(name="Conta", balance=0.0, is_active=True, owner=None):
        return fake_db.seed("bank_accounts", [{
            "user_id": owner or user_id,
            "name": name,
            "type": "checking",
            "bank": None,
            "icon": "🏦",
            "color": "#3B82F6",
            "balance": balance,
            "is_active": is_active,
        }])[0]
    return make
