# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# Environment-driven configuration for the Aurum API (pydantic-settings).
#
# Usage:
#   from app.config import settings
#   settings.DASHBOARD_TOP_CATEGORIES
#
# Values come from the process environment first, then from a `.env` file in
# the working directory when one exists. Bad values fail at import time.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Aurum runtime settings.

    Only the three Supabase connection values are mandatory; everything else
    has a development default.
    """

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Project URL, e.g. https://<ref>.supabase.co"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Public anon key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="service_role key; queries run with RLS bypassed"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Shared secret for HS256 access tokens (empty: JWKS only)"
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment stage"
    )

    DEBUG: bool = Field(
        default=False,
        description="DEBUG log level and uvicorn auto-reload"
    )

    API_HOST: str = Field(default="0.0.0.0", description="Bind address for `python -m app.main`")

    API_PORT: int = Field(default=8000, ge=1, le=65535, description="Bind port for `python -m app.main`")

    # Comma-separated; only enforced in production
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed browser origins"
    )

    # -------------------------------------------------------------------------
    # Finance
    # -------------------------------------------------------------------------

    DEFAULT_CURRENCY: str = Field(
        default="BRL",
        min_length=3,
        max_length=3,
        description="ISO 4217 code reported by the root endpoint"
    )

    DASHBOARD_TOP_CATEGORIES: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Expense categories shown individually before folding into 'Outros'"
    )

    BUDGET_WARNING_PERCENT: float = Field(
        default=80.0,
        gt=0.0,
        lt=100.0,
        description="Spent percentage at which a budget is flagged as 'warning'"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS_ORIGINS split on commas, blanks dropped."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Build Settings once per process."""
    return Settings()


settings = get_settings()
