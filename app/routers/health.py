# =============================================================================
# app/routers/health.py - Probes
# =============================================================================
# Unauthenticated endpoints for load balancers and orchestrators:
# /health (static info), /health/ready (database round-trip), /health/live.
# =============================================================================

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"

# Cheapest table every deployment has
PROBE_TABLE = "bank_accounts"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    database: str
    latency_ms: float | None = None


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _probe_database() -> ChecksResponse:
    """Run a one-row select and report the outcome."""
    started = time.perf_counter()
    try:
        client = SupabaseClient.get_client()
        client.table(PROBE_TABLE).select("id").limit(1).execute()
    except Exception as e:
        logger.warning(f"Readiness probe failed: {e}")
        return ChecksResponse(database=f"unhealthy: {str(e)[:50]}")
    elapsed = (time.perf_counter() - started) * 1000
    return ChecksResponse(database="healthy", latency_ms=round(elapsed, 1))


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Static service info; never touches the database."""
    return HealthResponse(
        status="healthy",
        timestamp=_utc_stamp(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness probe.

    Always 200; `status` is "degraded" when Supabase can't be reached so
    the body explains why instead of a bare 503.
    """
    checks = _probe_database()
    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=_utc_stamp(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_utc_stamp())
