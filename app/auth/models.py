# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Token-derived identity and the /auth response bodies.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AuthUser(BaseModel):
    """
    Caller identity read from verified token claims.

    Immutable so it can be shared across dependencies of one request.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None


class UserResponse(BaseModel):
    """
    Profile returned by GET /auth/me.

    Combines token claims with a count of the user's active accounts so the
    client can decide whether to run onboarding.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None
    active_accounts: int = 0


class VerifyResponse(BaseModel):
    """Result of GET /auth/verify."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool
    user_id: str
    email: Optional[str] = None
