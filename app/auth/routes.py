# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login is handled by Supabase Auth client-side.
# These routes only describe the caller behind a verified token.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, UserResponse, VerifyResponse
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse, response_model_by_alias=True)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current user's profile.

    Returns:
        UserResponse: id, email, role and the number of active accounts
    """
    client = SupabaseClient.get_client()
    response = SupabaseClient.execute(
        client.table("bank_accounts")
        .select("id", count="exact")
        .eq("user_id", str(user.id))
        .eq("is_active", True),
        code="PROFILE_FETCH_FAILED",
        message="Failed to count accounts",
    )

    return UserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        active_accounts=response.count or 0,
    )


@router.get("/verify", response_model=VerifyResponse, response_model_by_alias=True)
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> VerifyResponse:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return VerifyResponse(valid=True, user_id=str(user.id), email=user.email)
