# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies Supabase-issued JWTs. Signup/login stay with Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/accounts")
#   async def list_accounts(user: AuthUser = Depends(get_current_user)):
#       return AccountService.list_accounts(user.id)
# =============================================================================

from app.auth.dependencies import decode_token, get_current_user
from app.auth.models import AuthUser, UserResponse, VerifyResponse

__all__ = [
    "decode_token",
    "get_current_user",
    "AuthUser",
    "UserResponse",
    "VerifyResponse",
]
