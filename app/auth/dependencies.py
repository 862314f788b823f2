# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Verifies the access token issued by Supabase Auth. The API never issues
# tokens or stores passwords; it only checks signatures and reads claims.
#
# Supports both:
# - HS256 tokens signed with the project JWT secret
# - ES256 / RS256 tokens signed with the project's JWKS keys
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/accounts")
#   async def list_accounts(user: AuthUser = Depends(get_current_user)):
#       ...
# =============================================================================

import logging
import time
from typing import Any
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()

JWT_AUDIENCE = "authenticated"
ASYMMETRIC_ALGORITHMS = ("ES256", "RS256")

# Cache for JWKS keys
_jwks_cache: dict[str, Any] = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """JWKS endpoint of the Supabase project."""
    return f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict[str, Any]:
    """Fetch the project JWKS, cached for JWKS_CACHE_TTL seconds."""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(_get_jwks_url(), timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = now
        logger.debug(f"Fetched {len(_jwks_cache.get('keys', []))} JWKS keys")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys beat no keys
        return _jwks_cache or {"keys": []}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_signing_key(token: str) -> tuple[Any, str]:
    """
    Pick the verification key for a token based on its header.

    Returns:
        Tuple of (key, algorithm). The key is the shared secret for HS256
        or a JWK dict for asymmetric algorithms.

    Raises:
        HTTPException: 401 if no usable key exists
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise _unauthorized(f"Invalid token header: {e}")

    alg = header.get("alg", "HS256")

    if alg == "HS256":
        if not settings.SUPABASE_JWT_SECRET:
            logger.error("HS256 token received but SUPABASE_JWT_SECRET is not configured")
            raise _unauthorized("Token signing secret is not configured")
        return settings.SUPABASE_JWT_SECRET, alg

    if alg in ASYMMETRIC_ALGORITHMS:
        kid = header.get("kid")
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg
        logger.warning(f"No JWKS key matches kid={kid}")
        raise _unauthorized("Unknown signing key")

    raise _unauthorized(f"Unsupported token algorithm: {alg}")


def decode_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and build the AuthUser.

    Raises:
        HTTPException: 401 if the token is invalid, expired or has no subject
    """
    signing_key, algorithm = _resolve_signing_key(token)

    try:
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=JWT_AUDIENCE,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise _unauthorized("Invalid token: malformed user ID")

    return AuthUser(id=user_uuid, email=payload.get("email"), role=payload.get("role"))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the Bearer token.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    user = decode_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user

