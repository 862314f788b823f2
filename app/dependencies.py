# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# Route handlers declare `user: CurrentUser` to require a verified token.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.auth import AuthUser, get_current_user

# Type aliases for dependency injection
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
