# =============================================================================
# app/routers/preferences.py - User Preference Endpoints
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CurrentUser
from core.models.preferences import PreferencesResponse, PreferencesUpdate
from core.services.preferences_service import PreferencesService

router = APIRouter()


@router.get("", response_model=PreferencesResponse)
async def get_preferences(user: CurrentUser):
    """Caller's preferences; defaults are stored on first access."""
    return PreferencesService.get_preferences(user.id)


@router.patch("", response_model=PreferencesResponse)
async def update_preferences(body: PreferencesUpdate, user: CurrentUser):
    return PreferencesService.update_preferences(user.id, body)
