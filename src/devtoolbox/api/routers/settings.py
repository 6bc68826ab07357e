"""Settings router - editor preferences."""

from fastapi import APIRouter, Depends

from devtoolbox.api.dependencies import get_preferences_store
from devtoolbox.infrastructure.storage.preferences import PreferencesStore, PreferencesUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_user_settings(preferences: PreferencesStore = Depends(get_preferences_store)):
    return preferences.load().user_settings()


@router.patch("")
async def update_user_settings(
    patch: PreferencesUpdate,
    preferences: PreferencesStore = Depends(get_preferences_store),
):
    """Apply a partial update; empty strings and non-positive sizes are ignored."""
    return preferences.update(patch).user_settings()
