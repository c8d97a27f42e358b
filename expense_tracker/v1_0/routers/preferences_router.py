from fastapi import APIRouter, HTTPException, Depends
from dependency_injector.wiring import inject, Provide

from expense_tracker.core.security.deps import AuthUser, get_current_user
from expense_tracker.app_containers import ApplicationContainer
from expense_tracker.core.logger import logger

from expense_tracker.v1_0.schemas import PreferencesUpdate
from expense_tracker.v1_0.entities import PreferencesDTO, PreferencesSavedDTO
from expense_tracker.v1_0.services import PreferencesService

router = APIRouter(prefix="/preferences", tags=["Preferences"])

@router.get("", response_model=PreferencesDTO, summary="Get the caller's preferences (defaults when unset)")
@inject
async def get_preferences(
    user: AuthUser = Depends(get_current_user),
    service: PreferencesService = Depends(
        Provide[ApplicationContainer.api_container.preferences_service]
    ),
):
    try:
        return await service.get(user.user_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[PreferencesRouter] get error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch preferences")

@router.post("", response_model=PreferencesSavedDTO, summary="Replace the caller's preferences")
@inject
async def save_preferences(
    request: PreferencesUpdate,
    user: AuthUser = Depends(get_current_user),
    service: PreferencesService = Depends(
        Provide[ApplicationContainer.api_container.preferences_service]
    ),
):
    try:
        return await service.save(user.user_id, request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[PreferencesRouter] save error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to save preferences")
