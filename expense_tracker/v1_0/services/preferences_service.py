import asyncio
from datetime import datetime, timezone

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException
from pydantic import ValidationError

from expense_tracker.core.logger import logger
from expense_tracker.storage.document_store import PreferencesStore
from expense_tracker.v1_0.entities import NotificationsDTO, PreferencesDTO, PreferencesSavedDTO
from expense_tracker.v1_0.schemas import PreferencesUpdate


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class PreferencesService:
    """Display/locale settings and notification flags, one document per user."""

    def __init__(self, store: PreferencesStore) -> None:
        self.store = store

    async def get(self, user_id: str) -> PreferencesDTO:
        """Stored preferences, or the defaults tagged with the caller's id when none exist."""
        try:
            item = await asyncio.to_thread(self.store.get, user_id)
        except (BotoCoreError, ClientError) as e:
            logger.error("[PreferencesService] get failed user=%s: %s", user_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch preferences")

        if not item:
            return PreferencesDTO(user_id=user_id, updated_at=_now_iso())
        try:
            return PreferencesDTO.model_validate({**item, "userId": user_id})
        except ValidationError as e:
            logger.error("[PreferencesService] stored document invalid user=%s: %s", user_id, e)
            raise HTTPException(status_code=500, detail="Failed to fetch preferences")

    async def save(self, user_id: str, payload: PreferencesUpdate) -> PreferencesSavedDTO:
        """Replace the caller's document (last write wins)."""
        prefs = PreferencesDTO(
            user_id=user_id,
            theme=payload.theme,
            currency=payload.currency,
            language=payload.language or "en",
            notifications=payload.notifications or NotificationsDTO(),
            default_category=payload.default_category or "Other",
            updated_at=_now_iso(),
        )
        item = prefs.model_dump(by_alias=True)
        logger.info("[PreferencesService] save user=%s", user_id)
        try:
            await asyncio.to_thread(self.store.put, item)
        except (BotoCoreError, ClientError) as e:
            logger.error("[PreferencesService] save failed user=%s: %s", user_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to save preferences")

        return PreferencesSavedDTO(message="Preferences saved successfully", preferences=prefs)
