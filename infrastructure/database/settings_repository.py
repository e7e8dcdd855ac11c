"""
Supabase implementation of event settings repository.
Settings live in a single row keyed by SETTINGS_DOCUMENT_ID.
"""

import logging
from typing import Optional
from core.domain.models import EventSettings
from core.domain.constants import SETTINGS_DOCUMENT_ID
from core.interfaces.repositories import ISettingsRepository
from infrastructure.database.supabase_client import supabase, run_sync

logger = logging.getLogger(__name__)


class SupabaseSettingsRepository(ISettingsRepository):
    """Supabase implementation of settings repository"""

    @run_sync
    def _get_sync(self) -> Optional[dict]:
        response = supabase.table("settings").select("*").eq("id", SETTINGS_DOCUMENT_ID).execute()
        return response.data[0] if response.data else None

    async def get(self) -> Optional[EventSettings]:
        data = await self._get_sync()
        if not data:
            return None
        data.pop("id", None)
        return EventSettings(**data)

    @run_sync
    def _upsert_sync(self, event_settings: EventSettings) -> dict:
        data = event_settings.model_dump(mode="json")
        data["id"] = SETTINGS_DOCUMENT_ID
        response = supabase.table("settings").upsert(data).execute()
        return response.data[0]

    async def upsert(self, event_settings: EventSettings) -> EventSettings:
        data = await self._upsert_sync(event_settings)
        data.pop("id", None)
        return EventSettings(**data)
