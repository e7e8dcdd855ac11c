"""
Settings service - price, bank data and registration period.
"""

import logging
from datetime import date, timedelta
from typing import Optional
from core.domain.models import EventSettings, EventSettingsForm
from core.domain.constants import DEFAULT_REGISTRATION_WINDOW_DAYS
from core.interfaces.repositories import ISettingsRepository
from core.utils.dates import is_registration_open

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for event-wide settings"""

    def __init__(self, settings_repo: ISettingsRepository):
        self.settings_repo = settings_repo

    async def get_stored_settings(self) -> Optional[EventSettings]:
        """Stored settings, or None when the admin never saved them"""
        return await self.settings_repo.get()

    async def get_settings(self) -> EventSettings:
        """Stored settings, or defaults when missing"""
        stored = await self.settings_repo.get()
        if stored is None:
            logger.info("[SETTINGS] No settings stored, using defaults")
            today = date.today()
            return EventSettings(
                registration_start_date=today,
                registration_end_date=today + timedelta(days=DEFAULT_REGISTRATION_WINDOW_DAYS),
            )
        return stored

    async def update_settings(self, form: EventSettingsForm) -> EventSettings:
        saved = await self.settings_repo.upsert(form.to_settings())
        logger.info(
            f"[SETTINGS] Updated: price={saved.registration_price} "
            f"period={saved.registration_start_date}..{saved.registration_end_date}"
        )
        return saved

    async def registration_status(self, today: Optional[date] = None) -> tuple[bool, Optional[EventSettings]]:
        """
        Whether registrations are open today.
        Returns: (open, stored settings or None)
        """
        try:
            stored = await self.settings_repo.get()
        except Exception as e:
            # Registrations stay open if settings can't be loaded
            logger.error(f"[SETTINGS] Error loading registration dates: {e}", exc_info=True)
            return True, None
        is_open = is_registration_open(stored, today)
        logger.debug(f"[SETTINGS] Registration open={is_open} settings={stored}")
        return is_open, stored
