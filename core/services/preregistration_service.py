"""
Pre-registration service - leads captured on the home page.
"""

import logging
from datetime import datetime
from typing import List, Optional
from core.domain.models import Preregistration
from core.interfaces.repositories import IPreregistrationRepository
from core.utils.whatsapp import whatsapp_link

logger = logging.getLogger(__name__)

WHATSAPP_TEMPLATE = (
    "Hola {organizer}! 👋 Quiero pre-inscribirme a la *{event_name}*.\n"
    "*Nombre:* {name}\n"
    "*WhatsApp:* {whatsapp}\n"
    "Quedo atento(a) a la información y el itinerario. 🥾"
)


class PreregistrationService:
    """Service for home page pre-registrations"""

    def __init__(
        self,
        prereg_repo: IPreregistrationRepository,
        event_name: str,
        organizer_name: str,
        whatsapp_number: str,
    ):
        self.prereg_repo = prereg_repo
        self.event_name = event_name
        self.organizer_name = organizer_name
        self.whatsapp_number = whatsapp_number

    async def preregister(self, name: str, whatsapp: str) -> tuple[bool, str, Optional[str]]:
        """
        Store the lead and build the WhatsApp follow-up link.
        Returns: (success, message_key, whatsapp_url)
        """
        name, whatsapp = (name or "").strip(), (whatsapp or "").strip()
        if not name or not whatsapp:
            return False, "missing_fields", None

        await self.prereg_repo.create(Preregistration(
            name=name,
            whatsapp=whatsapp,
            event_name=self.event_name,
            created_at=datetime.now(),
        ))
        logger.info(f"[PREREG] New pre-registration: {name}")

        message = WHATSAPP_TEMPLATE.format(
            organizer=self.organizer_name,
            event_name=self.event_name,
            name=name,
            whatsapp=whatsapp,
        )
        return True, "preregistration_saved", whatsapp_link(self.whatsapp_number, message)

    async def list_preregistrations(self) -> List[Preregistration]:
        leads = await self.prereg_repo.get_all()
        return sorted(leads, key=lambda p: p.created_at.timestamp() if p.created_at else 0, reverse=True)
