"""
Souvenir service - kit delivery desk.
"""

import logging
from datetime import datetime
from typing import List
from core.domain.models import (
    Registration, PaymentStatus, SouvenirStatus,
    SouvenirStats, SouvenirLookup,
)
from core.domain.constants import RECENT_DELIVERIES_LIMIT
from core.interfaces.repositories import IRegistrationRepository

logger = logging.getLogger(__name__)


class SouvenirService:
    """Service for souvenir delivery operations"""

    def __init__(self, registration_repo: IRegistrationRepository):
        self.registration_repo = registration_repo

    async def get_stats(self) -> SouvenirStats:
        registrations = await self.registration_repo.get_all()
        total = len(registrations)
        delivered = sum(1 for r in registrations if r.souvenir_status == SouvenirStatus.DELIVERED)
        return SouvenirStats(total=total, delivered=delivered, pending=total - delivered)

    async def get_recent_deliveries(self, limit: int = RECENT_DELIVERIES_LIMIT) -> List[Registration]:
        registrations = await self.registration_repo.get_all()
        delivered = [r for r in registrations if r.souvenir_status == SouvenirStatus.DELIVERED]
        delivered.sort(key=lambda r: r.updated_at.timestamp() if r.updated_at else 0, reverse=True)
        return delivered[:limit]

    async def lookup(self, document_id: str) -> SouvenirLookup:
        """Find a person at the desk and say whether the kit can be handed over"""
        registration = await self.registration_repo.get_by_document(document_id.strip())
        if not registration:
            return SouvenirLookup(status="not_found")
        if registration.souvenir_status == SouvenirStatus.DELIVERED:
            return SouvenirLookup(status="already_delivered", registration=registration)
        if registration.payment_status != PaymentStatus.PAID:
            return SouvenirLookup(status="payment_pending", registration=registration)
        return SouvenirLookup(status="ready", registration=registration)

    async def deliver(self, document_id: str) -> SouvenirLookup:
        """Mark the souvenir delivered (only when the lookup says ready)"""
        result = await self.lookup(document_id)
        if result.status != "ready":
            return result

        updated = await self.registration_repo.update_by_document(result.registration.document_id, {
            "souvenir_status": SouvenirStatus.DELIVERED.value,
            "updated_at": datetime.now().isoformat(),
        })
        logger.info(f"[SOUVENIR] Delivered to {result.registration.full_name} ({result.registration.document_id})")
        return SouvenirLookup(status="delivered", registration=updated or result.registration)
