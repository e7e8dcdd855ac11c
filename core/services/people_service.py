"""
People service - admin view over registrations.
"""

import logging
from datetime import datetime
from typing import Optional, List, Dict
from core.domain.models import Registration, RegistrationUpdate
from core.domain.constants import REGISTRATION_DAYS
from core.interfaces.repositories import IRegistrationRepository
from core.services.route_service import RouteService
from core.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)


class PeopleService:
    """Service for listing, editing and removing registered people"""

    def __init__(
        self,
        registration_repo: IRegistrationRepository,
        route_service: RouteService,
        registration_service: RegistrationService,
    ):
        self.registration_repo = registration_repo
        self.route_service = route_service
        self.registration_service = registration_service

    async def route_names(self) -> Dict[str, str]:
        routes = await self.route_service.list_routes()
        return {r.id: r.name for r in routes}

    async def search(self, query: Optional[str] = None) -> List[Registration]:
        """All registrations, optionally filtered by document or name"""
        registrations = await self.registration_repo.get_all()
        if query:
            q = query.strip().lower()
            registrations = [
                r for r in registrations
                if q in r.document_id.lower() or q in r.full_name.lower()
            ]
        return sorted(registrations, key=lambda r: r.full_name.lower())

    async def get_person(self, document_id: str) -> Optional[Registration]:
        return await self.registration_repo.get_by_document(document_id)

    async def update_person(self, document_id: str, data: RegistrationUpdate) -> Optional[Registration]:
        update = data.model_dump(exclude_none=True)
        if not update:
            return await self.registration_repo.get_by_document(document_id)
        update["updated_at"] = datetime.now().isoformat()
        person = await self.registration_repo.update_by_document(document_id, update)
        logger.info(f"[PEOPLE] Updated {document_id}: {sorted(update)}")
        return person

    async def delete_person(self, document_id: str) -> tuple[bool, str]:
        """Remove a registration and give its route places back"""
        person = await self.registration_repo.get_by_document(document_id)
        if not person:
            return False, "registration_not_found"

        places = await self.registration_service.places_held(person)
        await self.registration_repo.delete_by_document(document_id)
        for day in REGISTRATION_DAYS:
            await self.route_service.adjust_spots(person.route_for_day(day), -places, day)

        logger.info(f"[PEOPLE] Deleted {document_id} ({person.registration_type.value}), released {places} per day")
        return True, "person_deleted"
