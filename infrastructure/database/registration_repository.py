"""
Supabase implementation of Registration repository.
"""

import logging
from typing import Optional, List
from core.domain.models import Registration
from core.interfaces.repositories import IRegistrationRepository
from infrastructure.database.supabase_client import supabase, run_sync

logger = logging.getLogger(__name__)


class SupabaseRegistrationRepository(IRegistrationRepository):
    """Supabase implementation of registration repository"""

    def _to_model(self, data: dict) -> Registration:
        """Convert database row to Registration model"""
        return Registration(
            id=str(data["id"]) if data.get("id") is not None else None,
            document_id=str(data["document_id"]),
            document_type=data.get("document_type"),
            full_name=data.get("full_name") or "",
            phone=data.get("phone") or "",
            rh=data.get("rh") or "",
            route_id_day1=data.get("route_id_day1"),
            route_id_day2=data.get("route_id_day2"),
            access_code=data.get("access_code") or "",
            group_id=data.get("group_id"),
            payment_status=data.get("payment_status"),
            registration_type=data.get("registration_type") or "individual",
            souvenir_status=data.get("souvenir_status"),
            group_name=data.get("group_name"),
            leader_full_name=data.get("leader_full_name"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("registrations").select("*").execute()
        return response.data or []

    async def get_all(self) -> List[Registration]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_document_sync(self, document_id: str) -> Optional[dict]:
        response = supabase.table("registrations").select("*").eq("document_id", document_id).execute()
        return response.data[0] if response.data else None

    async def get_by_document(self, document_id: str) -> Optional[Registration]:
        data = await self._get_by_document_sync(document_id)
        return self._to_model(data) if data else None

    @run_sync
    def _get_by_group_sync(self, group_id: str) -> List[dict]:
        response = supabase.table("registrations").select("*").eq("group_id", group_id).execute()
        return response.data or []

    async def get_by_group(self, group_id: str) -> List[Registration]:
        data = await self._get_by_group_sync(group_id)
        return [self._to_model(d) for d in data]

    @run_sync
    def _create_sync(self, registration: Registration) -> dict:
        data = registration.model_dump(mode="json", exclude={"id"})
        response = supabase.table("registrations").insert(data).execute()
        return response.data[0]

    async def create(self, registration: Registration) -> Registration:
        data = await self._create_sync(registration)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, document_id: str, data: dict) -> Optional[dict]:
        response = supabase.table("registrations").update(data).eq("document_id", document_id).execute()
        return response.data[0] if response.data else None

    async def update_by_document(self, document_id: str, data: dict) -> Optional[Registration]:
        row = await self._update_sync(document_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, document_id: str) -> bool:
        response = supabase.table("registrations").delete().eq("document_id", document_id).execute()
        return bool(response.data)

    async def delete_by_document(self, document_id: str) -> bool:
        return await self._delete_sync(document_id)
