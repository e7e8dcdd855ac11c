"""
Supabase implementation of Preregistration repository.
"""

from typing import List
from core.domain.models import Preregistration
from core.interfaces.repositories import IPreregistrationRepository
from infrastructure.database.supabase_client import supabase, run_sync


class SupabasePreregistrationRepository(IPreregistrationRepository):
    """Supabase implementation of pre-registration repository"""

    def _to_model(self, data: dict) -> Preregistration:
        return Preregistration(
            id=str(data["id"]),
            name=data.get("name") or "",
            whatsapp=data.get("whatsapp") or "",
            event_name=data.get("event_name") or "",
            kind=data.get("kind") or "preinscripcion",
            status=data.get("status") or "pendiente",
            notified=data.get("notified", False),
            created_at=data.get("created_at"),
        )

    @run_sync
    def _create_sync(self, preregistration: Preregistration) -> dict:
        data = preregistration.model_dump(mode="json", exclude={"id"})
        response = supabase.table("preregistrations").insert(data).execute()
        return response.data[0]

    async def create(self, preregistration: Preregistration) -> Preregistration:
        data = await self._create_sync(preregistration)
        return self._to_model(data)

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("preregistrations").select("*").execute()
        return response.data or []

    async def get_all(self) -> List[Preregistration]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]
