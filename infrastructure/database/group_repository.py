"""
Supabase implementation of Group repository.
"""

from typing import Optional
from core.domain.models import Group
from core.interfaces.repositories import IGroupRepository
from infrastructure.database.supabase_client import supabase, run_sync


class SupabaseGroupRepository(IGroupRepository):
    """Supabase implementation of group repository"""

    def _to_model(self, data: dict) -> Group:
        return Group(
            id=str(data["id"]),
            group_name=data.get("group_name") or "",
            leader_document_id=str(data.get("leader_document_id", "")),
            member_count=data.get("member_count") or 1,
            created_at=data.get("created_at"),
        )

    @run_sync
    def _get_by_id_sync(self, group_id: str) -> Optional[dict]:
        response = supabase.table("groups").select("*").eq("id", group_id).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, group_id: str) -> Optional[Group]:
        data = await self._get_by_id_sync(group_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, group_name: str, leader_document_id: str, member_count: int) -> dict:
        data = {
            "group_name": group_name,
            "leader_document_id": leader_document_id,
            "member_count": member_count,
        }
        response = supabase.table("groups").insert(data).execute()
        return response.data[0]

    async def create(self, group_name: str, leader_document_id: str, member_count: int) -> Group:
        data = await self._create_sync(group_name, leader_document_id, member_count)
        return self._to_model(data)
