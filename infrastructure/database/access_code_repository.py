"""
Supabase implementation of AccessCode repository.
"""

import logging
from typing import Optional, List
from core.domain.models import AccessCode, AccessCodeStatus
from core.interfaces.repositories import IAccessCodeRepository
from infrastructure.database.supabase_client import supabase, run_sync

logger = logging.getLogger(__name__)


class SupabaseAccessCodeRepository(IAccessCodeRepository):
    """Supabase implementation of access code repository"""

    def _to_model(self, data: dict) -> AccessCode:
        """Convert database row to AccessCode model"""
        return AccessCode(
            id=str(data["id"]),
            code=data["code"],
            document_id=str(data.get("document_id", "")),
            status=AccessCodeStatus(data.get("status") or "pending"),
            is_group=data.get("is_group", False),
            people_count=data.get("people_count") or 1,
            assigned_to_group=data.get("assigned_to_group", False),
            created_at=data.get("created_at"),
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("access_codes").select("*").order("created_at", desc=True).execute()
        return response.data or []

    async def get_all(self) -> List[AccessCode]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, code_id: str) -> Optional[dict]:
        response = supabase.table("access_codes").select("*").eq("id", code_id).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, code_id: str) -> Optional[AccessCode]:
        data = await self._get_by_id_sync(code_id)
        return self._to_model(data) if data else None

    @run_sync
    def _get_by_code_sync(self, code: str) -> Optional[dict]:
        logger.debug(f"[CODE_REPO] Looking for access code: '{code}'")
        response = supabase.table("access_codes").select("*").eq("code", code).execute()
        return response.data[0] if response.data else None

    async def get_by_code(self, code: str) -> Optional[AccessCode]:
        data = await self._get_by_code_sync(code)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, data: dict) -> dict:
        response = supabase.table("access_codes").insert(data).execute()
        return response.data[0]

    async def create(self, data: dict) -> AccessCode:
        row = await self._create_sync(data)
        return self._to_model(row)

    @run_sync
    def _update_sync(self, code_id: str, data: dict) -> Optional[dict]:
        response = supabase.table("access_codes").update(data).eq("id", code_id).execute()
        return response.data[0] if response.data else None

    async def update(self, code_id: str, data: dict) -> Optional[AccessCode]:
        row = await self._update_sync(code_id, data)
        return self._to_model(row) if row else None

    @run_sync
    def _delete_sync(self, code_id: str) -> bool:
        response = supabase.table("access_codes").delete().eq("id", code_id).execute()
        return bool(response.data)

    async def delete(self, code_id: str) -> bool:
        return await self._delete_sync(code_id)
