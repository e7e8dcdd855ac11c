"""
Supabase implementation of Route repository.
"""

import logging
from typing import Optional, List, Dict
from core.domain.models import Route, RouteForm, DaySpots
from core.interfaces.repositories import IRouteRepository
from infrastructure.database.supabase_client import supabase, run_sync

logger = logging.getLogger(__name__)


def _parse_counts(value) -> Dict[int, int]:
    """JSON object keys come back as strings"""
    if not value:
        return {}
    return {int(day): int(count) for day, count in value.items()}


class SupabaseRouteRepository(IRouteRepository):
    """Supabase implementation of route repository"""

    def _to_model(self, data: dict) -> Route:
        """Convert database row to Route model"""
        return Route(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description") or "",
            difficulty=data.get("difficulty") or "Fácil",
            image_url=data.get("image_url") or "",
            duration=data.get("duration") or "",
            distance=data.get("distance") or "",
            elevation=data.get("elevation") or "",
            meeting_point=data.get("meeting_point") or "",
            available_spots_by_day=[
                DaySpots(day=d["day"], spots=d.get("spots", 0), enabled=d.get("enabled", True) is not False)
                for d in (data.get("available_spots_by_day") or [])
            ],
            registered_by_day=_parse_counts(data.get("registered_by_day")),
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("routes").select("*").order("name").execute()
        return response.data or []

    async def get_all(self) -> List[Route]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, route_id: str) -> Optional[dict]:
        response = supabase.table("routes").select("*").eq("id", route_id).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, route_id: str) -> Optional[Route]:
        data = await self._get_by_id_sync(route_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, route_data: RouteForm) -> dict:
        data = route_data.to_record()
        data["registered_by_day"] = {}
        response = supabase.table("routes").insert(data).execute()
        return response.data[0]

    async def create(self, route_data: RouteForm) -> Route:
        data = await self._create_sync(route_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, route_id: str, route_data: RouteForm) -> Optional[dict]:
        response = supabase.table("routes").update(route_data.to_record()).eq("id", route_id).execute()
        return response.data[0] if response.data else None

    async def update(self, route_id: str, route_data: RouteForm) -> Optional[Route]:
        data = await self._update_sync(route_id, route_data)
        return self._to_model(data) if data else None

    @run_sync
    def _delete_sync(self, route_id: str) -> bool:
        response = supabase.table("routes").delete().eq("id", route_id).execute()
        return bool(response.data)

    async def delete(self, route_id: str) -> bool:
        return await self._delete_sync(route_id)

    @run_sync
    def _get_counts_sync(self, route_id: str) -> Dict[int, int]:
        response = supabase.table("routes").select("registered_by_day").eq("id", route_id).execute()
        if not response.data:
            return {}
        return _parse_counts(response.data[0].get("registered_by_day"))

    async def get_registered_by_day(self, route_id: str) -> Dict[int, int]:
        return await self._get_counts_sync(route_id)

    @run_sync
    def _set_counts_sync(self, route_id: str, counts: Dict[int, int]) -> None:
        payload = {str(day): count for day, count in counts.items()}
        supabase.table("routes").update({"registered_by_day": payload}).eq("id", route_id).execute()

    async def update_spots(self, route_id: str, delta: int, day: int) -> None:
        # Plain read-modify-write: concurrent registrations may race here,
        # scripts/recount_spots.py rebuilds the counters from registrations.
        counts = await self._get_counts_sync(route_id)
        counts[day] = max(0, counts.get(day, 0) + delta)
        await self._set_counts_sync(route_id, counts)

    async def set_registered_by_day(self, route_id: str, counts: Dict[int, int]) -> None:
        await self._set_counts_sync(route_id, counts)
