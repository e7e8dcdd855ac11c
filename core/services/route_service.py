"""
Route service - route management and per-day availability.
"""

import logging
from typing import Optional, List, Dict
from core.domain.models import Route, RouteForm, RouteAvailability, DaySpots
from core.interfaces.repositories import IRouteRepository

logger = logging.getLogger(__name__)


class RouteService:
    """Service for route-related operations"""

    def __init__(self, route_repo: IRouteRepository):
        self.route_repo = route_repo

    async def list_routes(self) -> List[Route]:
        return await self.route_repo.get_all()

    async def get_route(self, route_id: str) -> Optional[Route]:
        return await self.route_repo.get_by_id(route_id)

    async def create_route(self, form: RouteForm) -> Route:
        route = await self.route_repo.create(form)
        logger.info(f"[ROUTES] Created route {route.id} '{route.name}'")
        return route

    async def update_route(self, route_id: str, form: RouteForm) -> Optional[Route]:
        route = await self.route_repo.update(route_id, form)
        if route:
            logger.info(f"[ROUTES] Updated route {route_id}")
        else:
            logger.warning(f"[ROUTES] Route {route_id} not found for update")
        return route

    async def delete_route(self, route_id: str) -> bool:
        deleted = await self.route_repo.delete(route_id)
        logger.info(f"[ROUTES] Delete route {route_id}: {deleted}")
        return deleted

    async def get_available_routes(self) -> List[RouteAvailability]:
        """
        Routes with remaining places per day.
        Days with no places left are dropped, and so are routes with no day left.
        """
        routes = await self.route_repo.get_all()
        result = []
        for route in routes:
            days = [
                DaySpots(day=d.day, spots=max(0, d.spots - route.registered_by_day.get(d.day, 0)))
                for d in route.available_spots_by_day
                if d.enabled
            ]
            days = [d for d in days if d.spots > 0]
            if not days:
                continue
            result.append(RouteAvailability(
                id=route.id,
                name=route.name,
                difficulty=route.difficulty,
                available_spots_by_day=days,
            ))
        return result

    @staticmethod
    def routes_for_day(routes: List[RouteAvailability], day: int) -> List[RouteAvailability]:
        """Routes that can still be chosen on the given day"""
        return [r for r in routes if r.spots_on(day) > 0]

    async def is_offered(self, route_id: str, day: int, available: Optional[List[RouteAvailability]] = None) -> bool:
        if available is None:
            available = await self.get_available_routes()
        return any(r.id == route_id and r.spots_on(day) > 0 for r in available)

    async def adjust_spots(self, route_id: Optional[str], delta: int, day: int) -> None:
        """Move the taken-places counter; no-op without a route"""
        if not route_id or delta == 0:
            return
        await self.route_repo.update_spots(route_id, delta, day)
        logger.info(f"[ROUTES] Spots route={route_id} day={day} delta={delta:+d}")

    async def set_counters(self, route_id: str, counts: Dict[int, int]) -> None:
        """Overwrite the taken-places counters of a route"""
        await self.route_repo.set_registered_by_day(route_id, counts)
        logger.info(f"[ROUTES] Counters route={route_id} set to {counts}")
