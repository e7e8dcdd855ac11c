"""
Dashboard service - admin home figures.
"""

import logging
from core.domain.models import DashboardStats, RouteOccupancy, SouvenirStatus
from core.interfaces.repositories import (
    IAccessCodeRepository,
    IRegistrationRepository,
    IRouteRepository,
)

logger = logging.getLogger(__name__)


class DashboardService:
    """Aggregates codes, registrations and routes for the admin home"""

    def __init__(
        self,
        code_repo: IAccessCodeRepository,
        registration_repo: IRegistrationRepository,
        route_repo: IRouteRepository,
    ):
        self.code_repo = code_repo
        self.registration_repo = registration_repo
        self.route_repo = route_repo

    async def get_stats(self) -> DashboardStats:
        codes = await self.code_repo.get_all()
        registrations = await self.registration_repo.get_all()
        routes = await self.route_repo.get_all()

        occupancy = [
            RouteOccupancy(
                id=route.id,
                name=route.name,
                day1_used=sum(1 for r in registrations if r.route_id_day1 == route.id),
                day1_total=route.capacity(1),
                day2_used=sum(1 for r in registrations if r.route_id_day2 == route.id),
                day2_total=route.capacity(2),
            )
            for route in routes
        ]

        stats = DashboardStats(
            total_spots=sum(c.people_count for c in codes),
            total_registered=len(registrations),
            souvenirs_delivered=sum(1 for r in registrations if r.souvenir_status == SouvenirStatus.DELIVERED),
            routes=occupancy,
        )
        logger.debug(f"[DASHBOARD] spots={stats.total_spots} registered={stats.total_registered}")
        return stats
