"""
Repository interfaces - abstractions for data access.
This allows swapping implementations (Supabase -> Firestore -> in-memory, etc.)
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict
from core.domain.models import (
    Route, RouteForm,
    AccessCode,
    Registration,
    Group,
    EventSettings,
    Preregistration,
)


class IRouteRepository(ABC):
    """Interface for route data access"""

    @abstractmethod
    async def get_all(self) -> List[Route]:
        pass

    @abstractmethod
    async def get_by_id(self, route_id: str) -> Optional[Route]:
        pass

    @abstractmethod
    async def create(self, route_data: RouteForm) -> Route:
        pass

    @abstractmethod
    async def update(self, route_id: str, route_data: RouteForm) -> Optional[Route]:
        pass

    @abstractmethod
    async def delete(self, route_id: str) -> bool:
        pass

    @abstractmethod
    async def get_registered_by_day(self, route_id: str) -> Dict[int, int]:
        """Places already taken on each day"""
        pass

    @abstractmethod
    async def update_spots(self, route_id: str, delta: int, day: int) -> None:
        """Add delta (may be negative) to the day's taken places, never below 0"""
        pass

    @abstractmethod
    async def set_registered_by_day(self, route_id: str, counts: Dict[int, int]) -> None:
        """Overwrite the taken-places counters (used by the recount script)"""
        pass


class IAccessCodeRepository(ABC):
    """Interface for access code data access"""

    @abstractmethod
    async def get_all(self) -> List[AccessCode]:
        pass

    @abstractmethod
    async def get_by_id(self, code_id: str) -> Optional[AccessCode]:
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[AccessCode]:
        pass

    @abstractmethod
    async def create(self, data: dict) -> AccessCode:
        pass

    @abstractmethod
    async def update(self, code_id: str, data: dict) -> Optional[AccessCode]:
        pass

    @abstractmethod
    async def delete(self, code_id: str) -> bool:
        pass


class IRegistrationRepository(ABC):
    """Interface for registration data access"""

    @abstractmethod
    async def get_all(self) -> List[Registration]:
        pass

    @abstractmethod
    async def get_by_document(self, document_id: str) -> Optional[Registration]:
        pass

    @abstractmethod
    async def get_by_group(self, group_id: str) -> List[Registration]:
        pass

    @abstractmethod
    async def create(self, registration: Registration) -> Registration:
        pass

    @abstractmethod
    async def update_by_document(self, document_id: str, data: dict) -> Optional[Registration]:
        pass

    @abstractmethod
    async def delete_by_document(self, document_id: str) -> bool:
        pass


class IGroupRepository(ABC):
    """Interface for group data access"""

    @abstractmethod
    async def get_by_id(self, group_id: str) -> Optional[Group]:
        pass

    @abstractmethod
    async def create(self, group_name: str, leader_document_id: str, member_count: int) -> Group:
        pass


class ISettingsRepository(ABC):
    """Interface for event settings (single document)"""

    @abstractmethod
    async def get(self) -> Optional[EventSettings]:
        pass

    @abstractmethod
    async def upsert(self, event_settings: EventSettings) -> EventSettings:
        pass


class IPreregistrationRepository(ABC):
    """Interface for pre-registration leads"""

    @abstractmethod
    async def create(self, preregistration: Preregistration) -> Preregistration:
        pass

    @abstractmethod
    async def get_all(self) -> List[Preregistration]:
        pass
