"""
Shared fixtures: in-memory repositories behind the real services.
"""

import uuid
from datetime import date, datetime, timedelta
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from aiohttp.test_utils import TestClient, TestServer

from adapters.web.app import build_services, create_app
from config.settings import Settings
from core.domain.models import (
    AccessCode, AccessCodeStatus, DaySpots, EventSettings, Group,
    Preregistration, Registration, Route, RouteForm,
)
from core.interfaces.repositories import (
    IAccessCodeRepository, IGroupRepository, IPreregistrationRepository,
    IRegistrationRepository, IRouteRepository, ISettingsRepository,
)

ADMIN_TOKEN = "secret-token"


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class InMemoryRouteRepository(IRouteRepository):
    def __init__(self):
        self.routes: Dict[str, Route] = {}

    async def get_all(self) -> List[Route]:
        return [r.model_copy(deep=True) for r in self.routes.values()]

    async def get_by_id(self, route_id: str) -> Optional[Route]:
        route = self.routes.get(route_id)
        return route.model_copy(deep=True) if route else None

    async def create(self, route_data: RouteForm) -> Route:
        route = Route(id=_new_id(), **route_data.to_record())
        self.routes[route.id] = route
        return route.model_copy(deep=True)

    async def update(self, route_id: str, route_data: RouteForm) -> Optional[Route]:
        if route_id not in self.routes:
            return None
        counts = self.routes[route_id].registered_by_day
        self.routes[route_id] = Route(id=route_id, registered_by_day=counts, **route_data.to_record())
        return self.routes[route_id].model_copy(deep=True)

    async def delete(self, route_id: str) -> bool:
        return self.routes.pop(route_id, None) is not None

    async def get_registered_by_day(self, route_id: str) -> Dict[int, int]:
        route = self.routes.get(route_id)
        return dict(route.registered_by_day) if route else {}

    async def update_spots(self, route_id: str, delta: int, day: int) -> None:
        route = self.routes.get(route_id)
        if route:
            route.registered_by_day[day] = max(0, route.registered_by_day.get(day, 0) + delta)

    async def set_registered_by_day(self, route_id: str, counts: Dict[int, int]) -> None:
        self.routes[route_id].registered_by_day = dict(counts)


class InMemoryAccessCodeRepository(IAccessCodeRepository):
    def __init__(self):
        self.codes: Dict[str, AccessCode] = {}

    async def get_all(self) -> List[AccessCode]:
        return list(self.codes.values())

    async def get_by_id(self, code_id: str) -> Optional[AccessCode]:
        return self.codes.get(code_id)

    async def get_by_code(self, code: str) -> Optional[AccessCode]:
        return next((c for c in self.codes.values() if c.code == code), None)

    async def create(self, data: dict) -> AccessCode:
        code = AccessCode(id=_new_id(), created_at=datetime.now(), **data)
        self.codes[code.id] = code
        return code

    async def update(self, code_id: str, data: dict) -> Optional[AccessCode]:
        if code_id not in self.codes:
            return None
        merged = {**self.codes[code_id].model_dump(), **data}
        self.codes[code_id] = AccessCode(**merged)
        return self.codes[code_id]

    async def delete(self, code_id: str) -> bool:
        return self.codes.pop(code_id, None) is not None


class InMemoryRegistrationRepository(IRegistrationRepository):
    def __init__(self):
        self.registrations: Dict[str, Registration] = {}

    async def get_all(self) -> List[Registration]:
        return list(self.registrations.values())

    async def get_by_document(self, document_id: str) -> Optional[Registration]:
        return self.registrations.get(document_id)

    async def get_by_group(self, group_id: str) -> List[Registration]:
        return [r for r in self.registrations.values() if r.group_id == group_id]

    async def create(self, registration: Registration) -> Registration:
        stored = registration.model_copy(update={"id": _new_id()})
        self.registrations[stored.document_id] = stored
        return stored

    async def update_by_document(self, document_id: str, data: dict) -> Optional[Registration]:
        if document_id not in self.registrations:
            return None
        merged = {**self.registrations[document_id].model_dump(), **data}
        self.registrations[document_id] = Registration(**merged)
        return self.registrations[document_id]

    async def delete_by_document(self, document_id: str) -> bool:
        return self.registrations.pop(document_id, None) is not None


class InMemoryGroupRepository(IGroupRepository):
    def __init__(self):
        self.groups: Dict[str, Group] = {}

    async def get_by_id(self, group_id: str) -> Optional[Group]:
        return self.groups.get(group_id)

    async def create(self, group_name: str, leader_document_id: str, member_count: int) -> Group:
        group = Group(
            id=_new_id(),
            group_name=group_name,
            leader_document_id=leader_document_id,
            member_count=member_count,
            created_at=datetime.now(),
        )
        self.groups[group.id] = group
        return group


class InMemorySettingsRepository(ISettingsRepository):
    def __init__(self):
        self.stored: Optional[EventSettings] = None
        self.fail = False

    async def get(self) -> Optional[EventSettings]:
        if self.fail:
            raise ConnectionError("database unavailable")
        return self.stored

    async def upsert(self, event_settings: EventSettings) -> EventSettings:
        self.stored = event_settings
        return event_settings


class InMemoryPreregistrationRepository(IPreregistrationRepository):
    def __init__(self):
        self.items: List[Preregistration] = []

    async def create(self, preregistration: Preregistration) -> Preregistration:
        stored = preregistration.model_copy(update={"id": _new_id()})
        self.items.append(stored)
        return stored

    async def get_all(self) -> List[Preregistration]:
        return list(self.items)


# === FIXTURES ===

@pytest.fixture
def repos():
    return SimpleNamespace(
        routes=InMemoryRouteRepository(),
        codes=InMemoryAccessCodeRepository(),
        registrations=InMemoryRegistrationRepository(),
        groups=InMemoryGroupRepository(),
        settings=InMemorySettingsRepository(),
        preregistrations=InMemoryPreregistrationRepository(),
    )


@pytest.fixture
def config():
    return Settings(
        _env_file=None,
        admin_token=ADMIN_TOKEN,
        public_base_url="https://caminera.test",
        whatsapp_number="573216215749",
        landing_whatsapp_number="573128762526",
    )


@pytest.fixture
def features():
    return SimpleNamespace(
        PREREGISTRATION_ENABLED=True,
        LANDING_PAGE_ENABLED=True,
        THROTTLE_ENABLED=True,
        DEBUG_MODE=False,
    )


@pytest.fixture
def services(repos, config):
    return build_services(
        route_repo=repos.routes,
        code_repo=repos.codes,
        registration_repo=repos.registrations,
        group_repo=repos.groups,
        settings_repo=repos.settings,
        prereg_repo=repos.preregistrations,
        config=config,
    )


@pytest.fixture
async def client(services, config, features):
    app = create_app(services, config, features)
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


@pytest.fixture
def open_window(repos):
    """Stored settings with the registration window open today"""
    repos.settings.stored = EventSettings(
        registration_price=90000,
        bank_name="Bancolombia",
        account_type="Ahorros",
        account_number="12345678",
        account_holder="Caroltur SAS",
        nit="900123456",
        whatsapp_number="573216215749",
        payment_instructions="Envía el comprobante por WhatsApp",
        registration_start_date=date.today() - timedelta(days=1),
        registration_end_date=date.today() + timedelta(days=10),
    )
    return repos.settings.stored


def make_route(repos, name: str, day1: int = 10, day2: int = 10, taken: Optional[Dict[int, int]] = None) -> Route:
    days = []
    if day1 is not None:
        days.append(DaySpots(day=1, spots=day1))
    if day2 is not None:
        days.append(DaySpots(day=2, spots=day2))
    route = Route(
        id=_new_id(),
        name=name,
        description="Sendero de prueba por la montaña",
        duration="4 horas",
        distance="12 km",
        elevation="600 m",
        meeting_point="Parque principal",
        available_spots_by_day=days,
        registered_by_day=dict(taken or {}),
    )
    repos.routes.routes[route.id] = route
    return route


def make_code(repos, document_id: str, code: str, status: AccessCodeStatus = AccessCodeStatus.PAID,
              is_group: bool = False, people_count: int = 1) -> AccessCode:
    access_code = AccessCode(
        id=_new_id(),
        code=code,
        document_id=document_id,
        status=status,
        is_group=is_group,
        people_count=people_count,
    )
    repos.codes.codes[access_code.id] = access_code
    return access_code
