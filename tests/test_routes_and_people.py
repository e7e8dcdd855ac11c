import pytest
from pydantic import ValidationError

from conftest import make_code, make_route
from core.domain.models import DaySpots, InscriptionForm, RegistrationUpdate, Route, RouteForm, Walker
from core.services.route_service import RouteService


def route_form(**overrides) -> RouteForm:
    data = {
        "name": "Cascada El Salto",
        "description": "Caminata hasta la cascada por el bosque de niebla",
        "difficulty": "Moderada",
        "image_url": "https://example.com/salto.jpg",
        "duration": "5 horas",
        "distance": "14 km",
        "elevation": "700 m",
        "meeting_point": "Parque principal",
        "available_spots_by_day": [
            {"day": 1, "spots": 30, "enabled": True},
            {"day": 2, "spots": 20, "enabled": False},
            {"day": 3, "spots": 0, "enabled": False},
        ],
    }
    data.update(overrides)
    return RouteForm(**data)


# === ROUTES ===

async def test_available_routes_drop_full_days_and_routes(services, repos):
    open_route = make_route(repos, "Cascada El Salto", day1=10, day2=5, taken={1: 3, 2: 5})
    make_route(repos, "Alto de las Cruces", day1=4, day2=None, taken={1: 4})

    available = await services.routes.get_available_routes()

    assert [r.id for r in available] == [open_route.id]
    assert available[0].spots_on(1) == 7
    assert available[0].spots_on(2) == 0
    assert RouteService.routes_for_day(available, 2) == []


async def test_overbooked_route_is_never_negative(services, repos):
    make_route(repos, "Cascada El Salto", day1=5, day2=5, taken={1: 8})

    available = await services.routes.get_available_routes()

    assert available[0].spots_on(1) == 0
    assert available[0].spots_on(2) == 5


async def test_availability_uses_loaded_counters(services, repos, monkeypatch):
    route = make_route(repos, "Cascada El Salto", day1=10, day2=5, taken={1: 4})

    async def no_extra_lookup(route_id):
        raise AssertionError("counters are already on the route")

    monkeypatch.setattr(repos.routes, "get_registered_by_day", no_extra_lookup)

    available = await services.routes.get_available_routes()

    assert available[0].spots_on(1) == 6
    assert await services.routes.is_offered(route.id, 2, available)


async def test_route_crud_keeps_only_enabled_days(services, repos):
    route = await services.routes.create_route(route_form())

    assert [d.day for d in route.available_spots_by_day] == [1]
    slots = route.spots_for_form()
    assert [(s.day, s.spots, s.enabled) for s in slots] == [(1, 30, True), (2, 0, False), (3, 0, False)]

    updated = await services.routes.update_route(route.id, route_form(name="Salto renovado"))
    assert updated.name == "Salto renovado"

    assert await services.routes.delete_route(route.id)
    assert await services.routes.get_route(route.id) is None
    assert await services.routes.update_route(route.id, route_form()) is None


async def test_adjust_spots_ignores_missing_route(services, repos):
    route = make_route(repos, "Cascada El Salto", taken={1: 1})

    await services.routes.adjust_spots(None, 1, 1)
    await services.routes.adjust_spots(route.id, -5, 1)

    assert repos.routes.routes[route.id].registered_by_day == {1: 0}


def test_route_form_validation():
    with pytest.raises(ValidationError):
        route_form(name="ab")
    with pytest.raises(ValidationError):
        route_form(image_url="ftp://example.com/a.jpg")
    with pytest.raises(ValidationError):
        route_form(available_spots_by_day=[{"day": 1, "spots": 10, "enabled": False}])
    with pytest.raises(ValidationError):
        route_form(available_spots_by_day=[{"day": 4, "spots": 10}])
    with pytest.raises(ValidationError):
        route_form(available_spots_by_day=[{"day": 1, "spots": -1}])


def test_route_capacity_only_counts_enabled_days():
    route = Route(
        id="r1",
        name="Cascada",
        available_spots_by_day=[DaySpots(day=1, spots=10), DaySpots(day=2, spots=8, enabled=False)],
    )
    assert route.capacity(1) == 10
    assert route.capacity(2) == 0
    assert route.capacity(3) == 0


# === PEOPLE ===

async def register(services, repos, document_id: str, code: str, name: str, route_id: str = ""):
    make_code(repos, document_id, code)
    return await services.registration.submit_individual(InscriptionForm(
        document_id=document_id,
        confirmation_code=code,
        document_type="cedula",
        full_name=name,
        phone="3001234567",
        rh="O+",
        route_id_day1=route_id,
    ))


async def test_search_by_document_or_name(services, repos):
    await register(services, repos, "1020304050", "AAA111", "Laura Gómez")
    await register(services, repos, "5060708090", "BBB222", "andrés Pérez")

    everyone = await services.people.search()
    by_name = await services.people.search("GÓMEZ")
    by_document = await services.people.search("50607")

    assert [p.full_name for p in everyone] == ["andrés Pérez", "Laura Gómez"]
    assert [p.document_id for p in by_name] == ["1020304050"]
    assert [p.document_id for p in by_document] == ["5060708090"]


async def test_update_person(services, repos):
    await register(services, repos, "1020304050", "AAA111", "Laura Gómez")

    person = await services.people.update_person("1020304050", RegistrationUpdate(phone="3119998877", rh="AB-"))

    assert person.phone == "3119998877"
    assert person.rh == "AB-"
    assert person.full_name == "Laura Gómez"
    assert person.updated_at is not None


async def test_delete_individual_releases_place(services, repos):
    route = make_route(repos, "Cascada El Salto")
    await register(services, repos, "1020304050", "AAA111", "Laura Gómez", route.id)

    ok, key = await services.people.delete_person("1020304050")

    assert ok and key == "person_deleted"
    assert repos.routes.routes[route.id].registered_by_day == {1: 0}
    assert await services.people.get_person("1020304050") is None


async def test_delete_group_leader_releases_group_and_members_release_nothing(services, repos):
    route = make_route(repos, "Cascada El Salto")
    make_code(repos, "7080901234", "GRP001", is_group=True, people_count=3)
    _, _, group = await services.registration.register_group_leader(InscriptionForm(
        document_id="7080901234",
        confirmation_code="GRP001",
        document_type="cedula",
        leader_full_name="Carlos Ruiz",
        group_name="Los Andariegos",
        phone="3109876543",
        rh="A+",
        route_id_day1=route.id,
    ))
    await services.registration.add_group_member(
        group.id, Walker(full_name="Ana Ruiz", document_id="1112223334", phone="3001112233", rh="B+"),
    )

    await services.people.delete_person("1112223334")
    assert repos.routes.routes[route.id].registered_by_day == {1: 3}

    await services.people.delete_person("7080901234")
    assert repos.routes.routes[route.id].registered_by_day == {1: 0}


async def test_delete_unknown_person(services):
    ok, key = await services.people.delete_person("0000000000")
    assert not ok
    assert key == "registration_not_found"
