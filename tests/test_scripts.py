import csv
import sys
import types

import pytest

from conftest import make_code, make_route
from core.domain.models import InscriptionForm


@pytest.fixture
def script_services(services, monkeypatch):
    """Scripts import the Supabase-backed loader; hand them the in-memory services instead"""
    loader = types.ModuleType("adapters.web.loader")
    loader.services = services
    monkeypatch.setitem(sys.modules, "adapters.web.loader", loader)

    import scripts.export_registrations
    import scripts.recount_spots
    monkeypatch.setattr(scripts.export_registrations, "services", services)
    monkeypatch.setattr(scripts.recount_spots, "services", services)
    return services


async def test_recount_spots_fixes_drifted_counters(script_services, repos):
    from scripts.recount_spots import recount

    route = make_route(repos, "Cascada El Salto")
    make_code(repos, "1020304050", "ABC123")
    await script_services.registration.submit_individual(InscriptionForm(
        document_id="1020304050", confirmation_code="ABC123", document_type="cedula",
        full_name="Laura Gómez", phone="3001234567", rh="O+", route_id_day1=route.id,
    ))
    repos.routes.routes[route.id].registered_by_day = {1: 7, 2: 2}

    assert await recount(dry_run=True) == 1
    assert repos.routes.routes[route.id].registered_by_day == {1: 7, 2: 2}

    assert await recount(dry_run=False) == 1
    assert repos.routes.routes[route.id].registered_by_day == {1: 1, 2: 0, 3: 0}
    assert await recount(dry_run=False) == 0


async def test_export_registrations(script_services, repos, tmp_path):
    from scripts.export_registrations import export

    route = make_route(repos, "Cascada El Salto")
    make_code(repos, "1020304050", "ABC123")
    await script_services.registration.submit_individual(InscriptionForm(
        document_id="1020304050", confirmation_code="ABC123", document_type="cedula",
        full_name="Laura Gómez", phone="3001234567", rh="O+", route_id_day1=route.id,
    ))
    output = tmp_path / "registrations.csv"

    await export(str(output))

    with open(output, encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["full_name"] == "Laura Gómez"
    assert rows[0]["route_day1"] == "Cascada El Salto"
    assert rows[0]["route_day2"] == ""
    assert rows[0]["registration_type"] == "individual"
