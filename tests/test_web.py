from datetime import date, timedelta

from conftest import ADMIN_TOKEN, make_code, make_route
from core.domain.models import (
    AccessCodeStatus, EventSettings, Registration, RegistrationType, SouvenirStatus,
)


async def admin_login(client):
    resp = await client.get(f"/admin?token={ADMIN_TOKEN}")
    assert resp.status == 200


# === PUBLIC ===

async def test_health(client):
    resp = await client.get("/health")
    assert resp.status == 200
    assert await resp.json() == {"status": "ok"}


async def test_home_shows_routes_and_preregistration(client, repos, open_window):
    make_route(repos, "Cascada <El Salto>")

    resp = await client.get("/")
    text = await resp.text()

    assert resp.status == 200
    assert "Cascada &lt;El Salto&gt;" in text
    assert "90.000" in text
    assert 'action="/preinscripcion"' in text


async def test_preregistration_redirects_to_whatsapp(client, repos):
    resp = await client.post(
        "/preinscripcion", data={"name": "Laura Gómez", "whatsapp": "3001234567"}, allow_redirects=False,
    )

    assert resp.status == 302
    assert resp.headers["Location"].startswith("https://wa.me/573216215749?text=")
    assert repos.preregistrations.items[0].name == "Laura Gómez"


async def test_preregistration_missing_fields(client, repos):
    resp = await client.post("/preinscripcion", data={"name": "", "whatsapp": "3001234567"})

    assert resp.status == 400
    assert "Por favor completa todos los campos" in await resp.text()
    assert repos.preregistrations.items == []


async def test_landing_page(client):
    resp = await client.get("/landing")
    text = await resp.text()

    assert resp.status == 200
    assert "https://wa.me/573128762526?text=" in text
    assert "90.000" in text


# === REGISTRATION ===

async def test_closed_registration_page(client, repos):
    repos.settings.stored = EventSettings(
        registration_start_date=date.today() + timedelta(days=5),
        registration_end_date=date.today() + timedelta(days=20),
    )

    resp = await client.get("/inscripcion")

    assert "INSCRIPCIONES CERRADAS" in await resp.text()


async def test_verify_form_is_prefilled_from_link(client, open_window):
    resp = await client.get("/inscripcion?documento=1020304050&codigo=abc123")
    text = await resp.text()

    assert 'value="1020304050"' in text
    assert 'value="ABC123"' in text
    assert "Bancolombia" in text


async def test_verify_then_register_individual(client, repos, open_window):
    route = make_route(repos, "Cascada El Salto")
    code = make_code(repos, "1020304050", "ABC123")

    resp = await client.post("/inscripcion/verificar", data={
        "document_id": "1020304050", "confirmation_code": "abc123",
    })
    text = await resp.text()
    assert resp.status == 200
    assert 'action="/inscripcion/individual"' in text
    assert "Cascada El Salto" in text

    resp = await client.post("/inscripcion/individual", data={
        "document_id": "1020304050",
        "confirmation_code": "ABC123",
        "document_type": "cedula",
        "full_name": "Laura Gómez",
        "phone": "3001234567",
        "rh": "O+",
        "route_id_day1": route.id,
        "route_id_day2": "",
    })
    text = await resp.text()

    assert resp.status == 200
    assert "¡Inscripción completada exitosamente!" in text
    assert repos.codes.codes[code.id].status == AccessCodeStatus.USED
    assert repos.routes.routes[route.id].registered_by_day == {1: 1}


async def test_verify_wrong_document(client, repos, open_window):
    make_code(repos, "1020304050", "ABC123")

    resp = await client.post("/inscripcion/verificar", data={
        "document_id": "9999999999", "confirmation_code": "ABC123",
    })

    assert resp.status == 400
    assert "El número de documento no coincide con el código" in await resp.text()


async def test_verify_is_throttled(client, repos, open_window):
    statuses = []
    for _ in range(11):
        resp = await client.post("/inscripcion/verificar", data={
            "document_id": "1020304050", "confirmation_code": "NOPE00",
        })
        statuses.append(resp.status)

    assert statuses[:10] == [400] * 10
    assert statuses[10] == 429


async def test_throttle_ignores_forwarded_for(client, repos, open_window):
    statuses = []
    for i in range(11):
        resp = await client.post("/inscripcion/verificar", data={
            "document_id": "1020304050", "confirmation_code": "NOPE00",
        }, headers={"X-Forwarded-For": f"10.0.0.{i}"})
        statuses.append(resp.status)

    assert statuses[-1] == 429


async def test_unexpected_error_renders_generic_page(client, repos, open_window, monkeypatch):
    async def broken_get_all():
        raise RuntimeError("connection reset by supabase")

    monkeypatch.setattr(repos.routes, "get_all", broken_get_all)

    resp = await client.get("/")
    text = await resp.text()

    assert resp.status == 500
    assert "Hubo un problema al procesar la solicitud" in text
    assert "RuntimeError" not in text
    assert "connection reset" not in text
    assert "Traceback" not in text


async def test_default_language_applies_without_browser_preference(client, config, repos, open_window):
    make_code(repos, "1020304050", "ABC123")
    config.default_language = "en"

    resp = await client.post("/inscripcion/verificar", data={
        "document_id": "9999999999", "confirmation_code": "ABC123",
    }, headers={"Accept-Language": "fr-FR,fr;q=0.9"})

    assert resp.status == 400
    assert "The document number does not match the code" in await resp.text()


async def test_group_flow(client, repos, open_window):
    make_code(repos, "7080901234", "GRP001", is_group=True, people_count=2)

    resp = await client.post("/inscripcion/verificar", data={
        "document_id": "7080901234", "confirmation_code": "GRP001",
    })
    assert 'action="/inscripcion/grupo"' in await resp.text()

    resp = await client.post("/inscripcion/grupo", data={
        "document_id": "7080901234",
        "confirmation_code": "GRP001",
        "document_type": "cedula",
        "leader_full_name": "Carlos Ruiz",
        "group_name": "Los Andariegos",
        "phone": "3109876543",
        "rh": "A+",
    }, allow_redirects=False)
    assert resp.status == 302
    group_url = resp.headers["Location"].split("?")[0]
    assert group_url.startswith("/grupo/")

    resp = await client.post(f"{group_url}/caminantes", data={
        "full_name": "Ana Ruiz",
        "document_type": "cedula",
        "document_id": "1112223334",
        "phone": "3001112233",
        "rh": "B+",
    })
    text = await resp.text()

    assert resp.status == 200
    assert "Caminante agregado al grupo" in text
    assert "Ana Ruiz" in text
    assert "El grupo está completo." in text


async def test_add_walker_validation_errors(client, repos, open_window):
    group = await repos.groups.create("Los Andariegos", "7080901234", 3)
    await repos.registrations.create(_leader(group.id))

    resp = await client.post(f"/grupo/{group.id}/caminantes", data={
        "full_name": "An", "document_id": "1112223334", "phone": "3001112233", "rh": "B+",
    })

    assert resp.status == 400
    assert 'class="error-text"' in await resp.text()
    assert len(await repos.registrations.get_by_group(group.id)) == 1


async def test_unknown_group_page(client):
    resp = await client.get("/grupo/missing")
    assert resp.status == 404


def _leader(group_id):
    return Registration(
        document_id="7080901234",
        full_name="Carlos Ruiz",
        phone="3109876543",
        rh="A+",
        access_code="GRP001",
        group_id=group_id,
        registration_type=RegistrationType.GROUP_LEADER,
    )


# === ADMIN ===

async def test_admin_requires_token(client):
    resp = await client.get("/admin")
    assert resp.status == 401

    resp = await client.get("/admin?token=wrong")
    assert resp.status == 401


async def test_admin_token_is_kept_in_cookie(client):
    await admin_login(client)

    resp = await client.get("/admin/rutas")

    assert resp.status == 200
    assert "Nueva ruta" in await resp.text()


async def test_admin_creates_route(client, repos):
    await admin_login(client)

    resp = await client.post("/admin/rutas", data={
        "name": "Cascada El Salto",
        "description": "Caminata hasta la cascada por el bosque",
        "difficulty": "Difícil",
        "image_url": "",
        "duration": "5 horas",
        "distance": "14 km",
        "elevation": "700 m",
        "meeting_point": "Parque principal",
        "day1_enabled": "on",
        "day1_spots": "30",
        "day2_spots": "15",
        "day3_spots": "",
    }, allow_redirects=False)

    assert resp.status == 302
    route = next(iter(repos.routes.routes.values()))
    assert [(d.day, d.spots) for d in route.available_spots_by_day] == [(1, 30)]


async def test_admin_route_validation(client, repos):
    await admin_login(client)

    resp = await client.post("/admin/rutas", data={"name": "Ca", "day1_spots": "10"})

    assert resp.status == 400
    assert repos.routes.routes == {}


async def test_admin_code_lifecycle(client, repos):
    await admin_login(client)

    resp = await client.post("/admin/codigos", data={"document_id": "1020304050", "people_count": "1"})
    assert resp.status == 200
    code = next(iter(repos.codes.codes.values()))
    assert f"Código {code.code} generado" in await resp.text()

    resp = await client.post(f"/admin/codigos/{code.id}/pagado", allow_redirects=False)
    assert resp.status == 302
    assert repos.codes.codes[code.id].status == AccessCodeStatus.PAID

    resp = await client.get(f"/admin/codigos/{code.id}/qr.png")
    assert resp.content_type == "image/png"


async def test_admin_souvenir_delivery(client, repos):
    make_code(repos, "1020304050", "ABC123")
    await client.post("/inscripcion/individual", data={
        "document_id": "1020304050", "confirmation_code": "ABC123", "document_type": "cedula",
        "full_name": "Laura Gómez", "phone": "3001234567", "rh": "O+",
    })
    await admin_login(client)

    resp = await client.post("/admin/souvenirs/buscar", data={"document_id": "1020304050"})
    assert "Confirmar entrega" in await resp.text()

    resp = await client.post("/admin/souvenirs/entregar", data={"document_id": "1020304050"})
    assert "Souvenir marcado como entregado para Laura Gómez" in await resp.text()
    assert repos.registrations.registrations["1020304050"].souvenir_status == SouvenirStatus.DELIVERED


async def test_admin_settings_validation(client, repos):
    await admin_login(client)

    resp = await client.post("/admin/configuracion", data={
        "registration_price": "90000",
        "bank_name": "Bancolombia",
        "account_type": "Ahorros",
        "account_number": "12345678",
        "account_holder": "Caroltur SAS",
        "nit": "900123456",
        "whatsapp_number": "573216215749",
        "payment_instructions": "Envía el comprobante por WhatsApp",
        "registration_start_date": "2026-03-15",
        "registration_end_date": "2026-03-01",
    })

    assert resp.status == 400
    assert "La fecha de cierre debe ser posterior a la fecha de inicio" in await resp.text()
    assert repos.settings.stored is None


async def test_admin_deletes_person(client, repos):
    route = make_route(repos, "Cascada El Salto")
    make_code(repos, "1020304050", "ABC123")
    await client.post("/inscripcion/individual", data={
        "document_id": "1020304050", "confirmation_code": "ABC123", "document_type": "cedula",
        "full_name": "Laura Gómez", "phone": "3001234567", "rh": "O+", "route_id_day1": route.id,
    })
    await admin_login(client)

    resp = await client.post("/admin/personas/1020304050/eliminar", allow_redirects=False)

    assert resp.status == 302
    assert "person_deleted" in resp.headers["Location"]
    assert repos.registrations.registrations == {}
    assert repos.routes.routes[route.id].registered_by_day == {1: 0}
