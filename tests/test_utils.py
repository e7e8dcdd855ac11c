from datetime import date, datetime
from urllib.parse import parse_qs, urlparse

from aiohttp.test_utils import make_mocked_request

from adapters.web.middleware import ThrottlingMiddleware
from adapters.web.pages import format_cop
from core.domain.models import EventSettings, Registration
from core.utils.dates import format_date_es, is_registration_open
from core.utils.language import detect_lang
from core.utils.qr_generator import generate_access_code_qr, registration_link
from core.utils.whatsapp import whatsapp_link
from locales import t


# === REGISTRATION WINDOW ===

def test_window_open_without_dates():
    assert is_registration_open(None)
    assert is_registration_open(EventSettings(registration_start_date=date(2026, 3, 1)))


def test_window_is_inclusive_by_day():
    window = EventSettings(
        registration_start_date=date(2026, 3, 1),
        registration_end_date=date(2026, 3, 15),
    )
    assert not is_registration_open(window, today=date(2026, 2, 28))
    assert is_registration_open(window, today=date(2026, 3, 1))
    assert is_registration_open(window, today=date(2026, 3, 15))
    assert not is_registration_open(window, today=date(2026, 3, 16))


def test_stored_timestamps_become_dates():
    stored = EventSettings(
        registration_start_date="2026-03-01T00:00:00+00:00",
        registration_end_date=datetime(2026, 3, 15, 23, 59),
        bank_name=None,
    )
    assert stored.registration_start_date == date(2026, 3, 1)
    assert stored.registration_end_date == date(2026, 3, 15)
    assert stored.bank_name == ""


def test_format_date_es():
    assert format_date_es(date(2026, 3, 14)) == "sábado, 14 de marzo de 2026"
    assert format_date_es("2026-03-20") == "viernes, 20 de marzo de 2026"
    assert format_date_es("pronto") == "pronto"
    assert format_date_es(None) == "No configurado"


# === LINKS ===

def test_whatsapp_link_keeps_digits_only():
    url = whatsapp_link("+57 321 621 5749", "Hola! Quiero pre-inscribirme")
    assert url == "https://wa.me/573216215749?text=Hola%21%20Quiero%20pre-inscribirme"


def test_registration_link_prefills_form():
    link = registration_link("https://caminera.test/", "ABC123", "1020304050")
    parsed = urlparse(link)
    assert parsed.path == "/inscripcion"
    assert parse_qs(parsed.query) == {"documento": ["1020304050"], "codigo": ["ABC123"]}


def test_access_code_qr_is_png():
    png = generate_access_code_qr("ABC123", "1020304050", "https://caminera.test")
    assert png.startswith(b"\x89PNG")


def test_format_cop():
    assert format_cop(90000) == "90.000"
    assert format_cop(1250000) == "1.250.000"


# === LOCALES ===

def test_translations_fall_back():
    assert t("registration_closed") == "El período de inscripciones está cerrado"
    assert t("registration_closed", "en") == "Registration is closed"
    assert t("registration_closed", "fr") == t("registration_closed")
    assert t("no_such_key") == "no_such_key"
    assert t("code_created", code="ABC123") == "Código ABC123 generado"


def test_detect_lang():
    assert detect_lang("en-US,en;q=0.9") == "en"
    assert detect_lang("es-CO,es;q=0.9,en;q=0.5") == "es"
    assert detect_lang(None) == "es"
    assert detect_lang("fr-FR,fr;q=0.9", default="en") == "en"
    assert detect_lang("es-CO", default="en") == "es"


# === MODELS ===

def test_registration_fills_missing_defaults():
    registration = Registration(
        document_id="1020304050",
        route_id_day1="",
        souvenir_status=None,
        payment_status="",
        group_id=None,
        document_type="",
    )
    assert registration.route_id_day1 is None
    assert registration.souvenir_status.value == "pending"
    assert registration.payment_status.value == "paid"
    assert registration.group_id == "independiente"
    assert registration.document_type == "cedula"


# === THROTTLING ===

def test_throttle_sliding_window():
    throttle = ThrottlingMiddleware(["/inscripcion/verificar"], limit=2, interval=60)

    assert throttle.is_allowed("1.2.3.4", now=0)
    assert throttle.is_allowed("1.2.3.4", now=10)
    assert not throttle.is_allowed("1.2.3.4", now=20)
    assert throttle.is_allowed("5.6.7.8", now=20)
    assert throttle.is_allowed("1.2.3.4", now=61)


def test_throttle_sweeps_idle_clients():
    throttle = ThrottlingMiddleware(["/inscripcion/verificar"], limit=2, interval=60)
    for i in range(30):
        throttle.is_allowed(f"10.0.0.{i}", now=100)

    throttle.is_allowed("1.2.3.4", now=200)

    assert list(throttle._requests) == ["1.2.3.4"]


def test_throttle_reads_forwarded_for_only_behind_proxy():
    request = make_mocked_request("POST", "/inscripcion/verificar", headers={"X-Forwarded-For": "10.0.0.7, 172.16.0.1"})

    direct = ThrottlingMiddleware(["/inscripcion/verificar"])
    proxied = ThrottlingMiddleware(["/inscripcion/verificar"], trust_proxy=True)

    assert direct._client_ip(request) != "10.0.0.7"
    assert proxied._client_ip(request) == "10.0.0.7"
