"""
Registration wizard pages.

GET  /inscripcion                -> verify form (or closed page)
POST /inscripcion/verificar      -> individual / group leader form
POST /inscripcion/individual     -> register or update an individual
POST /inscripcion/grupo          -> create group + leader, redirect to group page
GET  /grupo/{group_id}           -> group page
POST /grupo/{group_id}/caminantes -> add a walker to the group

Every POST re-verifies document + code through RegistrationService.
"""

import logging
from typing import Dict, List, Optional
from aiohttp import web
from pydantic import ValidationError

from adapters.web.pages import (
    esc, layout, html_response, flash, flash_from_query,
    text_input, select_input, hidden, form_data, validation_errors, format_cop,
)
from core.domain.constants import DOCUMENT_TYPES, RH_TYPES, REGISTRATION_DAYS, DEFAULT_DOCUMENT_TYPE
from core.domain.models import (
    InscriptionForm, Registration, RegistrationStep, RouteAvailability,
    VerificationResult, Walker, EventSettings,
)
from core.services.route_service import RouteService
from core.utils.dates import format_date_es
from core.utils.language import detect_lang
from locales import t

logger = logging.getLogger(__name__)

TITLE = "Inscripción"

# Failures that send the visitor back to the first step
VERIFY_FAILURES = {
    "registration_closed", "missing_fields", "document_mismatch",
    "payment_not_confirmed", "invalid_code",
}

FORM_FIELDS = list(InscriptionForm.model_fields)
WALKER_FIELDS = list(Walker.model_fields)


def _document_select(selected: str, errors: Optional[Dict[str, str]] = None) -> str:
    return select_input(
        "document_type", "Tipo de documento", DOCUMENT_TYPES.items(),
        selected or DEFAULT_DOCUMENT_TYPE, errors,
    )


def _rh_select(selected: str, errors: Optional[Dict[str, str]] = None) -> str:
    return select_input("rh", "RH", [(rh, rh) for rh in RH_TYPES], selected, errors, blank="Selecciona")


def _route_selects(available: List[RouteAvailability], names: Dict[str, str], form: InscriptionForm) -> str:
    """One select per registration day; the visitor's current choice stays listed even when full"""
    html = ""
    for day in REGISTRATION_DAYS:
        current = form.route_id_day1 if day == 1 else form.route_id_day2
        options = [
            (r.id, f"{r.name} ({r.difficulty.value}, {r.spots_on(day)} cupos)")
            for r in RouteService.routes_for_day(available, day)
        ]
        if current and all(value != current for value, _ in options) and current in names:
            options.insert(0, (current, f"{names[current]} (tu ruta actual)"))
        html += select_input(f"route_id_day{day}", f"Ruta día {day}", options, current, blank="Sin ruta")
    return html


def _payment_info(event_settings: EventSettings) -> str:
    if not event_settings.bank_name:
        return ""
    return f"""
<div class="card">
  <h2>Datos de pago</h2>
  <div class="row"><span>Valor inscripción</span><strong>${format_cop(event_settings.registration_price)} COP</strong></div>
  <div class="row"><span>Banco</span><span>{esc(event_settings.bank_name)}</span></div>
  <div class="row"><span>Tipo de cuenta</span><span>{esc(event_settings.account_type)}</span></div>
  <div class="row"><span>Número</span><span>{esc(event_settings.account_number)}</span></div>
  <div class="row"><span>Titular</span><span>{esc(event_settings.account_holder)}</span></div>
  <div class="row"><span>NIT</span><span>{esc(event_settings.nit)}</span></div>
  <p class="muted">{esc(event_settings.payment_instructions)}</p>
</div>"""


def _registration_summary(registration: Registration, names: Dict[str, str]) -> str:
    rows = [
        ("Nombre", registration.full_name),
        ("Documento", f"{DOCUMENT_TYPES.get(registration.document_type, registration.document_type)} {registration.document_id}"),
        ("Teléfono", registration.phone),
        ("RH", registration.rh),
    ]
    for day in REGISTRATION_DAYS:
        route_id = registration.route_for_day(day)
        rows.append((f"Ruta día {day}", names.get(route_id, "Sin ruta") if route_id else "Sin ruta"))
    return "".join(f'<div class="row"><span>{label}</span><strong>{esc(value)}</strong></div>' for label, value in rows)


def setup_routes(app: web.Application, services, config) -> None:

    def lang_of(request: web.Request) -> str:
        return detect_lang(request.headers.get("Accept-Language"), config.default_language)

    async def render_closed(stored: Optional[EventSettings]) -> web.Response:
        if stored is None:
            body = """
<div class="card">
  <p class="big">¡INSCRIPCIONES NO DISPONIBLES!</p>
  <p>Las fechas de inscripción no han sido configuradas todavía.</p>
</div>"""
        else:
            body = f"""
<div class="card">
  <p class="big">¡INSCRIPCIONES CERRADAS!</p>
  <p>Período de inscripciones.</p>
  <div class="row"><span>Inicio:</span><strong>{esc(format_date_es(stored.registration_start_date))}</strong></div>
  <div class="row"><span>Cierre:</span><strong>{esc(format_date_es(stored.registration_end_date))}</strong></div>
</div>"""
        body += '<a class="button" href="/">Volver al Inicio</a>'
        return html_response(layout(TITLE, body))

    async def render_verify(form: InscriptionForm, message: str = "", status: int = 200) -> web.Response:
        event_settings = await services.settings.get_settings()
        body = f"""
<div class="card">
  <p>Ingresa tu número de documento y el código de confirmación que recibiste al pagar.</p>
  <p class="muted">Inscripciones hasta el {esc(format_date_es(event_settings.registration_end_date))}</p>
  <form method="post" action="/inscripcion/verificar">
    {text_input("document_id", "Número de documento", form.document_id)}
    {text_input("confirmation_code", "Código de confirmación", form.confirmation_code, extra='style="text-transform: uppercase"')}
    <button type="submit">Verificar código</button>
  </form>
</div>
{_payment_info(event_settings)}"""
        return html_response(layout(TITLE, body, flash=message), status=status)

    async def render_individual(form: InscriptionForm, is_update: bool, message: str = "",
                                status: int = 200) -> web.Response:
        available = await services.routes.get_available_routes()
        names = await services.people.route_names()
        heading = "Actualiza tu inscripción" if is_update else "Inscripción individual"
        button = "Guardar cambios" if is_update else "Completar inscripción"
        body = f"""
<div class="card">
  <h2>{heading}</h2>
  <form method="post" action="/inscripcion/individual">
    {hidden("document_id", form.document_id)}
    {hidden("confirmation_code", form.confirmation_code)}
    <p class="muted">Documento: {esc(form.document_id)} · Código: {esc(form.confirmation_code)}</p>
    {_document_select(form.document_type)}
    {text_input("full_name", "Nombre completo", form.full_name)}
    {text_input("phone", "Teléfono", form.phone, input_type="tel")}
    {_rh_select(form.rh)}
    {_route_selects(available, names, form)}
    <button type="submit">{button}</button>
  </form>
</div>"""
        return html_response(layout(TITLE, body, flash=message), status=status)

    async def render_group_leader(form: InscriptionForm, people_count: int, message: str = "",
                                  status: int = 200) -> web.Response:
        available = await services.routes.get_available_routes()
        names = await services.people.route_names()
        body = f"""
<div class="card">
  <h2>Inscripción de grupo ({people_count} personas)</h2>
  <p class="muted">Tú eres el líder del grupo. Después podrás agregar a los demás caminantes.</p>
  <form method="post" action="/inscripcion/grupo">
    {hidden("document_id", form.document_id)}
    {hidden("confirmation_code", form.confirmation_code)}
    {text_input("group_name", "Nombre del grupo", form.group_name)}
    {_document_select(form.document_type)}
    {text_input("leader_full_name", "Nombre completo del líder", form.leader_full_name)}
    {text_input("phone", "Teléfono", form.phone, input_type="tel")}
    {_rh_select(form.rh)}
    {_route_selects(available, names, form)}
    <button type="submit">Crear grupo</button>
  </form>
</div>"""
        return html_response(layout(TITLE, body, flash=message), status=status)

    async def render_step(form: InscriptionForm, verification: VerificationResult, message: str = "",
                          status: int = 200) -> web.Response:
        if verification.step == RegistrationStep.GROUP_LEADER:
            return await render_group_leader(form, verification.access_code.people_count, message, status)
        return await render_individual(form, verification.is_update, message, status)

    def group_redirect(group_id: str, message_key: str, kind: str = "ok"):
        return web.HTTPFound(f"/grupo/{group_id}?msg={message_key}&kind={kind}")

    async def read_form(request: web.Request) -> InscriptionForm:
        post = await request.post()
        return InscriptionForm(**form_data(post, FORM_FIELDS))

    # === HANDLERS ===

    async def handle_inscription(request: web.Request) -> web.Response:
        is_open, stored = await services.settings.registration_status()
        if not is_open:
            return await render_closed(stored)
        form = InscriptionForm(
            document_id=request.query.get("documento", ""),
            confirmation_code=request.query.get("codigo", "").upper(),
        )
        return await render_verify(form, message=flash_from_query(request, lang_of(request)))

    async def handle_verify(request: web.Request) -> web.Response:
        lang = lang_of(request)
        form = await read_form(request)
        verification = await services.registration.verify_access_code(form.document_id, form.confirmation_code)

        if not verification.success:
            logger.info(f"[WEB] Verification failed for document {form.document_id}: {verification.message_key}")
            if verification.message_key == "registration_closed":
                _, stored = await services.settings.registration_status()
                return await render_closed(stored)
            return await render_verify(form, flash(t(verification.message_key, lang), "error"), status=400)

        if verification.redirect_group_id:
            raise group_redirect(verification.redirect_group_id, verification.message_key, "info")

        existing = verification.existing_registration
        if existing:
            form = form.model_copy(update={
                "document_type": existing.document_type,
                "full_name": existing.full_name,
                "phone": existing.phone,
                "rh": existing.rh,
                "route_id_day1": existing.route_id_day1 or "",
                "route_id_day2": existing.route_id_day2 or "",
            })
        kind = "info" if verification.is_update else "ok"
        return await render_step(form, verification, flash(t(verification.message_key, lang), kind))

    async def handle_individual(request: web.Request) -> web.Response:
        lang = lang_of(request)
        form = await read_form(request)
        success, message_key, registration = await services.registration.submit_individual(form)

        if success:
            names = await services.people.route_names()
            body = f"""
<div class="card">
  {_registration_summary(registration, names)}
</div>
<a class="button" href="/">Volver al Inicio</a>"""
            return html_response(layout(TITLE, body, flash=flash(t(message_key, lang), "ok")))

        message = flash(t(message_key, lang), "error")
        if message_key in VERIFY_FAILURES:
            return await render_verify(form, message, status=400)
        verification = await services.registration.verify_access_code(form.document_id, form.confirmation_code)
        if not verification.success:
            return await render_verify(form, message, status=400)
        return await render_step(form, verification, message, status=400)

    async def handle_group(request: web.Request) -> web.Response:
        lang = lang_of(request)
        form = await read_form(request)
        success, message_key, group = await services.registration.register_group_leader(form)

        if success:
            raise group_redirect(group.id, message_key)
        if message_key == "group_already_registered" and group:
            raise group_redirect(group.id, message_key, "info")

        message = flash(t(message_key, lang), "error")
        if message_key in VERIFY_FAILURES:
            return await render_verify(form, message, status=400)
        verification = await services.registration.verify_access_code(form.document_id, form.confirmation_code)
        if not verification.success:
            return await render_verify(form, message, status=400)
        return await render_step(form, verification, message, status=400)

    async def render_group_page(request: web.Request, walker: Optional[dict] = None,
                                errors: Optional[Dict[str, str]] = None, message: str = "",
                                status: int = 200) -> web.Response:
        group_id = request.match_info["group_id"]
        group, leader, members = await services.registration.get_group(group_id)
        if not group or not leader:
            body = f'<div class="card">{flash(t("group_not_found", lang_of(request)), "error")}</div>'
            return html_response(layout("Grupo", body), status=404)

        names = await services.people.route_names()
        walker = walker or {}
        errors = errors or {}
        registered = 1 + len(members)

        member_rows = "".join(
            f"<tr><td>{esc(m.full_name)}</td><td>{esc(m.document_id)}</td>"
            f"<td>{esc(m.phone)}</td><td>{esc(m.rh)}</td></tr>"
            for m in members
        ) or '<tr><td colspan="4" class="muted">Aún no hay caminantes agregados.</td></tr>'

        if registered < group.member_count:
            add_form = f"""
<div class="card">
  <h2>Agregar caminante</h2>
  <form method="post" action="/grupo/{esc(group.id)}/caminantes">
    {text_input("full_name", "Nombre completo", walker.get("full_name", ""), errors)}
    {_document_select(walker.get("document_type", ""), errors)}
    {text_input("document_id", "Número de documento", walker.get("document_id", ""), errors)}
    {text_input("phone", "Teléfono", walker.get("phone", ""), errors, input_type="tel")}
    {_rh_select(walker.get("rh", ""), errors)}
    <button type="submit">Agregar</button>
  </form>
</div>"""
        else:
            add_form = '<div class="card"><p>El grupo está completo.</p></div>'

        body = f"""
<div class="card">
  <p class="big">{esc(group.group_name)}</p>
  <div class="row"><span>Caminantes inscritos</span><strong>{registered} de {group.member_count}</strong></div>
  <h2>Líder</h2>
  {_registration_summary(leader, names)}
</div>
<div class="card">
  <h2>Caminantes</h2>
  <table><tr><th>Nombre</th><th>Documento</th><th>Teléfono</th><th>RH</th></tr>{member_rows}</table>
</div>
{add_form}"""
        message = message or flash_from_query(request, lang_of(request))
        return html_response(layout("Grupo", body, flash=message), status=status)

    async def handle_group_page(request: web.Request) -> web.Response:
        return await render_group_page(request)

    async def handle_add_walker(request: web.Request) -> web.Response:
        lang = lang_of(request)
        group_id = request.match_info["group_id"]
        post = await request.post()
        data = form_data(post, WALKER_FIELDS)
        try:
            walker = Walker(**{k: v for k, v in data.items() if v or k != "document_type"})
        except ValidationError as e:
            return await render_group_page(request, data, validation_errors(e), status=400)

        success, message_key, _ = await services.registration.add_group_member(group_id, walker)
        if success:
            raise group_redirect(group_id, message_key)
        return await render_group_page(request, data, message=flash(t(message_key, lang), "error"), status=400)

    app.router.add_get("/inscripcion", handle_inscription)
    app.router.add_post("/inscripcion/verificar", handle_verify)
    app.router.add_post("/inscripcion/individual", handle_individual)
    app.router.add_post("/inscripcion/grupo", handle_group)
    app.router.add_get("/grupo/{group_id}", handle_group_page)
    app.router.add_post("/grupo/{group_id}/caminantes", handle_add_walker)
