"""
Admin pages: dashboard, routes, people, access codes, souvenirs, settings, pre-registrations.
All paths live under /admin and are guarded by admin_auth_middleware.
"""

import logging
from typing import Dict, Optional
from aiohttp import web
from pydantic import ValidationError

from adapters.web.pages import (
    esc, layout, html_response, flash, flash_from_query, ADMIN_NAV,
    text_input, select_input, hidden, post_button, form_data, validation_errors,
    field_error, format_cop,
)
from core.domain.constants import DOCUMENT_TYPES, RH_TYPES, MAX_EVENT_DAYS
from core.domain.models import (
    AccessCodeCreate, AccessCodeStatus, DaySpots, Difficulty,
    EventSettingsForm, RegistrationUpdate, Route, RouteForm,
)
from core.utils.dates import format_date_es
from core.utils.qr_generator import generate_access_code_qr, registration_link
from locales import t

logger = logging.getLogger(__name__)

ROUTE_FIELDS = ["name", "description", "difficulty", "image_url", "duration", "distance", "elevation", "meeting_point"]
PERSON_FIELDS = ["full_name", "phone", "rh", "document_type"]
SETTINGS_FIELDS = list(EventSettingsForm.model_fields)

STATUS_LABELS = {
    AccessCodeStatus.PENDING: "Pendiente de pago",
    AccessCodeStatus.PAID: "Pagado",
    AccessCodeStatus.USED: "Usado",
}

# New routes start with days 1 and 2 open
DEFAULT_ROUTE_DAYS = [
    DaySpots(day=1, spots=0, enabled=True),
    DaySpots(day=2, spots=0, enabled=True),
    DaySpots(day=3, spots=0, enabled=False),
]


def page(title: str, body: str, message: str = "", status: int = 200) -> web.Response:
    return html_response(layout(title, body, flash=message, nav=ADMIN_NAV), status=status)


def redirect(path: str, message_key: str, kind: str = "ok"):
    return web.HTTPFound(f"{path}?msg={message_key}&kind={kind}")


def _bar(pct: float) -> str:
    return f'<div class="bar"><div style="width: {min(pct, 100.0)}%"></div></div>'


def parse_route_days(post) -> list:
    """day{i}_enabled / day{i}_spots -> DaySpots; a disabled day keeps 0 spots"""
    days = []
    for i in range(1, MAX_EVENT_DAYS + 1):
        enabled = post.get(f"day{i}_enabled") == "on"
        try:
            spots = int(post.get(f"day{i}_spots") or 0) if enabled else 0
        except ValueError:
            spots = -1
        days.append({"day": i, "spots": spots, "enabled": enabled})
    return days


def setup_routes(app: web.Application, services, config) -> None:

    # === DASHBOARD ===

    async def handle_dashboard(request: web.Request) -> web.Response:
        stats = await services.dashboard.get_stats()
        code_totals = await services.codes.totals_by_status()

        available = (
            f'<span class="big">{stats.available}</span>' if stats.available >= 0
            else '<span class="big error-text">¡Cupos excedidos!</span>'
        )
        route_rows = "".join(
            f"<tr><td>{esc(r.name)}</td>"
            f"<td>{r.day1_used}/{r.day1_total} ({r.day1_pct}%)</td>"
            f"<td>{r.day2_used}/{r.day2_total} ({r.day2_pct}%)</td>"
            f"<td>{_bar(r.bar_pct)}</td></tr>"
            for r in stats.routes
        ) or '<tr><td colspan="4" class="muted">No hay rutas.</td></tr>'
        code_rows = "".join(
            f'<div class="row"><span>{STATUS_LABELS[AccessCodeStatus(status)]}</span><strong>{count}</strong></div>'
            for status, count in code_totals.items()
        )

        body = f"""
<div class="card">
  <div class="row"><span>Cupos vendidos</span><span class="big">{stats.total_spots}</span></div>
  <div class="row"><span>Inscritos</span><span class="big">{stats.total_registered}</span></div>
  <div class="row"><span>Cupos disponibles</span>{available}</div>
  <div class="row"><span>Ocupación</span><strong>{stats.occupancy_pct}%</strong></div>
  {_bar(stats.occupancy_pct)}
</div>
<div class="card">
  <h2>Souvenirs</h2>
  <div class="row"><span>Entregados</span><strong>{stats.souvenirs_delivered} ({stats.delivered_pct}%)</strong></div>
  <div class="row"><span>Pendientes</span><strong>{stats.total_registered - stats.souvenirs_delivered} ({stats.pending_pct}%)</strong></div>
</div>
<div class="card">
  <h2>Códigos de acceso</h2>
  {code_rows}
</div>
<div class="card">
  <h2>Ocupación por ruta</h2>
  <table><tr><th>Ruta</th><th>Día 1</th><th>Día 2</th><th></th></tr>{route_rows}</table>
</div>"""
        return page("Panel de Administración", body, flash_from_query(request))

    # === ROUTES ===

    def route_form_html(action: str, values: Dict[str, str], days, errors: Dict[str, str], button: str) -> str:
        day_inputs = ""
        for d in days:
            checked = " checked" if d.enabled else ""
            day_inputs += f"""
<div class="row">
  <label><input type="checkbox" name="day{d.day}_enabled"{checked}> Día {d.day}</label>
  <input type="number" min="0" name="day{d.day}_spots" value="{d.spots}" style="width: 120px">
</div>"""
        difficulties = [(d.value, d.value) for d in Difficulty]
        return f"""
<form method="post" action="{esc(action)}">
  {text_input("name", "Nombre", values.get("name", ""), errors)}
  {text_input("description", "Descripción", values.get("description", ""), errors)}
  {select_input("difficulty", "Dificultad", difficulties, values.get("difficulty", Difficulty.EASY.value), errors)}
  {text_input("image_url", "URL de imagen", values.get("image_url", ""), errors, placeholder="https://")}
  {text_input("duration", "Duración", values.get("duration", ""), errors)}
  {text_input("distance", "Distancia", values.get("distance", ""), errors)}
  {text_input("elevation", "Desnivel", values.get("elevation", ""), errors)}
  {text_input("meeting_point", "Punto de encuentro", values.get("meeting_point", ""), errors)}
  <label>Cupos por día</label>
  {day_inputs}
  {field_error(errors, "available_spots_by_day")}
  <button type="submit">{button}</button>
</form>"""

    def route_values(route: Route) -> Dict[str, str]:
        data = route.model_dump(mode="json", include=set(ROUTE_FIELDS))
        return {k: str(v or "") for k, v in data.items()}

    async def render_routes(request: web.Request, values: Optional[Dict[str, str]] = None, days=None,
                            errors: Optional[Dict[str, str]] = None, status: int = 200) -> web.Response:
        routes = await services.routes.list_routes()
        rows = ""
        for r in routes:
            spots = ", ".join(
                f"Día {d.day}: {d.spots - r.registered_by_day.get(d.day, 0)}/{d.spots}"
                for d in r.available_spots_by_day if d.enabled
            )
            rows += (
                f"<tr><td>{esc(r.name)}</td><td>{esc(r.difficulty.value)}</td><td>{esc(spots)}</td>"
                f'<td><a href="/admin/rutas/{esc(r.id)}">Editar</a> '
                f'{post_button(f"/admin/rutas/{r.id}/eliminar", "Eliminar", danger=True, confirm="¿Eliminar esta ruta?")}'
                f"</td></tr>"
            )
        rows = rows or '<tr><td colspan="4" class="muted">No hay rutas.</td></tr>'
        body = f"""
<div class="card">
  <table><tr><th>Ruta</th><th>Dificultad</th><th>Cupos libres</th><th></th></tr>{rows}</table>
</div>
<div class="card">
  <h2>Nueva ruta</h2>
  {route_form_html("/admin/rutas", values or {}, days or DEFAULT_ROUTE_DAYS, errors or {}, "Agregar ruta")}
</div>"""
        return page("Gestión de Rutas", body, flash_from_query(request), status)

    async def handle_routes(request: web.Request) -> web.Response:
        return await render_routes(request)

    def read_route_form(post):
        values = form_data(post, ROUTE_FIELDS)
        days = parse_route_days(post)
        try:
            return RouteForm(**values, available_spots_by_day=days), values, days, {}
        except ValidationError as e:
            shown = [DaySpots(day=d["day"], spots=max(d["spots"], 0), enabled=d["enabled"]) for d in days]
            return None, values, shown, validation_errors(e)

    async def handle_create_route(request: web.Request) -> web.Response:
        post = await request.post()
        form, values, days, errors = read_route_form(post)
        if form is None:
            return await render_routes(request, values, days, errors, status=400)
        await services.routes.create_route(form)
        raise redirect("/admin/rutas", "route_created")

    async def handle_edit_route(request: web.Request) -> web.Response:
        route = await services.routes.get_route(request.match_info["route_id"])
        if not route:
            raise redirect("/admin/rutas", "route_not_found", "error")
        body = f"""
<div class="card">
  {route_form_html(f"/admin/rutas/{route.id}", route_values(route), route.spots_for_form(), {}, "Guardar cambios")}
</div>"""
        return page(f"Editar ruta: {route.name}", body)

    async def handle_update_route(request: web.Request) -> web.Response:
        route_id = request.match_info["route_id"]
        post = await request.post()
        form, values, days, errors = read_route_form(post)
        if form is None:
            body = f'<div class="card">{route_form_html(f"/admin/rutas/{route_id}", values, days, errors, "Guardar cambios")}</div>'
            return page("Editar ruta", body, status=400)
        route = await services.routes.update_route(route_id, form)
        if not route:
            raise redirect("/admin/rutas", "route_not_found", "error")
        raise redirect("/admin/rutas", "route_updated")

    async def handle_delete_route(request: web.Request) -> web.Response:
        deleted = await services.routes.delete_route(request.match_info["route_id"])
        if not deleted:
            raise redirect("/admin/rutas", "route_not_found", "error")
        raise redirect("/admin/rutas", "route_deleted")

    # === PEOPLE ===

    async def handle_people(request: web.Request) -> web.Response:
        query = request.query.get("q", "").strip()
        people = await services.people.search(query or None)
        names = await services.people.route_names()

        def route_name(route_id):
            return names.get(route_id, "-") if route_id else "-"

        rows = "".join(
            f'<tr><td><a href="/admin/personas/{esc(p.document_id)}">{esc(p.full_name)}</a></td>'
            f"<td>{esc(p.document_id)}</td><td>{esc(p.phone)}</td>"
            f"<td>{esc(route_name(p.route_id_day1))}</td><td>{esc(route_name(p.route_id_day2))}</td>"
            f"<td>{esc(p.group_name or '')}</td></tr>"
            for p in people
        ) or '<tr><td colspan="6" class="muted">No se encontraron personas.</td></tr>'

        body = f"""
<div class="card">
  <form method="get" action="/admin/personas">
    {text_input("q", "Buscar por documento o nombre", query)}
    <button type="submit">Buscar</button>
  </form>
</div>
<div class="card">
  <p class="muted">{len(people)} personas</p>
  <table><tr><th>Nombre</th><th>Documento</th><th>Teléfono</th><th>Ruta día 1</th><th>Ruta día 2</th><th>Grupo</th></tr>{rows}</table>
</div>"""
        return page("Gestión de Personas", body, flash_from_query(request))

    async def render_person(request: web.Request, document_id: str, values: Optional[Dict[str, str]] = None,
                            errors: Optional[Dict[str, str]] = None, message: str = "",
                            status: int = 200) -> web.Response:
        person = await services.people.get_person(document_id)
        if not person:
            raise redirect("/admin/personas", "registration_not_found", "error")
        values = values or person.model_dump(mode="json", include=set(PERSON_FIELDS))
        errors = errors or {}
        path = f"/admin/personas/{person.document_id}"
        body = f"""
<div class="card">
  <div class="row"><span>Documento</span><strong>{esc(person.document_id)}</strong></div>
  <div class="row"><span>Tipo de inscripción</span><span>{esc(person.registration_type.value)}</span></div>
  <div class="row"><span>Código</span><span>{esc(person.access_code)}</span></div>
  <div class="row"><span>Souvenir</span><span>{esc(person.souvenir_status.value)}</span></div>
</div>
<div class="card">
  <form method="post" action="{esc(path)}">
    {text_input("full_name", "Nombre completo", values.get("full_name", ""), errors)}
    {select_input("document_type", "Tipo de documento", DOCUMENT_TYPES.items(), values.get("document_type", ""), errors)}
    {text_input("phone", "Teléfono", values.get("phone", ""), errors)}
    {select_input("rh", "RH", [(rh, rh) for rh in RH_TYPES], values.get("rh", ""), errors)}
    <button type="submit">Guardar</button>
  </form>
  {post_button(f"{path}/eliminar", "Eliminar inscripción", danger=True, confirm="¿Eliminar esta inscripción?")}
</div>"""
        return page(person.full_name or person.document_id, body, message or flash_from_query(request), status)

    async def handle_person(request: web.Request) -> web.Response:
        return await render_person(request, request.match_info["document_id"])

    async def handle_update_person(request: web.Request) -> web.Response:
        document_id = request.match_info["document_id"]
        post = await request.post()
        values = form_data(post, PERSON_FIELDS)
        try:
            update = RegistrationUpdate(**{k: v for k, v in values.items() if v})
        except ValidationError as e:
            return await render_person(request, document_id, values, validation_errors(e), status=400)
        person = await services.people.update_person(document_id, update)
        if not person:
            raise redirect("/admin/personas", "registration_not_found", "error")
        raise redirect(f"/admin/personas/{document_id}", "person_updated")

    async def handle_delete_person(request: web.Request) -> web.Response:
        success, message_key = await services.people.delete_person(request.match_info["document_id"])
        raise redirect("/admin/personas", message_key, "ok" if success else "error")

    # === ACCESS CODES ===

    async def render_codes(request: web.Request, values: Optional[Dict[str, str]] = None,
                           errors: Optional[Dict[str, str]] = None, message: str = "",
                           status: int = 200) -> web.Response:
        status_filter = request.query.get("estado", "")
        try:
            selected = AccessCodeStatus(status_filter) if status_filter else None
        except ValueError:
            selected = None
        codes = await services.codes.list_codes(selected)
        values = values or {}
        errors = errors or {}

        rows = ""
        for c in codes:
            actions = f'<a href="/admin/codigos/{esc(c.id)}/qr.png">QR</a> '
            if c.status == AccessCodeStatus.PENDING:
                actions += post_button(f"/admin/codigos/{c.id}/pagado", "Confirmar pago")
            if c.status != AccessCodeStatus.USED:
                actions += post_button(f"/admin/codigos/{c.id}/eliminar", "Eliminar", danger=True, confirm="¿Eliminar este código?")
            kind = f"Grupo ({c.people_count})" if c.is_group else "Individual"
            rows += (
                f"<tr><td><strong>{esc(c.code)}</strong></td><td>{esc(c.document_id)}</td>"
                f"<td>{kind}</td><td>{STATUS_LABELS[c.status]}</td><td>{actions}</td></tr>"
            )
        rows = rows or '<tr><td colspan="5" class="muted">No hay códigos.</td></tr>'

        filters = " ".join(
            f'<a href="/admin/codigos?estado={s.value}">{STATUS_LABELS[s]}</a>' for s in AccessCodeStatus
        )
        body = f"""
<div class="card">
  <h2>Nuevo código</h2>
  <form method="post" action="/admin/codigos">
    {text_input("document_id", "Documento del comprador", values.get("document_id", ""), errors)}
    <label><input type="checkbox" name="is_group"{" checked" if values.get("is_group") == "on" else ""}> Es un grupo</label>
    {text_input("people_count", "Número de personas", values.get("people_count", "1"), errors, input_type="number")}
    {field_error(errors, "__all__")}
    <button type="submit">Generar código</button>
  </form>
</div>
<div class="card">
  <p><a href="/admin/codigos">Todos</a> {filters}</p>
  <table><tr><th>Código</th><th>Documento</th><th>Tipo</th><th>Estado</th><th></th></tr>{rows}</table>
</div>"""
        return page("Códigos de Acceso", body, message or flash_from_query(request), status)

    async def handle_codes(request: web.Request) -> web.Response:
        return await render_codes(request)

    async def handle_create_code(request: web.Request) -> web.Response:
        post = await request.post()
        values = form_data(post, ["document_id", "is_group", "people_count"])
        try:
            data = AccessCodeCreate(
                document_id=values["document_id"],
                is_group=values["is_group"] == "on",
                people_count=values["people_count"] or 1,
            )
        except ValidationError as e:
            return await render_codes(request, values, validation_errors(e), status=400)

        code = await services.codes.create_code(data)
        link = registration_link(config.public_base_url, code.code, code.document_id)
        message = flash(t("code_created", code=code.code), "ok") + (
            f'<div class="card"><p>Enlace de inscripción:</p><p><a href="{esc(link)}">{esc(link)}</a></p>'
            f'<img src="/admin/codigos/{esc(code.id)}/qr.png" alt="QR {esc(code.code)}" width="200"></div>'
        )
        return await render_codes(request, message=message)

    async def handle_mark_paid(request: web.Request) -> web.Response:
        success, message_key = await services.codes.mark_paid(request.match_info["code_id"])
        raise redirect("/admin/codigos", message_key, "ok" if success else "error")

    async def handle_delete_code(request: web.Request) -> web.Response:
        success, message_key = await services.codes.delete_code(request.match_info["code_id"])
        raise redirect("/admin/codigos", message_key, "ok" if success else "error")

    async def handle_code_qr(request: web.Request) -> web.Response:
        code = await services.codes.get_by_id(request.match_info["code_id"])
        if not code:
            raise web.HTTPNotFound()
        png = generate_access_code_qr(code.code, code.document_id, config.public_base_url)
        return web.Response(body=png, content_type="image/png")

    # === SOUVENIRS ===

    async def render_souvenirs(request: web.Request, result_html: str = "", document_id: str = "",
                               message: str = "") -> web.Response:
        stats = await services.souvenirs.get_stats()
        recent = await services.souvenirs.get_recent_deliveries()
        recent_rows = "".join(
            f"<tr><td>{esc(r.full_name)}</td><td>{esc(r.document_id)}</td>"
            f"<td>{r.updated_at.strftime('%d/%m %H:%M') if r.updated_at else ''}</td></tr>"
            for r in recent
        ) or '<tr><td colspan="3" class="muted">Aún no hay entregas.</td></tr>'
        body = f"""
<div class="card">
  <div class="row"><span>Total inscritos</span><strong>{stats.total}</strong></div>
  <div class="row"><span>Entregados</span><strong>{stats.delivered}</strong></div>
  <div class="row"><span>Pendientes</span><strong>{stats.pending}</strong></div>
</div>
<div class="card">
  <form method="post" action="/admin/souvenirs/buscar">
    {text_input("document_id", "Número de documento", document_id)}
    <button type="submit">Buscar</button>
  </form>
  {result_html}
</div>
<div class="card">
  <h2>Entregas recientes</h2>
  <table><tr><th>Nombre</th><th>Documento</th><th>Hora</th></tr>{recent_rows}</table>
</div>"""
        return page("Control de Souvenirs", body, message)

    async def handle_souvenirs(request: web.Request) -> web.Response:
        return await render_souvenirs(request, message=flash_from_query(request))

    async def handle_souvenir_lookup(request: web.Request) -> web.Response:
        post = await request.post()
        document_id = str(post.get("document_id", "")).strip()
        if not document_id:
            return await render_souvenirs(request, message=flash(t("missing_fields"), "error"))

        result = await services.souvenirs.lookup(document_id)
        person = result.registration
        if result.status == "ready":
            result_html = (
                f"<p>{esc(t('souvenir_ready', name=person.full_name, document_id=person.document_id))}</p>"
                f'<form method="post" action="/admin/souvenirs/entregar">'
                f'{hidden("document_id", person.document_id)}'
                f'<button type="submit">Confirmar entrega</button></form>'
            )
            return await render_souvenirs(request, result_html, document_id)

        if result.status == "already_delivered":
            message = flash(t("souvenir_already_delivered", name=person.full_name), "info")
        else:
            message = flash(t(f"souvenir_{result.status}"), "error")
        return await render_souvenirs(request, document_id=document_id, message=message)

    async def handle_souvenir_deliver(request: web.Request) -> web.Response:
        post = await request.post()
        result = await services.souvenirs.deliver(str(post.get("document_id", "")))
        if result.status == "delivered":
            message = flash(t("souvenir_delivered", name=result.registration.full_name), "ok")
        elif result.status == "already_delivered":
            message = flash(t("souvenir_already_delivered", name=result.registration.full_name), "info")
        else:
            message = flash(t(f"souvenir_{result.status}"), "error")
        return await render_souvenirs(request, message=message)

    # === SETTINGS ===

    async def render_settings(request: web.Request, values: Optional[Dict[str, str]] = None,
                              errors: Optional[Dict[str, str]] = None, message: str = "",
                              status: int = 200) -> web.Response:
        current = await services.settings.get_settings()
        if values is None:
            values = {k: "" if v is None else str(v) for k, v in current.model_dump(mode="json").items()}
        errors = errors or {}
        updated = current.updated_at.strftime("%d/%m/%Y %H:%M") if current.updated_at else t("not_configured")
        body = f"""
<div class="card">
  <div class="row"><span>Precio actual</span><strong>${format_cop(current.registration_price)} COP</strong></div>
  <div class="row"><span>Inscripciones</span><span>{esc(format_date_es(current.registration_start_date))} → {esc(format_date_es(current.registration_end_date))}</span></div>
  <p class="muted">Última actualización: {esc(updated)}</p>
</div>
<div class="card">
  <form method="post" action="/admin/configuracion">
    {text_input("registration_price", "Valor de inscripción (COP)", values.get("registration_price", ""), errors, input_type="number")}
    {text_input("bank_name", "Banco", values.get("bank_name", ""), errors)}
    {text_input("account_type", "Tipo de cuenta", values.get("account_type", ""), errors)}
    {text_input("account_number", "Número de cuenta", values.get("account_number", ""), errors)}
    {text_input("account_holder", "Titular", values.get("account_holder", ""), errors)}
    {text_input("nit", "NIT", values.get("nit", ""), errors)}
    {text_input("whatsapp_number", "WhatsApp de pagos", values.get("whatsapp_number", ""), errors)}
    {text_input("payment_instructions", "Instrucciones de pago", values.get("payment_instructions", ""), errors)}
    {text_input("registration_start_date", "Inicio de inscripciones", values.get("registration_start_date", ""), errors, input_type="date")}
    {text_input("registration_end_date", "Cierre de inscripciones", values.get("registration_end_date", ""), errors, input_type="date")}
    {field_error(errors, "__all__")}
    <button type="submit">Guardar</button>
  </form>
</div>"""
        return page("Configuración de Precios", body, message or flash_from_query(request), status)

    async def handle_settings(request: web.Request) -> web.Response:
        return await render_settings(request)

    async def handle_save_settings(request: web.Request) -> web.Response:
        post = await request.post()
        values = form_data(post, SETTINGS_FIELDS)
        try:
            form = EventSettingsForm(**{k: v for k, v in values.items() if v})
        except ValidationError as e:
            logger.info(f"[WEB] Settings form rejected: {e.error_count()} errors")
            return await render_settings(request, values, validation_errors(e), status=400)
        await services.settings.update_settings(form)
        raise redirect("/admin/configuracion", "settings_saved")

    # === PRE-REGISTRATIONS ===

    async def handle_preregistrations(request: web.Request) -> web.Response:
        leads = await services.preregistration.list_preregistrations()
        rows = "".join(
            f"<tr><td>{esc(p.name)}</td><td>{esc(p.whatsapp)}</td><td>{esc(p.status)}</td>"
            f"<td>{p.created_at.strftime('%d/%m/%Y %H:%M') if p.created_at else ''}</td></tr>"
            for p in leads
        ) or '<tr><td colspan="4" class="muted">No hay pre-inscripciones.</td></tr>'
        body = f"""
<div class="card">
  <p class="muted">{len(leads)} pre-inscripciones</p>
  <table><tr><th>Nombre</th><th>WhatsApp</th><th>Estado</th><th>Fecha</th></tr>{rows}</table>
</div>"""
        return page("Pre-inscripciones", body)

    app.router.add_get("/admin", handle_dashboard)
    app.router.add_get("/admin/rutas", handle_routes)
    app.router.add_post("/admin/rutas", handle_create_route)
    app.router.add_get("/admin/rutas/{route_id}", handle_edit_route)
    app.router.add_post("/admin/rutas/{route_id}", handle_update_route)
    app.router.add_post("/admin/rutas/{route_id}/eliminar", handle_delete_route)
    app.router.add_get("/admin/personas", handle_people)
    app.router.add_get("/admin/personas/{document_id}", handle_person)
    app.router.add_post("/admin/personas/{document_id}", handle_update_person)
    app.router.add_post("/admin/personas/{document_id}/eliminar", handle_delete_person)
    app.router.add_get("/admin/codigos", handle_codes)
    app.router.add_post("/admin/codigos", handle_create_code)
    app.router.add_post("/admin/codigos/{code_id}/pagado", handle_mark_paid)
    app.router.add_post("/admin/codigos/{code_id}/eliminar", handle_delete_code)
    app.router.add_get("/admin/codigos/{code_id}/qr.png", handle_code_qr)
    app.router.add_get("/admin/souvenirs", handle_souvenirs)
    app.router.add_post("/admin/souvenirs/buscar", handle_souvenir_lookup)
    app.router.add_post("/admin/souvenirs/entregar", handle_souvenir_deliver)
    app.router.add_get("/admin/configuracion", handle_settings)
    app.router.add_post("/admin/configuracion", handle_save_settings)
    app.router.add_get("/admin/preinscripciones", handle_preregistrations)
