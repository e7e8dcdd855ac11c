"""
Public pages: home with pre-registration form and the marketing landing page.
"""

import logging
from aiohttp import web

from adapters.web.pages import esc, layout, html_response, flash, text_input, format_cop
from core.utils.dates import format_date_es
from core.utils.language import detect_lang
from core.utils.whatsapp import whatsapp_link
from locales import t

logger = logging.getLogger(__name__)

LANDING_MESSAGE = (
    "¡Hola! Quiero inscribirme en la {event_name}. "
    "Me interesa el cupo de ${price} que incluye el kit y las 2 rutas."
)

LANDING_INCLUDES = [
    "Póliza de seguro",
    "Souvenir exclusivo",
    "Refrigerios",
    "Elección de 2 rutas",
    "Toda la programación",
]


def setup_routes(app: web.Application, services, config, features) -> None:

    async def render_home(request: web.Request, form: dict = None, message: str = "", status: int = 200) -> web.Response:
        form = form or {}
        event_settings = await services.settings.get_settings()
        routes = await services.routes.get_available_routes()

        route_items = "".join(
            f'<li>{esc(r.name)} <span class="muted">({esc(r.difficulty.value)})</span></li>'
            for r in routes
        ) or '<li class="muted">Pronto publicaremos las rutas.</li>'

        prereg_html = ""
        if features.PREREGISTRATION_ENABLED:
            prereg_html = f"""
<div class="card">
  <h2>Pre-inscríbete</h2>
  <p class="muted">Déjanos tus datos y te contactamos por WhatsApp con toda la información.</p>
  <form method="post" action="/preinscripcion">
    {text_input("name", "Nombre completo", form.get("name", ""))}
    {text_input("whatsapp", "WhatsApp", form.get("whatsapp", ""), input_type="tel")}
    <button type="submit">Quiero pre-inscribirme</button>
  </form>
</div>"""

        body = f"""
<div class="card">
  <p class="big">{esc(config.event_name)}</p>
  <p>Caminatas ecológicas y culturales organizadas por {esc(config.organizer_name)}.</p>
  <div class="row"><span>Inscripción</span><strong>${format_cop(event_settings.registration_price)} COP</strong></div>
  <div class="row"><span>Inscripciones desde</span><span>{esc(format_date_es(event_settings.registration_start_date))}</span></div>
  <div class="row"><span>Hasta</span><span>{esc(format_date_es(event_settings.registration_end_date))}</span></div>
  <a class="button" href="/inscripcion">Ya tengo mi código: inscribirme</a>
</div>
<div class="card">
  <h2>Rutas</h2>
  <ul>{route_items}</ul>
</div>
{prereg_html}"""
        return html_response(layout(config.event_name, body, flash=message), status=status)

    async def handle_home(request: web.Request) -> web.Response:
        return await render_home(request)

    async def handle_preregister(request: web.Request) -> web.Response:
        if not features.PREREGISTRATION_ENABLED:
            raise web.HTTPNotFound()
        lang = detect_lang(request.headers.get("Accept-Language"), config.default_language)
        post = await request.post()
        name = str(post.get("name", ""))
        whatsapp = str(post.get("whatsapp", ""))

        success, message_key, url = await services.preregistration.preregister(name, whatsapp)
        if not success:
            logger.info(f"[WEB] Pre-registration rejected: {message_key}")
            return await render_home(
                request,
                form={"name": name, "whatsapp": whatsapp},
                message=flash(t(message_key, lang), "error"),
                status=400,
            )
        raise web.HTTPFound(url)

    async def handle_landing(request: web.Request) -> web.Response:
        if not features.LANDING_PAGE_ENABLED:
            raise web.HTTPNotFound()

        price = format_cop(config.landing_price)
        link = whatsapp_link(
            config.landing_whatsapp_number,
            LANDING_MESSAGE.format(event_name=config.event_name, price=price),
        )
        includes = "".join(f"<li>{esc(item)}</li>" for item in LANDING_INCLUDES)

        head_extra = ""
        if config.meta_pixel_id:
            pixel = esc(config.meta_pixel_id)
            head_extra = (
                f'<script>!function(f,b,e,v,n,t,s){{if(f.fbq)return;n=f.fbq=function(){{n.callMethod?'
                f'n.callMethod.apply(n,arguments):n.queue.push(arguments)}};if(!f._fbq)f._fbq=n;'
                f'n.push=n;n.loaded=!0;n.version="2.0";n.queue=[];t=b.createElement(e);t.async=!0;'
                f't.src=v;s=b.getElementsByTagName(e)[0];s.parentNode.insertBefore(t,s)}}'
                f'(window,document,"script","https://connect.facebook.net/en_US/fbevents.js");'
                f'fbq("init","{pixel}");fbq("track","PageView");</script>'
            )

        body = f"""
<div class="card">
  <p class="big">EL PUEBLO QUE ENAMORA</p>
  <p>Vive la {esc(config.event_name)}. Naturaleza, historia y aventura en un solo lugar.</p>
  <a class="button" href="{esc(link)}">QUIERO MI CUPO POR ${price}</a>
</div>
<div class="card">
  <h2>${price} de inversión total</h2>
  <p>Tu inscripción incluye:</p>
  <ul>{includes}</ul>
</div>
<div class="card">
  <h2>¿LISTO PARA ENAMORARTE?</h2>
  <p>¡Escríbenos ahora mismo y separa tu cupo!</p>
  <a class="button" href="{esc(link)}">HABLAR CON UN ASESOR</a>
</div>"""
        return html_response(layout(config.event_name, body, head_extra=head_extra))

    app.router.add_get("/", handle_home)
    app.router.add_post("/preinscripcion", handle_preregister)
    app.router.add_get("/landing", handle_landing)
