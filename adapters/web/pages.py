"""
HTML rendering helpers shared by all web handlers.
Pages are plain f-strings; every value coming from users or the database goes through esc().
"""

from html import escape as esc
from typing import Dict, Iterable, Optional, Tuple

from aiohttp import web
from pydantic import ValidationError

from locales import t

_STYLE = """
  body { font-family: -apple-system, BlinkMacSystemFont, sans-serif; max-width: 860px; margin: 0 auto; padding: 16px; background: #f6f8f4; color: #1f2a1c; }
  h1 { font-size: 1.5em; border-bottom: 2px solid #3b7a2a; padding-bottom: 8px; }
  h2 { font-size: 1.2em; margin-top: 24px; }
  nav a { margin-right: 12px; color: #3b7a2a; }
  .card { background: #fff; border: 1px solid #d6e2cf; border-radius: 8px; padding: 16px; margin-bottom: 12px; }
  .big { font-size: 2em; font-weight: bold; color: #3b7a2a; }
  .row { display: flex; justify-content: space-between; margin: 4px 0; }
  .muted { color: #6b7a66; font-size: 0.9em; }
  .flash { padding: 10px 14px; border-radius: 6px; margin-bottom: 12px; }
  .flash.ok { background: #e3f4dc; border: 1px solid #8cc47a; }
  .flash.error { background: #fbe4e1; border: 1px solid #e29a90; }
  .flash.info { background: #e6eef9; border: 1px solid #9bb6e0; }
  .error-text { color: #b3261e; font-size: 0.85em; }
  table { width: 100%; border-collapse: collapse; margin-top: 8px; }
  th, td { text-align: left; padding: 6px 8px; border-bottom: 1px solid #e3e9df; }
  label { display: block; margin-top: 10px; font-weight: 600; }
  input, select, textarea { width: 100%; padding: 8px; margin-top: 4px; box-sizing: border-box; }
  input[type=checkbox] { width: auto; }
  button, .button { background: #3b7a2a; color: #fff; border: 0; border-radius: 6px; padding: 10px 16px; margin-top: 12px; cursor: pointer; text-decoration: none; display: inline-block; }
  button.danger { background: #b3261e; }
  .bar { background: #e3e9df; border-radius: 4px; height: 8px; }
  .bar > div { background: #3b7a2a; height: 8px; border-radius: 4px; }
  form.inline { display: inline; }
"""

ADMIN_NAV = [
    ("/admin", "Inicio"),
    ("/admin/rutas", "Gestión de Rutas"),
    ("/admin/personas", "Gestión de Personas"),
    ("/admin/codigos", "Códigos de Acceso"),
    ("/admin/souvenirs", "Control de Souvenirs"),
    ("/admin/configuracion", "Configuración de Precios"),
    ("/admin/preinscripciones", "Pre-inscripciones"),
    ("/", "Ir al sitio público"),
]


def layout(title: str, body: str, flash: str = "", nav: Optional[Iterable[Tuple[str, str]]] = None,
           head_extra: str = "") -> str:
    nav_html = ""
    if nav:
        nav_html = "<nav>" + "".join(f'<a href="{href}">{esc(label)}</a>' for href, label in nav) + "</nav>"
    return f"""<!DOCTYPE html>
<html lang="es"><head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{esc(title)}</title>
<style>{_STYLE}</style>
{head_extra}
</head><body>
{nav_html}
<h1>{esc(title)}</h1>
{flash}
{body}
</body></html>"""


def html_response(text: str, status: int = 200) -> web.Response:
    return web.Response(text=text, status=status, content_type="text/html")


def flash(message: str, kind: str = "info") -> str:
    if not message:
        return ""
    return f'<div class="flash {kind}">{esc(message)}</div>'


def flash_from_query(request: web.Request, lang: str = "es") -> str:
    """Messages passed through redirects as ?msg=<locale key>&kind=<ok|error|info>"""
    key = request.query.get("msg")
    if not key:
        return ""
    kind = request.query.get("kind", "ok")
    if kind not in ("ok", "error", "info"):
        kind = "info"
    return flash(t(key, lang), kind)


def validation_errors(exc: ValidationError) -> Dict[str, str]:
    """Field -> first message; model-level errors go under '__all__'"""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "__all__"
        msg = err.get("msg", "")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        errors.setdefault(field, msg)
    return errors


def field_error(errors: Dict[str, str], name: str) -> str:
    if name in errors:
        return f'<div class="error-text">{esc(errors[name])}</div>'
    return ""


def text_input(name: str, label: str, value="", errors: Optional[Dict[str, str]] = None,
               input_type: str = "text", placeholder: str = "", extra: str = "") -> str:
    return (
        f'<label for="{name}">{esc(label)}</label>'
        f'<input type="{input_type}" id="{name}" name="{name}" value="{esc(str(value or ""))}" '
        f'placeholder="{esc(placeholder)}" {extra}>'
        f'{field_error(errors or {}, name)}'
    )


def select_input(name: str, label: str, options: Iterable[Tuple[str, str]], selected: str = "",
                 errors: Optional[Dict[str, str]] = None, blank: Optional[str] = None) -> str:
    opts = []
    if blank is not None:
        opts.append(f'<option value="">{esc(blank)}</option>')
    for value, text in options:
        sel = " selected" if str(value) == str(selected or "") else ""
        opts.append(f'<option value="{esc(str(value))}"{sel}>{esc(text)}</option>')
    return (
        f'<label for="{name}">{esc(label)}</label>'
        f'<select id="{name}" name="{name}">{"".join(opts)}</select>'
        f'{field_error(errors or {}, name)}'
    )


def hidden(name: str, value) -> str:
    return f'<input type="hidden" name="{name}" value="{esc(str(value or ""))}">'


def post_button(action: str, label: str, danger: bool = False, confirm: str = "") -> str:
    onsubmit = f' onsubmit="return confirm(\'{esc(confirm)}\')"' if confirm else ""
    cls = ' class="danger"' if danger else ""
    return (
        f'<form class="inline" method="post" action="{esc(action)}"{onsubmit}>'
        f'<button type="submit"{cls}>{esc(label)}</button></form>'
    )


def form_data(post, fields: Iterable[str]) -> Dict[str, str]:
    """Pick the given fields from a POST body as plain strings"""
    return {name: str(post.get(name, "")).strip() for name in fields}


def format_cop(value: int) -> str:
    """50000 -> '50.000'"""
    return f"{value:,}".replace(",", ".")
