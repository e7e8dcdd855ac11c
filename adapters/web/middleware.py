"""
Middleware for the web app.

- error_middleware: logs unexpected errors and renders a generic error page
- ThrottlingMiddleware: per-IP rate limit on access code POSTs
- admin_auth_middleware: token gate for /admin pages
"""

import hmac
import logging
import time
from collections import defaultdict
from typing import Dict, Iterable

from aiohttp import web

from adapters.web.pages import layout, flash, html_response
from core.domain.constants import RATE_LIMIT_VERIFY, RATE_LIMIT_INTERVAL_SECONDS
from locales import t

logger = logging.getLogger(__name__)

ADMIN_COOKIE = "admin_token"


def _same(given: str, expected: str) -> bool:
    return bool(given) and hmac.compare_digest(given.encode(), expected.encode())


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        logger.error(f"[WEB] Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return html_response(layout("Error", flash(t("error_generic"), "error")), status=500)


class ThrottlingMiddleware:
    """
    Simple rate limiter: tracks request timestamps per client IP.
    Rejects POSTs to the protected paths that exceed the limit within the interval.
    """

    __middleware_version__ = 1

    def __init__(
        self,
        paths: Iterable[str],
        limit: int = RATE_LIMIT_VERIFY,
        interval: int = RATE_LIMIT_INTERVAL_SECONDS,
        trust_proxy: bool = False,
    ):
        self.paths = set(paths)
        self.limit = limit
        self.interval = interval
        self.trust_proxy = trust_proxy
        # {ip: [timestamp, timestamp, ...]}
        self._requests: Dict[str, list] = defaultdict(list)
        self._last_sweep = 0.0

    def _client_ip(self, request: web.Request) -> str:
        # X-Forwarded-For is client-controlled unless a proxy overwrites it
        if self.trust_proxy:
            forwarded = request.headers.get("X-Forwarded-For", "")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.remote or "unknown"

    def _cleanup(self, ip: str, now: float):
        """Remove expired timestamps."""
        cutoff = now - self.interval
        self._requests[ip] = [ts for ts in self._requests[ip] if ts > cutoff]
        if not self._requests[ip]:
            del self._requests[ip]

    def _sweep(self, now: float):
        """Drop IPs whose timestamps have all expired, once per interval."""
        if now - self._last_sweep < self.interval:
            return
        self._last_sweep = now
        for ip in list(self._requests):
            self._cleanup(ip, now)

    def is_allowed(self, ip: str, now: float = None) -> bool:
        now = now if now is not None else time.monotonic()
        self._sweep(now)
        self._cleanup(ip, now)
        if len(self._requests[ip]) >= self.limit:
            return False
        self._requests[ip].append(now)
        return True

    async def __call__(self, request: web.Request, handler):
        if request.method == "POST" and request.path in self.paths:
            ip = self._client_ip(request)
            if not self.is_allowed(ip):
                logger.warning(f"[THROTTLE] Too many attempts from {ip} on {request.path}")
                return html_response(layout("Inscripción", flash(t("too_many_requests"), "error")), status=429)
        return await handler(request)


def admin_auth_middleware(admin_token: str):
    """
    /admin pages need the admin token: passed once as ?token=..., then kept in a cookie.
    With no token configured the admin area stays closed.
    """

    @web.middleware
    async def middleware(request: web.Request, handler):
        if not request.path.startswith("/admin"):
            return await handler(request)

        if not admin_token:
            logger.warning("[AUTH] ADMIN_TOKEN not configured, admin area disabled")
            return html_response(layout("Admin", flash(t("unauthorized"), "error")), status=401)

        query_token = request.query.get("token", "")
        if _same(query_token, admin_token):
            try:
                response = await handler(request)
            except web.HTTPException as redirect:
                redirect.set_cookie(ADMIN_COOKIE, admin_token, httponly=True, samesite="Strict")
                raise
            response.set_cookie(ADMIN_COOKIE, admin_token, httponly=True, samesite="Strict")
            return response

        if _same(request.cookies.get(ADMIN_COOKIE, ""), admin_token):
            return await handler(request)

        logger.warning(f"[AUTH] Unauthorized admin access to {request.path}")
        return html_response(layout("Admin", flash(t("unauthorized"), "error")), status=401)

    return middleware
