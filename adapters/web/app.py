"""
Web application factory: wires services into the aiohttp app.
Handlers live in adapters/web/handlers, grouped per area.
"""

import logging
from dataclasses import dataclass

from aiohttp import web

from adapters.web.handlers import admin, public, registration
from adapters.web.middleware import ThrottlingMiddleware, admin_auth_middleware, error_middleware
from core.interfaces.repositories import (
    IRouteRepository,
    IAccessCodeRepository,
    IRegistrationRepository,
    IGroupRepository,
    ISettingsRepository,
    IPreregistrationRepository,
)
from core.services import (
    RouteService,
    SettingsService,
    AccessCodeService,
    RegistrationService,
    PeopleService,
    SouvenirService,
    DashboardService,
    PreregistrationService,
)

logger = logging.getLogger(__name__)

# POST endpoints that check an access code
THROTTLED_PATHS = (
    "/inscripcion/verificar",
    "/inscripcion/individual",
    "/inscripcion/grupo",
)


@dataclass
class AppServices:
    """Everything the handlers need, built once at startup"""
    routes: RouteService
    settings: SettingsService
    codes: AccessCodeService
    registration: RegistrationService
    people: PeopleService
    souvenirs: SouvenirService
    dashboard: DashboardService
    preregistration: PreregistrationService


def build_services(
    route_repo: IRouteRepository,
    code_repo: IAccessCodeRepository,
    registration_repo: IRegistrationRepository,
    group_repo: IGroupRepository,
    settings_repo: ISettingsRepository,
    prereg_repo: IPreregistrationRepository,
    config,
) -> AppServices:
    route_service = RouteService(route_repo)
    settings_service = SettingsService(settings_repo)
    registration_service = RegistrationService(
        registration_repo, group_repo, code_repo, route_service, settings_service,
    )
    return AppServices(
        routes=route_service,
        settings=settings_service,
        codes=AccessCodeService(code_repo),
        registration=registration_service,
        people=PeopleService(registration_repo, route_service, registration_service),
        souvenirs=SouvenirService(registration_repo),
        dashboard=DashboardService(code_repo, registration_repo, route_repo),
        preregistration=PreregistrationService(
            prereg_repo,
            event_name=config.event_name,
            organizer_name=config.organizer_name,
            whatsapp_number=config.whatsapp_number,
        ),
    )


def create_app(services: AppServices, config, features=None) -> web.Application:
    """Create the aiohttp app with public, registration and admin pages."""
    if features is None:
        from config.features import features

    middlewares = [error_middleware]
    if features.THROTTLE_ENABLED:
        middlewares.append(ThrottlingMiddleware(THROTTLED_PATHS, trust_proxy=config.trust_proxy))
    middlewares.append(admin_auth_middleware(config.admin_token))

    app = web.Application(middlewares=middlewares)

    async def handle_health(request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    app.router.add_get("/health", handle_health)
    public.setup_routes(app, services, config, features)
    registration.setup_routes(app, services, config)
    admin.setup_routes(app, services, config)

    logger.info(f"Web app created ({len(app.router.routes())} routes, throttle={features.THROTTLE_ENABLED})")
    return app
