"""
Web loader - initializes repositories and services.
"""

from config.settings import settings

# Infrastructure
from infrastructure.database import (
    SupabaseRouteRepository,
    SupabaseAccessCodeRepository,
    SupabaseRegistrationRepository,
    SupabaseGroupRepository,
    SupabaseSettingsRepository,
    SupabasePreregistrationRepository,
)

from adapters.web.app import build_services


# === REPOSITORIES ===
route_repo = SupabaseRouteRepository()
code_repo = SupabaseAccessCodeRepository()
registration_repo = SupabaseRegistrationRepository()
group_repo = SupabaseGroupRepository()
settings_repo = SupabaseSettingsRepository()
prereg_repo = SupabasePreregistrationRepository()


# === SERVICES ===
services = build_services(
    route_repo=route_repo,
    code_repo=code_repo,
    registration_repo=registration_repo,
    group_repo=group_repo,
    settings_repo=settings_repo,
    prereg_repo=prereg_repo,
    config=settings,
)
