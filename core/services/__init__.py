from core.services.route_service import RouteService
from core.services.settings_service import SettingsService
from core.services.access_code_service import AccessCodeService
from core.services.registration_service import RegistrationService
from core.services.people_service import PeopleService
from core.services.souvenir_service import SouvenirService
from core.services.dashboard_service import DashboardService
from core.services.preregistration_service import PreregistrationService

__all__ = [
    "RouteService",
    "SettingsService",
    "AccessCodeService",
    "RegistrationService",
    "PeopleService",
    "SouvenirService",
    "DashboardService",
    "PreregistrationService",
]
