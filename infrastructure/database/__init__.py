from infrastructure.database.route_repository import SupabaseRouteRepository
from infrastructure.database.access_code_repository import SupabaseAccessCodeRepository
from infrastructure.database.registration_repository import SupabaseRegistrationRepository
from infrastructure.database.group_repository import SupabaseGroupRepository
from infrastructure.database.settings_repository import SupabaseSettingsRepository
from infrastructure.database.preregistration_repository import SupabasePreregistrationRepository

__all__ = [
    "SupabaseRouteRepository",
    "SupabaseAccessCodeRepository",
    "SupabaseRegistrationRepository",
    "SupabaseGroupRepository",
    "SupabaseSettingsRepository",
    "SupabasePreregistrationRepository",
]
