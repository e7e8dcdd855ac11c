from core.interfaces.repositories import (
    IRouteRepository,
    IAccessCodeRepository,
    IRegistrationRepository,
    IGroupRepository,
    ISettingsRepository,
    IPreregistrationRepository,
)

__all__ = [
    "IRouteRepository",
    "IAccessCodeRepository",
    "IRegistrationRepository",
    "IGroupRepository",
    "ISettingsRepository",
    "IPreregistrationRepository",
]
