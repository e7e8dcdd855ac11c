"""
Feature Flags - Easy on/off toggle for features.
Change values here to enable/disable functionality.
"""

import os


class Features:
    """Feature toggles - set via env vars or defaults"""

    # === PUBLIC PAGES ===
    PREREGISTRATION_ENABLED: bool = os.getenv("PREREGISTRATION_ENABLED", "true").lower() == "true"
    LANDING_PAGE_ENABLED: bool = os.getenv("LANDING_PAGE_ENABLED", "true").lower() == "true"

    # === ABUSE PROTECTION ===
    THROTTLE_ENABLED: bool = os.getenv("THROTTLE_ENABLED", "true").lower() == "true"

    # === DEBUG ===
    DEBUG_MODE: bool = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def to_dict(cls) -> dict:
        """Get all features as dict (useful for logging)"""
        return {
            "preregistration_enabled": cls.PREREGISTRATION_ENABLED,
            "landing_page_enabled": cls.LANDING_PAGE_ENABLED,
            "throttle_enabled": cls.THROTTLE_ENABLED,
            "debug_mode": cls.DEBUG_MODE,
        }


# Shortcut
features = Features()
