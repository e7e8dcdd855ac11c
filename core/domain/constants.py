"""
Domain constants - event limits, defaults and other static data.
Centralized here for easy modification.
"""

# Routes can be configured for up to three event days;
# registrations choose a route for day 1 and day 2.
MAX_EVENT_DAYS = 3
REGISTRATION_DAYS = (1, 2)

# group_id stored on registrations that don't belong to a group
INDEPENDENT_GROUP_ID = "independiente"

DOCUMENT_TYPES = {
    "cedula": "Cédula de ciudadanía",
    "tarjeta_identidad": "Tarjeta de identidad",
    "cedula_extranjeria": "Cédula de extranjería",
    "pasaporte": "Pasaporte",
}
DEFAULT_DOCUMENT_TYPE = "cedula"

RH_TYPES = ["O+", "O-", "A+", "A-", "B+", "B-", "AB+", "AB-"]

# Event settings defaults
DEFAULT_REGISTRATION_PRICE = 50000  # COP
MIN_REGISTRATION_PRICE = 1000
DEFAULT_REGISTRATION_WINDOW_DAYS = 30

# Access code settings
ACCESS_CODE_LENGTH = 6
ACCESS_CODE_MAX_ATTEMPTS = 20

# Souvenir desk
RECENT_DELIVERIES_LIMIT = 5

# Form limits
MIN_DOCUMENT_LENGTH = 5

# Rate limiting (code verification)
RATE_LIMIT_VERIFY = 10  # attempts per interval
RATE_LIMIT_INTERVAL_SECONDS = 60

# Settings are a single document
SETTINGS_DOCUMENT_ID = "event"
