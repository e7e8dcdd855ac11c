"""
Date helpers for the registration period.
"""

from datetime import date
from typing import Optional, Union

from core.domain.models import EventSettings

_WEEKDAYS = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
_MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]


def is_registration_open(event_settings: Optional[EventSettings], today: Optional[date] = None) -> bool:
    """Whole-day check: start <= today <= end. Open when dates aren't configured."""
    if event_settings is None:
        return True
    start = event_settings.registration_start_date
    end = event_settings.registration_end_date
    if not start or not end:
        return True
    today = today or date.today()
    return start <= today <= end


def format_date_es(value: Union[date, str, None]) -> str:
    """'sábado, 14 de marzo de 2026'. Unparsable strings are returned as-is."""
    if not value:
        return "No configurado"
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return value
    return f"{_WEEKDAYS[value.weekday()]}, {value.day} de {_MONTHS[value.month - 1]} de {value.year}"
