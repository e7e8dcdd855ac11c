"""
i18n module: dict-based translation with fallback to Spanish.
"""

from locales.es import ES_STRINGS
from locales.en import EN_STRINGS

_STRINGS = {"es": ES_STRINGS, "en": EN_STRINGS}


def t(key: str, lang: str = "es", **kwargs) -> str:
    """Get translated string. Falls back to ES, then to the key itself."""
    strings = _STRINGS.get(lang, _STRINGS["es"])
    text = strings.get(key, _STRINGS["es"].get(key, key))
    return text.format(**kwargs) if kwargs else text

