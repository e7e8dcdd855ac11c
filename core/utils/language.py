"""
Centralized language detection for all web handlers.

Picks Spanish or English from the browser's first preference;
anything else falls back to the configured default language.
"""

from typing import Optional

SUPPORTED_LANGUAGES = ("es", "en")


def detect_lang(accept_language: Optional[str] = None, default: str = "es") -> str:
    """
    Detect visitor language from the Accept-Language header.

    Args:
        accept_language: raw header value, e.g. "en-US,en;q=0.9,es;q=0.8".
        default: language used when the header names neither "es" nor "en".

    Returns:
        Language code ("es" or "en").
    """
    if accept_language:
        first = accept_language.split(",")[0].strip().lower()
        for lang in SUPPORTED_LANGUAGES:
            if first.startswith(lang):
                return lang
    return default
