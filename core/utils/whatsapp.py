"""
WhatsApp click-to-chat links.
"""

from urllib.parse import quote


def whatsapp_link(number: str, message: str) -> str:
    digits = "".join(ch for ch in number if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(message)}"
