"""
QR code generator for access codes.
Generates a PNG pointing to the registration form with document and code prefilled.
"""

import io
from urllib.parse import urlencode

import qrcode
from PIL import Image, ImageDraw, ImageFont


def registration_link(base_url: str, code: str, document_id: str) -> str:
    query = urlencode({"documento": document_id, "codigo": code})
    return f"{base_url.rstrip('/')}/inscripcion?{query}"


def generate_access_code_qr(code: str, document_id: str, base_url: str, label: str = None) -> bytes:
    """Generate a QR code PNG for an access code.

    Returns the PNG bytes.
    """
    link = registration_link(base_url, code, document_id)

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=2,
    )
    qr.add_data(link)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").convert("RGB")

    # Add label below QR
    label_text = label or f"Código {code}"
    width, height = img.size
    final = Image.new("RGB", (width, height + 50), "white")
    final.paste(img, (0, 0))

    draw = ImageDraw.Draw(final)
    font = None
    for font_path in [
        "/System/Library/Fonts/Helvetica.ttc",           # macOS
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",  # Debian/Ubuntu
        "/usr/share/fonts/TTF/DejaVuSans.ttf",           # Arch
    ]:
        try:
            font = ImageFont.truetype(font_path, 22)
            break
        except OSError:
            continue
    if font is None:
        font = ImageFont.load_default()

    bbox = draw.textbbox((0, 0), label_text, font=font)
    text_w = bbox[2] - bbox[0]
    draw.text(((width - text_w) / 2, height + 12), label_text, fill="black", font=font)

    buf = io.BytesIO()
    final.save(buf, format="PNG")
    return buf.getvalue()
