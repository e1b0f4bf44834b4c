"""
QR code generator for fixture ticket links.
Generates a PNG with the ticket link encoded and a label underneath.
"""

import io
import qrcode
from PIL import Image, ImageDraw, ImageFont


FONT_PATHS = [
    "/System/Library/Fonts/Helvetica.ttc",           # macOS
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",  # Debian/Ubuntu
    "/usr/share/fonts/TTF/DejaVuSans.ttf",           # Arch
]


def _label_font(size: int = 24):
    for font_path in FONT_PATHS:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError:
            continue
    return ImageFont.load_default()


def ticket_qr_png(ticket_link: str, label: str) -> bytes:
    """Generate a QR code PNG for a ticket link and return its bytes."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=2,
    )
    qr.add_data(ticket_link)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").convert("RGB")

    width, height = img.size
    final = Image.new("RGB", (width, height + 60), "white")
    final.paste(img, (0, 0))

    draw = ImageDraw.Draw(final)
    font = _label_font()
    bbox = draw.textbbox((0, 0), label, font=font)
    text_w = bbox[2] - bbox[0]
    draw.text(((width - text_w) / 2, height + 15), label, fill="black", font=font)

    buf = io.BytesIO()
    final.save(buf, format="PNG")
    return buf.getvalue()


def ticket_label(opponent: str) -> str:
    return f"{opponent} — Tickets"
