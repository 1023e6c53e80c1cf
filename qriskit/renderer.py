"""QR image renderer for regenerated QRIS payloads."""
from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Any

import qrcode
from PIL import Image, ImageDraw, ImageFont

from .config import RenderConfig, settings

logger = logging.getLogger("qriskit.renderer")

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def _build_qr(data: str, config: RenderConfig) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=None,
        error_correction=_ERROR_CORRECTION[config.error_correction],
        box_size=config.box_size,
        border=config.border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def generate_qr_image(data: str, title: str | None = None, config: RenderConfig | None = None) -> Image.Image:
    """Generate QR image with a framed label underneath."""

    config = config or settings.render
    title = config.title if title is None else title

    qr_img = _build_qr(data, config).make_image(fill_color="black", back_color="white").convert("RGBA")
    width, height = qr_img.size

    label_height = 40 if title else 0
    margin = 40
    canvas_width = width + margin * 2
    canvas_height = height + margin * 2 + label_height

    canvas = Image.new("RGBA", (canvas_width, canvas_height), color="#F5F7FA")
    canvas.paste(qr_img, (margin, margin))
    if not title:
        return canvas

    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    text = title.upper()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_width, text_height = right - left, bottom - top
    text_x = (canvas_width - text_width) // 2
    text_y = margin + height + (label_height - text_height) // 2
    draw.rectangle(
        [(margin // 2, margin + height), (canvas_width - margin // 2, margin + height + label_height)],
        fill="#FFFFFF",
    )
    draw.text((text_x, text_y), text, fill="#1F2937", font=font)

    return canvas


def qr_image_to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_qr_payload(payload: str, title: str | None = None) -> dict[str, Any]:
    """Render payload into PNG bytes, base64 and a data URL."""

    image = generate_qr_image(payload, title=title)
    png_bytes = qr_image_to_png_bytes(image)
    png_base64 = base64.b64encode(png_bytes).decode("ascii")
    return {
        "png_bytes": png_bytes,
        "png_base64": png_base64,
        "data_url": f"{PNG_DATA_URL_PREFIX}{png_base64}",
    }


def render_terminal(payload: str, *, invert: bool = False) -> str:
    """Render payload as block characters for terminal output."""

    out = io.StringIO()
    _build_qr(payload, settings.render).print_ascii(out=out, invert=invert)
    return out.getvalue()


def save_qr_file(payload: str, output: str | Path, title: str | None = None) -> Path:
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    generate_qr_image(payload, title=title).save(path, format="PNG")
    logger.info("qr image written", extra={"path": str(path)})
    return path
