"""Decode QRIS strings from QR images."""
from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from pyzbar.pyzbar import ZBarSymbol
from pyzbar.pyzbar import decode as pyzbar_decode

from .services.errors import err_qr_read

logger = logging.getLogger("qriskit.reader")

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")
_BASE64_BODY = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")

QRIS_PREFIX = "000201"
REQUIRED_TAGS = ("26", "52", "53", "54", "58", "59", "60", "61")


def _decode_image(image: Image.Image, *, source: str) -> str:
    symbols = pyzbar_decode(image.convert("RGB"), symbols=[ZBarSymbol.QRCODE])
    if not symbols:
        raise err_qr_read("No QR code found in image", source=source)
    if len(symbols) > 1:
        logger.warning("multiple qr codes found, using the first", extra={"source": source, "count": len(symbols)})
    return symbols[0].data.decode("utf-8")


def read_from_file(image_path: str | Path) -> str:
    """Read the first QR code found in an image file."""

    path = Path(image_path)
    if not path.is_file():
        raise err_qr_read(f"File not found: {path}", source=str(path))
    try:
        with Image.open(path) as image:
            return _decode_image(image, source=str(path))
    except (UnidentifiedImageError, OSError) as exc:
        raise err_qr_read(f"Failed to read QR code: {exc}", source=str(path)) from exc


def read_from_base64(encoded: str) -> str:
    """Read the first QR code from a base64 image, with or without a data URL prefix."""

    body = _DATA_URL_PREFIX.sub("", encoded.strip())
    if not body or not _BASE64_BODY.match(body):
        raise err_qr_read("Invalid base64 string", source="base64")
    try:
        raw = base64.b64decode(body, validate=True)
        with Image.open(io.BytesIO(raw)) as image:
            return _decode_image(image, source="base64")
    except (binascii.Error, UnidentifiedImageError, OSError) as exc:
        raise err_qr_read(f"Failed to read QR code: {exc}", source="base64") from exc


def looks_like_qris(content: str) -> bool:
    """Cheap pre-check on scanned text before a full decode."""

    if not content.startswith(QRIS_PREFIX):
        return False
    return all(tag in content for tag in REQUIRED_TAGS)
