from __future__ import annotations

import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

from ..core.constants import DEFAULT_MAX_IMAGE_KB, MAX_IMAGE_PIXELS
from ..core.exceptions import ValidationError

_DATA_URL = re.compile(r"^data:([A-Za-z-+/]+);base64,(.+)$", re.DOTALL)


def decode_data_url(value: str) -> bytes:
    """Decode a ``data:<mime>;base64,<payload>`` string into raw bytes."""
    match = _DATA_URL.match((value or "").strip())
    if not match:
        raise ValidationError("Invalid image format")
    try:
        # MIME-style payloads are wrapped at 76 columns
        payload = re.sub(r"\s+", "", match.group(2))
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Invalid image format")


def open_image(raw: bytes) -> Image.Image:
    if not raw:
        raise ValidationError("Image is required")
    try:
        img = Image.open(io.BytesIO(raw))
        width, height = img.size
        if width * height > MAX_IMAGE_PIXELS:
            raise ValidationError("Image dimensions are too large")
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
        raise ValidationError("Image could not be decoded")
    return img


def compress_to_target_size(raw: bytes, max_kb: int = DEFAULT_MAX_IMAGE_KB) -> bytes:
    """Re-encode as JPEG, lowering quality from 100 in steps of 10 until it fits ``max_kb``.

    Stops before quality 10. When no quality fits, the original bytes are returned unchanged.
    """
    img = open_image(raw)
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    quality = 100
    while quality > 10:
        out = io.BytesIO()
        img.save(out, format="JPEG", quality=quality)
        data = out.getvalue()
        if len(data) / 1024 <= max_kb:
            return data
        quality -= 10

    return raw
