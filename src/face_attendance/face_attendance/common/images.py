from __future__ import annotations

import base64
import binascii

from ..core.exceptions import ValidationError


def decode_data_url(image: str) -> bytes:
    """Decode base64 image data, with or without a ``data:...;base64,`` prefix."""

    if not image or not isinstance(image, str):
        raise ValidationError("Image is required")
    payload = image.split(",", 1)[1] if image.startswith("data:") else image
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image is not valid base64") from None
