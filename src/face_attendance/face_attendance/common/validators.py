from __future__ import annotations

import math
from typing import Any, Sequence

from ..core.constants import EMBEDDING_DIMENSIONS
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_hour(value: Any, field_name: str) -> int:
    try:
        hour = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer hour") from None
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer hour")
    if not 0 <= hour <= 23:
        raise ValidationError(f"{field_name} must be between 0 and 23")
    return hour


def is_valid_embedding(values: Any) -> bool:
    """True for a sequence of exactly 128 finite numbers."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        return False
    if len(values) != EMBEDDING_DIMENSIONS:
        return False
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return False
        if not math.isfinite(v):
            return False
    return True


def require_embedding(values: Any, field_name: str = "Face descriptor") -> list[float]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ValidationError(f"Invalid {field_name.lower()}")
    if len(values) != EMBEDDING_DIMENSIONS:
        raise ValidationError(
            f"Invalid {field_name.lower()} length: {len(values)}. Expected {EMBEDDING_DIMENSIONS}."
        )
    if not is_valid_embedding(values):
        raise ValidationError(f"{field_name} must contain only finite numbers")
    return [float(v) for v in values]
