from __future__ import annotations

import logging
import math
from typing import Optional

from .geo import distance_meters
from .model import LocationCheck, OfficeGeofence

logger = logging.getLogger(__name__)

INVALID_COORDINATES = "Invalid coordinates provided"
LOCATION_VERIFIED = "Location verified - within office premises"


class LocationGate:
    """Decide whether a reported position lies inside the office geofence.

    ``zero_is_missing`` keeps the historical behaviour where a 0 coordinate or
    a 0 radius counts as "not provided". With it off only ``None``, NaN and
    infinities are treated as missing.
    """

    def __init__(self, *, zero_is_missing: bool = True):
        self._zero_is_missing = bool(zero_is_missing)

    def _is_missing(self, value: Optional[float]) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and not math.isfinite(value):
            return True
        return self._zero_is_missing and value == 0

    def validate(
        self,
        user_lat: Optional[float],
        user_lon: Optional[float],
        office_lat: Optional[float],
        office_lon: Optional[float],
        radius_meters: Optional[float],
    ) -> LocationCheck:
        if any(self._is_missing(v) for v in (user_lat, user_lon, office_lat, office_lon, radius_meters)):
            return LocationCheck(allowed=False, distance_meters=None, message=INVALID_COORDINATES)

        distance = distance_meters(user_lat, user_lon, office_lat, office_lon)
        allowed = distance <= radius_meters
        rounded = int(math.floor(distance + 0.5))

        if allowed:
            message = LOCATION_VERIFIED
        else:
            message = (
                f"Access denied - You are {rounded} meters from the office "
                f"(allowed: {_format_radius(radius_meters)}m)"
            )
        logger.debug("Location check: distance=%sm radius=%sm allowed=%s", rounded, radius_meters, allowed)
        return LocationCheck(allowed=allowed, distance_meters=rounded, message=message)

    def validate_against(self, user_lat: Optional[float], user_lon: Optional[float], office: OfficeGeofence) -> LocationCheck:
        return self.validate(user_lat, user_lon, office.latitude, office.longitude, office.radius_meters)


def _format_radius(radius: float) -> str:
    return str(int(radius)) if float(radius).is_integer() else str(radius)
