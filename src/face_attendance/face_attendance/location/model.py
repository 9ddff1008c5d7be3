from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OfficeGeofence:
    """Office center and allowed radius, loaded once from configuration."""

    latitude: Optional[float]
    longitude: Optional[float]
    radius_meters: Optional[float]

    @property
    def is_configured(self) -> bool:
        return None not in (self.latitude, self.longitude, self.radius_meters)


@dataclass(frozen=True)
class LocationCheck:
    allowed: bool
    distance_meters: Optional[int]
    message: str

    def to_dict(self) -> dict:
        return {"allowed": self.allowed, "distance": self.distance_meters, "message": self.message}
