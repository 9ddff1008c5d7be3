import os
from typing import Optional


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def env_float(name: str) -> Optional[float]:
    """Unset or blank variables read as None (geofence not configured)."""
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


def office_geofence() -> dict:
    return {
        "latitude": env_float("OFFICE_LATITUDE"),
        "longitude": env_float("OFFICE_LONGITUDE"),
        "radius": env_float("OFFICE_RADIUS"),
    }
