import os

from config import env_flag, office_geofence

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "face_attendance"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

DEBUG = True

# Office geofence; any missing value disables location validation (HTTP 500).
OFFICE_GEOFENCE = office_geofence()
# Treat a 0 latitude/longitude as "not provided".
GEOFENCE_ZERO_IS_MISSING = env_flag("GEOFENCE_ZERO_IS_MISSING", "1")

FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.6"))
DEFAULT_LATE_THRESHOLD_HOUR = int(os.getenv("DEFAULT_LATE_THRESHOLD_HOUR", "9"))
SCAN_RETRY_ATTEMPTS = int(os.getenv("SCAN_RETRY_ATTEMPTS", "3"))
SCAN_COOLDOWN_SECONDS = float(os.getenv("SCAN_COOLDOWN_SECONDS", "5"))
# Kiosk may submit staffId/staffName it matched itself.
ALLOW_CLIENT_RESOLVED_SCANS = env_flag("ALLOW_CLIENT_RESOLVED_SCANS", "1")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
