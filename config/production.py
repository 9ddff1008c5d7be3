import os

from config import env_flag, office_geofence

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "face_attendance"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

DEBUG = False

OFFICE_GEOFENCE = office_geofence()
GEOFENCE_ZERO_IS_MISSING = env_flag("GEOFENCE_ZERO_IS_MISSING", "1")

FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.6"))
DEFAULT_LATE_THRESHOLD_HOUR = int(os.getenv("DEFAULT_LATE_THRESHOLD_HOUR", "9"))
SCAN_RETRY_ATTEMPTS = int(os.getenv("SCAN_RETRY_ATTEMPTS", "3"))
SCAN_COOLDOWN_SECONDS = float(os.getenv("SCAN_COOLDOWN_SECONDS", "5"))
# Identity must be resolved server-side from the embedding.
ALLOW_CLIENT_RESOLVED_SCANS = env_flag("ALLOW_CLIENT_RESOLVED_SCANS", "0")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/face_attendance.log")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
