import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "face_attendance_test"),
    "connection_timeout": 2,
}

DEBUG = False
TESTING = True

OFFICE_GEOFENCE = {"latitude": 12.9716, "longitude": 77.5946, "radius": 100.0}
GEOFENCE_ZERO_IS_MISSING = True

FACE_MATCH_THRESHOLD = 0.6
DEFAULT_LATE_THRESHOLD_HOUR = 9
SCAN_RETRY_ATTEMPTS = 3
SCAN_COOLDOWN_SECONDS = 0
ALLOW_CLIENT_RESOLVED_SCANS = True

LOG_LEVEL = "WARNING"
LOG_FILE = None

AUTO_INIT_DB = False
AUTO_SEED_DB = False
