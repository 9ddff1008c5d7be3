from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .attendance.ledger import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.orchestrator import AttendanceOrchestrator
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_THRESHOLD_HOUR, DEFAULT_MATCH_THRESHOLD, DEFAULT_SCAN_RETRY_ATTEMPTS
from .database.connection import DBConfig, DatabaseConnection
from .faces.matcher import FaceMatcher
from .faces.mysql_face_repository import MySQLFaceEmbeddingRepository
from .faces.repository import FaceEmbeddingRepository
from .faces.store import FaceEmbeddingStore
from .location.gate import LocationGate
from .location.model import OfficeGeofence
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository


@dataclass(frozen=True)
class AppOptions:
    """Tunables read from the settings module at start-up."""

    office: OfficeGeofence = field(default_factory=lambda: OfficeGeofence(None, None, None))
    geofence_zero_is_missing: bool = True
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    default_late_threshold_hour: int = DEFAULT_LATE_THRESHOLD_HOUR
    scan_retry_attempts: int = DEFAULT_SCAN_RETRY_ATTEMPTS
    scan_cooldown_seconds: float = 0
    allow_client_resolved_scans: bool = False

    @classmethod
    def from_settings(cls, settings: Any) -> "AppOptions":
        office = getattr(settings, "OFFICE_GEOFENCE", {}) or {}
        return cls(
            office=OfficeGeofence(
                latitude=office.get("latitude"),
                longitude=office.get("longitude"),
                radius_meters=office.get("radius"),
            ),
            geofence_zero_is_missing=bool(getattr(settings, "GEOFENCE_ZERO_IS_MISSING", True)),
            match_threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD", DEFAULT_MATCH_THRESHOLD)),
            default_late_threshold_hour=int(getattr(settings, "DEFAULT_LATE_THRESHOLD_HOUR", DEFAULT_LATE_THRESHOLD_HOUR)),
            scan_retry_attempts=int(getattr(settings, "SCAN_RETRY_ATTEMPTS", DEFAULT_SCAN_RETRY_ATTEMPTS)),
            scan_cooldown_seconds=float(getattr(settings, "SCAN_COOLDOWN_SECONDS", 0)),
            allow_client_resolved_scans=bool(getattr(settings, "ALLOW_CLIENT_RESOLVED_SCANS", False)),
        )


@dataclass(frozen=True)
class Container:
    options: AppOptions

    staff_repo: StaffRepository
    faces_repo: FaceEmbeddingRepository
    attendance_repo: AttendanceRepository
    settings_repo: SettingsRepository

    settings_service: SettingsService
    face_store: FaceEmbeddingStore
    ledger: AttendanceLedger
    orchestrator: AttendanceOrchestrator
    attendance_service: AttendanceService
    location_gate: LocationGate

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    staff_repo: StaffRepository,
    faces_repo: FaceEmbeddingRepository,
    attendance_repo: AttendanceRepository,
    settings_repo: SettingsRepository,
    options: Optional[AppOptions] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    options = options or AppOptions()

    settings_service = SettingsService(settings_repo, default_late_threshold_hour=options.default_late_threshold_hour)
    face_store = FaceEmbeddingStore(faces_repo)
    ledger = AttendanceLedger(attendance_repo, settings_service.late_threshold_hour)
    orchestrator = AttendanceOrchestrator(
        face_store,
        ledger,
        matcher=FaceMatcher(),
        threshold=options.match_threshold,
        retry_attempts=options.scan_retry_attempts,
        cooldown_seconds=options.scan_cooldown_seconds,
    )

    return Container(
        options=options,
        staff_repo=staff_repo,
        faces_repo=faces_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        settings_service=settings_service,
        face_store=face_store,
        ledger=ledger,
        orchestrator=orchestrator,
        attendance_service=AttendanceService(attendance_repo),
        location_gate=LocationGate(zero_is_missing=options.geofence_zero_is_missing),
        conn=conn,
    )


def build_container(*, db_config: dict, options: Optional[AppOptions] = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=int(db_config.get("connection_timeout", 5)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_container(
        staff_repo=MySQLStaffRepository(conn),
        faces_repo=MySQLFaceEmbeddingRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        options=options,
        conn=conn,
    )
