"""Example: drive the service layer directly, without Flask.

Controllers are thin; the scan flow, ledger and geofence live in services.
"""

import importlib

from config import get_settings_module

from src.face_attendance.face_attendance.common.datetime_utils import now_local
from src.face_attendance.face_attendance.container import AppOptions, build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, options=AppOptions.from_settings(settings))

    office = container.options.office
    if office.is_configured:
        print(container.location_gate.validate_against(office.latitude, office.longitude, office).message)

    print(f"late threshold: {container.settings_service.late_threshold_hour():02d}:00")
    for record in container.attendance_service.list_for_date(now_local().date()):
        print(record.to_dict())


if __name__ == "__main__":
    main()
