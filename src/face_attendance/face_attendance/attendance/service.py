from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import hours_between
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: query attendance and apply administrative corrections."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date)

    def history(self, staff_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        staff_id = require_non_empty(staff_id, "Staff ID")
        if int(limit) <= 0:
            raise ValidationError("Limit must be positive")
        return self._attendance.get_recent_for_staff(staff_id, int(limit))

    def get_today_record(self, staff_id: str, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_staff_and_date(staff_id, today)

    def correct_record(
        self,
        attendance_id: str,
        *,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")

        if check_out_time is not None and check_in_time is None:
            raise ValidationError("Check-out requires a check-in time")
        if check_in_time and check_out_time and check_out_time < check_in_time:
            raise ValidationError("Check-out cannot be earlier than check-in")
        for ts in (check_in_time, check_out_time):
            if ts is not None and ts.date() != record.work_date:
                raise ValidationError("Times must fall on the record's business date")

        working_hours = hours_between(check_in_time, check_out_time) if check_in_time and check_out_time else None

        self._attendance.admin_update_record(
            attendance_id=attendance_id,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            working_hours=working_hours,
        )
        logger.info("Attendance %s corrected: status=%s hours=%s", attendance_id, status.value, working_hours)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            staff_id=record.staff_id,
            staff_name=record.staff_name,
            work_date=record.work_date,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            working_hours=working_hours,
        )
