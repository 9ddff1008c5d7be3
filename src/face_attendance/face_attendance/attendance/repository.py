from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_staff(self, staff_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        attendance_id: str,
        staff_id: str,
        staff_name: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Insert the day's record.

        Must raise ``ConcurrencyConflict`` when a record for
        (staff_id, work_date) already exists.
        """

        raise NotImplementedError

    def claim_checkin(self, *, attendance_id: str, staff_name: str, check_in_time: datetime, status: AttendanceStatus) -> bool:
        """Set check-in on an existing row that has neither check-in nor check-out.

        Returns False when another scan filled it first.
        """

        raise NotImplementedError

    def close_checkout(self, *, attendance_id: str, check_out_time: datetime, working_hours: Optional[float]) -> bool:
        """Set check-out only if it is still unset. Returns False otherwise."""

        raise NotImplementedError

    def admin_update_record(
        self,
        *,
        attendance_id: str,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        working_hours: Optional[float],
    ) -> bool:
        """Admin-only override used for manual corrections."""

        raise NotImplementedError
