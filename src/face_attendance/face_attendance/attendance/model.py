from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, LedgerState, ScanOutcome


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one staff member's attendance on one business date."""

    attendance_id: str
    staff_id: str
    staff_name: str
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    working_hours: Optional[float] = None

    @property
    def state(self) -> LedgerState:
        if self.check_out_time is not None:
            return LedgerState.CHECKED_OUT
        if self.check_in_time is None:
            # Row kept by an admin correction (e.g. marked absent) without times.
            return LedgerState.ABSENT
        return LedgerState.CHECKED_IN

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "date": self.work_date.isoformat(),
            "checkIn": self.check_in_time.isoformat() if self.check_in_time else None,
            "checkOut": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "workingHours": self.working_hours if self.working_hours is not None else 0,
        }


@dataclass(frozen=True)
class ScanTransition:
    """What the ledger did with a scan: opened or closed the day's record."""

    transition: ScanOutcome
    record: AttendanceRecord
