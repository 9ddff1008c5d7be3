from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status stored on each record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class LedgerState(str, Enum):
    """Per (staff, business date) state of the attendance ledger."""

    ABSENT = "absent"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class ScanOutcome(str, Enum):
    CHECKIN = "checkin"
    CHECKOUT = "checkout"
    NOT_RECOGNIZED = "not_recognized"
    ALREADY_COMPLETED = "already_completed"
    COOLDOWN = "cooldown"
