from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class PresentStrategy(CheckInStrategy):
    """Check-in at or before the late threshold."""

    def decide_checkin(self, *, now: datetime, late_threshold_hour: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
