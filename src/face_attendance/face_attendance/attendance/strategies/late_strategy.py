from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide_checkin(self, *, now: datetime, late_threshold_hour: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
