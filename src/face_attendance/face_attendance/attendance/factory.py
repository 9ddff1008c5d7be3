from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import minutes_since_midnight
from .strategies.base import CheckInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy for a scan time.

    Compares minutes since midnight with ``late_threshold_hour * 60``; only a
    check-in strictly after the threshold minute is late (09:00 is on time,
    09:01 is late). Seconds are ignored.
    """

    def for_checkin(self, *, now: datetime, late_threshold_hour: int) -> CheckInStrategy:
        if minutes_since_midnight(now) > int(late_threshold_hour) * 60:
            return LateStrategy()
        return PresentStrategy()
