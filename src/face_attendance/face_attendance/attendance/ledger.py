from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Hashable, Iterator, Optional

from ..common.datetime_utils import business_date, hours_between, now_local
from ..common.validators import require_hour, require_non_empty
from ..core.enums import LedgerState, ScanOutcome
from ..core.exceptions import AttendanceCompletedError, ConcurrencyConflict
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, ScanTransition
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class KeyedLocks:
    """One lock per key, dropped once nobody holds or waits for it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, list] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


class AttendanceLedger:
    """Daily attendance state machine for one staff member.

    Absent (no record, or a corrected row without times) -> CheckedIn ->
    CheckedOut. CheckedOut is terminal for
    the business date: a further scan raises ``AttendanceCompletedError`` and
    leaves the record untouched.

    Scans for the same (staff, date) are serialized in-process; across
    processes the repository's unique (staff, date) constraint and the
    conditional check-out turn a lost race into ``ConcurrencyConflict``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        late_threshold: Callable[[], int],
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._attendance = attendance
        self._late_threshold = late_threshold
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._new_id = id_factory
        self._locks = KeyedLocks()

    def state(self, staff_id: str, work_date: date) -> LedgerState:
        record = self._attendance.get_for_staff_and_date(staff_id, work_date)
        return record.state if record else LedgerState.ABSENT

    def record_scan(
        self,
        staff_id: str,
        display_name: str,
        now: Optional[datetime] = None,
        *,
        late_threshold_hour: Optional[int] = None,
    ) -> ScanTransition:
        staff_id = require_non_empty(staff_id, "Staff ID")
        display_name = require_non_empty(display_name, "Staff name")
        now = now or now_local()
        work_date = business_date(now)

        with self._locks.hold((staff_id, work_date)):
            existing = self._attendance.get_for_staff_and_date(staff_id, work_date)
            if existing is None or existing.state == LedgerState.ABSENT:
                return self._check_in(staff_id, display_name, now, work_date, late_threshold_hour, existing)
            if existing.state == LedgerState.CHECKED_IN:
                return self._check_out(existing, now)

            logger.info("Rejected scan for %s on %s: already checked out", staff_id, work_date)
            raise AttendanceCompletedError(f"{existing.staff_name} has already checked in and out today")

    def _check_in(
        self,
        staff_id: str,
        display_name: str,
        now: datetime,
        work_date: date,
        late_threshold_hour: Optional[int],
        existing: Optional[AttendanceRecord] = None,
    ) -> ScanTransition:
        if late_threshold_hour is None:
            late_threshold_hour = self._late_threshold()
        hour = require_hour(late_threshold_hour, "Late threshold")

        strategy = self._factory.for_checkin(now=now, late_threshold_hour=hour)
        decision = strategy.decide_checkin(now=now, late_threshold_hour=hour)

        if existing is None:
            record = self._attendance.create_checkin(
                attendance_id=self._new_id(),
                staff_id=staff_id,
                staff_name=display_name,
                work_date=work_date,
                check_in_time=now,
                status=decision.status,
            )
        else:
            if not self._attendance.claim_checkin(
                attendance_id=existing.attendance_id,
                staff_name=display_name,
                check_in_time=now,
                status=decision.status,
            ):
                raise ConcurrencyConflict(f"Check-in for {staff_id} on {work_date} was recorded concurrently")
            record = replace(
                existing,
                staff_name=display_name,
                check_in_time=now,
                status=decision.status,
                working_hours=None,
            )
        logger.info(
            "Check-in: %s (%s) at %s vs threshold %02d:00 -> %s",
            display_name,
            staff_id,
            now.strftime("%H:%M"),
            hour,
            decision.status.value,
        )
        return ScanTransition(transition=ScanOutcome.CHECKIN, record=record)

    def _check_out(self, record: AttendanceRecord, now: datetime) -> ScanTransition:
        working_hours = max(0.0, hours_between(record.check_in_time, now))

        if not self._attendance.close_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            working_hours=working_hours,
        ):
            raise ConcurrencyConflict(f"Check-out for {record.staff_id} on {record.work_date} was recorded concurrently")

        logger.info("Check-out: %s (%s) after %s hours", record.staff_name, record.staff_id, working_hours)
        updated = replace(record, check_out_time=now, working_hours=working_hours)
        return ScanTransition(transition=ScanOutcome.CHECKOUT, record=updated)
