from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.face_attendance.face_attendance.attendance.ledger import AttendanceLedger
from src.face_attendance.face_attendance.attendance.model import AttendanceRecord
from src.face_attendance.face_attendance.core.enums import AttendanceStatus, LedgerState, ScanOutcome
from src.face_attendance.face_attendance.core.exceptions import (
    AttendanceCompletedError,
    ConcurrencyConflict,
    ValidationError,
)


class InMemoryAttendance:
    """Enforces one record per (staff, date) like the unique index does."""

    def __init__(self):
        self._lock = threading.Lock()
        self.records: dict[str, AttendanceRecord] = {}

    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._find(staff_id, work_date)

    def _find(self, staff_id: str, work_date: date) -> Optional[AttendanceRecord]:
        for rec in self.records.values():
            if rec.staff_id == staff_id and rec.work_date == work_date:
                return rec
        return None

    def create_checkin(self, *, attendance_id, staff_id, staff_name, work_date, check_in_time, status):
        with self._lock:
            if self._find(staff_id, work_date):
                raise ConcurrencyConflict("duplicate")
            rec = AttendanceRecord(
                attendance_id=attendance_id,
                staff_id=staff_id,
                staff_name=staff_name,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=None,
                status=status,
            )
            self.records[attendance_id] = rec
            return rec

    def claim_checkin(self, *, attendance_id, staff_name, check_in_time, status) -> bool:
        with self._lock:
            rec = self.records.get(attendance_id)
            if rec is None or rec.check_in_time is not None or rec.check_out_time is not None:
                return False
            self.records[attendance_id] = replace(
                rec, staff_name=staff_name, check_in_time=check_in_time, status=status, working_hours=None
            )
            return True

    def close_checkout(self, *, attendance_id: str, check_out_time: datetime, working_hours) -> bool:
        with self._lock:
            rec = self.records.get(attendance_id)
            if rec is None or rec.check_out_time is not None:
                return False
            self.records[attendance_id] = replace(rec, check_out_time=check_out_time, working_hours=working_hours)
            return True


class StaleReadAttendance(InMemoryAttendance):
    """Another process wrote the row between our read and our write."""

    def get_for_staff_and_date(self, staff_id, work_date):
        return None


class LostClaimAttendance(InMemoryAttendance):
    def claim_checkin(self, **kwargs) -> bool:
        return False


class LostCheckoutAttendance(InMemoryAttendance):
    def close_checkout(self, **kwargs) -> bool:
        return False


def _ids():
    counter = iter(range(1, 10_000))
    return lambda: f"att-{next(counter)}"


def _ledger(repo, threshold: int = 9) -> AttendanceLedger:
    return AttendanceLedger(repo, lambda: threshold, id_factory=_ids())


def test_first_scan_checks_in_late_after_threshold():
    repo = InMemoryAttendance()
    ledger = _ledger(repo)

    result = ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 9, 15))

    assert result.transition == ScanOutcome.CHECKIN
    assert result.record.status == AttendanceStatus.LATE
    assert result.record.check_in_time == datetime(2026, 1, 5, 9, 15)
    assert result.record.work_date == date(2026, 1, 5)
    assert result.record.attendance_id == "att-1"
    assert ledger.state("s1", date(2026, 1, 5)) == LedgerState.CHECKED_IN


def test_checkin_on_time(fixed_now):
    result = _ledger(InMemoryAttendance()).record_scan("s1", "Alice", fixed_now)

    assert result.record.status == AttendanceStatus.PRESENT


def test_second_scan_checks_out_with_working_hours():
    repo = InMemoryAttendance()
    ledger = _ledger(repo)
    ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 9, 15))

    result = ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 17, 0))

    assert result.transition == ScanOutcome.CHECKOUT
    assert result.record.check_out_time == datetime(2026, 1, 5, 17, 0)
    assert result.record.working_hours == 7.75
    assert result.record.status == AttendanceStatus.LATE
    assert repo.records["att-1"].working_hours == 7.75
    assert ledger.state("s1", date(2026, 1, 5)) == LedgerState.CHECKED_OUT


def test_third_scan_is_rejected_and_record_unchanged():
    repo = InMemoryAttendance()
    ledger = _ledger(repo)
    ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 8, 0))
    ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 17, 0))
    before = repo.records["att-1"]

    with pytest.raises(AttendanceCompletedError, match="Alice has already checked in and out today"):
        ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 18, 0))

    assert repo.records == {"att-1": before}


def test_new_business_date_starts_a_new_record():
    repo = InMemoryAttendance()
    ledger = _ledger(repo)
    ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 8, 0))
    ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 17, 0))

    result = ledger.record_scan("s1", "Alice", datetime(2026, 1, 6, 8, 0))

    assert result.transition == ScanOutcome.CHECKIN
    assert len(repo.records) == 2


def test_late_threshold_is_read_at_every_checkin():
    current = {"hour": 9}
    ledger = AttendanceLedger(InMemoryAttendance(), lambda: current["hour"], id_factory=_ids())

    first = ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 9, 30))
    current["hour"] = 10
    second = ledger.record_scan("s2", "Bob", datetime(2026, 1, 5, 9, 30))

    assert first.record.status == AttendanceStatus.LATE
    assert second.record.status == AttendanceStatus.PRESENT


def test_explicit_threshold_overrides_setting():
    result = _ledger(InMemoryAttendance(), threshold=9).record_scan(
        "s1", "Alice", datetime(2026, 1, 5, 9, 30), late_threshold_hour=10
    )

    assert result.record.status == AttendanceStatus.PRESENT


def test_checkout_before_checkin_is_clamped_to_zero_hours():
    repo = InMemoryAttendance()
    ledger = _ledger(repo)
    ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 12, 0))

    result = ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 11, 0))

    assert result.record.working_hours == 0


def test_lost_checkin_race_surfaces_conflict():
    repo = StaleReadAttendance()
    repo.create_checkin(
        attendance_id="other",
        staff_id="s1",
        staff_name="Alice",
        work_date=date(2026, 1, 5),
        check_in_time=datetime(2026, 1, 5, 8, 0),
        status=AttendanceStatus.PRESENT,
    )

    with pytest.raises(ConcurrencyConflict):
        _ledger(repo).record_scan("s1", "Alice", datetime(2026, 1, 5, 8, 0, 1))
    assert list(repo.records) == ["other"]


def test_lost_checkout_race_surfaces_conflict():
    repo = LostCheckoutAttendance()
    ledger = _ledger(repo)
    ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 8, 0))

    with pytest.raises(ConcurrencyConflict):
        ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 17, 0))


def test_parallel_scans_never_create_two_records():
    repo = InMemoryAttendance()
    ledger = AttendanceLedger(repo, lambda: 9)
    now = datetime(2026, 1, 5, 8, 0)
    workers = 8
    barrier = threading.Barrier(workers)
    outcomes: list[str] = []
    outcomes_lock = threading.Lock()

    def scan():
        barrier.wait()
        try:
            outcome = ledger.record_scan("s1", "Alice", now).transition.value
        except AttendanceCompletedError:
            outcome = "completed"
        with outcomes_lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=scan) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(repo.records) == 1
    assert sorted(outcomes) == sorted(["checkin", "checkout"] + ["completed"] * (workers - 2))


def test_blank_identity_is_rejected():
    with pytest.raises(ValidationError):
        _ledger(InMemoryAttendance()).record_scan(" ", "Alice", datetime(2026, 1, 5, 8, 0))


def _absent_row(repo: InMemoryAttendance) -> None:
    repo.records["adm-1"] = AttendanceRecord(
        attendance_id="adm-1",
        staff_id="s1",
        staff_name="Alice",
        work_date=date(2026, 1, 5),
        check_in_time=None,
        check_out_time=None,
        status=AttendanceStatus.ABSENT,
    )


def test_row_without_times_counts_as_absent():
    repo = InMemoryAttendance()
    _absent_row(repo)

    assert _ledger(repo).state("s1", date(2026, 1, 5)) == LedgerState.ABSENT


def test_scan_on_admin_absent_row_checks_in_on_that_row():
    repo = InMemoryAttendance()
    _absent_row(repo)
    ledger = _ledger(repo)

    first = ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 8, 0))
    second = ledger.record_scan("s1", "Alice", datetime(2026, 1, 5, 16, 30))

    assert first.transition == ScanOutcome.CHECKIN
    assert first.record.attendance_id == "adm-1"
    assert first.record.status == AttendanceStatus.PRESENT
    assert first.record.check_in_time == datetime(2026, 1, 5, 8, 0)
    assert second.transition == ScanOutcome.CHECKOUT
    assert second.record.working_hours == 8.5
    assert list(repo.records) == ["adm-1"]


def test_lost_claim_on_absent_row_surfaces_conflict():
    repo = LostClaimAttendance()
    _absent_row(repo)

    with pytest.raises(ConcurrencyConflict):
        _ledger(repo).record_scan("s1", "Alice", datetime(2026, 1, 5, 8, 0))
    assert repo.records["adm-1"].check_in_time is None
