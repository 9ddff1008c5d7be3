from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.cooldown import CooldownKeeper
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_MATCH_THRESHOLD, DEFAULT_SCAN_RETRY_ATTEMPTS
from ..core.enums import AttendanceStatus, ScanOutcome
from ..core.exceptions import AttendanceCompletedError, TransientIOError
from ..faces.matcher import FaceMatch, FaceMatcher
from ..faces.model import FaceEmbedding
from ..faces.store import FaceEmbeddingStore
from .ledger import AttendanceLedger
from .model import AttendanceRecord, ScanTransition

logger = logging.getLogger(__name__)

NOT_RECOGNIZED_MESSAGE = "Face not recognized. Please try again."


@dataclass(frozen=True)
class ScanResult:
    outcome: ScanOutcome
    message: str
    record: Optional[AttendanceRecord] = None
    staff_id: Optional[str] = None
    display_name: Optional[str] = None
    distance: Optional[float] = None

    @property
    def recognized(self) -> bool:
        return self.outcome != ScanOutcome.NOT_RECOGNIZED

    def to_dict(self) -> dict:
        return {
            "type": self.outcome.value,
            "record": self.record.to_dict() if self.record else None,
            "message": self.message,
            "staffId": self.staff_id,
            "distance": round(self.distance, 4) if self.distance is not None else None,
        }


class AttendanceOrchestrator:
    """Kiosk scan flow: match a live embedding, then record the transition."""

    def __init__(
        self,
        store: FaceEmbeddingStore,
        ledger: AttendanceLedger,
        *,
        matcher: Optional[FaceMatcher] = None,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        retry_attempts: int = DEFAULT_SCAN_RETRY_ATTEMPTS,
        cooldown_seconds: float = 0,
    ):
        self._store = store
        self._ledger = ledger
        self._matcher = matcher or FaceMatcher()
        self._threshold = float(threshold)
        self._retry_attempts = max(1, int(retry_attempts))
        self._cooldown = CooldownKeeper(cooldown_seconds)

    def scan_and_record(
        self,
        live_embedding: Sequence[float],
        *,
        threshold: Optional[float] = None,
        late_threshold_hour: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ScanResult:
        now = now or now_local()
        candidates = self._load_candidates()
        match = self._matcher.match(
            live_embedding,
            candidates,
            self._threshold if threshold is None else float(threshold),
        )
        if match is None:
            return ScanResult(outcome=ScanOutcome.NOT_RECOGNIZED, message=NOT_RECOGNIZED_MESSAGE)
        return self._record(match.staff_id, match.display_name, now, late_threshold_hour, match)

    def record_resolved_scan(
        self,
        staff_id: str,
        staff_name: str,
        *,
        now: Optional[datetime] = None,
    ) -> ScanResult:
        """Record a scan whose identity was already resolved by the kiosk."""

        staff_id = require_non_empty(staff_id, "Staff ID")
        staff_name = require_non_empty(staff_name, "Staff name")
        return self._record(staff_id, staff_name, now or now_local(), None, None)

    def _load_candidates(self) -> list[FaceEmbedding]:
        attempt = 1
        while True:
            try:
                return self._store.list_valid()
            except TransientIOError:
                if attempt >= self._retry_attempts:
                    raise
                logger.warning("Loading face embeddings failed (attempt %d/%d), retrying", attempt, self._retry_attempts)
                attempt += 1

    def _record(
        self,
        staff_id: str,
        display_name: str,
        now: datetime,
        late_threshold_hour: Optional[int],
        match: Optional[FaceMatch],
    ) -> ScanResult:
        distance = match.distance if match else None

        if not self._cooldown.try_acquire(staff_id, now):
            return ScanResult(
                outcome=ScanOutcome.COOLDOWN,
                message=f"{display_name} was just recorded. Please step away from the camera.",
                staff_id=staff_id,
                display_name=display_name,
                distance=distance,
            )

        try:
            transition = self._ledger.record_scan(staff_id, display_name, now, late_threshold_hour=late_threshold_hour)
        except AttendanceCompletedError as e:
            self._cooldown.release(staff_id, now)
            return ScanResult(
                outcome=ScanOutcome.ALREADY_COMPLETED,
                message=str(e),
                staff_id=staff_id,
                display_name=display_name,
                distance=distance,
            )
        except Exception:
            self._cooldown.release(staff_id, now)
            raise

        return ScanResult(
            outcome=transition.transition,
            message=_message_for(transition, display_name),
            record=transition.record,
            staff_id=staff_id,
            display_name=display_name,
            distance=distance,
        )


def _message_for(transition: ScanTransition, display_name: str) -> str:
    record = transition.record
    if transition.transition == ScanOutcome.CHECKIN:
        at = record.check_in_time.strftime("%H:%M") if record.check_in_time else "-"
        label = "Late" if record.status == AttendanceStatus.LATE else "On time"
        return f"Welcome, {display_name}! Checked in at {at} ({label})."

    at = record.check_out_time.strftime("%H:%M") if record.check_out_time else "-"
    if record.working_hours is None:
        return f"Goodbye, {display_name}! Checked out at {at}."
    return f"Goodbye, {display_name}! Checked out at {at} after {record.working_hours:.2f} hours."
