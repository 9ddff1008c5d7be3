from __future__ import annotations

import threading
from datetime import datetime


class CooldownKeeper:
    """Remembers when each key last fired and refuses it again too soon.

    A cooldown of 0 seconds never refuses.
    """

    def __init__(self, seconds: float):
        self.seconds = float(seconds)
        self._last: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def try_acquire(self, key: str, now: datetime) -> bool:
        """Check and mark in one step. False while the key is still cooling."""

        if self.seconds <= 0:
            return True
        with self._lock:
            last = self._last.get(key)
            if last is not None and (now - last).total_seconds() < self.seconds:
                return False
            self._last[key] = now
            return True

    def release(self, key: str, now: datetime) -> None:
        """Undo ``try_acquire(key, now)`` unless the key was marked again since.

        Any earlier mark had already expired, so dropping the key is enough.
        """

        if self.seconds <= 0:
            return
        with self._lock:
            if self._last.get(key) == now:
                del self._last[key]
