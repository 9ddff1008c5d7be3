from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from .model import Setting


class SettingsRepository(Protocol):
    def get(self, key: str) -> Optional[Setting]:
        raise NotImplementedError

    def upsert(self, *, key: str, value: Any, updated_at: datetime) -> Setting:
        """Create or replace the value stored under ``key``."""

        raise NotImplementedError
