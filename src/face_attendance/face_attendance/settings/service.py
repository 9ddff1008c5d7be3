from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_hour, require_non_empty
from ..core.constants import DEFAULT_LATE_THRESHOLD_HOUR, LATE_THRESHOLD_KEY
from ..core.exceptions import ValidationError
from .model import Setting
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: read and change administrative runtime settings."""

    def __init__(self, settings: SettingsRepository, *, default_late_threshold_hour: int = DEFAULT_LATE_THRESHOLD_HOUR):
        self._settings = settings
        self._default_late_threshold_hour = require_hour(default_late_threshold_hour, "Default late threshold")

    def get(self, key: str) -> Setting:
        key = require_non_empty(key, "Setting key")
        return self._settings.get(key) or Setting(key=key, value=None)

    def update(self, key: str, value: Any, *, now: Optional[datetime] = None) -> Setting:
        key = require_non_empty(key, "Setting key")
        if key == LATE_THRESHOLD_KEY:
            value = require_hour(value, "Late threshold")
        setting = self._settings.upsert(key=key, value=value, updated_at=now or now_local())
        logger.info("Setting updated: %s = %r", key, value)
        return setting

    def late_threshold_hour(self) -> int:
        """Current late threshold, read from the store on every call."""

        setting = self._settings.get(LATE_THRESHOLD_KEY)
        if setting is None or setting.value is None:
            return self._default_late_threshold_hour
        try:
            return require_hour(setting.value, "Late threshold")
        except ValidationError:
            logger.warning("Ignoring invalid stored late threshold %r", setting.value)
            return self._default_late_threshold_hour
