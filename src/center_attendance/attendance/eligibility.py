from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import TimeService
from ..core.constants import MARK_WINDOW_AFTER_MINUTES, MARK_WINDOW_BEFORE_MINUTES
from ..sessions.model import SessionOccurrence
from .model import AttendanceRecord


class EligibilityEvaluator:
    """Decides whether an occurrence can be marked now, and with what delay."""

    def __init__(self, time_service: TimeService):
        self._time = time_service
        self.window_before = MARK_WINDOW_BEFORE_MINUTES
        self.window_after = MARK_WINDOW_AFTER_MINUTES

    def minutes_from_start(self, occurrence: SessionOccurrence, now: datetime) -> float:
        return self._time.minutes_between(now, occurrence.start)

    def delay_minutes(self, occurrence: SessionOccurrence, now: datetime) -> int:
        # Half-up rounding: 4.5 minutes late counts as 5.
        return int(math.floor(self.minutes_from_start(occurrence, now) + 0.5))

    def within_window(self, occurrence: SessionOccurrence, now: datetime) -> bool:
        diff = self.minutes_from_start(occurrence, now)
        return -self.window_before <= diff <= self.window_after

    def can_mark(self, occurrence: SessionOccurrence, now: datetime, existing: Optional[AttendanceRecord]) -> bool:
        return existing is None and self.within_window(occurrence, now)
