from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import ONE_TIME_KEY, DuplicateRule


class OneTimeSessionRule(DuplicateRule):
    """Any earlier record for the session blocks every later mark."""

    def find_existing(
        self,
        attendance: AttendanceRepository,
        *,
        assistant_id: int,
        target: Any,
        day_bounds: tuple[datetime, datetime],
    ) -> Optional[AttendanceRecord]:
        return attendance.find_for_session(assistant_id=assistant_id, session_id=target.session_id)

    def occurrence_key(self, *, target: Any, civil_date: date) -> Optional[str]:
        return ONE_TIME_KEY
