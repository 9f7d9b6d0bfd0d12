from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import DuplicateRule


class WeeklySessionRule(DuplicateRule):
    """One record per civil day, so each week's occurrence can be marked."""

    def find_existing(
        self,
        attendance: AttendanceRepository,
        *,
        assistant_id: int,
        target: Any,
        day_bounds: tuple[datetime, datetime],
    ) -> Optional[AttendanceRecord]:
        start, end = day_bounds
        return attendance.find_for_session_between(
            assistant_id=assistant_id,
            session_id=target.session_id,
            start=start,
            end=end,
        )

    def occurrence_key(self, *, target: Any, civil_date: date) -> Optional[str]:
        return civil_date.isoformat()
