from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import CALL_SESSION_KEY, DuplicateRule


class CallSessionRule(DuplicateRule):
    """One record per assistant per call session, ever."""

    def find_existing(
        self,
        attendance: AttendanceRepository,
        *,
        assistant_id: int,
        target: Any,
        day_bounds: tuple[datetime, datetime],
    ) -> Optional[AttendanceRecord]:
        return attendance.find_for_call_session(assistant_id=assistant_id, call_session_id=target.call_session_id)

    def occurrence_key(self, *, target: Any, civil_date: date) -> Optional[str]:
        return CALL_SESSION_KEY
