from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import DuplicateRule


class OtherActivityRule(DuplicateRule):
    """Admin-entered activity records are never deduplicated."""

    def find_existing(
        self,
        attendance: AttendanceRepository,
        *,
        assistant_id: int,
        target: Any,
        day_bounds: tuple[datetime, datetime],
    ) -> Optional[AttendanceRecord]:
        return None

    def occurrence_key(self, *, target: Any, civil_date: date) -> Optional[str]:
        return None
