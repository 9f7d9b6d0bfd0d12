from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ...core.enums import AttendanceSource
from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import DuplicateRule


class WhatsAppShiftRule(DuplicateRule):
    """One WhatsApp record per user per civil day, however many shifts that day holds."""

    def find_existing(
        self,
        attendance: AttendanceRepository,
        *,
        assistant_id: int,
        target: Any,
        day_bounds: tuple[datetime, datetime],
    ) -> Optional[AttendanceRecord]:
        start, end = day_bounds
        return attendance.find_for_activity_between(
            assistant_id=assistant_id,
            activity_type=AttendanceSource.WHATSAPP.value,
            start=start,
            end=end,
        )

    def occurrence_key(self, *, target: Any, civil_date: date) -> Optional[str]:
        return civil_date.isoformat()
