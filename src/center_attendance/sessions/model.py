from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceSource, RecurrenceType


@dataclass(frozen=True)
class SessionDefinition:
    """Domain entity: a teaching session, either one-time or repeating weekly.

    ``start_time`` is an aware instant. For weekly sessions only its civil
    hour/minute matter; ``day_of_week`` (1=Monday..7=Sunday) picks the days.
    """

    session_id: int
    center_id: int
    assistant_id: Optional[int]
    subject: str
    start_time: datetime
    recurrence_type: RecurrenceType = RecurrenceType.ONE_TIME
    day_of_week: Optional[int] = None
    is_active: bool = True

    @property
    def source(self) -> AttendanceSource:
        if self.recurrence_type == RecurrenceType.WEEKLY:
            return AttendanceSource.WEEKLY_SESSION
        return AttendanceSource.ONE_TIME_SESSION

    def is_visible_to(self, assistant_id: int) -> bool:
        return self.assistant_id is None or self.assistant_id == assistant_id


@dataclass(frozen=True)
class SessionOccurrence:
    """A session definition projected onto one civil date (not persisted)."""

    session_id: int
    center_id: int
    assistant_id: Optional[int]
    subject: str
    source: AttendanceSource
    civil_date: date
    start: datetime
    end: datetime

    @property
    def recurrence_type(self) -> RecurrenceType:
        if self.source == AttendanceSource.WEEKLY_SESSION:
            return RecurrenceType.WEEKLY
        return RecurrenceType.ONE_TIME
