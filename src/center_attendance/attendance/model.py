from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceSource


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark.

    At most one of session_id / call_session_id is set. Neither means an
    activity record: a generated WhatsApp shift (activity_type "whatsapp") or an
    admin-entered "other activity". ``session_subject`` is cached so the
    record stays readable after its session is deleted.
    """

    attendance_id: int
    assistant_id: int
    time_recorded: datetime
    session_id: Optional[int] = None
    call_session_id: Optional[int] = None
    session_subject: Optional[str] = None
    center_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    delay_minutes: int = 0
    notes: Optional[str] = None
    occurrence_key: Optional[str] = None
    activity_type: Optional[str] = None
    is_deleted: bool = False
    deleted_by: Optional[int] = None
    deleted_at: Optional[datetime] = None
    deletion_reason: Optional[str] = None

    def is_on_time(self) -> bool:
        return self.delay_minutes == 0


@dataclass(frozen=True)
class NewAttendance:
    assistant_id: int
    time_recorded: datetime
    session_id: Optional[int] = None
    call_session_id: Optional[int] = None
    session_subject: Optional[str] = None
    center_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    delay_minutes: int = 0
    notes: Optional[str] = None
    occurrence_key: Optional[str] = None
    activity_type: Optional[str] = None


@dataclass(frozen=True)
class SessionTarget:
    """A session picked without resolving a dated occurrence (admin manual entries)."""

    session_id: int
    subject: str
    source: AttendanceSource


@dataclass(frozen=True)
class OtherActivityTarget:
    subject: Optional[str] = None
    source: AttendanceSource = AttendanceSource.OTHER_ACTIVITY
