from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_for_session(self, *, assistant_id: int, session_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_for_session_between(
        self,
        *,
        assistant_id: int,
        session_id: int,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceRecord]:
        """Record with start <= time_recorded < end."""

        raise NotImplementedError

    def find_for_call_session(self, *, assistant_id: int, call_session_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_for_activity_between(
        self,
        *,
        assistant_id: int,
        activity_type: str,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: NewAttendance) -> int:
        """Insert and return attendance_id.

        Raises DuplicateAttendanceError when a storage uniqueness constraint rejects the row.
        """

        raise NotImplementedError

    def list_recent_for_assistant(self, assistant_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        subject: Optional[str] = None,
        assistant_id: Optional[int] = None,
        include_deleted: bool = False,
        limit: int = 200,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def admin_update(
        self,
        *,
        attendance_id: int,
        time_recorded: datetime,
        delay_minutes: int,
        notes: Optional[str],
        occurrence_key: Optional[str],
    ) -> bool:
        """Admin-only in-place edit."""

        raise NotImplementedError

    def soft_delete(self, *, attendance_id: int, deleted_by: int, deleted_at: datetime, reason: Optional[str]) -> bool:
        raise NotImplementedError
