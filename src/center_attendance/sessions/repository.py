from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RecurrenceType
from .model import SessionDefinition


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[SessionDefinition]:
        raise NotImplementedError

    def list_candidates_for_day(
        self,
        *,
        assistant_id: int,
        day_start: datetime,
        day_end: datetime,
        day_of_week: int,
    ) -> Sequence[SessionDefinition]:
        """One-time sessions starting in [day_start, day_end) plus weekly sessions on day_of_week.

        Only sessions assigned to assistant_id or unassigned. Callers still resolve
        each candidate; this is a prefilter for the database.
        """

        raise NotImplementedError

    def list_all(self, *, center_id: Optional[int] = None, assistant_id: Optional[int] = None) -> Sequence[SessionDefinition]:
        raise NotImplementedError

    def create(
        self,
        *,
        center_id: int,
        assistant_id: Optional[int],
        subject: str,
        start_time: datetime,
        recurrence_type: RecurrenceType,
        day_of_week: Optional[int],
        is_active: bool,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        session_id: int,
        center_id: int,
        assistant_id: Optional[int],
        subject: str,
        start_time: datetime,
        recurrence_type: RecurrenceType,
        day_of_week: Optional[int],
        is_active: bool,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, session_id: int) -> bool:
        raise NotImplementedError
