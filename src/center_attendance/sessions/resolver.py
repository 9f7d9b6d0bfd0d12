from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import TimeService
from ..core.constants import SESSION_DURATION_MINUTES
from ..core.enums import RecurrenceType
from .model import SessionDefinition, SessionOccurrence


class ScheduleResolver:
    """Projects session definitions onto a civil date.

    One-time sessions occur only on the civil date holding their start instant.
    Weekly sessions occur on every date whose weekday matches ``day_of_week``,
    at the civil hour/minute of their stored start. Every occurrence lasts
    exactly two hours; crossing midnight is allowed.
    """

    def __init__(self, time_service: TimeService):
        self._time = time_service
        self._duration = timedelta(minutes=SESSION_DURATION_MINUTES)

    def occurrence_on(self, definition: SessionDefinition, day: date) -> Optional[SessionOccurrence]:
        if definition.recurrence_type == RecurrenceType.WEEKLY:
            if not definition.is_active:
                return None
            if definition.day_of_week != self._time.civil_day_of_week(day):
                return None
            stored = self._time.to_civil(definition.start_time)
            start = self._time.at_civil_time(day, stored.hour, stored.minute)
        else:
            day_start, day_end = self._time.civil_day_bounds(day)
            if not day_start <= definition.start_time < day_end:
                return None
            start = self._time.to_civil(definition.start_time)

        return self._occurrence(definition, day, start)

    def as_stored(self, definition: SessionDefinition) -> SessionOccurrence:
        """Occurrence at the stored start instant, whatever its recurrence or active flag."""
        start = self._time.to_civil(definition.start_time)
        return self._occurrence(definition, start.date(), start)

    def _occurrence(self, definition: SessionDefinition, day: date, start: datetime) -> SessionOccurrence:
        return SessionOccurrence(
            session_id=definition.session_id,
            center_id=definition.center_id,
            assistant_id=definition.assistant_id,
            subject=definition.subject,
            source=definition.source,
            civil_date=day,
            start=start,
            end=self._time.add_exact(start, self._duration),
        )

    def occurrences_on_date(
        self,
        definitions: Iterable[SessionDefinition],
        day: date,
        assistant_id: int,
    ) -> list[SessionOccurrence]:
        out: list[SessionOccurrence] = []
        for definition in definitions:
            if not definition.is_visible_to(assistant_id):
                continue
            occurrence = self.occurrence_on(definition, day)
            if occurrence is not None:
                out.append(occurrence)
        out.sort(key=lambda o: (o.start, o.session_id))
        return out
