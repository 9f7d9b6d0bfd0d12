from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import TimeService
from .factory import DuplicateRuleFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository


class DuplicateGuard:
    """Finds the record that would make a new mark a duplicate.

    ``target`` is anything carrying a ``source`` tag plus the matching id
    (a SessionOccurrence, SessionTarget, CallSessionTarget, WhatsAppTarget or OtherActivityTarget).
    The same lookup feeds both ``can_mark_attendance`` and write rejection.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        time_service: TimeService,
        *,
        rule_factory: DuplicateRuleFactory | None = None,
    ):
        self._attendance = attendance
        self._time = time_service
        self._factory = rule_factory or DuplicateRuleFactory()

    def find_existing(self, assistant_id: int, target: Any, day: date) -> Optional[AttendanceRecord]:
        rule = self._factory.for_source(target.source)
        return rule.find_existing(
            self._attendance,
            assistant_id=int(assistant_id),
            target=target,
            day_bounds=self._time.civil_day_bounds(day),
        )

    def occurrence_key(self, target: Any, day: date) -> Optional[str]:
        return self._factory.for_source(target.source).occurrence_key(target=target, civil_date=day)
