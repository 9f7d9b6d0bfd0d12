from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Optional

from ..model import AttendanceRecord
from ..repository import AttendanceRepository

ONE_TIME_KEY = "once"
CALL_SESSION_KEY = "call"


class DuplicateRule(ABC):
    """Strategy Pattern: one uniqueness policy per attendance source.

    ``occurrence_key`` is the bucket stored with the record; the storage
    unique index on it enforces the same policy under concurrent writes.
    """

    @abstractmethod
    def find_existing(
        self,
        attendance: AttendanceRepository,
        *,
        assistant_id: int,
        target: Any,
        day_bounds: tuple[datetime, datetime],
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    @abstractmethod
    def occurrence_key(self, *, target: Any, civil_date: date) -> Optional[str]:
        raise NotImplementedError
