from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceSource, CallSessionStatus


@dataclass(frozen=True)
class CallSession:
    """Domain entity: a phone outreach shift. Marked at most once per assistant."""

    call_session_id: int
    name: str
    assistant_id: Optional[int]
    status: CallSessionStatus
    start_time: datetime
    end_time: Optional[datetime] = None

    def is_visible_to(self, assistant_id: int) -> bool:
        return self.assistant_id is None or self.assistant_id == assistant_id


@dataclass(frozen=True)
class CallSessionTarget:
    """Attendance target for a call session; there is no per-date occurrence."""

    call_session_id: int
    subject: str
    source: AttendanceSource = AttendanceSource.CALL_SESSION
