from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import CallSession


class CallSessionRepository(Protocol):
    def get_by_id(self, call_session_id: int) -> Optional[CallSession]:
        raise NotImplementedError

    def list_for_assistant(self, assistant_id: int) -> Sequence[CallSession]:
        """Call sessions assigned to assistant_id or open to everyone."""

        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        assistant_id: Optional[int],
        start_time: datetime,
        end_time: Optional[datetime],
    ) -> int:
        raise NotImplementedError
