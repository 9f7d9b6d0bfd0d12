from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WhatsAppSchedule


class WhatsAppScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: int) -> Optional[WhatsAppSchedule]:
        raise NotImplementedError

    def list_all(self, *, user_id: Optional[int] = None) -> Sequence[WhatsAppSchedule]:
        raise NotImplementedError

    def list_active_for_day(self, day_of_week: int) -> Sequence[WhatsAppSchedule]:
        raise NotImplementedError

    def create(self, *, user_id: int, day_of_week: int, start_time: str, end_time: str, is_active: bool) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        schedule_id: int,
        user_id: int,
        day_of_week: int,
        start_time: str,
        end_time: str,
        is_active: bool,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, schedule_id: int) -> bool:
        raise NotImplementedError
