from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceSource

WHATSAPP_SUBJECT = "WhatsApp"


@dataclass(frozen=True)
class WhatsAppSchedule:
    """Weekly WhatsApp shift for one user.

    Times are civil "HH:MM" strings; an end before the start is an overnight shift.
    """

    schedule_id: int
    user_id: int
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool = True

    def start_hour_minute(self) -> tuple[int, int]:
        hour, minute = self.start_time.split(":")
        return int(hour), int(minute)


@dataclass(frozen=True)
class WhatsAppTarget:
    subject: str = WHATSAPP_SUBJECT
    source: AttendanceSource = AttendanceSource.WHATSAPP
