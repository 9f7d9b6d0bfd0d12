from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for route authorization."""

    ADMIN = "admin"
    ASSISTANT = "assistant"


class RecurrenceType(str, Enum):
    """How a session definition repeats."""

    ONE_TIME = "one_time"
    WEEKLY = "weekly"


class AttendanceSource(str, Enum):
    """What an attendance mark is tied to; selects the duplicate rule."""

    ONE_TIME_SESSION = "one_time_session"
    WEEKLY_SESSION = "weekly_session"
    CALL_SESSION = "call_session"
    WHATSAPP = "whatsapp"
    OTHER_ACTIVITY = "other_activity"


class CallSessionStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class DeletedItemType(str, Enum):
    CENTER = "center"
    SESSION = "session"
    ATTENDANCE = "attendance"
    WHATSAPP_SCHEDULE = "whatsapp_schedule"
