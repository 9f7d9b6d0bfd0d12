from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceSource
from .strategies.base import DuplicateRule
from .strategies.call_session_rule import CallSessionRule
from .strategies.one_time_rule import OneTimeSessionRule
from .strategies.other_activity_rule import OtherActivityRule
from .strategies.weekly_rule import WeeklySessionRule
from .strategies.whatsapp_rule import WhatsAppShiftRule


@dataclass
class DuplicateRuleFactory:
    """Factory Pattern: choose the uniqueness rule from the attendance source."""

    def for_source(self, source: AttendanceSource) -> DuplicateRule:
        if source == AttendanceSource.ONE_TIME_SESSION:
            return OneTimeSessionRule()
        if source == AttendanceSource.WEEKLY_SESSION:
            return WeeklySessionRule()
        if source == AttendanceSource.CALL_SESSION:
            return CallSessionRule()
        if source == AttendanceSource.WHATSAPP:
            return WhatsAppShiftRule()
        return OtherActivityRule()
