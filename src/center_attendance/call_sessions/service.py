from __future__ import annotations

from typing import Any, Sequence

from ..audit.service import AuditTrail
from ..common.datetime_utils import TimeService, parse_iso_datetime
from ..common.validators import optional_int, require_non_empty
from ..core.constants import MAX_NAME_LENGTH
from ..core.enums import CallSessionStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import CallSession
from .repository import CallSessionRepository


def call_session_to_dict(cs: CallSession, time_service: TimeService) -> dict:
    return {
        "id": cs.call_session_id,
        "name": cs.name,
        "assistant_id": cs.assistant_id,
        "status": cs.status.value,
        "start_time": time_service.to_civil(cs.start_time).isoformat(),
        "end_time": time_service.to_civil(cs.end_time).isoformat() if cs.end_time else None,
    }


class CallSessionService:
    def __init__(self, call_sessions: CallSessionRepository, *, time_service: TimeService, audit: AuditTrail):
        self._call_sessions = call_sessions
        self._time = time_service
        self._audit = audit

    def list_for_assistant(self, assistant_id: int) -> Sequence[CallSession]:
        return self._call_sessions.list_for_assistant(int(assistant_id))

    def get_call_session(self, call_session_id: int) -> CallSession:
        cs = self._call_sessions.get_by_id(int(call_session_id))
        if not cs:
            raise NotFoundError("Call session not found")
        return cs

    def get_visible(self, call_session_id: int, assistant_id: int) -> CallSession:
        cs = self._call_sessions.get_by_id(int(call_session_id))
        if not cs or not cs.is_visible_to(int(assistant_id)):
            raise NotFoundError("Call session not found or not assigned to you")
        return cs

    def create_call_session(self, *, actor_id: int, data: dict[str, Any]) -> CallSession:
        name = require_non_empty(data.get("name"), "Call session name", max_len=MAX_NAME_LENGTH)
        if not data.get("start_time"):
            raise ValidationError("Start time is required")
        start_time = parse_iso_datetime(str(data["start_time"]))
        end_time = parse_iso_datetime(str(data["end_time"])) if data.get("end_time") else None
        if end_time is not None and end_time <= start_time:
            raise ValidationError("End time must be after start time")
        assistant_id = optional_int(data.get("assistant_id"), "Assistant")

        call_session_id = self._call_sessions.create(
            name=name,
            assistant_id=assistant_id,
            start_time=start_time,
            end_time=end_time,
        )
        cs = CallSession(
            call_session_id=call_session_id,
            name=name,
            assistant_id=assistant_id,
            status=CallSessionStatus.PENDING,
            start_time=start_time,
            end_time=end_time,
        )
        self._audit.record(actor_id, "CREATE_CALL_SESSION", call_session_to_dict(cs, self._time))
        return cs
