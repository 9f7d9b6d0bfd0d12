from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from ..attendance.duplicate_guard import DuplicateGuard
from ..attendance.eligibility import EligibilityEvaluator
from ..audit.service import AuditTrail, DeletionSnapshots
from ..centers.model import Center
from ..centers.repository import CenterRepository
from ..common.datetime_utils import TimeService, parse_iso_datetime
from ..common.validators import optional_int, require_int, require_int_in_range, require_non_empty
from ..core.constants import MAX_SUBJECT_LENGTH
from ..core.enums import DeletedItemType, RecurrenceType
from ..core.exceptions import NotFoundError, ValidationError
from .model import SessionDefinition, SessionOccurrence
from .repository import SessionRepository
from .resolver import ScheduleResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionInput:
    center_id: int
    assistant_id: Optional[int]
    subject: str
    start_time: datetime
    recurrence_type: RecurrenceType
    day_of_week: Optional[int]
    is_active: bool

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "SessionInput":
        raw_type = data.get("recurrence_type") or RecurrenceType.ONE_TIME.value
        try:
            recurrence_type = RecurrenceType(raw_type)
        except ValueError:
            raise ValidationError("Recurrence type must be 'one_time' or 'weekly'")

        if not data.get("start_time"):
            raise ValidationError("Start time is required")
        start_time = data["start_time"]
        if not isinstance(start_time, datetime):
            start_time = parse_iso_datetime(str(start_time))

        day_of_week = None
        if recurrence_type == RecurrenceType.WEEKLY:
            if data.get("day_of_week") in (None, ""):
                raise ValidationError("Day of week is required for weekly sessions")
            day_of_week = require_int_in_range(data["day_of_week"], "Day of week", 1, 7)

        is_active = data.get("is_active", True)
        if isinstance(is_active, str):
            is_active = is_active.strip().lower() in {"1", "true", "yes", "on"}

        return cls(
            center_id=require_int(data.get("center_id"), "Center"),
            assistant_id=optional_int(data.get("assistant_id"), "Assistant"),
            subject=require_non_empty(data.get("subject"), "Subject", max_len=MAX_SUBJECT_LENGTH),
            start_time=start_time,
            recurrence_type=recurrence_type,
            day_of_week=day_of_week,
            is_active=bool(is_active),
        )


def session_to_dict(definition: SessionDefinition, time_service: TimeService) -> dict:
    return {
        "id": definition.session_id,
        "center_id": definition.center_id,
        "assistant_id": definition.assistant_id,
        "subject": definition.subject,
        "start_time": time_service.to_civil(definition.start_time).isoformat(),
        "recurrence_type": definition.recurrence_type.value,
        "day_of_week": definition.day_of_week,
        "is_active": definition.is_active,
    }


class SessionService:
    """Assistant-facing schedule queries plus admin maintenance of session definitions."""

    def __init__(
        self,
        sessions: SessionRepository,
        centers: CenterRepository,
        *,
        time_service: TimeService,
        resolver: ScheduleResolver,
        eligibility: EligibilityEvaluator,
        duplicate_guard: DuplicateGuard,
        audit: AuditTrail | None = None,
        snapshots: DeletionSnapshots | None = None,
    ):
        self._sessions = sessions
        self._centers = centers
        self._time = time_service
        self._resolver = resolver
        self._eligibility = eligibility
        self._guard = duplicate_guard
        self._audit = audit or AuditTrail()
        self._snapshots = snapshots

    def _occurrence_dict(self, occurrence: SessionOccurrence, center: Optional[Center]) -> dict:
        return {
            "id": occurrence.session_id,
            "subject": occurrence.subject,
            "date": occurrence.civil_date.isoformat(),
            "start_time": self._time.format_hhmm(occurrence.start),
            "end_time": self._time.format_hhmm(occurrence.end),
            "center_id": occurrence.center_id,
            "center_name": center.name if center else None,
            "latitude": center.latitude if center else None,
            "longitude": center.longitude if center else None,
            "radius_m": center.radius_m if center else None,
            "recurrence_type": occurrence.recurrence_type.value,
        }

    def today_sessions(self, assistant_id: int, *, now: Optional[datetime] = None) -> list[dict]:
        now = self._time.to_civil(now) if now else self._time.now()
        today = self._time.civil_date(now)
        day_start, day_end = self._time.civil_day_bounds(today)

        candidates = self._sessions.list_candidates_for_day(
            assistant_id=int(assistant_id),
            day_start=day_start,
            day_end=day_end,
            day_of_week=self._time.civil_day_of_week(today),
        )
        occurrences = self._resolver.occurrences_on_date(candidates, today, int(assistant_id))

        centers: dict[int, Optional[Center]] = {}
        out: list[dict] = []
        for occurrence in occurrences:
            if occurrence.center_id not in centers:
                centers[occurrence.center_id] = self._centers.get_by_id(occurrence.center_id)
            center = centers[occurrence.center_id]
            if center is None:
                logger.warning("Session %s skipped: center %s not found", occurrence.session_id, occurrence.center_id)
                continue

            existing = self._guard.find_existing(assistant_id, occurrence, today)
            item = self._occurrence_dict(occurrence, center)
            item["attendance_id"] = existing.attendance_id if existing else None
            item["attended"] = existing is not None
            item["can_mark_attendance"] = self._eligibility.can_mark(occurrence, now, existing)
            out.append(item)
        return out

    def get_session(self, session_id: int, assistant_id: int, *, now: Optional[datetime] = None) -> dict:
        now = self._time.to_civil(now) if now else self._time.now()
        today = self._time.civil_date(now)

        definition = self._sessions.get_by_id(int(session_id))
        if not definition or not definition.is_visible_to(int(assistant_id)):
            raise NotFoundError("Session not found or not assigned to you")
        # Off days fall back to the stored start, so the detail is readable any day.
        occurrence = self._resolver.occurrence_on(definition, today) or self._resolver.as_stored(definition)
        center = self._centers.get_by_id(occurrence.center_id)
        if center is None:
            logger.warning("Session %s refers to missing center %s", definition.session_id, definition.center_id)
        return self._occurrence_dict(occurrence, center)

    # ----- admin -----

    def list_sessions(
        self,
        *,
        center_id: Optional[int] = None,
        assistant_id: Optional[int] = None,
    ) -> Sequence[SessionDefinition]:
        return self._sessions.list_all(center_id=center_id, assistant_id=assistant_id)

    def get_definition(self, session_id: int) -> SessionDefinition:
        definition = self._sessions.get_by_id(int(session_id))
        if not definition:
            raise NotFoundError("Session not found")
        return definition

    def _require_center(self, center_id: int) -> None:
        if not self._centers.get_by_id(center_id):
            raise NotFoundError("Center not found")

    def create_session(self, *, actor_id: int, data: dict[str, Any]) -> SessionDefinition:
        values = SessionInput.from_payload(data)
        self._require_center(values.center_id)

        session_id = self._sessions.create(**values.__dict__)
        definition = SessionDefinition(session_id=session_id, **values.__dict__)
        logger.info("Session %s (%s) created by %s", session_id, values.recurrence_type.value, actor_id)
        self._audit.record(actor_id, "CREATE_SESSION", session_to_dict(definition, self._time))
        return definition

    def update_session(self, *, actor_id: int, session_id: int, data: dict[str, Any]) -> SessionDefinition:
        existing = self.get_definition(session_id)
        merged = {**session_to_dict(existing, self._time), **data}
        if "recurrence_type" in data and data["recurrence_type"] == RecurrenceType.ONE_TIME.value:
            merged["day_of_week"] = None
        values = SessionInput.from_payload(merged)
        if values.center_id != existing.center_id:
            self._require_center(values.center_id)

        self._sessions.update(session_id=existing.session_id, **values.__dict__)
        definition = SessionDefinition(session_id=existing.session_id, **values.__dict__)
        self._audit.record(actor_id, "UPDATE_SESSION", session_to_dict(definition, self._time))
        return definition

    def delete_session(self, *, actor_id: int, session_id: int, reason: Optional[str] = None) -> None:
        definition = self.get_definition(session_id)
        if self._snapshots is not None:
            self._snapshots.capture(
                item_type=DeletedItemType.SESSION,
                entity=definition,
                item_id=definition.session_id,
                deleted_by=actor_id,
                deleted_at=self._time.now(),
                reason=reason,
            )
        if not self._sessions.delete(session_id=definition.session_id):
            raise NotFoundError("Session not found")
        logger.info("Session %s deleted by %s", definition.session_id, actor_id)
        self._audit.record(
            actor_id,
            "DELETE_SESSION",
            {"session_id": definition.session_id, "subject": definition.subject},
        )
