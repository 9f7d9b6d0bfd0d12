from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..audit.service import AuditTrail, DeletionSnapshots
from ..call_sessions.model import CallSessionTarget
from ..call_sessions.service import CallSessionService
from ..centers.geofence import GeofenceChecker
from ..centers.model import Coordinate
from ..centers.repository import CenterRepository
from ..common.datetime_utils import TimeService, parse_iso_datetime
from ..common.validators import optional_int, optional_text, require_int, require_latitude, require_longitude
from ..core.constants import (
    DEFAULT_ADMIN_LIST_LIMIT,
    DEFAULT_HISTORY_LIMIT,
    MAX_DELETION_REASON_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_SUBJECT_LENGTH,
)
from ..core.enums import DeletedItemType
from ..core.exceptions import (
    DuplicateAttendanceError,
    NotFoundError,
    OutOfRangeError,
    ValidationError,
    WindowClosedError,
)
from ..sessions.repository import SessionRepository
from ..sessions.resolver import ScheduleResolver
from .duplicate_guard import DuplicateGuard
from .eligibility import EligibilityEvaluator
from .model import AttendanceRecord, NewAttendance, OtherActivityTarget, SessionTarget
from .repository import AttendanceRepository
from .strategies.base import CALL_SESSION_KEY, ONE_TIME_KEY

logger = logging.getLogger(__name__)


def format_delay(delay_minutes: int) -> str:
    """Human-readable delay. Negative values only come from admin-entered records."""
    if delay_minutes == 0:
        return "On time"
    if delay_minutes < 0:
        return f"Early by {abs(delay_minutes)} minutes"
    return f"Late by {delay_minutes} minutes"


def record_to_dict(record: AttendanceRecord, time_service: TimeService) -> dict:
    return {
        "id": record.attendance_id,
        "assistant_id": record.assistant_id,
        "session_id": record.session_id,
        "call_session_id": record.call_session_id,
        "session_subject": record.session_subject,
        "center_id": record.center_id,
        "latitude": record.latitude,
        "longitude": record.longitude,
        "time_recorded": time_service.to_civil(record.time_recorded).isoformat(),
        "delay_minutes": record.delay_minutes,
        "delay": format_delay(record.delay_minutes),
        "on_time": record.is_on_time(),
        "notes": record.notes,
        "activity_type": record.activity_type,
        "is_deleted": record.is_deleted,
        "deleted_by": record.deleted_by,
        "deleted_at": time_service.to_civil(record.deleted_at).isoformat() if record.deleted_at else None,
        "deletion_reason": record.deletion_reason,
    }


def coordinate_from_payload(data: dict[str, Any]) -> Optional[Coordinate]:
    """Both latitude and longitude, or neither."""

    lat = data.get("latitude")
    lon = data.get("longitude")
    if lat is None and lon is None:
        return None
    return Coordinate(require_latitude(lat), require_longitude(lon))


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        centers: CenterRepository,
        call_sessions: CallSessionService,
        *,
        time_service: TimeService,
        resolver: ScheduleResolver,
        eligibility: EligibilityEvaluator,
        duplicate_guard: DuplicateGuard,
        geofence: GeofenceChecker | None = None,
        audit: AuditTrail | None = None,
        snapshots: DeletionSnapshots | None = None,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._centers = centers
        self._call_sessions = call_sessions
        self._time = time_service
        self._resolver = resolver
        self._eligibility = eligibility
        self._guard = duplicate_guard
        self._geofence = geofence or GeofenceChecker()
        self._audit = audit or AuditTrail()
        self._snapshots = snapshots

    # ----- assistant marking -----

    def record(
        self,
        assistant_id: int,
        *,
        session_id: Optional[int] = None,
        call_session_id: Optional[int] = None,
        coordinate: Optional[Coordinate] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        if session_id is not None and call_session_id is not None:
            raise ValidationError("Cannot mark a session and a call session at once")
        if session_id is None and call_session_id is None:
            raise ValidationError("session_id or call_session_id is required")

        now = self._time.to_civil(now) if now else self._time.now()
        notes = optional_text(notes, "Notes", max_len=MAX_NOTES_LENGTH)
        if coordinate is not None:
            coordinate = Coordinate(require_latitude(coordinate.latitude), require_longitude(coordinate.longitude))

        if session_id is not None:
            return self._mark_session(int(assistant_id), int(session_id), coordinate, notes, now)
        return self._mark_call_session(int(assistant_id), int(call_session_id), coordinate, notes, now)

    def _mark_session(
        self,
        assistant_id: int,
        session_id: int,
        coordinate: Optional[Coordinate],
        notes: Optional[str],
        now: datetime,
    ) -> AttendanceRecord:
        if coordinate is None:
            raise ValidationError("Location is required to mark session attendance")

        today = self._time.civil_date(now)
        definition = self._sessions.get_by_id(session_id)
        if not definition or not definition.is_visible_to(assistant_id):
            raise NotFoundError("Session not found or not assigned to you")

        occurrence = self._resolver.occurrence_on(definition, today)
        if occurrence is None:
            raise NotFoundError("Session is not scheduled for today")

        center = self._centers.get_by_id(occurrence.center_id)
        if not center:
            raise NotFoundError("Session center not found")

        if not self._geofence.is_within_radius(center, coordinate):
            distance = self._geofence.distance_to(center, coordinate)
            logger.info(
                "Assistant %s outside geofence of center %s (%.1f m > %s m)",
                assistant_id,
                center.center_id,
                distance,
                center.radius_m,
            )
            raise OutOfRangeError(
                f"You are {distance:.0f} m away from {center.name}; allowed radius is {center.radius_m:g} m"
            )

        if self._guard.find_existing(assistant_id, occurrence, today):
            raise DuplicateAttendanceError("Attendance already recorded for this session")

        if not self._eligibility.within_window(occurrence, now):
            raise WindowClosedError(
                f"Attendance can be marked from {self._eligibility.window_before} minutes before "
                f"until {self._eligibility.window_after} minutes after the session starts"
            )

        new = NewAttendance(
            assistant_id=assistant_id,
            time_recorded=now,
            session_id=occurrence.session_id,
            session_subject=occurrence.subject,
            center_id=center.center_id,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            delay_minutes=max(0, self._eligibility.delay_minutes(occurrence, now)),
            notes=notes,
            occurrence_key=self._guard.occurrence_key(occurrence, today),
        )
        return self._persist(new, action="MARK_ATTENDANCE")

    def _mark_call_session(
        self,
        assistant_id: int,
        call_session_id: int,
        coordinate: Optional[Coordinate],
        notes: Optional[str],
        now: datetime,
    ) -> AttendanceRecord:
        cs = self._call_sessions.get_visible(call_session_id, assistant_id)

        today = self._time.civil_date(now)
        target = CallSessionTarget(call_session_id=cs.call_session_id, subject=cs.name)
        if self._guard.find_existing(assistant_id, target, today):
            raise DuplicateAttendanceError("Attendance already recorded for this call session")

        new = NewAttendance(
            assistant_id=assistant_id,
            time_recorded=now,
            call_session_id=cs.call_session_id,
            session_subject=cs.name,
            latitude=coordinate.latitude if coordinate else None,
            longitude=coordinate.longitude if coordinate else None,
            delay_minutes=0,
            notes=notes,
            occurrence_key=self._guard.occurrence_key(target, today),
        )
        return self._persist(new, action="MARK_CALL_ATTENDANCE")

    def _persist(self, new: NewAttendance, *, action: str, actor_id: Optional[int] = None) -> AttendanceRecord:
        attendance_id = self._attendance.create(new)
        record = AttendanceRecord(attendance_id=attendance_id, **new.__dict__)
        logger.info(
            "Attendance %s recorded for assistant %s (session=%s call_session=%s delay=%s)",
            attendance_id,
            new.assistant_id,
            new.session_id,
            new.call_session_id,
            new.delay_minutes,
        )
        self._audit.record(
            actor_id or new.assistant_id,
            action,
            {
                "attendance_id": attendance_id,
                "assistant_id": new.assistant_id,
                "session_id": new.session_id,
                "call_session_id": new.call_session_id,
                "delay_minutes": new.delay_minutes,
            },
        )
        return record

    def history_for_assistant(
        self, assistant_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_recent_for_assistant(int(assistant_id), int(limit))

    # ----- admin -----

    def list_records(
        self,
        *,
        subject: Optional[str] = None,
        assistant_id: Optional[int] = None,
        include_deleted: bool = False,
        limit: int = DEFAULT_ADMIN_LIST_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        subject = subject.strip() if subject else None
        return self._attendance.list_filtered(
            subject=subject or None,
            assistant_id=assistant_id,
            include_deleted=include_deleted,
            limit=limit,
        )

    def get_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def create_manual(self, *, actor_id: int, data: dict[str, Any]) -> AttendanceRecord:
        """Admin-entered record.

        No time window or geofence check, and the delay may be negative. The
        per-source duplicate rule still applies.
        """

        assistant_id = require_int(data.get("assistant_id"), "Assistant")
        session_id = optional_int(data.get("session_id"), "Session")
        call_session_id = optional_int(data.get("call_session_id"), "Call session")
        if session_id is not None and call_session_id is not None:
            raise ValidationError("Cannot have both session_id and call_session_id")

        time_recorded = (
            parse_iso_datetime(str(data["time_recorded"])) if data.get("time_recorded") else self._time.now()
        )
        day = self._time.civil_date(time_recorded)
        delay = require_int(data.get("delay_minutes", 0), "Delay")
        notes = optional_text(data.get("notes"), "Notes", max_len=MAX_NOTES_LENGTH)
        coordinate = coordinate_from_payload(data)
        center_id = optional_int(data.get("center_id"), "Center")

        if session_id is not None:
            definition = self._sessions.get_by_id(session_id)
            if not definition:
                raise NotFoundError("Session not found")
            if coordinate is None:
                raise ValidationError("Latitude and longitude are required for session attendance")
            center_id = center_id or definition.center_id
            target = SessionTarget(session_id=session_id, subject=definition.subject, source=definition.source)
        elif call_session_id is not None:
            cs = self._call_sessions.get_call_session(call_session_id)
            target = CallSessionTarget(call_session_id=call_session_id, subject=cs.name)
        else:
            subject = optional_text(data.get("subject"), "Subject", max_len=MAX_SUBJECT_LENGTH)
            target = OtherActivityTarget(subject=subject)

        if self._guard.find_existing(assistant_id, target, day):
            raise DuplicateAttendanceError("A qualifying attendance record already exists")

        new = NewAttendance(
            assistant_id=assistant_id,
            time_recorded=time_recorded,
            session_id=session_id,
            call_session_id=call_session_id,
            session_subject=target.subject,
            center_id=center_id,
            latitude=coordinate.latitude if coordinate else None,
            longitude=coordinate.longitude if coordinate else None,
            delay_minutes=delay,
            notes=notes,
            occurrence_key=self._guard.occurrence_key(target, day),
        )
        return self._persist(new, action="CREATE_MANUAL_ATTENDANCE", actor_id=actor_id)

    def admin_update(self, *, actor_id: int, attendance_id: int, data: dict[str, Any]) -> AttendanceRecord:
        record = self.get_record(attendance_id)
        if record.is_deleted:
            raise NotFoundError("Attendance record not found")

        time_recorded = (
            parse_iso_datetime(str(data["time_recorded"])) if data.get("time_recorded") else record.time_recorded
        )
        delay = require_int(data["delay_minutes"], "Delay") if "delay_minutes" in data else record.delay_minutes
        notes = optional_text(data["notes"], "Notes", max_len=MAX_NOTES_LENGTH) if "notes" in data else record.notes

        # Weekly records are bucketed by civil day; moving the record moves its bucket.
        key = record.occurrence_key
        if key not in (None, ONE_TIME_KEY, CALL_SESSION_KEY):
            key = self._time.civil_date(time_recorded).isoformat()

        self._attendance.admin_update(
            attendance_id=record.attendance_id,
            time_recorded=time_recorded,
            delay_minutes=delay,
            notes=notes,
            occurrence_key=key,
        )
        self._audit.record(
            actor_id,
            "EDIT_ATTENDANCE",
            {"attendance_id": record.attendance_id, "delay_minutes": delay, "time_recorded": time_recorded.isoformat()},
        )
        return self.get_record(record.attendance_id)

    def soft_delete(self, *, actor_id: int, attendance_id: int, reason: Optional[str] = None) -> None:
        record = self.get_record(attendance_id)
        if record.is_deleted:
            raise NotFoundError("Attendance record not found")
        reason = optional_text(reason, "Deletion reason", max_len=MAX_DELETION_REASON_LENGTH)
        deleted_at = self._time.now()

        if self._snapshots is not None:
            self._snapshots.capture(
                item_type=DeletedItemType.ATTENDANCE,
                entity=record,
                item_id=record.attendance_id,
                deleted_by=actor_id,
                deleted_at=deleted_at,
                reason=reason,
            )
        if not self._attendance.soft_delete(
            attendance_id=record.attendance_id,
            deleted_by=int(actor_id),
            deleted_at=deleted_at,
            reason=reason,
        ):
            raise NotFoundError("Attendance record not found")

        logger.info("Attendance %s soft-deleted by %s", record.attendance_id, actor_id)
        self._audit.record(actor_id, "DELETE_ATTENDANCE", {"attendance_id": record.attendance_id, "reason": reason})
