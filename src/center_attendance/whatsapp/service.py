from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..attendance.duplicate_guard import DuplicateGuard
from ..attendance.model import AttendanceRecord, NewAttendance
from ..attendance.repository import AttendanceRepository
from ..audit.service import AuditTrail, DeletionSnapshots
from ..common.datetime_utils import TimeService
from ..common.validators import require_int, require_int_in_range
from ..core.enums import AttendanceSource, DeletedItemType
from ..core.exceptions import DuplicateAttendanceError, NotFoundError, ValidationError
from .model import WhatsAppSchedule, WhatsAppTarget
from .repository import WhatsAppScheduleRepository

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")


def _require_hhmm(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    value = str(value).strip()
    if not _HHMM.match(value):
        raise ValidationError(f"{field_name} must be in HH:MM format")
    return value


@dataclass(frozen=True)
class WhatsAppScheduleInput:
    user_id: int
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "WhatsAppScheduleInput":
        start_time = _require_hhmm(data.get("start_time"), "Start time")
        end_time = _require_hhmm(data.get("end_time"), "End time")
        if start_time == end_time:
            raise ValidationError("Start time and end time cannot be the same")

        is_active = data.get("is_active", True)
        if isinstance(is_active, str):
            is_active = is_active.strip().lower() in {"1", "true", "yes", "on"}

        return cls(
            user_id=require_int(data.get("user_id"), "User"),
            day_of_week=require_int_in_range(data.get("day_of_week"), "Day of week", 1, 7),
            start_time=start_time,
            end_time=end_time,
            is_active=bool(is_active),
        )


def whatsapp_schedule_to_dict(schedule: WhatsAppSchedule) -> dict:
    return {
        "id": schedule.schedule_id,
        "user_id": schedule.user_id,
        "day_of_week": schedule.day_of_week,
        "start_time": schedule.start_time,
        "end_time": schedule.end_time,
        "is_active": schedule.is_active,
        "recurrence_type": "weekly",
    }


class WhatsAppScheduleService:
    """Admin maintenance of weekly WhatsApp shifts and the daily records they produce."""

    def __init__(
        self,
        schedules: WhatsAppScheduleRepository,
        attendance: AttendanceRepository,
        *,
        time_service: TimeService,
        duplicate_guard: DuplicateGuard,
        audit: AuditTrail | None = None,
        snapshots: DeletionSnapshots | None = None,
    ):
        self._schedules = schedules
        self._attendance = attendance
        self._time = time_service
        self._guard = duplicate_guard
        self._audit = audit or AuditTrail()
        self._snapshots = snapshots

    def list_schedules(self, *, user_id: Optional[int] = None) -> Sequence[WhatsAppSchedule]:
        return self._schedules.list_all(user_id=user_id)

    def get_schedule(self, schedule_id: int) -> WhatsAppSchedule:
        schedule = self._schedules.get_by_id(int(schedule_id))
        if not schedule:
            raise NotFoundError("WhatsApp schedule not found")
        return schedule

    def create_schedule(self, *, actor_id: int, data: dict[str, Any]) -> WhatsAppSchedule:
        values = WhatsAppScheduleInput.from_payload(data)
        schedule_id = self._schedules.create(**values.__dict__)
        schedule = WhatsAppSchedule(schedule_id=schedule_id, **values.__dict__)
        logger.info("WhatsApp schedule %s created for user %s by %s", schedule_id, values.user_id, actor_id)
        self._audit.record(actor_id, "CREATE_WHATSAPP_SCHEDULE", whatsapp_schedule_to_dict(schedule))
        return schedule

    def update_schedule(self, *, actor_id: int, schedule_id: int, data: dict[str, Any]) -> WhatsAppSchedule:
        existing = self.get_schedule(schedule_id)
        values = WhatsAppScheduleInput.from_payload({**whatsapp_schedule_to_dict(existing), **data})
        self._schedules.update(schedule_id=existing.schedule_id, **values.__dict__)
        schedule = WhatsAppSchedule(schedule_id=existing.schedule_id, **values.__dict__)
        self._audit.record(actor_id, "UPDATE_WHATSAPP_SCHEDULE", whatsapp_schedule_to_dict(schedule))
        return schedule

    def delete_schedule(self, *, actor_id: int, schedule_id: int, reason: Optional[str] = None) -> None:
        schedule = self.get_schedule(schedule_id)
        if self._snapshots is not None:
            self._snapshots.capture(
                item_type=DeletedItemType.WHATSAPP_SCHEDULE,
                entity=schedule,
                item_id=schedule.schedule_id,
                deleted_by=actor_id,
                deleted_at=self._time.now(),
                reason=reason,
            )
        if not self._schedules.delete(schedule_id=schedule.schedule_id):
            raise NotFoundError("WhatsApp schedule not found")
        logger.info("WhatsApp schedule %s deleted by %s", schedule.schedule_id, actor_id)
        self._audit.record(actor_id, "DELETE_WHATSAPP_SCHEDULE", {"schedule_id": schedule.schedule_id})

    def generate_whatsapp_records_for(self, day: date, *, actor_id: Optional[int] = None) -> list[AttendanceRecord]:
        """Create the WhatsApp activity records for one civil day.

        Every user with an active schedule on that weekday gets one record, stamped at
        the start of their earliest shift. Users already holding a record for the day
        are skipped, so running it again is harmless.
        """

        day = self._time.civil_date(day)
        schedules = self._schedules.list_active_for_day(self._time.civil_day_of_week(day))

        earliest: dict[int, WhatsAppSchedule] = {}
        for schedule in sorted(schedules, key=lambda s: (s.user_id, s.start_time)):
            earliest.setdefault(schedule.user_id, schedule)

        target = WhatsAppTarget()
        created: list[AttendanceRecord] = []
        for user_id, schedule in earliest.items():
            if self._guard.find_existing(user_id, target, day):
                continue

            hour, minute = schedule.start_hour_minute()
            new = NewAttendance(
                assistant_id=user_id,
                time_recorded=self._time.at_civil_time(day, hour, minute),
                session_subject=target.subject,
                delay_minutes=0,
                notes=f"WhatsApp shift {schedule.start_time}-{schedule.end_time}",
                occurrence_key=self._guard.occurrence_key(target, day),
                activity_type=AttendanceSource.WHATSAPP.value,
            )
            try:
                attendance_id = self._attendance.create(new)
            except DuplicateAttendanceError:
                logger.info("WhatsApp record for user %s on %s already exists", user_id, day)
                continue
            created.append(AttendanceRecord(attendance_id=attendance_id, **new.__dict__))

        logger.info("Generated %s WhatsApp records for %s", len(created), day.isoformat())
        if actor_id is not None:
            self._audit.record(
                actor_id,
                "GENERATE_WHATSAPP_RECORDS",
                {"date": day.isoformat(), "attendance_ids": [r.attendance_id for r in created]},
            )
        return created
