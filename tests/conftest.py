from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from center_attendance.call_sessions.model import CallSession
from center_attendance.centers.model import Center
from center_attendance.common.datetime_utils import TimeService
from center_attendance.container import wire_container
from center_attendance.core.enums import CallSessionStatus, RecurrenceType
from center_attendance.sessions.model import SessionDefinition
from center_attendance.whatsapp.model import WhatsAppSchedule
from fakes import (
    FrozenClock,
    InMemoryAttendance,
    InMemoryAuditLogs,
    InMemoryCallSessions,
    InMemoryCenters,
    InMemoryDeletedItems,
    InMemorySessions,
    InMemoryWhatsAppSchedules,
)

CAIRO = ZoneInfo("Africa/Cairo")

ASSISTANT_ID = 7
OTHER_ASSISTANT_ID = 8
ADMIN_ID = 1

# Dokki, Giza.
CENTER_LAT = 30.0380
CENTER_LON = 31.2110


@dataclass
class Repos:
    centers: InMemoryCenters
    sessions: InMemorySessions
    call_sessions: InMemoryCallSessions
    attendance: InMemoryAttendance
    whatsapp_schedules: InMemoryWhatsAppSchedules
    audit: InMemoryAuditLogs
    deleted_items: InMemoryDeletedItems


@pytest.fixture
def fixed_now() -> datetime:
    # Monday 5 January 2026, 10:05 Cairo (UTC+2).
    return datetime(2026, 1, 5, 10, 5, tzinfo=CAIRO)


@pytest.fixture
def clock(fixed_now) -> FrozenClock:
    return FrozenClock(fixed_now)


@pytest.fixture
def time_service(clock) -> TimeService:
    return TimeService("Africa/Cairo", clock=clock)


@pytest.fixture
def center() -> Center:
    return Center(center_id=1, name="Dokki Center", latitude=CENTER_LAT, longitude=CENTER_LON, radius_m=30)


@pytest.fixture
def weekly_session() -> SessionDefinition:
    # Stored start is a past Monday; only its 10:00 civil time matters.
    return SessionDefinition(
        session_id=1,
        center_id=1,
        assistant_id=ASSISTANT_ID,
        subject="Physics",
        start_time=datetime(2025, 12, 1, 10, 0, tzinfo=CAIRO),
        recurrence_type=RecurrenceType.WEEKLY,
        day_of_week=1,
    )


@pytest.fixture
def one_time_session() -> SessionDefinition:
    return SessionDefinition(
        session_id=2,
        center_id=1,
        assistant_id=None,
        subject="Chemistry revision",
        start_time=datetime(2026, 1, 5, 14, 0, tzinfo=CAIRO),
        recurrence_type=RecurrenceType.ONE_TIME,
    )


@pytest.fixture
def call_session() -> CallSession:
    return CallSession(
        call_session_id=1,
        name="Parents follow-up calls",
        assistant_id=ASSISTANT_ID,
        status=CallSessionStatus.ACTIVE,
        start_time=datetime(2026, 1, 5, 9, 0, tzinfo=CAIRO),
    )


@pytest.fixture
def whatsapp_schedules() -> list[WhatsAppSchedule]:
    # Monday shifts: assistant 7 twice, assistant 8 once; the Tuesday one stays out of Monday runs.
    return [
        WhatsAppSchedule(schedule_id=1, user_id=ASSISTANT_ID, day_of_week=1, start_time="18:00", end_time="20:00"),
        WhatsAppSchedule(schedule_id=2, user_id=ASSISTANT_ID, day_of_week=1, start_time="09:00", end_time="11:00"),
        WhatsAppSchedule(schedule_id=3, user_id=OTHER_ASSISTANT_ID, day_of_week=1, start_time="22:00", end_time="01:00"),
        WhatsAppSchedule(schedule_id=4, user_id=OTHER_ASSISTANT_ID, day_of_week=2, start_time="09:00", end_time="12:00"),
    ]


@pytest.fixture
def repos(center, weekly_session, one_time_session, call_session, whatsapp_schedules) -> Repos:
    return Repos(
        centers=InMemoryCenters(center),
        sessions=InMemorySessions(weekly_session, one_time_session),
        call_sessions=InMemoryCallSessions(call_session),
        attendance=InMemoryAttendance(),
        whatsapp_schedules=InMemoryWhatsAppSchedules(*whatsapp_schedules),
        audit=InMemoryAuditLogs(),
        deleted_items=InMemoryDeletedItems(),
    )


@pytest.fixture
def container(repos, time_service):
    return wire_container(
        time_service=time_service,
        centers_repo=repos.centers,
        sessions_repo=repos.sessions,
        call_sessions_repo=repos.call_sessions,
        attendance_repo=repos.attendance,
        whatsapp_schedules_repo=repos.whatsapp_schedules,
        audit_repo=repos.audit,
        deleted_items_repo=repos.deleted_items,
    )


@pytest.fixture
def app(container, monkeypatch):
    from center_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
