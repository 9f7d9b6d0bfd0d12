from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from center_attendance.centers.model import Coordinate
from center_attendance.core.enums import RecurrenceType
from center_attendance.core.exceptions import NotFoundError, ValidationError

CAIRO = ZoneInfo("Africa/Cairo")
ASSISTANT_ID = 7
ADMIN_ID = 1
NEAR = Coordinate(30.0381, 31.2110)


def test_today_sessions_lists_occurrences_in_start_order(container):
    sessions = container.session_service.today_sessions(ASSISTANT_ID)

    assert [s["id"] for s in sessions] == [1, 2]
    physics = sessions[0]
    assert physics["date"] == "2026-01-05"
    assert physics["start_time"] == "10:00:00"
    assert physics["end_time"] == "12:00:00"
    assert physics["center_name"] == "Dokki Center"
    assert physics["radius_m"] == 30
    assert physics["recurrence_type"] == "weekly"
    assert physics["attended"] is False
    assert physics["attendance_id"] is None
    assert physics["can_mark_attendance"] is True
    assert sessions[1]["can_mark_attendance"] is False


def test_today_sessions_reflect_existing_attendance(container):
    record = container.attendance_service.record(ASSISTANT_ID, session_id=1, coordinate=NEAR)

    physics = container.session_service.today_sessions(ASSISTANT_ID)[0]

    assert physics["attended"] is True
    assert physics["attendance_id"] == record.attendance_id
    assert physics["can_mark_attendance"] is False


def test_today_sessions_only_shows_visible_sessions(container):
    sessions = container.session_service.today_sessions(8)

    assert [s["id"] for s in sessions] == [2]


def test_today_sessions_skip_missing_center(container, repos):
    repos.centers.delete(center_id=1)

    assert container.session_service.today_sessions(ASSISTANT_ID) == []


def test_get_session_detail(container):
    detail = container.session_service.get_session(2, ASSISTANT_ID)

    assert detail["subject"] == "Chemistry revision"
    assert detail["start_time"] == "14:00:00"

    with pytest.raises(NotFoundError):
        container.session_service.get_session(1, 8)


def test_get_weekly_session_detail_on_another_day(container, clock):
    clock.set(datetime(2026, 1, 6, 10, 0, tzinfo=CAIRO))

    detail = container.session_service.get_session(1, ASSISTANT_ID)

    assert detail["subject"] == "Physics"
    assert detail["recurrence_type"] == "weekly"
    assert detail["start_time"] == "10:00:00"
    assert detail["end_time"] == "12:00:00"
    assert detail["center_name"] == "Dokki Center"


def test_get_past_one_time_session_detail(container, clock):
    clock.set(datetime(2026, 1, 9, 10, 0, tzinfo=CAIRO))

    detail = container.session_service.get_session(2, ASSISTANT_ID)

    assert detail["date"] == "2026-01-05"
    assert detail["start_time"] == "14:00:00"
    assert detail["end_time"] == "16:00:00"


def test_get_session_detail_without_center(container, repos):
    repos.centers.delete(center_id=1)

    detail = container.session_service.get_session(2, ASSISTANT_ID)

    assert detail["center_id"] == 1
    assert detail["center_name"] is None


def test_create_weekly_session_requires_day(container):
    svc = container.session_service
    data = {
        "center_id": 1,
        "assistant_id": ASSISTANT_ID,
        "subject": "Math",
        "start_time": "2026-01-06T16:00:00+02:00",
        "recurrence_type": "weekly",
    }

    with pytest.raises(ValidationError):
        svc.create_session(actor_id=ADMIN_ID, data=data)

    created = svc.create_session(actor_id=ADMIN_ID, data={**data, "day_of_week": 2})

    assert created.recurrence_type == RecurrenceType.WEEKLY
    assert created.day_of_week == 2


@pytest.mark.parametrize(
    "patch",
    [
        {"subject": "  "},
        {"recurrence_type": "monthly"},
        {"start_time": "soon"},
        {"recurrence_type": "weekly", "day_of_week": 8},
        {"recurrence_type": "weekly", "day_of_week": 2.7},
        {"recurrence_type": "weekly", "day_of_week": "Tuesday"},
    ],
)
def test_create_session_validation(container, patch):
    data = {"center_id": 1, "subject": "Math", "start_time": "2026-01-06T16:00:00+02:00", **patch}

    with pytest.raises(ValidationError):
        container.session_service.create_session(actor_id=ADMIN_ID, data=data)


def test_create_session_unknown_center(container):
    data = {"center_id": 9, "subject": "Math", "start_time": "2026-01-06T16:00:00+02:00"}

    with pytest.raises(NotFoundError):
        container.session_service.create_session(actor_id=ADMIN_ID, data=data)


def test_update_session_merges_fields(container, repos):
    updated = container.session_service.update_session(actor_id=ADMIN_ID, session_id=1, data={"subject": "Advanced Physics"})

    assert updated.subject == "Advanced Physics"
    assert updated.day_of_week == 1
    assert repos.sessions.get_by_id(1).subject == "Advanced Physics"
    assert "UPDATE_SESSION" in repos.audit.actions()


def test_delete_session_snapshots_first(container, repos):
    container.session_service.delete_session(actor_id=ADMIN_ID, session_id=2, reason="cancelled")

    snapshot = repos.deleted_items.items[0]
    assert snapshot.item_type.value == "session"
    assert snapshot.item_data["subject"] == "Chemistry revision"
    assert snapshot.deletion_reason == "cancelled"

    with pytest.raises(NotFoundError):
        container.session_service.delete_session(actor_id=ADMIN_ID, session_id=2)
