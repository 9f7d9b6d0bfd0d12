import pytest

from center_attendance.core.enums import CallSessionStatus
from center_attendance.core.exceptions import NotFoundError, ValidationError

ADMIN_ID = 1


def test_create_call_session_starts_pending(container, repos):
    cs = container.call_session_service.create_call_session(
        actor_id=ADMIN_ID,
        data={"name": "Absence calls", "start_time": "2026-01-06T17:00:00+02:00"},
    )

    assert cs.status == CallSessionStatus.PENDING
    assert cs.assistant_id is None
    assert repos.call_sessions.get_by_id(cs.call_session_id) is not None


def test_unassigned_call_session_is_visible_to_everyone(container):
    container.call_session_service.create_call_session(
        actor_id=ADMIN_ID,
        data={"name": "Absence calls", "start_time": "2026-01-06T17:00:00+02:00"},
    )

    assert len(container.call_session_service.list_for_assistant(7)) == 2
    assert len(container.call_session_service.list_for_assistant(8)) == 1


def test_end_must_follow_start(container):
    with pytest.raises(ValidationError):
        container.call_session_service.create_call_session(
            actor_id=ADMIN_ID,
            data={
                "name": "Absence calls",
                "start_time": "2026-01-06T17:00:00+02:00",
                "end_time": "2026-01-06T16:00:00+02:00",
            },
        )


def test_get_visible(container):
    assert container.call_session_service.get_visible(1, 7).name == "Parents follow-up calls"

    with pytest.raises(NotFoundError):
        container.call_session_service.get_visible(1, 8)


def test_get_call_session_ignores_assignment(container):
    assert container.call_session_service.get_call_session(1).assistant_id == 7

    with pytest.raises(NotFoundError):
        container.call_session_service.get_call_session(42)
