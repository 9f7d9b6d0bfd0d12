from center_attendance.audit.service import AuditTrail, snapshot_of
from center_attendance.core.enums import RecurrenceType
from fakes import BrokenAuditLogs, InMemoryAuditLogs


def test_audit_failure_is_swallowed():
    AuditTrail(BrokenAuditLogs()).record(1, "MARK_ATTENDANCE", {"attendance_id": 3})


def test_audit_requires_actor_and_action():
    logs = InMemoryAuditLogs()
    trail = AuditTrail(logs)

    trail.record(None, "MARK_ATTENDANCE")
    trail.record(1, "")
    trail.record(1, "MARK_ATTENDANCE", {"attendance_id": 3})

    assert logs.actions() == ["MARK_ATTENDANCE"]
    assert logs.entries[0].details == {"attendance_id": 3}


def test_snapshot_is_json_friendly(weekly_session):
    data = snapshot_of(weekly_session)

    assert data["recurrence_type"] == RecurrenceType.WEEKLY.value
    assert data["start_time"].startswith("2025-12-01T10:00:00")
