from fakes import login

ASSISTANT_ID = 7
ADMIN_ID = 1
NEAR = {"latitude": 30.0381, "longitude": 31.2110}


def _as_assistant(client, user_id=ASSISTANT_ID):
    login(client, user_id, "assistant")


def _as_admin(client):
    login(client, ADMIN_ID, "admin")


def test_requires_login(client):
    resp = client.get("/api/sessions/today")

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthorized"


def test_admin_routes_reject_assistants(client):
    _as_assistant(client)

    resp = client.get("/api/admin/centers")

    assert resp.status_code == 403
    assert resp.get_json() == {"success": False, "error": "forbidden", "message": "You do not have permission for this action"}


def test_today_sessions(client):
    _as_assistant(client)

    body = client.get("/api/sessions/today").get_json()

    assert body["success"] is True
    assert [s["id"] for s in body["data"]] == [1, 2]
    assert body["data"][0]["can_mark_attendance"] is True


def test_session_detail_not_found(client):
    _as_assistant(client, 8)

    resp = client.get("/api/sessions/1")

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


def test_mark_attendance_then_duplicate(client):
    _as_assistant(client)

    resp = client.post("/api/attendance", json={"session_id": 1, **NEAR})
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["delay_minutes"] == 5
    assert data["delay"] == "Late by 5 minutes"
    assert data["time_recorded"].startswith("2026-01-05T10:05:00")

    resp = client.post("/api/attendance", json={"session_id": 1, **NEAR})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "duplicate"


def test_mark_attendance_out_of_range(client):
    _as_assistant(client)

    resp = client.post("/api/attendance", json={"session_id": 1, "latitude": 30.05, "longitude": 31.2110})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "out_of_range"


def test_mark_attendance_window_closed(client):
    _as_assistant(client)

    resp = client.post("/api/attendance", json={"session_id": 2, **NEAR})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "window_closed"


def test_mark_attendance_bad_coordinates(client):
    _as_assistant(client)

    resp = client.post("/api/attendance", json={"session_id": 1, "latitude": 30.0381})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_call_sessions_and_history(client):
    _as_assistant(client)

    listed = client.get("/api/call-sessions").get_json()["data"]
    assert [c["id"] for c in listed] == [1]

    assert client.post("/api/attendance", json={"call_session_id": 1}).status_code == 201

    history = client.get("/api/attendance/history").get_json()["data"]
    assert [h["call_session_id"] for h in history] == [1]
    assert history[0]["delay"] == "On time"


def test_call_session_detail(client):
    _as_assistant(client)

    assert client.get("/api/call-sessions/1").get_json()["data"]["name"] == "Parents follow-up calls"

    _as_assistant(client, 8)
    assert client.get("/api/call-sessions/1").status_code == 404


def test_weekly_session_detail_on_off_day(client, clock):
    from datetime import datetime
    from zoneinfo import ZoneInfo

    clock.set(datetime(2026, 1, 7, 12, 0, tzinfo=ZoneInfo("Africa/Cairo")))
    _as_assistant(client)

    resp = client.get("/api/sessions/1")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["start_time"] == "10:00:00"


def test_storage_outage_maps_to_503(client, repos, monkeypatch):
    from center_attendance.core.exceptions import StorageUnavailableError

    def down(**kwargs):
        raise StorageUnavailableError("Database is temporarily unavailable")

    monkeypatch.setattr(repos.sessions, "list_candidates_for_day", down)
    _as_assistant(client)

    resp = client.get("/api/sessions/today")

    assert resp.status_code == 503
    assert resp.get_json()["error"] == "storage_unavailable"


def test_admin_center_crud(client):
    _as_admin(client)

    created = client.post("/api/admin/centers", json={"name": "Maadi", "latitude": 29.96, "longitude": 31.25})
    assert created.status_code == 201
    center_id = created.get_json()["data"]["id"]

    updated = client.put(f"/api/admin/centers/{center_id}", json={"radius_m": 80})
    assert updated.get_json()["data"]["radius_m"] == 80

    assert client.delete(f"/api/admin/centers/{center_id}", json={"reason": "moved"}).status_code == 200
    assert client.get(f"/api/admin/centers/{center_id}").status_code == 404


def test_admin_session_crud(client):
    _as_admin(client)

    created = client.post(
        "/api/admin/sessions",
        json={
            "center_id": 1,
            "subject": "Math",
            "start_time": "2026-01-06T16:00:00+02:00",
            "recurrence_type": "weekly",
            "day_of_week": 2,
        },
    )
    assert created.status_code == 201
    session_id = created.get_json()["data"]["id"]

    listed = client.get("/api/admin/sessions?center_id=1").get_json()["data"]
    assert session_id in [s["id"] for s in listed]

    updated = client.put(f"/api/admin/sessions/{session_id}", json={"subject": "Algebra"})
    assert updated.get_json()["data"]["subject"] == "Algebra"

    assert client.delete(f"/api/admin/sessions/{session_id}").status_code == 200


def test_admin_attendance_flow(client):
    _as_admin(client)

    manual = client.post(
        "/api/admin/attendance/manual",
        json={"assistant_id": ASSISTANT_ID, "subject": "Exam proctoring", "delay_minutes": -5},
    )
    assert manual.status_code == 201
    attendance_id = manual.get_json()["data"]["id"]
    assert manual.get_json()["data"]["delay"] == "Early by 5 minutes"

    edited = client.put(f"/api/admin/attendance/{attendance_id}", json={"delay_minutes": 0, "notes": "corrected"})
    assert edited.get_json()["data"]["notes"] == "corrected"

    assert client.delete(f"/api/admin/attendance/{attendance_id}", json={"reason": "test"}).status_code == 200

    visible = client.get("/api/admin/attendance").get_json()["data"]
    assert visible == []
    everything = client.get("/api/admin/attendance?include_deleted=1").get_json()["data"]
    assert everything[0]["is_deleted"] is True
    assert client.get(f"/api/admin/attendance/{attendance_id}").get_json()["data"]["deletion_reason"] == "test"


def test_admin_creates_call_session(client):
    _as_admin(client)

    resp = client.post("/api/admin/call-sessions", json={"name": "Reminders", "start_time": "2026-01-07T12:00:00Z"})

    assert resp.status_code == 201
    assert resp.get_json()["data"]["status"] == "pending"
    assert resp.get_json()["data"]["start_time"] == "2026-01-07T14:00:00+02:00"


def test_admin_whatsapp_schedules(client):
    _as_admin(client)

    created = client.post(
        "/api/admin/whatsapp-schedules",
        json={"user_id": 9, "day_of_week": 1, "start_time": "12:00", "end_time": "14:00"},
    )
    assert created.status_code == 201
    schedule_id = created.get_json()["data"]["id"]

    updated = client.put(f"/api/admin/whatsapp-schedules/{schedule_id}", json={"end_time": "15:00"})
    assert updated.get_json()["data"]["end_time"] == "15:00"

    listed = client.get("/api/admin/whatsapp-schedules?user_id=9").get_json()["data"]
    assert [s["id"] for s in listed] == [schedule_id]

    bad = client.post("/api/admin/whatsapp-schedules", json={"user_id": 9, "day_of_week": 1, "start_time": "noon"})
    assert bad.status_code == 400

    assert client.delete(f"/api/admin/whatsapp-schedules/{schedule_id}").status_code == 200
    assert client.delete(f"/api/admin/whatsapp-schedules/{schedule_id}").status_code == 404


def test_admin_generate_whatsapp_records(client):
    _as_admin(client)

    resp = client.post("/api/admin/whatsapp-schedules/generate", json={"date": "2026-01-05"})

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert sorted(r["assistant_id"] for r in data) == [7, 8]
    assert {r["activity_type"] for r in data} == {"whatsapp"}

    again = client.post("/api/admin/whatsapp-schedules/generate").get_json()
    assert again["data"] == []

    bad = client.post("/api/admin/whatsapp-schedules/generate", json={"date": "05/01/2026"})
    assert bad.status_code == 400
