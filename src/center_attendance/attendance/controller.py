from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import admin_required, assistant_required, current_user_id
from ..common.validators import optional_int
from ..container import Container
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_HISTORY_LIMIT
from .service import coordinate_from_payload, record_to_dict


def _truthy(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @assistant_required
    def attendance_mark():
        body = request.get_json(silent=True) or {}
        record = container.attendance_service.record(
            current_user_id(),
            session_id=optional_int(body.get("session_id"), "Session"),
            call_session_id=optional_int(body.get("call_session_id"), "Call session"),
            coordinate=coordinate_from_payload(body),
            notes=body.get("notes"),
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Attendance recorded successfully",
                    "data": record_to_dict(record, container.time_service),
                }
            ),
            201,
        )

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @assistant_required
    def attendance_history():
        limit = optional_int(request.args.get("limit"), "Limit") or DEFAULT_HISTORY_LIMIT
        records = container.attendance_service.history_for_assistant(current_user_id(), limit=limit)
        return jsonify({"success": True, "data": [record_to_dict(r, container.time_service) for r in records]})

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance_list")
    @admin_required
    def admin_attendance_list():
        records = container.attendance_service.list_records(
            subject=request.args.get("subject"),
            assistant_id=optional_int(request.args.get("assistant_id"), "Assistant"),
            include_deleted=_truthy(request.args.get("include_deleted")),
            limit=optional_int(request.args.get("limit"), "Limit") or DEFAULT_ADMIN_LIST_LIMIT,
        )
        return jsonify({"success": True, "data": [record_to_dict(r, container.time_service) for r in records]})

    @app.route("/api/admin/attendance/manual", methods=["POST"], endpoint="admin_attendance_manual")
    @admin_required
    def admin_attendance_manual():
        record = container.attendance_service.create_manual(
            actor_id=current_user_id(),
            data=request.get_json(silent=True) or {},
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Attendance record created successfully",
                    "data": record_to_dict(record, container.time_service),
                }
            ),
            201,
        )

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["GET"], endpoint="admin_attendance_get")
    @admin_required
    def admin_attendance_get(attendance_id: int):
        record = container.attendance_service.get_record(attendance_id)
        return jsonify({"success": True, "data": record_to_dict(record, container.time_service)})

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["PUT"], endpoint="admin_attendance_update")
    @admin_required
    def admin_attendance_update(attendance_id: int):
        record = container.attendance_service.admin_update(
            actor_id=current_user_id(),
            attendance_id=attendance_id,
            data=request.get_json(silent=True) or {},
        )
        return jsonify(
            {
                "success": True,
                "message": "Attendance record updated successfully",
                "data": record_to_dict(record, container.time_service),
            }
        )

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="admin_attendance_delete")
    @admin_required
    def admin_attendance_delete(attendance_id: int):
        body = request.get_json(silent=True) or {}
        container.attendance_service.soft_delete(
            actor_id=current_user_id(),
            attendance_id=attendance_id,
            reason=body.get("reason"),
        )
        return jsonify({"success": True, "message": "Attendance record deleted successfully"})
