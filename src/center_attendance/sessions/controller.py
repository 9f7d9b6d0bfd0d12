from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import admin_required, assistant_required, current_user_id
from ..common.validators import optional_int
from ..container import Container
from .service import session_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions/today", methods=["GET"], endpoint="sessions_today")
    @assistant_required
    def sessions_today():
        sessions = container.session_service.today_sessions(current_user_id())
        return jsonify({"success": True, "data": sessions})

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="sessions_get")
    @assistant_required
    def sessions_get(session_id: int):
        data = container.session_service.get_session(session_id, current_user_id())
        return jsonify({"success": True, "data": data})

    @app.route("/api/admin/sessions", methods=["GET"], endpoint="admin_sessions_list")
    @admin_required
    def admin_sessions_list():
        sessions = container.session_service.list_sessions(
            center_id=optional_int(request.args.get("center_id"), "Center"),
            assistant_id=optional_int(request.args.get("assistant_id"), "Assistant"),
        )
        time_service = container.time_service
        return jsonify({"success": True, "data": [session_to_dict(s, time_service) for s in sessions]})

    @app.route("/api/admin/sessions", methods=["POST"], endpoint="admin_sessions_create")
    @admin_required
    def admin_sessions_create():
        definition = container.session_service.create_session(
            actor_id=current_user_id(),
            data=request.get_json(silent=True) or {},
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Session created successfully",
                    "data": session_to_dict(definition, container.time_service),
                }
            ),
            201,
        )

    @app.route("/api/admin/sessions/<int:session_id>", methods=["PUT"], endpoint="admin_sessions_update")
    @admin_required
    def admin_sessions_update(session_id: int):
        definition = container.session_service.update_session(
            actor_id=current_user_id(),
            session_id=session_id,
            data=request.get_json(silent=True) or {},
        )
        return jsonify(
            {
                "success": True,
                "message": "Session updated successfully",
                "data": session_to_dict(definition, container.time_service),
            }
        )

    @app.route("/api/admin/sessions/<int:session_id>", methods=["DELETE"], endpoint="admin_sessions_delete")
    @admin_required
    def admin_sessions_delete(session_id: int):
        body = request.get_json(silent=True) or {}
        container.session_service.delete_session(actor_id=current_user_id(), session_id=session_id, reason=body.get("reason"))
        return jsonify({"success": True, "message": "Session deleted successfully"})
