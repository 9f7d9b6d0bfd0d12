from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import admin_required, assistant_required, current_user_id
from ..container import Container
from .service import call_session_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/call-sessions", methods=["GET"], endpoint="call_sessions_list")
    @assistant_required
    def call_sessions_list():
        items = container.call_session_service.list_for_assistant(current_user_id())
        return jsonify({"success": True, "data": [call_session_to_dict(cs, container.time_service) for cs in items]})

    @app.route("/api/call-sessions/<int:call_session_id>", methods=["GET"], endpoint="call_sessions_get")
    @assistant_required
    def call_sessions_get(call_session_id: int):
        cs = container.call_session_service.get_visible(call_session_id, current_user_id())
        return jsonify({"success": True, "data": call_session_to_dict(cs, container.time_service)})

    @app.route("/api/admin/call-sessions", methods=["POST"], endpoint="admin_call_sessions_create")
    @admin_required
    def admin_call_sessions_create():
        cs = container.call_session_service.create_call_session(
            actor_id=current_user_id(),
            data=request.get_json(silent=True) or {},
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Call session created successfully",
                    "data": call_session_to_dict(cs, container.time_service),
                }
            ),
            201,
        )
