from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.service import record_to_dict
from ..common.auth import admin_required, current_user_id
from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int
from ..container import Container
from .service import whatsapp_schedule_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/whatsapp-schedules", methods=["GET"], endpoint="admin_whatsapp_list")
    @admin_required
    def admin_whatsapp_list():
        schedules = container.whatsapp_service.list_schedules(
            user_id=optional_int(request.args.get("user_id"), "User"),
        )
        return jsonify({"success": True, "data": [whatsapp_schedule_to_dict(s) for s in schedules]})

    @app.route("/api/admin/whatsapp-schedules", methods=["POST"], endpoint="admin_whatsapp_create")
    @admin_required
    def admin_whatsapp_create():
        schedule = container.whatsapp_service.create_schedule(
            actor_id=current_user_id(),
            data=request.get_json(silent=True) or {},
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "WhatsApp schedule created successfully",
                    "data": whatsapp_schedule_to_dict(schedule),
                }
            ),
            201,
        )

    @app.route("/api/admin/whatsapp-schedules/<int:schedule_id>", methods=["PUT"], endpoint="admin_whatsapp_update")
    @admin_required
    def admin_whatsapp_update(schedule_id: int):
        schedule = container.whatsapp_service.update_schedule(
            actor_id=current_user_id(),
            schedule_id=schedule_id,
            data=request.get_json(silent=True) or {},
        )
        return jsonify(
            {
                "success": True,
                "message": "WhatsApp schedule updated successfully",
                "data": whatsapp_schedule_to_dict(schedule),
            }
        )

    @app.route("/api/admin/whatsapp-schedules/<int:schedule_id>", methods=["DELETE"], endpoint="admin_whatsapp_delete")
    @admin_required
    def admin_whatsapp_delete(schedule_id: int):
        body = request.get_json(silent=True) or {}
        container.whatsapp_service.delete_schedule(
            actor_id=current_user_id(),
            schedule_id=schedule_id,
            reason=body.get("reason"),
        )
        return jsonify({"success": True, "message": "WhatsApp schedule deleted successfully"})

    @app.route("/api/admin/whatsapp-schedules/generate", methods=["POST"], endpoint="admin_whatsapp_generate")
    @admin_required
    def admin_whatsapp_generate():
        body = request.get_json(silent=True) or {}
        time_service = container.time_service
        day = parse_iso_date(str(body["date"])) if body.get("date") else time_service.civil_date(time_service.now())
        records = container.whatsapp_service.generate_whatsapp_records_for(day, actor_id=current_user_id())
        return (
            jsonify(
                {
                    "success": True,
                    "message": f"{len(records)} WhatsApp records generated for {day.isoformat()}",
                    "data": [record_to_dict(r, time_service) for r in records],
                }
            ),
            201,
        )
