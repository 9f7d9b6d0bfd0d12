from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import admin_required, current_user_id
from ..container import Container
from .service import center_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/centers", methods=["GET"], endpoint="admin_centers_list")
    @admin_required
    def admin_centers_list():
        centers = container.center_service.list_centers()
        return jsonify({"success": True, "data": [center_to_dict(c) for c in centers]})

    @app.route("/api/admin/centers", methods=["POST"], endpoint="admin_centers_create")
    @admin_required
    def admin_centers_create():
        center = container.center_service.create_center(actor_id=current_user_id(), data=request.get_json(silent=True) or {})
        return jsonify({"success": True, "message": "Center created successfully", "data": center_to_dict(center)}), 201

    @app.route("/api/admin/centers/<int:center_id>", methods=["GET"], endpoint="admin_centers_get")
    @admin_required
    def admin_centers_get(center_id: int):
        center = container.center_service.get_center(center_id)
        return jsonify({"success": True, "data": center_to_dict(center)})

    @app.route("/api/admin/centers/<int:center_id>", methods=["PUT"], endpoint="admin_centers_update")
    @admin_required
    def admin_centers_update(center_id: int):
        center = container.center_service.update_center(
            actor_id=current_user_id(),
            center_id=center_id,
            data=request.get_json(silent=True) or {},
        )
        return jsonify({"success": True, "message": "Center updated successfully", "data": center_to_dict(center)})

    @app.route("/api/admin/centers/<int:center_id>", methods=["DELETE"], endpoint="admin_centers_delete")
    @admin_required
    def admin_centers_delete(center_id: int):
        body = request.get_json(silent=True) or {}
        container.center_service.delete_center(actor_id=current_user_id(), center_id=center_id, reason=body.get("reason"))
        return jsonify({"success": True, "message": "Center deleted successfully"})
