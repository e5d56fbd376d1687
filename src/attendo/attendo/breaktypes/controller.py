from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.responses import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.break_type_service

    @app.route("/api/break-types", methods=["GET"], endpoint="break_types_list")
    @json_endpoint
    def break_types_list():
        include_inactive = request.args.get("all", "0").strip() in {"1", "true", "yes"}
        items = service.list_all() if include_inactive else service.list_active()
        return jsonify({"success": True, "break_types": [asdict(bt) for bt in items]}), 200

    @app.route("/api/break-types", methods=["POST"], endpoint="break_types_create")
    @json_endpoint
    def break_types_create():
        data = request.get_json(silent=True) or {}
        break_id = service.create(
            description=data.get("description") or "",
            computes_as_work_time=bool(data.get("computes_as_work_time", False)),
        )
        return jsonify({"success": True, "break_id": break_id}), 201

    @app.route("/api/break-types/<int:break_id>/label", methods=["GET"], endpoint="break_types_label")
    @json_endpoint
    def break_types_label(break_id: int):
        # Unknown ids still get a label; old records may reference removed types.
        return jsonify({"success": True, "break_id": break_id, "label": service.describe(break_id)}), 200

    @app.route("/api/break-types/<int:break_id>", methods=["PUT"], endpoint="break_types_update")
    @json_endpoint
    def break_types_update(break_id: int):
        data = request.get_json(silent=True) or {}
        service.update(
            break_id=break_id,
            description=data.get("description") or "",
            computes_as_work_time=bool(data.get("computes_as_work_time", False)),
        )
        return jsonify({"success": True}), 200

    @app.route("/api/break-types/<int:break_id>/active", methods=["POST"], endpoint="break_types_set_active")
    @json_endpoint
    def break_types_set_active(break_id: int):
        data = request.get_json(silent=True) or {}
        service.set_active(break_id=break_id, is_active=bool(data.get("is_active", True)))
        return jsonify({"success": True}), 200
