from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import json_endpoint
from ..core.enums import ActionType, ManualAction, PunchAction
from ..core.exceptions import ValidationError
from ..container import Container
from .filters import TimeRecordFilter
from .model import DraftRecord


def _parse_date_arg(value: Optional[str], field_name: str) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def _parse_enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(str(value or "").strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def _parse_optional_int(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def build_filter(worker_id: str, args, *, default_limit: int) -> TimeRecordFilter:
    order = (args.get("order") or "asc").strip().lower()
    if order not in {"asc", "desc"}:
        raise ValidationError("order must be asc or desc")

    return TimeRecordFilter(
        worker_id=worker_id,
        start_date=_parse_date_arg(args.get("start"), "start"),
        end_date=_parse_date_arg(args.get("end"), "end"),
        action_type=_parse_enum(ActionType, args.get("action") or ActionType.ALL.value, "action"),
        limit=_parse_optional_int(args.get("limit"), "limit") or default_limit,
        ascending=order == "asc",
    )


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/workers/<worker_id>/state", methods=["GET"], endpoint="worker_state")
    @json_endpoint
    def worker_state(worker_id: str):
        state = service.current_state(worker_id)
        return jsonify({"success": True, "worker_id": worker_id, **state.to_dict()}), 200

    @app.route("/api/workers/<worker_id>/dashboard", methods=["GET"], endpoint="worker_dashboard")
    @json_endpoint
    def worker_dashboard(worker_id: str):
        return jsonify({"success": True, **service.dashboard(worker_id)}), 200

    @app.route("/api/workers/<worker_id>/punch", methods=["POST"], endpoint="worker_punch")
    @json_endpoint
    def worker_punch(worker_id: str):
        data = request.get_json(silent=True) or {}
        record = service.punch(
            worker_id,
            _parse_enum(PunchAction, data.get("action"), "action"),
            location=data.get("location"),
            break_type_id=_parse_optional_int(data.get("break_type_id"), "break_type_id"),
        )
        return jsonify({"success": True, "record": service.to_row(record)}), 201

    @app.route("/api/workers/<worker_id>/records", methods=["GET"], endpoint="worker_records")
    @json_endpoint
    def worker_records(worker_id: str):
        flt = build_filter(worker_id, request.args, default_limit=container.default_record_limit)
        return jsonify({"success": True, "records": service.list_records_ui(flt)}), 200

    @app.route("/api/workers/<worker_id>/manual-context", methods=["GET"], endpoint="manual_context")
    @json_endpoint
    def manual_context(worker_id: str):
        return jsonify({"success": True, **service.manual_entry_context(worker_id)}), 200

    @app.route("/api/manual-records", methods=["POST"], endpoint="manual_record_create")
    @json_endpoint
    def manual_record_create():
        data = request.get_json(silent=True) or {}
        draft = DraftRecord(
            worker_id=str(data.get("worker_id") or ""),
            action=_parse_enum(ManualAction, data.get("action"), "action"),
            work_date=data.get("date"),
            time_of_day=data.get("time"),
            break_type_id=_parse_optional_int(data.get("break_type_id"), "break_type_id"),
            location=data.get("location"),
        )
        record = service.record_manual(draft)
        return jsonify({"success": True, "message": "Manual record created", "record": service.to_row(record)}), 201
