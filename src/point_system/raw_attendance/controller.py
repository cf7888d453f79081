from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.http import clock
from ..core.exceptions import ValidationError
from ..container import Container
from .model import RawAttendanceRecord


def record_json(r: RawAttendanceRecord) -> dict:
    return {
        "id": r.raw_attendance_id,
        "work_day_id": r.work_day_id,
        "company_id": r.company_id,
        "employee_id": r.employee_id,
        "employee_name": r.employee_name,
        "position": r.position,
        "start_at": clock(r.start_at),
        "end_at": clock(r.end_at),
        "total_hours": r.total_hours,
        "total_hour_out": r.total_hours_out,
        "status": r.status.value,
        "notes": r.notes,
        "calculate_over_time": r.calculate_overtime,
        "calculate_lunch_hour": r.calculate_lunch_hour,
    }


def _optional_flag(body: dict, key: str) -> Optional[bool]:
    value = body.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be true or false")
    return value


def register(app: Flask, container: Container) -> None:
    @app.route("/api/raw-attendances", methods=["GET"], endpoint="list_raw_attendances")
    def list_raw_attendances():
        work_day_id = request.args.get("work_day_id", type=int)
        if not work_day_id:
            raise ValidationError("work_day_id is required")
        records = container.raw_attendance_service.list_for_work_day(
            work_day_id=work_day_id,
            company_id=request.args.get("company_id", type=int),
        )
        return jsonify({"data": [record_json(r) for r in records]})

    @app.route("/api/raw-attendances/<int:raw_attendance_id>", methods=["PUT"], endpoint="update_raw_attendance")
    def update_raw_attendance(raw_attendance_id: int):
        body = request.get_json(silent=True) or {}
        record = container.raw_attendance_service.update(
            raw_attendance_id,
            start_at=body.get("start_at"),
            end_at=body.get("end_at"),
            notes=body.get("notes") or "",
            status=body.get("status") or "present",
        )
        return jsonify({"data": record_json(record)})

    @app.route("/api/raw-attendances/<int:raw_attendance_id>/flags", methods=["PUT"], endpoint="update_raw_attendance_flags")
    def update_raw_attendance_flags(raw_attendance_id: int):
        body = request.get_json(silent=True) or {}
        record = container.raw_attendance_service.set_policy_flags(
            raw_attendance_id,
            calculate_overtime=_optional_flag(body, "calculate_over_time"),
            calculate_lunch_hour=_optional_flag(body, "calculate_lunch_hour"),
        )
        return jsonify({"data": record_json(record)})
