from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import PunchRecord
from .windows import DailyWindow


def _punch_json(p: PunchRecord) -> dict:
    return {
        "id": p.punch_id,
        "employee_no": p.employee_no,
        "timestamp": p.timestamp.isoformat(),
        "system_punch": p.direction.value if p.direction else None,
        "serial_number": p.serial_number,
        "uid": p.uid,
        "status": p.status,
        "punch": p.punch_hint,
    }


def _window_json(w: DailyWindow) -> dict:
    return {
        "employee_no": w.employee_no,
        "date": w.work_date.isoformat(),
        "checkin": w.check_in.isoformat() if w.check_in else None,
        "checkout": w.check_out.isoformat() if w.check_out else None,
        "hours_out": w.hours_out,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance-logs", methods=["POST"], endpoint="create_attendance_log")
    def create_attendance_log():
        body = request.get_json(silent=True) or {}
        record = container.punch_service.decode_and_classify(
            str(body.get("serial_number") or ""),
            str(body.get("hex_data") or ""),
        )
        return jsonify({"message": "Attendance log saved successfully", "data": _punch_json(record)}), 201

    @app.route("/api/employees/<int:employee_no>/daily-window", methods=["GET"], endpoint="daily_window")
    def daily_window(employee_no: int):
        try:
            day = parse_iso_date(request.args.get("date") or "")
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD") from None

        window = container.punch_service.reconstruct_daily_window(employee_no, day)
        if window is None:
            raise NotFoundError(f"No punches for {employee_no} on {day.isoformat()}")
        return jsonify({"data": _window_json(window)})
