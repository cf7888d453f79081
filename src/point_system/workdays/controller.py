from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container
from ..raw_attendance.controller import record_json


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workdays", methods=["POST"], endpoint="create_workday")
    def create_workday():
        body = request.get_json(silent=True) or {}
        try:
            work_date = parse_iso_date(body["date"]) if body.get("date") else None
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD") from None

        result = container.work_day_service.create_work_day(work_date=work_date, day_type=body.get("day_type"))
        return (
            jsonify(
                {
                    "data": {
                        "id": result.work_day.work_day_id,
                        "date": result.work_day.work_date.isoformat(),
                        "day_type": result.work_day.day_type.value,
                    },
                    "raw_attendances": [record_json(r) for r in result.records],
                }
            ),
            201,
        )

    @app.route("/api/workdays/<int:work_day_id>/generate", methods=["POST"], endpoint="generate_workday")
    def generate_workday(work_day_id: int):
        records = container.work_day_service.generate_workday_attendance(work_day_id)
        return jsonify({"data": [record_json(r) for r in records]})
