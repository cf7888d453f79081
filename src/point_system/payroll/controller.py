from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/payroll", methods=["GET"], endpoint="payroll_report")
    def payroll_report():
        company_id = request.args.get("company_id", type=int)
        if not company_id:
            raise ValidationError("company_id is required")
        try:
            start = parse_iso_date(request.args.get("start") or "")
            end = parse_iso_date(request.args.get("end") or "")
        except ValueError:
            raise ValidationError("start and end must be YYYY-MM-DD") from None

        rows = container.payroll_report_service.generate_report(
            company_id=company_id,
            start=start,
            end=end,
            timeout=request.args.get("timeout", type=float),
        )
        return jsonify(
            {
                "data": [
                    {"user_id": r.employee_id, "employee_name": r.employee_name, "work_days": r.workday_units}
                    for r in rows
                ]
            }
        )
