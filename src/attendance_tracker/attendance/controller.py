from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.web import json_body, login_required
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    policy = container.policy
    service = container.attendance_service

    @app.route("/attendance", endpoint="attendance_sheet")
    @login_required(policy)
    def attendance_sheet():
        today = today_local()
        try:
            year = int(request.args.get("year", today.year))
            month = int(request.args.get("month", today.month))
            sheet = service.month_sheet(
                year,
                month,
                search=request.args.get("q", ""),
                company=request.args.get("company", ""),
            )
        except ValueError:
            raise ValidationError("Invalid month")

        return jsonify(
            {
                "year": sheet.year,
                "month": sheet.month,
                "days": sheet.days,
                "companies": sheet.companies,
                "readOnly": sheet.read_only,
                "rows": [
                    {"employee": r.employee.to_dict(), "editable": r.editable, "statuses": r.statuses}
                    for r in sheet.rows
                ],
            }
        )

    @app.route("/attendance/<employee_id>/<day>", methods=["POST"], endpoint="toggle_attendance")
    @login_required(policy)
    def toggle_attendance(employee_id: str, day: str):
        data = json_body()
        try:
            work_date = parse_iso_date(day)
            requested = AttendanceStatus(data.get("status", ""))
        except ValueError:
            raise ValidationError("Invalid date or attendance status")

        transition = service.toggle_status(employee_id, work_date, requested)
        if transition is None:
            return jsonify({"applied": False, "status": _value(service.status_for(employee_id, work_date))})
        return jsonify(
            {
                "applied": True,
                "previous": _value(transition.previous),
                "status": _value(transition.new),
            }
        )


def _value(status):
    return status.value if status else None
