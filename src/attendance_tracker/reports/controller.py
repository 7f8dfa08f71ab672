from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, render_template, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    policy = container.policy
    service = container.report_service

    def _build():
        try:
            start = parse_iso_date(request.args["start"]) if request.args.get("start") else None
            end = parse_iso_date(request.args["end"]) if request.args.get("end") else None
        except ValueError:
            raise ValidationError("Invalid date range")
        return service.build(
            company=request.args.get("company", ""),
            employee_id=request.args.get("employee", ""),
            name_search=request.args.get("q", ""),
            start=start,
            end=end,
        )

    @app.route("/reports", endpoint="report")
    @login_required(policy)
    def report():
        return render_template("report.html", report=_build(), companies=service.companies())

    @app.route("/reports.json", endpoint="report_json")
    @login_required(policy)
    def report_json():
        return jsonify(asdict(_build()))
