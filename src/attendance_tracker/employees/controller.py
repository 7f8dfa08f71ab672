from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import json_body, login_required
from ..container import Container
from ..core.enums import EmployeeStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    policy = container.policy
    service = container.employee_service

    def _refused():
        return jsonify({"error": "You do not have permission to add or edit employees"}), 403

    @app.route("/employees", endpoint="list_employees")
    @login_required(policy)
    def list_employees():
        employees = service.list_visible(request.args.get("q", ""))
        return jsonify({"employees": [e.to_dict() for e in employees], "canEdit": policy.can_edit})

    @app.route("/employees", methods=["POST"], endpoint="add_employee")
    @login_required(policy)
    def add_employee():
        data = json_body()
        employee = service.save_employee(
            name=data.get("name", ""),
            ref_id=data.get("refId", ""),
            phone=data.get("phone", ""),
            company=data.get("company", ""),
        )
        if employee is None:
            return _refused()
        return jsonify({"employee": employee.to_dict()}), 201

    @app.route("/employees/<employee_id>", methods=["PUT"], endpoint="edit_employee")
    @login_required(policy)
    def edit_employee(employee_id: str):
        data = json_body()
        employee = service.save_employee(
            employee_id=employee_id,
            name=data.get("name", ""),
            ref_id=data.get("refId", ""),
            phone=data.get("phone", ""),
            company=data.get("company", ""),
        )
        if employee is None:
            return _refused()
        return jsonify({"employee": employee.to_dict()})

    @app.route("/employees/<employee_id>/status", methods=["POST"], endpoint="employee_status")
    @login_required(policy)
    def employee_status(employee_id: str):
        data = json_body()
        try:
            status = EmployeeStatus(data.get("status", ""))
        except ValueError:
            raise ValidationError("Invalid employee status")
        employee = service.set_status(employee_id, status)
        if employee is None:
            return _refused()
        return jsonify({"employee": employee.to_dict()})

    @app.route("/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @login_required(policy)
    def delete_employee(employee_id: str):
        if not policy.can_edit:
            return _refused()
        return jsonify({"deleted": service.delete_employee(employee_id)})
