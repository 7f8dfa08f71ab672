from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, json_body, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def _role(value) -> Role:
    try:
        return Role(value or Role.USER.value)
    except (ValueError, TypeError):
        raise ValidationError("Invalid account type")


def _permissions(data: dict):
    perms = data.get("permissions")
    if perms is None:
        perms = {}
    if not isinstance(perms, dict):
        raise ValidationError("Permissions must be an object")
    allowed = perms.get("allowedCompanies")
    return perms.get("canEdit", False), [] if allowed is None else allowed


def register(app: Flask, container: Container) -> None:
    policy = container.policy

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.login(data.get("username", ""), data.get("password", ""))
        return jsonify({"user": user.to_dict(include_password=False)})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.auth_service.logout()
        return jsonify({"ok": True})

    @app.route("/me", endpoint="me")
    @login_required(policy)
    def me():
        return jsonify(
            {
                "user": policy.user.to_dict(include_password=False),
                "isAdmin": policy.is_admin,
                "canEdit": policy.can_edit,
            }
        )

    @app.route("/users", endpoint="list_users")
    @admin_required(policy)
    def list_users():
        users = container.user_service.list_users()
        return jsonify({"users": [u.to_dict(include_password=False) for u in users]})

    @app.route("/users", methods=["POST"], endpoint="add_user")
    @admin_required(policy)
    def add_user():
        data = json_body()
        can_edit, companies = _permissions(data)
        user = container.user_service.save_user(
            username=data.get("username", ""),
            display_name=data.get("displayName", ""),
            role=_role(data.get("role")),
            can_edit=can_edit,
            allowed_companies=companies,
            password=data.get("password") or None,
        )
        return jsonify({"user": user.to_dict(include_password=False)}), 201

    @app.route("/users/<user_id>", methods=["PUT"], endpoint="edit_user")
    @admin_required(policy)
    def edit_user(user_id: str):
        data = json_body()
        can_edit, companies = _permissions(data)
        user = container.user_service.save_user(
            user_id=user_id,
            username=data.get("username", ""),
            display_name=data.get("displayName", ""),
            role=_role(data.get("role")),
            can_edit=can_edit,
            allowed_companies=companies,
            password=data.get("password") or None,
        )
        return jsonify({"user": user.to_dict(include_password=False)})

    @app.route("/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required(policy)
    def delete_user(user_id: str):
        container.user_service.delete_user(user_id)
        return jsonify({"ok": True})

    @app.route("/companies", endpoint="companies")
    @admin_required(policy)
    def companies():
        return jsonify({"companies": container.user_service.known_companies()})
