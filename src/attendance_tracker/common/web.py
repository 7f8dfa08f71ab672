from __future__ import annotations

from functools import wraps

from flask import jsonify, request

from ..auth.permissions import AccessPolicy
from ..core.exceptions import AuthorizationError, ValidationError


def login_required(policy: AccessPolicy):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not policy.is_authenticated:
                return jsonify({"error": "Please sign in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(policy: AccessPolicy):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not policy.is_authenticated:
                return jsonify({"error": "Please sign in to continue"}), 401
            if not policy.is_admin:
                raise AuthorizationError("Administrator access required")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object")
    return data
