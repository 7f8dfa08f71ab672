from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .container import build_container, build_store
from .core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .storage.store import KeyValueStore

from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .notifications.controller import register as register_notifications
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, store: Optional[KeyValueStore] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="templates")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s store=%s",
        settings_module,
        "injected" if store is not None else getattr(settings, "STORE_BACKEND", "file"),
    )

    store = store if store is not None else build_store(settings)
    container = build_container(store=store, settings=settings)
    app.extensions["attendance_tracker"] = container

    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _authentication_error(e):
        return jsonify({"error": str(e)}), 401

    @app.errorhandler(AuthorizationError)
    def _authorization_error(e):
        return jsonify({"error": str(e)}), 403

    @app.before_request
    def _daily_reminder():
        # At most once per calendar day (marker key in the store).
        container.daily_reminder.run()

    register_users(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_notifications(app, container)
    register_reports(app, container)

    return app
