from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    policy = container.policy
    service = container.notification_service

    @app.route("/notifications", endpoint="notifications")
    @login_required(policy)
    def notifications():
        return jsonify(
            {
                "notifications": [n.to_dict() for n in service.list_all()],
                "unreadCount": service.unread_count(),
            }
        )

    @app.route("/notifications/<notification_id>/read", methods=["POST"], endpoint="mark_notification_read")
    @login_required(policy)
    def mark_notification_read(notification_id: str):
        return jsonify({"updated": service.mark_as_read(notification_id)})

    @app.route("/notifications/read-all", methods=["POST"], endpoint="mark_all_notifications_read")
    @login_required(policy)
    def mark_all_notifications_read():
        service.mark_all_as_read()
        return jsonify({"ok": True})

    @app.route("/notifications", methods=["DELETE"], endpoint="clear_notifications")
    @login_required(policy)
    def clear_notifications():
        service.clear()
        return jsonify({"ok": True})
