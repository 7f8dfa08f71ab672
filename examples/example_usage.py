"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

from datetime import date

from attendance_tracker.container import build_container
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.storage.store import MemoryKeyValueStore


def main():
    container = build_container(store=MemoryKeyValueStore())
    container.auth_service.login("admin", "admin123")

    employee = container.employee_service.save_employee(name="Sara Ali", ref_id="1001", company="Acme")
    container.attendance_service.toggle_status(employee.id, date.today(), AttendanceStatus.ABSENT)

    for n in container.notification_service.list_all():
        print(n.title, "-", n.message)


if __name__ == "__main__":
    main()
