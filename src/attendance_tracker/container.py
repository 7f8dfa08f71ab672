from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.service import AttendanceService
from .attendance.store_attendance_repository import StoreAttendanceRepository
from .auth.permissions import AccessPolicy
from .auth.session import ActiveSession
from .core import constants
from .employees.service import EmployeeService
from .employees.store_employee_repository import StoreEmployeeRepository
from .notifications.reminder import DailyReminder, ReminderPolicy
from .notifications.service import NotificationService
from .notifications.store_notification_repository import StoreNotificationRepository
from .reports.service import AttendanceReportService
from .storage.bootstrap import ensure_kv_table
from .storage.connection import DatabaseConnection, db_config_from_dict
from .storage.file_store import FileKeyValueStore
from .storage.mysql_store import MySQLKeyValueStore
from .storage.store import KeyValueStore, MemoryKeyValueStore
from .users.service import AuthService, UserService
from .users.store_user_repository import StoreUserRepository


@dataclass(frozen=True)
class Container:
    store: KeyValueStore

    users_repo: StoreUserRepository
    employees_repo: StoreEmployeeRepository
    attendance_repo: StoreAttendanceRepository
    notifications_repo: StoreNotificationRepository

    session: ActiveSession
    policy: AccessPolicy

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    notification_service: NotificationService
    report_service: AttendanceReportService
    daily_reminder: DailyReminder


def build_store(settings: Any) -> KeyValueStore:
    backend = str(getattr(settings, "STORE_BACKEND", "file")).lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "file":
        return FileKeyValueStore(getattr(settings, "STORE_PATH", "instance/store"))
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(db_config_from_dict(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_kv_table(conn)
        return MySQLKeyValueStore(conn)
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(*, store: KeyValueStore, settings: Optional[Any] = None) -> Container:
    users_repo = StoreUserRepository(
        store,
        admin_username=getattr(settings, "DEFAULT_ADMIN_USERNAME", constants.DEFAULT_ADMIN_USERNAME),
        admin_password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", constants.DEFAULT_ADMIN_PASSWORD),
        admin_display_name=getattr(settings, "DEFAULT_ADMIN_DISPLAY_NAME", constants.DEFAULT_ADMIN_DISPLAY_NAME),
    )
    attendance_repo = StoreAttendanceRepository(store)
    employees_repo = StoreEmployeeRepository(store, attendance_repo)
    notifications_repo = StoreNotificationRepository(store)

    session = ActiveSession(store, users_repo)
    session.load()
    policy = AccessPolicy(session)

    notification_service = NotificationService(notifications_repo)
    auth_service = AuthService(users_repo, session)
    user_service = UserService(
        users_repo,
        employees_repo,
        policy,
        password_min_length=getattr(settings, "PASSWORD_MIN_LENGTH", constants.DEFAULT_PASSWORD_MIN_LENGTH),
    )
    employee_service = EmployeeService(employees_repo, policy)
    attendance_service = AttendanceService(attendance_repo, employees_repo, policy, notification_service)
    report_service = AttendanceReportService(attendance_repo, employees_repo, policy)
    daily_reminder = DailyReminder(
        store,
        employees_repo,
        attendance_repo,
        notification_service,
        policy,
        reminder_policy=ReminderPolicy(
            enabled=bool(getattr(settings, "REMINDER_ENABLED", True)),
            threshold=float(getattr(settings, "REMINDER_THRESHOLD", constants.DEFAULT_REMINDER_THRESHOLD)),
        ),
    )

    return Container(
        store=store,
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        notifications_repo=notifications_repo,
        session=session,
        policy=policy,
        auth_service=auth_service,
        user_service=user_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        notification_service=notification_service,
        report_service=report_service,
        daily_reminder=daily_reminder,
    )
