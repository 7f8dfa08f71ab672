"""Seed demo employees into the configured store (existing ones are kept)."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from attendance_tracker.config import get_settings_module
from attendance_tracker.container import build_container, build_store
from attendance_tracker.employees.model import Employee

DEMO_EMPLOYEES = [
    Employee(id="demo-001", name="Sara Ali", ref_id="1001", phone="0500000001", company="Acme"),
    Employee(id="demo-002", name="Omar Hassan", ref_id="1002", phone="0500000002", company="Acme"),
    Employee(id="demo-003", name="Lina Saleh", ref_id="2001", phone="0500000003", company="Beta"),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(store=build_store(settings), settings=settings)

    # Listing users seeds the default administrator on an empty store.
    users = container.users_repo.list_all()

    added = 0
    for employee in DEMO_EMPLOYEES:
        if container.employees_repo.get_by_id(employee.id) is None:
            container.employees_repo.save(employee)
            added += 1

    print(f"OK: users={len(users)} employees added={added}")


if __name__ == "__main__":
    main()
