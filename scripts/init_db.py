from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from attendance_tracker.config import get_settings_module
from attendance_tracker.storage.bootstrap import ensure_kv_table, list_tables
from attendance_tracker.storage.connection import DatabaseConnection, db_config_from_dict


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = db_config_from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(config)

    ensure_kv_table(conn)
    tables = list_tables(conn)
    print(f"OK: kv_store ready -> {config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
