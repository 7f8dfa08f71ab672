"""Backup the store.

Note: Writes every key of the configured store into one timestamped JSON file
under `backups/`. Values stay raw so corrupted entries are preserved as-is.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from attendance_tracker.config import get_settings_module
from attendance_tracker.container import build_store


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(settings)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_store_{ts}.json"

    snapshot = {key: store.get(key) for key in store.keys()}
    out_file.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file} (keys={len(snapshot)})")


if __name__ == "__main__":
    main()
