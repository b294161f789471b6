"""Backup every storage partition to a timestamped JSON file.

Note: Works for any STORAGE_BACKEND (json files, mysql kv_store table); the
output is one JSON object mapping partition key -> stored document.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_management.employee_management.container import build_store
from src.employee_management.employee_management.core.constants import (
    ALL_STORAGE_KEYS,
    STORAGE_KEY_TIMEOFF,
    STORAGE_KEY_USERS,
)
from src.employee_management.employee_management.storage.partitions import PartitionStore


def dump_partitions(partitions: PartitionStore) -> dict:
    defaults = {key: dict for key in ALL_STORAGE_KEYS}
    defaults[STORAGE_KEY_USERS] = list
    defaults[STORAGE_KEY_TIMEOFF] = list
    return {key: partitions.read(key, factory) for key, factory in defaults.items()}


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        backend=settings.STORAGE_BACKEND,
        storage_dir=getattr(settings, "STORAGE_DIR", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"ems_{ts}.json"
    out_file.write_text(
        json.dumps(dump_partitions(PartitionStore(store)), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
