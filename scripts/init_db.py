"""Create the MySQL database and the kv_store table used by STORAGE_BACKEND=mysql."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_management.employee_management.database.bootstrap import apply_schema, list_tables
from src.employee_management.employee_management.storage.mysql_store import TABLE_NAME


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    if TABLE_NAME not in list_tables(db_config):
        print(f"ERROR: {TABLE_NAME} missing after applying schema.sql -> {target}")
        return 1

    print(f"OK: {TABLE_NAME} ready -> {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
