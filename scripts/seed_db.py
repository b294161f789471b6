from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_management.employee_management.container import build_container, build_store


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        backend=settings.STORAGE_BACKEND,
        storage_dir=getattr(settings, "STORAGE_DIR", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )
    container = build_container(store=store, company_name=settings.COMPANY_NAME)

    admin = container.account_service.ensure_default_admin()
    if admin:
        print(f"OK: Seeded default admin -> login_id={admin.login_id} email={admin.email}")
    else:
        print("OK: Store already has accounts, nothing to seed")


if __name__ == "__main__":
    main()
