from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container, build_store
from .database.bootstrap import apply_schema, list_tables
from .timeoff.controller import register as register_timeoff
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        backend = str(getattr(settings, "STORAGE_BACKEND", "json"))
        db_config = getattr(settings, "DB_CONFIG", None)

        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        store = build_store(
            backend=backend,
            storage_dir=getattr(settings, "STORAGE_DIR", None),
            db_config=db_config,
        )
        container = build_container(
            store=store,
            company_name=str(getattr(settings, "COMPANY_NAME", "Company")),
        )
        logger.info("Using settings=%s storage=%s", settings_module, backend)

    if bool(getattr(settings, "AUTO_SEED_ADMIN", True)):
        container.account_service.ensure_default_admin()

    app.extensions["employee_management"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_timeoff(app, container)

    return app
