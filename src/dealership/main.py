from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .accounts.controller import register as register_accounts
from .auth import middleware as auth_middleware
from .common.formatting import thousands, usd
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from .home.controller import register as register_home
from .inventory.controller import register as register_inventory
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"), static_folder=str(REPO_ROOT / "static"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config.from_object(settings)
    app.secret_key = getattr(settings, "SECRET_KEY")
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_accounts(db_config)
            logger.info("demo seed ready")
        container = build_container(settings=settings)

    app.extensions["dealership"] = container
    app.jinja_env.filters["usd"] = usd
    app.jinja_env.filters["thousands"] = thousands

    auth_middleware.install(app, container.issuer)
    register_home(app, container)
    register_accounts(app, container)
    register_inventory(app, container)

    return app
