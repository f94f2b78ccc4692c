"""Load database/seed.sql and (re)create the demo Client/Employee/Admin accounts."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path

from config import get_settings_module

from dealership.database.bootstrap import DEMO_ACCOUNTS, apply_seed_sql, ensure_demo_accounts
from dealership.logging_setup import configure_logging

logger = logging.getLogger("seed_db")


def main() -> int:
    configure_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=Path(__file__).resolve().parents[1] / "database" / "seed.sql")
    ensure_demo_accounts(db_config)
    for _first, _last, email, _password, account_type in DEMO_ACCOUNTS:
        logger.info("Demo %s account ready: %s", account_type, email)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
