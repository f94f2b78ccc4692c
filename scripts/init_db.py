"""Create the database (if missing) and apply database/schema.sql.

Usage: APP_ENV=production python scripts/init_db.py [--seed]
"""

from __future__ import annotations

import argparse
import importlib
import logging
from pathlib import Path

from config import get_settings_module

from dealership.database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from dealership.logging_setup import configure_logging

logger = logging.getLogger("init_db")

DATABASE_DIR = Path(__file__).resolve().parents[1] / "database"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Apply the CSE Motors schema")
    parser.add_argument("--seed", action="store_true", help="also load seed.sql and the demo accounts")
    args = parser.parse_args(argv)

    configure_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
    logger.info("Schema applied to %s (tables=%d)", db_config.get("database"), len(list_tables(db_config)))

    if args.seed:
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_accounts(db_config)
        logger.info("Seed data loaded")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
