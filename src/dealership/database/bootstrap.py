from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..accounts.passwords import PasswordHasher
from .connection import DBConfig

logger = logging.getLogger(__name__)

# (firstname, lastname, email, password, account_type)
DEMO_ACCOUNTS = (
    ("Admin", "User", "admin@cse-motors.test", "Admin1234!x", "Admin"),
    ("Happy", "Employee", "employee@cse-motors.test", "Employ1234!x", "Employee"),
    ("Basic", "Client", "client@cse-motors.test", "Client1234!x", "Client"),
)

_STATEMENT_RE = re.compile(r"""(?:'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|[^;'"])+""", re.S)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Yield statements split on semicolons that sit outside quoted literals."""
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    for match in _STATEMENT_RE.finditer(body):
        stmt = match.group(0).strip()
        if stmt:
            yield stmt


def _connect(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(**target.connect_kwargs(with_database=with_database))


def _exec_file(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_mapping(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _exec_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _exec_file(db_config, seed_path)


def upsert_account(
    db_config: dict,
    *,
    firstname: str,
    lastname: str,
    email: str,
    password: str,
    account_type: str,
    hasher: PasswordHasher | None = None,
) -> None:
    hasher = hasher or PasswordHasher()
    password_hash = hasher.hash(password)
    email = email.strip().lower()

    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT account_id FROM account WHERE account_email=%s", (email,))
        existing = cur.fetchone()
        if existing:
            cur.execute(
                """
                UPDATE account
                SET account_firstname=%s, account_lastname=%s, account_password=%s, account_type=%s
                WHERE account_email=%s
                """,
                (firstname, lastname, password_hash, account_type, email),
            )
        else:
            cur.execute(
                """
                INSERT INTO account (account_firstname, account_lastname, account_email, account_password, account_type)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (firstname, lastname, email, password_hash, account_type),
            )
        conn.commit()
    finally:
        conn.close()


def ensure_demo_accounts(db_config: dict) -> None:
    hasher = PasswordHasher()
    for firstname, lastname, email, password, account_type in DEMO_ACCOUNTS:
        upsert_account(
            db_config,
            firstname=firstname,
            lastname=lastname,
            email=email,
            password=password,
            account_type=account_type,
            hasher=hasher,
        )
        logger.info("Demo account ready: %s (%s)", email, account_type)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
