from __future__ import annotations

from typing import Optional

from mysql.connector import IntegrityError

from ..core.enums import AccountType
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .model import Account
from .repository import AccountRepository

_SELECT = """
    SELECT account_id, account_firstname, account_lastname, account_email, account_password, account_type
    FROM account
"""


def _row_to_account(row: dict) -> Account:
    return Account(
        account_id=int(row["account_id"]),
        firstname=row["account_firstname"],
        lastname=row["account_lastname"],
        email=row["account_email"],
        password_hash=row["account_password"],
        account_type=AccountType(row["account_type"]),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: int) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE account_id=%s", (int(account_id),))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE LOWER(account_email)=%s", (email.strip().lower(),))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def create_account(
        self,
        *,
        firstname: str,
        lastname: str,
        email: str,
        password_hash: str,
        account_type: AccountType = AccountType.CLIENT,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO account(account_firstname, account_lastname, account_email, account_password, account_type)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (firstname, lastname, email, password_hash, account_type.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Email already exists.") from e
            raise

    def update_profile(self, *, account_id: int, firstname: str, lastname: str, email: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE account
                    SET account_firstname=%s, account_lastname=%s, account_email=%s
                    WHERE account_id=%s
                    """,
                    (firstname, lastname, email, int(account_id)),
                )
                # MySQL reports 0 affected rows when nothing changed; existence is what matters here.
                return cur.rowcount > 0 or self.get_by_id(account_id) is not None
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Email already exists.") from e
            raise

    def update_password(self, *, account_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE account SET account_password=%s WHERE account_id=%s",
                (password_hash, int(account_id)),
            )
            return cur.rowcount > 0
