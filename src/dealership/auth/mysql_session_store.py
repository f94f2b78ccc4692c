from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .session_store import SessionRecord, SessionStore


def _to_db(value: datetime) -> datetime:
    # DATETIME columns are naive; everything stored is UTC.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _from_db(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class MySQLSessionStore(SessionStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, *, session_id: str, data: dict, expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO session(sid, sess, expire)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE sess=VALUES(sess), expire=VALUES(expire)
                """,
                (session_id, json.dumps(data), _to_db(expires_at)),
            )

    def get(self, session_id: str) -> Optional[SessionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT sid, sess, expire FROM session WHERE sid=%s", (session_id,))
            r = fetchone(cur)
            if not r:
                return None
            return SessionRecord(session_id=r["sid"], data=json.loads(r["sess"]), expires_at=_from_db(r["expire"]))

    def delete(self, session_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM session WHERE sid=%s", (session_id,))
            return cur.rowcount > 0

    def delete_expired(self, *, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM session WHERE expire <= %s", (_to_db(now),))
            return int(cur.rowcount or 0)
