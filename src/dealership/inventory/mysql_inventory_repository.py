from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector import IntegrityError

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Classification, InventoryItem
from .repository import InventoryRepository

ITEM_FIELDS = (
    "inv_make",
    "inv_model",
    "inv_year",
    "inv_description",
    "inv_image",
    "inv_thumbnail",
    "inv_price",
    "inv_miles",
    "inv_color",
    "classification_id",
)

_SELECT_ITEMS = """
    SELECT i.inv_id, i.inv_make, i.inv_model, i.inv_year, i.inv_description,
           i.inv_image, i.inv_thumbnail, i.inv_price, i.inv_miles, i.inv_color,
           i.classification_id, c.classification_name
    FROM inventory i
    LEFT JOIN classification c ON c.classification_id = i.classification_id
"""


def _row_to_item(r: dict) -> InventoryItem:
    return InventoryItem(
        inv_id=int(r["inv_id"]),
        inv_make=r["inv_make"],
        inv_model=r["inv_model"],
        inv_year=int(r["inv_year"]),
        inv_description=r["inv_description"],
        inv_image=r["inv_image"],
        inv_thumbnail=r["inv_thumbnail"],
        inv_price=Decimal(str(r["inv_price"])),
        inv_miles=int(r["inv_miles"]),
        inv_color=r["inv_color"],
        classification_id=int(r["classification_id"]),
        classification_name=r.get("classification_name"),
    )


class MySQLInventoryRepository(InventoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_classifications(self) -> Sequence[Classification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT classification_id, classification_name FROM classification ORDER BY classification_name")
            return [
                Classification(classification_id=int(r["classification_id"]), classification_name=r["classification_name"])
                for r in fetchall(cur)
            ]

    def get_classification(self, classification_id: int) -> Optional[Classification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT classification_id, classification_name FROM classification WHERE classification_id=%s",
                (int(classification_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Classification(classification_id=int(r["classification_id"]), classification_name=r["classification_name"])

    def get_classification_by_name(self, name: str) -> Optional[Classification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT classification_id, classification_name FROM classification WHERE LOWER(classification_name)=%s",
                (name.strip().lower(),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Classification(classification_id=int(r["classification_id"]), classification_name=r["classification_name"])

    def create_classification(self, *, name: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT INTO classification(classification_name) VALUES(%s)", (name,))
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError(f"Classification '{name}' already exists.") from e
            raise

    def list_by_classification_name(self, name: str) -> Sequence[InventoryItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ITEMS + " WHERE c.classification_name=%s ORDER BY i.inv_make, i.inv_model",
                (name,),
            )
            return [_row_to_item(r) for r in fetchall(cur)]

    def get_item(self, inv_id: int) -> Optional[InventoryItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ITEMS + " WHERE i.inv_id=%s", (int(inv_id),))
            r = fetchone(cur)
            return _row_to_item(r) if r else None

    def create_item(self, **fields) -> int:
        columns = ", ".join(ITEM_FIELDS)
        placeholders = ",".join(["%s"] * len(ITEM_FIELDS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO inventory({columns}) VALUES({placeholders})",
                tuple(fields[name] for name in ITEM_FIELDS),
            )
            return int(cur.lastrowid)

    def update_item(self, inv_id: int, **fields) -> bool:
        assignments = ", ".join(f"{name}=%s" for name in ITEM_FIELDS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE inventory SET {assignments} WHERE inv_id=%s",
                tuple(fields[name] for name in ITEM_FIELDS) + (int(inv_id),),
            )
            return cur.rowcount > 0 or self.get_item(inv_id) is not None

    def list_image_paths(self) -> Sequence[tuple[int, str, str]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT inv_id, inv_image, inv_thumbnail FROM inventory ORDER BY inv_id")
            return [(int(r["inv_id"]), r["inv_image"], r["inv_thumbnail"]) for r in fetchall(cur)]

    def set_image_paths(self, *, inv_id: int, inv_image: str, inv_thumbnail: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE inventory SET inv_image=%s, inv_thumbnail=%s WHERE inv_id=%s",
                (inv_image, inv_thumbnail, int(inv_id)),
            )
            return cur.rowcount > 0
