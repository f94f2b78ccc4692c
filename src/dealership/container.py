from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.passwords import PasswordHasher
from .accounts.repository import AccountRepository
from .accounts.service import AccountService
from .auth.factory import build_issuer
from .auth.issuer import CredentialIssuer
from .auth.mysql_session_store import MySQLSessionStore
from .core.constants import CREDENTIAL_TTL_SECONDS
from .core.enums import AuthMode
from .database.connection import DBConfig, DatabaseConnection
from .inventory.mysql_inventory_repository import MySQLInventoryRepository
from .inventory.repository import InventoryRepository
from .inventory.service import InventoryService


@dataclass(frozen=True)
class Container:
    accounts_repo: AccountRepository
    inventory_repo: InventoryRepository

    hasher: PasswordHasher
    issuer: CredentialIssuer

    account_service: AccountService
    inventory_service: InventoryService

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    accounts_repo: AccountRepository,
    inventory_repo: InventoryRepository,
    issuer: CredentialIssuer,
    hasher: Optional[PasswordHasher] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    hasher = hasher or PasswordHasher()
    return Container(
        accounts_repo=accounts_repo,
        inventory_repo=inventory_repo,
        hasher=hasher,
        issuer=issuer,
        account_service=AccountService(accounts_repo, hasher, issuer),
        inventory_service=InventoryService(inventory_repo),
        conn=conn,
    )


def build_container(*, settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
    mode = AuthMode(getattr(settings, "AUTH_MODE", AuthMode.TOKEN.value))

    issuer = build_issuer(
        mode,
        secret_key=getattr(settings, "ACCESS_TOKEN_SECRET", None),
        session_store=MySQLSessionStore(conn) if mode == AuthMode.SESSION else None,
        ttl_seconds=int(getattr(settings, "CREDENTIAL_TTL_SECONDS", CREDENTIAL_TTL_SECONDS)),
    )

    return wire_container(
        accounts_repo=MySQLAccountRepository(conn),
        inventory_repo=MySQLInventoryRepository(conn),
        issuer=issuer,
        conn=conn,
    )
