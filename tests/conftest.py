from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

import pytest

from dealership.accounts.model import Account
from dealership.accounts.passwords import PasswordHasher
from dealership.auth.session_issuer import ServerSessionIssuer
from dealership.auth.session_store import SessionRecord
from dealership.auth.token_issuer import SignedTokenIssuer
from dealership.container import wire_container
from dealership.core.enums import AccountType
from dealership.core.exceptions import ConflictError
from dealership.inventory.model import Classification, InventoryItem
from dealership.main import create_app


class InMemoryAccounts:
    def __init__(self):
        self.by_id: dict[int, Account] = {}
        self._next_id = 1

    def get_by_id(self, account_id: int) -> Optional[Account]:
        return self.by_id.get(int(account_id))

    def get_by_email(self, email: str) -> Optional[Account]:
        email = email.strip().lower()
        for acc in self.by_id.values():
            if acc.email.lower() == email:
                return acc
        return None

    def _email_taken(self, email: str, *, except_id: Optional[int] = None) -> bool:
        return any(a.email.lower() == email.lower() and a.account_id != except_id for a in self.by_id.values())

    def create_account(self, *, firstname, lastname, email, password_hash, account_type=AccountType.CLIENT) -> int:
        # Mirrors the UNIQUE index on account_email.
        if self._email_taken(email):
            raise ConflictError("Email already exists.")
        account_id = self._next_id
        self._next_id += 1
        self.by_id[account_id] = Account(
            account_id=account_id,
            firstname=firstname,
            lastname=lastname,
            email=email,
            password_hash=password_hash,
            account_type=account_type,
        )
        return account_id

    def update_profile(self, *, account_id, firstname, lastname, email) -> bool:
        acc = self.by_id.get(int(account_id))
        if not acc:
            return False
        if self._email_taken(email, except_id=acc.account_id):
            raise ConflictError("Email already exists.")
        self.by_id[acc.account_id] = Account(
            account_id=acc.account_id,
            firstname=firstname,
            lastname=lastname,
            email=email,
            password_hash=acc.password_hash,
            account_type=acc.account_type,
        )
        return True

    def update_password(self, *, account_id, password_hash) -> bool:
        acc = self.by_id.get(int(account_id))
        if not acc:
            return False
        self.by_id[acc.account_id] = Account(
            account_id=acc.account_id,
            firstname=acc.firstname,
            lastname=acc.lastname,
            email=acc.email,
            password_hash=password_hash,
            account_type=acc.account_type,
        )
        return True


class InMemoryInventory:
    def __init__(self):
        self.classifications: dict[int, Classification] = {}
        self.items: dict[int, InventoryItem] = {}
        self._next_cid = 1
        self._next_iid = 1

    def list_classifications(self):
        return sorted(self.classifications.values(), key=lambda c: c.classification_name)

    def get_classification(self, classification_id):
        return self.classifications.get(int(classification_id))

    def _find_by_name(self, name):
        for c in self.classifications.values():
            if c.classification_name.lower() == name.strip().lower():
                return c
        return None

    def get_classification_by_name(self, name):
        return self._find_by_name(name)

    def create_classification(self, *, name):
        # Mirrors the UNIQUE index on classification_name.
        if self._find_by_name(name):
            raise ConflictError(f"Classification '{name}' already exists.")
        cid = self._next_cid
        self._next_cid += 1
        self.classifications[cid] = Classification(classification_id=cid, classification_name=name)
        return cid

    def _build(self, inv_id, fields):
        c = self.classifications.get(int(fields["classification_id"]))
        return InventoryItem(
            inv_id=inv_id,
            inv_make=fields["inv_make"],
            inv_model=fields["inv_model"],
            inv_year=int(fields["inv_year"]),
            inv_description=fields["inv_description"],
            inv_image=fields["inv_image"],
            inv_thumbnail=fields["inv_thumbnail"],
            inv_price=Decimal(str(fields["inv_price"])),
            inv_miles=int(fields["inv_miles"]),
            inv_color=fields["inv_color"],
            classification_id=int(fields["classification_id"]),
            classification_name=c.classification_name if c else None,
        )

    def list_by_classification_name(self, name):
        return [i for i in self.items.values() if i.classification_name == name]

    def get_item(self, inv_id):
        return self.items.get(int(inv_id))

    def create_item(self, **fields):
        iid = self._next_iid
        self._next_iid += 1
        self.items[iid] = self._build(iid, fields)
        return iid

    def update_item(self, inv_id, **fields):
        if int(inv_id) not in self.items:
            return False
        self.items[int(inv_id)] = self._build(int(inv_id), fields)
        return True

    def list_image_paths(self):
        return [(i.inv_id, i.inv_image, i.inv_thumbnail) for i in self.items.values()]

    def set_image_paths(self, *, inv_id, inv_image, inv_thumbnail):
        item = self.items[int(inv_id)]
        fields = {k: getattr(item, k) for k in (
            "inv_make", "inv_model", "inv_year", "inv_description", "inv_price",
            "inv_miles", "inv_color", "classification_id",
        )}
        self.items[int(inv_id)] = self._build(int(inv_id), dict(fields, inv_image=inv_image, inv_thumbnail=inv_thumbnail))
        return True


class InMemorySessions:
    def __init__(self):
        self.rows: dict[str, SessionRecord] = {}

    def save(self, *, session_id, data, expires_at):
        self.rows[session_id] = SessionRecord(session_id=session_id, data=dict(data), expires_at=expires_at)

    def get(self, session_id):
        return self.rows.get(session_id)

    def delete(self, session_id):
        return self.rows.pop(session_id, None) is not None

    def delete_expired(self, *, now):
        expired = [sid for sid, r in self.rows.items() if r.expires_at <= now]
        for sid in expired:
            del self.rows[sid]
        return len(expired)


class Clock:
    """Settable clock for expiry tests."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime.now(tz=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now = self.now + timedelta(seconds=seconds)


STRONG_PASSWORD = "Abc123!@#x"
TOKEN_SECRET = "test-access-token-secret-32-bytes-min"


@pytest.fixture
def hasher():
    # Low cost keeps the suite fast; production uses the default of 10 rounds.
    return PasswordHasher(rounds=4)


@pytest.fixture
def accounts_repo():
    return InMemoryAccounts()


@pytest.fixture
def inventory_repo():
    return InMemoryInventory()


@pytest.fixture
def sessions():
    return InMemorySessions()


@pytest.fixture(params=["token", "session"])
def issuer(request, sessions):
    if request.param == "token":
        return SignedTokenIssuer(TOKEN_SECRET)
    return ServerSessionIssuer(sessions)


@pytest.fixture
def make_account(accounts_repo, hasher):
    def _make(email="jane@example.com", password=STRONG_PASSWORD, account_type=AccountType.CLIENT, firstname="Jane", lastname="Doe"):
        account_id = accounts_repo.create_account(
            firstname=firstname,
            lastname=lastname,
            email=email,
            password_hash=hasher.hash(password),
            account_type=account_type,
        )
        return accounts_repo.get_by_id(account_id)

    return _make


@pytest.fixture
def container(accounts_repo, inventory_repo, issuer, hasher):
    return wire_container(accounts_repo=accounts_repo, inventory_repo=inventory_repo, issuer=issuer, hasher=hasher)


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(email="jane@example.com", password=STRONG_PASSWORD):
        return client.post("/account/login", data={"account_email": email, "account_password": password})

    return _login
