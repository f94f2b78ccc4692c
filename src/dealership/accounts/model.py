from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..core.enums import AccountType


@dataclass(frozen=True)
class Account:
    """Domain entity: a dealership account.

    Note: plain data object, no DB access code here.
    """

    account_id: int
    firstname: str
    lastname: str
    email: str
    password_hash: str
    account_type: AccountType = AccountType.CLIENT

    def snapshot(self) -> "IdentitySnapshot":
        return IdentitySnapshot(
            account_id=self.account_id,
            firstname=self.firstname,
            lastname=self.lastname,
            email=self.email,
            account_type=self.account_type,
        )


@dataclass(frozen=True)
class IdentitySnapshot:
    """The part of an account that travels inside a credential. Never holds secrets."""

    account_id: int
    firstname: str
    lastname: str
    email: str
    account_type: AccountType

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()

    def has_role(self, *roles: AccountType) -> bool:
        return self.account_type in roles

    def to_claims(self) -> Dict[str, Any]:
        return {
            "sub": str(self.account_id),
            "account_firstname": self.firstname,
            "account_lastname": self.lastname,
            "account_email": self.email,
            "account_type": self.account_type.value,
        }

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "IdentitySnapshot":
        """Rebuild a snapshot; raises KeyError/ValueError on incomplete claims."""
        return cls(
            account_id=int(claims["sub"]),
            firstname=str(claims["account_firstname"]),
            lastname=str(claims["account_lastname"]),
            email=str(claims["account_email"]),
            account_type=AccountType(claims["account_type"]),
        )
