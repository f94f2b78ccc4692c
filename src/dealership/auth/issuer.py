from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from ..accounts.model import IdentitySnapshot
from ..core.enums import RejectReason


@dataclass(frozen=True)
class IssuedCredential:
    """A freshly minted credential artifact and when it stops being valid."""

    value: str
    expires_at: datetime


@dataclass(frozen=True)
class CredentialCheck:
    snapshot: Optional[IdentitySnapshot] = None
    reason: Optional[RejectReason] = None

    @property
    def ok(self) -> bool:
        return self.snapshot is not None

    @classmethod
    def valid(cls, snapshot: IdentitySnapshot) -> "CredentialCheck":
        return cls(snapshot=snapshot)

    @classmethod
    def invalid(cls, reason: RejectReason) -> "CredentialCheck":
        return cls(reason=reason)


class CredentialIssuer(Protocol):
    """Binds identity snapshots to cookie-carried credential artifacts.

    A deployment uses exactly one implementation; its ``cookie_name`` is the
    only cookie that login writes and logout clears.
    """

    cookie_name: str
    ttl_seconds: int

    def issue(self, snapshot: IdentitySnapshot) -> IssuedCredential:
        raise NotImplementedError

    def validate(self, value: Optional[str]) -> CredentialCheck:
        raise NotImplementedError

    def revoke(self, value: Optional[str]) -> None:
        raise NotImplementedError
