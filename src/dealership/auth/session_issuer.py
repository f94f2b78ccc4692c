from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from typing import Callable, Optional

from ..accounts.model import IdentitySnapshot
from ..common.datetime_utils import now_utc
from ..core.constants import CREDENTIAL_TTL_SECONDS, SESSION_COOKIE_NAME
from ..core.enums import RejectReason
from .issuer import CredentialCheck, IssuedCredential
from .session_store import SessionStore

logger = logging.getLogger(__name__)


class ServerSessionIssuer:
    """Opaque random session keys; the snapshot lives in the session table."""

    def __init__(
        self,
        store: SessionStore,
        *,
        ttl_seconds: int = CREDENTIAL_TTL_SECONDS,
        cookie_name: str = SESSION_COOKIE_NAME,
        clock: Callable = now_utc,
    ) -> None:
        self._store = store
        self._clock = clock
        self.ttl_seconds = int(ttl_seconds)
        self.cookie_name = cookie_name

    def issue(self, snapshot: IdentitySnapshot) -> IssuedCredential:
        now = self._clock()
        purged = self._store.delete_expired(now=now)
        if purged:
            logger.debug("Purged %d expired sessions", purged)

        session_id = secrets.token_urlsafe(32)
        expires_at = now + timedelta(seconds=self.ttl_seconds)
        self._store.save(session_id=session_id, data=snapshot.to_claims(), expires_at=expires_at)
        return IssuedCredential(value=session_id, expires_at=expires_at)

    def validate(self, value: Optional[str]) -> CredentialCheck:
        if not value:
            return CredentialCheck.invalid(RejectReason.ABSENT)

        record = self._store.get(value)
        if record is None:
            return CredentialCheck.invalid(RejectReason.UNKNOWN_SESSION)
        if record.expires_at <= self._clock():
            self._store.delete(value)
            return CredentialCheck.invalid(RejectReason.EXPIRED)

        try:
            return CredentialCheck.valid(IdentitySnapshot.from_claims(record.data))
        except (KeyError, TypeError, ValueError):
            logger.warning("Session row carried an incomplete identity snapshot")
            return CredentialCheck.invalid(RejectReason.MALFORMED)

    def revoke(self, value: Optional[str]) -> None:
        if value:
            self._store.delete(value)
