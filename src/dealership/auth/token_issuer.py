from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable, Optional

import jwt

from ..accounts.model import IdentitySnapshot
from ..common.datetime_utils import now_utc
from ..core.constants import CREDENTIAL_TTL_SECONDS, TOKEN_ALGORITHM, TOKEN_COOKIE_NAME
from ..core.enums import RejectReason
from .issuer import CredentialCheck, IssuedCredential

logger = logging.getLogger(__name__)


class SignedTokenIssuer:
    """Self-contained HS256 tokens: the snapshot travels inside the cookie.

    Revocation is client-side only. A captured token keeps working until its
    ``exp`` claim passes, which is why the TTL stays short.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        ttl_seconds: int = CREDENTIAL_TTL_SECONDS,
        algorithm: str = TOKEN_ALGORITHM,
        cookie_name: str = TOKEN_COOKIE_NAME,
        clock: Callable = now_utc,
    ) -> None:
        if not secret_key:
            raise RuntimeError("ACCESS_TOKEN_SECRET is not configured.")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._clock = clock
        self.ttl_seconds = int(ttl_seconds)
        self.cookie_name = cookie_name

    def issue(self, snapshot: IdentitySnapshot) -> IssuedCredential:
        now = self._clock()
        expires_at = now + timedelta(seconds=self.ttl_seconds)
        payload = dict(snapshot.to_claims(), iat=now, exp=expires_at)
        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return IssuedCredential(value=token, expires_at=expires_at)

    def validate(self, value: Optional[str]) -> CredentialCheck:
        if not value:
            return CredentialCheck.invalid(RejectReason.ABSENT)
        try:
            claims = jwt.decode(
                value,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            return CredentialCheck.invalid(RejectReason.EXPIRED)
        except jwt.InvalidSignatureError:
            return CredentialCheck.invalid(RejectReason.BAD_SIGNATURE)
        except jwt.InvalidTokenError:
            return CredentialCheck.invalid(RejectReason.MALFORMED)

        try:
            return CredentialCheck.valid(IdentitySnapshot.from_claims(claims))
        except (KeyError, TypeError, ValueError):
            logger.warning("Signed token carried an incomplete identity snapshot")
            return CredentialCheck.invalid(RejectReason.MALFORMED)

    def revoke(self, value: Optional[str]) -> None:
        # Nothing to delete server-side; the controller clears the cookie.
        return None
