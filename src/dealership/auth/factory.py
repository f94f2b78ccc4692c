from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..core.constants import CREDENTIAL_TTL_SECONDS
from ..core.enums import AuthMode
from .issuer import CredentialIssuer
from .session_issuer import ServerSessionIssuer
from .session_store import SessionStore
from .token_issuer import SignedTokenIssuer

logger = logging.getLogger(__name__)

_PLACEHOLDER_SECRETS = {"", "change-me", "dev-access-token-secret-change-me-0000"}


def build_issuer(
    mode: AuthMode | str,
    *,
    secret_key: Optional[str] = None,
    session_store: Optional[SessionStore] = None,
    ttl_seconds: int = CREDENTIAL_TTL_SECONDS,
    clock: Callable = now_utc,
) -> CredentialIssuer:
    """Factory: pick the single credential realization this deployment uses."""
    mode = AuthMode(mode)

    if mode == AuthMode.SESSION:
        if session_store is None:
            raise RuntimeError("AUTH_MODE=session needs a session store.")
        return ServerSessionIssuer(session_store, ttl_seconds=ttl_seconds, clock=clock)

    if (secret_key or "") in _PLACEHOLDER_SECRETS:
        logger.warning("ACCESS_TOKEN_SECRET is using a placeholder value. Configure a real secret in production.")
    return SignedTokenIssuer(secret_key or "", ttl_seconds=ttl_seconds, clock=clock)
