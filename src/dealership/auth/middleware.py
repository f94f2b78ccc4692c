"""Per-request auth chain.

``resolve_identity`` runs before every view and leaves an ``AuthContext`` on
``flask.g``. The decorators below are the gates views opt into; they must be
stacked under ``@app.route`` and only read what ``resolve_identity`` decided.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import Flask, Response, current_app, flash, g, redirect, request, url_for

from ..accounts.model import IdentitySnapshot
from ..core.enums import AccountType, AuthState, RejectReason
from .issuer import CredentialIssuer, IssuedCredential

logger = logging.getLogger(__name__)

LOGIN_NOTICE = "Please log in."
EXPIRED_NOTICE = "Your session has expired. Please log in again."
FORBIDDEN_NOTICE = "You are not authorized to access this page."


@dataclass(frozen=True)
class AuthContext:
    state: AuthState
    identity: Optional[IdentitySnapshot] = None
    credential: Optional[str] = None
    reason: Optional[RejectReason] = None

    @property
    def authenticated(self) -> bool:
        return self.state == AuthState.AUTHENTICATED

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(state=AuthState.UNAUTHENTICATED)


def current_auth() -> AuthContext:
    return g.get("auth") or AuthContext.anonymous()


def current_identity() -> Optional[IdentitySnapshot]:
    return current_auth().identity


def resolve_identity(issuer: CredentialIssuer) -> AuthContext:
    value = request.cookies.get(issuer.cookie_name)
    if not value:
        return AuthContext.anonymous()

    check = issuer.validate(value)
    if check.ok:
        return AuthContext(state=AuthState.AUTHENTICATED, identity=check.snapshot, credential=value)

    logger.info("Rejected credential on %s: %s", request.path, check.reason.value if check.reason else "unknown")
    return AuthContext(state=AuthState.REJECTED, reason=check.reason)


def write_credential(response: Response, issuer: CredentialIssuer, credential: IssuedCredential) -> Response:
    response.set_cookie(
        issuer.cookie_name,
        credential.value,
        max_age=issuer.ttl_seconds,
        httponly=True,
        secure=bool(current_app.config.get("COOKIE_SECURE", True)),
        samesite="Lax",
    )
    g.credential_written = True
    return response


def clear_credential(response: Response, issuer: CredentialIssuer) -> Response:
    response.delete_cookie(
        issuer.cookie_name,
        secure=bool(current_app.config.get("COOKIE_SECURE", True)),
        samesite="Lax",
    )
    g.credential_written = True
    return response


def install(app: Flask, issuer: CredentialIssuer) -> None:
    """Attach the resolve / cleanup hooks and expose the identity to templates."""

    @app.before_request
    def _resolve_identity():
        g.auth = resolve_identity(issuer)

    @app.after_request
    def _drop_rejected_cookie(response: Response):
        if current_auth().state == AuthState.REJECTED and not g.get("credential_written"):
            clear_credential(response, issuer)
        return response

    @app.context_processor
    def _inject_identity():
        identity = current_identity()
        return {"current_account": identity, "loggedin": identity is not None}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        auth = current_auth()
        if not auth.authenticated:
            flash(EXPIRED_NOTICE if auth.reason == RejectReason.EXPIRED else LOGIN_NOTICE, "warning")
            return redirect(url_for("account_login"))
        return view(*args, **kwargs)

    return wrapper


def role_required(*roles: AccountType):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            auth = current_auth()
            if not auth.authenticated:
                flash(EXPIRED_NOTICE if auth.reason == RejectReason.EXPIRED else LOGIN_NOTICE, "warning")
                return redirect(url_for("account_login"))

            if not auth.identity.has_role(*allowed):
                flash(FORBIDDEN_NOTICE, "danger")
                return redirect(url_for("account_dashboard"))

            return view(*args, **kwargs)

        return wrapper

    return decorator


def guest_only(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_auth().authenticated:
            return redirect(url_for("account_dashboard"))
        return view(*args, **kwargs)

    return wrapper
