from __future__ import annotations

from enum import Enum


class AccountType(str, Enum):
    """Account roles used for authorization."""

    CLIENT = "Client"
    EMPLOYEE = "Employee"
    ADMIN = "Admin"


class AuthMode(str, Enum):
    """Which credential realization a deployment uses."""

    TOKEN = "token"
    SESSION = "session"


class AuthState(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATED = "AUTHENTICATED"
    REJECTED = "REJECTED"


class RejectReason(str, Enum):
    """Why a credential artifact failed validation (diagnostics only)."""

    ABSENT = "ABSENT"
    EXPIRED = "EXPIRED"
    BAD_SIGNATURE = "BAD_SIGNATURE"
    MALFORMED = "MALFORMED"
    UNKNOWN_SESSION = "UNKNOWN_SESSION"


class Outcome(str, Enum):
    """Result variants returned by the account and inventory flows."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    AUTHENTICATED = "AUTHENTICATED"
    LOGGED_OUT = "LOGGED_OUT"
    CONFLICT = "CONFLICT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    MISMATCH = "MISMATCH"
    NOT_FOUND = "NOT_FOUND"
