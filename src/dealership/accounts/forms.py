"""Presence/format rules for the account forms.

Each ``validate_*`` returns the normalized values or raises ``ValidationError``
carrying every field message at once.
"""

from __future__ import annotations

from typing import Dict

from ..common.validators import FieldChecks, require_email, require_non_empty, require_strong_password
from ..core.constants import NAME_MAX_LENGTH


def _require_name(value: str, which: str) -> str:
    return require_non_empty(
        value,
        f"Please provide a {which} name.",
        max_len=NAME_MAX_LENGTH,
        long_message=f"The {which} name must be at most {NAME_MAX_LENGTH} characters.",
    )


def validate_registration(*, firstname: str, lastname: str, email: str, password: str) -> Dict[str, str]:
    checks = FieldChecks()
    values = {
        "firstname": checks.check(_require_name, firstname, "first"),
        "lastname": checks.check(_require_name, lastname, "last"),
        "email": checks.check(require_email, email),
        "password": checks.check(require_strong_password, password),
    }
    checks.raise_if_any()
    return values


def validate_login(*, email: str, password: str) -> Dict[str, str]:
    checks = FieldChecks()
    values = {
        "email": checks.check(require_email, email),
        "password": checks.check(require_non_empty, password, "Password is required."),
    }
    checks.raise_if_any()
    # Passwords are compared as typed; only the emptiness check strips.
    values["password"] = password
    return values


def validate_profile(*, firstname: str, lastname: str, email: str) -> Dict[str, str]:
    checks = FieldChecks()
    values = {
        "firstname": checks.check(_require_name, firstname, "first"),
        "lastname": checks.check(_require_name, lastname, "last"),
        "email": checks.check(require_email, email),
    }
    checks.raise_if_any("Please fix the errors below to update your account.")
    return values


def validate_password_change(*, current_password: str, password: str) -> None:
    checks = FieldChecks()
    checks.check(require_non_empty, current_password, "Please enter your current password.")
    checks.check(require_strong_password, password)
    checks.raise_if_any()
