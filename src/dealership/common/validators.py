from __future__ import annotations

import math
import re
from typing import Callable, List, Optional, TypeVar

from ..core.constants import EMAIL_MAX_LENGTH, PASSWORD_MAX_BYTES, PASSWORD_MIN_LENGTH
from ..core.exceptions import ValidationError

T = TypeVar("T")

_EMAIL_RE = re.compile(r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$")
_STRONG_PASSWORD_RE = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?=.*[^a-zA-Z0-9])(?!.*\s).+$")
_ALNUM_RE = re.compile(r"^[A-Za-z0-9]+$")


def _check_max_length(value: str, max_len: Optional[int], long_message: Optional[str]) -> None:
    if max_len is not None and len(value) > max_len:
        raise ValidationError(long_message or f"Must be at most {max_len} characters.")


def require_non_empty(
    value: Optional[str], message: str, *, max_len: Optional[int] = None, long_message: Optional[str] = None
) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    value = value.strip()
    _check_max_length(value, max_len, long_message)
    return value


def require_min_length(
    value: Optional[str],
    message: str,
    min_len: int,
    *,
    max_len: Optional[int] = None,
    long_message: Optional[str] = None,
) -> str:
    value = (value or "").strip()
    if len(value) < min_len:
        raise ValidationError(message)
    _check_max_length(value, max_len, long_message)
    return value


def require_email(value: Optional[str], message: str = "A valid email is required.") -> str:
    email = (value or "").strip().lower()
    if len(email) > EMAIL_MAX_LENGTH or not _EMAIL_RE.match(email):
        raise ValidationError(message)
    return email


def require_strong_password(value: Optional[str]) -> str:
    value = value or ""
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters.")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(f"Password cannot be longer than {PASSWORD_MAX_BYTES} bytes.")
    if not _STRONG_PASSWORD_RE.match(value):
        raise ValidationError("Password must contain at least 1 uppercase, 1 lowercase, 1 number, and 1 special character.")
    return value


def require_alphanumeric(value: Optional[str], message: str) -> str:
    value = (value or "").strip()
    if not _ALNUM_RE.match(value):
        raise ValidationError(message)
    return value


def require_int(value, message: str, *, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(message)
    if min_value is not None and number < min_value:
        raise ValidationError(message)
    if max_value is not None and number > max_value:
        raise ValidationError(message)
    return number


def require_float(
    value, message: str, *, min_value: Optional[float] = None, max_value: Optional[float] = None
) -> float:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(message)
    if not math.isfinite(number):
        raise ValidationError(message)
    if min_value is not None and number < min_value:
        raise ValidationError(message)
    if max_value is not None and number > max_value:
        raise ValidationError(message)
    return number


class FieldChecks:
    """Run several field validators and keep every message instead of stopping at the first."""

    def __init__(self) -> None:
        self.errors: List[str] = []

    def check(self, validator: Callable[..., T], *args, **kwargs) -> Optional[T]:
        try:
            return validator(*args, **kwargs)
        except ValidationError as e:
            self.errors.extend(e.errors)
            return None

    def raise_if_any(self, message: str = "Please fix the errors below.") -> None:
        if self.errors:
            raise ValidationError(message, self.errors)
