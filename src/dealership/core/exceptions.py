from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, errors: Sequence[str] = ()):
        super().__init__(message)
        self.errors = list(errors) or [message]


class ConflictError(DomainError):
    """Raised when a uniqueness constraint would be violated."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""
