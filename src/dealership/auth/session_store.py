from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    data: dict
    expires_at: datetime


class SessionStore(Protocol):
    """Server-side table of opaque sessions keyed by the cookie value."""

    def save(self, *, session_id: str, data: dict, expires_at: datetime) -> None:
        raise NotImplementedError

    def get(self, session_id: str) -> Optional[SessionRecord]:
        raise NotImplementedError

    def delete(self, session_id: str) -> bool:
        raise NotImplementedError

    def delete_expired(self, *, now: datetime) -> int:
        raise NotImplementedError
