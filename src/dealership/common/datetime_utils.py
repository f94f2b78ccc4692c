from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current time as an aware UTC datetime.

    Note: Wrapped so tests can inject a fixed clock.
    """
    return datetime.now(tz=timezone.utc)


def current_year() -> int:
    return now_utc().year
