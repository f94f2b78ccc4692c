from __future__ import annotations

from decimal import Decimal, InvalidOperation


def usd(value) -> str:
    """Format a price like ``$25,000`` (whole dollars, US grouping)."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return str(value)
    return f"${amount:,.0f}"


def thousands(value) -> str:
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return str(value)
