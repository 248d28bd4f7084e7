"""Display helpers for euro amounts held in cents."""

from __future__ import annotations

from typing import Any

NARROW_NBSP = "\u202f"
NBSP = "\u00a0"


def _cents(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def format_eur(cents: Any) -> str:
    """French currency display, e.g. ``1 234,56 €`` (narrow no-break space grouping)."""
    amount = _cents(cents)
    sign = "-" if amount < 0 else ""
    units, remainder = divmod(abs(amount), 100)
    grouped = f"{units:,}".replace(",", NARROW_NBSP)
    return f"{sign}{grouped},{remainder:02d}{NBSP}€"


def cents_fr(cents: Any) -> str:
    """Plain decimal with a comma for French CSV cells: 1250 -> ``12,5``."""
    amount = _cents(cents)
    if amount % 100 == 0:
        return str(amount // 100)
    return str(amount / 100).replace(".", ",")
