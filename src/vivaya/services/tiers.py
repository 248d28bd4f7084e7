"""Subscription tiers: one type, one parser for every tier string in the store."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from supabase import Client

from ..config import settings


class Tier(str, Enum):
    FREE = "free"
    ESSENTIAL = "essential"
    ELITE = "elite"

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {Tier.FREE: 0, Tier.ESSENTIAL: 1, Tier.ELITE: 2}

_ALIASES = {
    "free": Tier.FREE,
    "gratuit": Tier.FREE,
    "essential": Tier.ESSENTIAL,
    "essentiel": Tier.ESSENTIAL,
    "premium": Tier.ESSENTIAL,
    "elite": Tier.ELITE,
    "élite": Tier.ELITE,
    "keefon+": Tier.ELITE,
    "keefonplus": Tier.ELITE,
}

TIER_LABELS = {
    Tier.FREE: "Gratuit",
    Tier.ESSENTIAL: "Essentiel",
    Tier.ELITE: "Keefon+",
}


def normalize_tier(raw: Any) -> Tier:
    """Map any stored tier value (plan ids, marketing names, None) to a Tier."""
    if isinstance(raw, Tier):
        return raw
    value = str(raw if raw is not None else "").strip().lower()
    return _ALIASES.get(value, Tier.FREE)


def tier_label(tier: Any) -> str:
    return TIER_LABELS[normalize_tier(tier)]


def has_tier_at_least(tier: Any, required: Any) -> bool:
    return normalize_tier(tier).rank >= normalize_tier(required).rank


def is_premium_like(tier: Any) -> bool:
    return has_tier_at_least(tier, Tier.ESSENTIAL)


def effective_tier(client: Client | None, user_id: Optional[str]) -> Tier:
    """Tier from the effective-plans view; FREE when unknown or unreadable."""
    if client is None or not user_id:
        return Tier.FREE
    try:
        response = (
            client.table(settings.effective_plans_view)
            .select("effective_tier")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logging.warning(f"Effective tier lookup failed for user {user_id}: {exc}")
        return Tier.FREE

    rows = response.data or []
    return normalize_tier(rows[0].get("effective_tier") if rows else None)
