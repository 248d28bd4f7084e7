"""Subscription tier endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from supabase import Client

from ...schemas.tiers import TierModel
from ...services.tiers import Tier, effective_tier, is_premium_like, normalize_tier, tier_label
from ..deps import get_client

router = APIRouter(prefix="/tiers", tags=["tiers"])


def _model(tier: Tier) -> TierModel:
    return TierModel(tier=tier.value, label=tier_label(tier), premium_like=is_premium_like(tier))


@router.get("/normalize", response_model=TierModel, status_code=status.HTTP_200_OK)
def normalize(value: str | None = Query(default=None, description="Raw tier value")) -> TierModel:
    return _model(normalize_tier(value))


@router.get("/effective/{user_id}", response_model=TierModel, status_code=status.HTTP_200_OK)
def get_effective_tier(user_id: str, client: Client | None = Depends(get_client)) -> TierModel:
    return _model(effective_tier(client, user_id))
