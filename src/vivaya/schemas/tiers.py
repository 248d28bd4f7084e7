"""Tier API schemas."""

from __future__ import annotations

from pydantic import BaseModel


class TierModel(BaseModel):
    tier: str
    label: str
    premium_like: bool
