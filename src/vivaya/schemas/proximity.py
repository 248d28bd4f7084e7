"""Proximity API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CitySuggestionModel(BaseModel):
    city: str
    postal_code: str
    lat: float | None = None
    lon: float | None = None


class DistanceResponse(BaseModel):
    user_id: str
    city: str | None = None
    postal_code: str | None = None
    distance_km: float | None = None


class PeerRow(BaseModel):
    model_config = ConfigDict(extra="allow")

    peer_user_id: str
    ville: Optional[str] = None
    code_postal: Optional[str] = None


class EnrichRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    rows: List[PeerRow] = Field(default_factory=list)


class EnrichResponse(BaseModel):
    items: List[dict]
