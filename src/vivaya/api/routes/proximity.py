"""Proximity endpoints: city autocomplete and "N km away" figures."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...schemas.proximity import (
    CitySuggestionModel,
    DistanceResponse,
    EnrichRequest,
    EnrichResponse,
)
from ...services.proximity import ProximityResolver
from ..deps import get_proximity_resolver

router = APIRouter(prefix="/proximity", tags=["proximity"])


@router.get("/cities", response_model=List[CitySuggestionModel], status_code=status.HTTP_200_OK)
def search_cities(
    q: str = Query(default="", description="Beginning of a commune name"),
    resolver: ProximityResolver = Depends(get_proximity_resolver),
) -> List[CitySuggestionModel]:
    return [
        CitySuggestionModel(city=item.city, postal_code=item.postal_code, lat=item.lat, lon=item.lon)
        for item in resolver.search_cities_by_prefix(q)
    ]


@router.get("/distance", response_model=DistanceResponse, status_code=status.HTTP_200_OK)
def get_distance(
    user_id: str = Query(..., min_length=1, description="Member the distance is measured from"),
    city: str | None = Query(default=None),
    postal_code: str | None = Query(default=None),
    resolver: ProximityResolver = Depends(get_proximity_resolver),
) -> DistanceResponse:
    return DistanceResponse(
        user_id=user_id,
        city=city,
        postal_code=postal_code,
        distance_km=resolver.distance_from_me_to_city(user_id, city, postal_code),
    )


@router.post("/enrich", response_model=EnrichResponse, status_code=status.HTTP_200_OK)
def enrich_rows(
    payload: EnrichRequest,
    resolver: ProximityResolver = Depends(get_proximity_resolver),
) -> EnrichResponse:
    rows = [row.model_dump(exclude_unset=True) for row in payload.rows]
    return EnrichResponse(items=resolver.enrich_with_distances(rows, payload.user_id))
