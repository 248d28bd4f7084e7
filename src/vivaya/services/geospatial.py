"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Optional

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push near-antipodal points just above 1
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Optional[Coordinate], b: Optional[Coordinate]) -> Optional[float]:
    """Great-circle distance in km, or None when either side is unknown."""

    if a is None or b is None:
        return None
    try:
        distance = haversine_km(a.lat, a.lon, b.lat, b.lon)
    except (TypeError, ValueError):
        return None
    return distance if math.isfinite(distance) else None
