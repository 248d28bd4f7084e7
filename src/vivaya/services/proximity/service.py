"""Distance between members, resolved from stored coordinates or city/postal code."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ...data.locations_repository import LocationRepository
from ...models.domain import CitySuggestion, Coordinate, LookupFailure
from .. import geospatial


def _row_city(row: Mapping[str, Any]) -> Optional[str]:
    value = row.get("ville") or row.get("city")
    return value if value else None


def _row_postal_code(row: Mapping[str, Any]) -> Optional[str]:
    value = row.get("code_postal") or row.get("postal_code")
    return str(value) if value else None


class ProximityResolver:
    """Resolve coordinates and "N km away" figures without exposing peers' lat/lon.

    The repository is injected so tests can substitute a fake backend.
    """

    def __init__(self, repository: LocationRepository) -> None:
        self.repository = repository

    def resolve_coordinate_by_city(
        self, city: Optional[str], postal_code: Optional[str]
    ) -> Optional[Coordinate]:
        lookup = self.repository.coordinate_by_city_zip(city, postal_code)
        if lookup.ok:
            return lookup.value
        if lookup.failure is LookupFailure.BACKEND_ERROR:
            logging.warning(f"Commune lookup failed for {city!r} ({postal_code!r}): {lookup.message}")
        elif lookup.failure is LookupFailure.NOT_FOUND:
            logging.debug(f"Coordinates not found for {city!r} ({postal_code!r})")
        return None

    def resolve_my_coordinate(self, user_id: Optional[str]) -> Optional[Coordinate]:
        """Stored coordinates first, then the profile's city and postal code."""
        stored = self.repository.stored_coordinate(user_id)
        if stored.ok:
            return stored.value
        if stored.failure is LookupFailure.BACKEND_ERROR:
            logging.warning(f"Stored location lookup failed for user {user_id}: {stored.message}")

        profile = self.repository.profile_location(user_id)
        if not profile.ok:
            if profile.failure is LookupFailure.BACKEND_ERROR:
                logging.warning(f"Profile location fallback failed for user {user_id}: {profile.message}")
            return None
        return self.resolve_coordinate_by_city(profile.value.city, profile.value.postal_code)

    @staticmethod
    def distance_km(a: Optional[Coordinate], b: Optional[Coordinate]) -> Optional[float]:
        return geospatial.distance_km(a, b)

    def distance_from_me_to_city(
        self, user_id: Optional[str], city: Optional[str], postal_code: Optional[str]
    ) -> Optional[float]:
        me = self.resolve_my_coordinate(user_id)
        other = self.resolve_coordinate_by_city(city, postal_code)
        return self.distance_km(me, other)

    def enrich_with_distances(
        self, rows: Iterable[Mapping[str, Any]], my_user_id: Optional[str]
    ) -> list[dict]:
        """Copy each row and attach ``distance_km`` relative to ``my_user_id``.

        Peer coordinates are memoized per literal (city, postal code) pair for the
        duration of the call only.
        """
        me = self.resolve_my_coordinate(my_user_id)
        memo: dict[tuple[str, str], Optional[Coordinate]] = {}
        enriched: list[dict] = []

        for row in rows:
            city = _row_city(row)
            postal_code = _row_postal_code(row)
            key = (city or "", postal_code or "")
            if key not in memo:
                memo[key] = self.resolve_coordinate_by_city(city, postal_code)
            enriched.append({**row, "distance_km": self.distance_km(me, memo[key])})
        return enriched

    def search_cities_by_prefix(self, partial: Optional[str]) -> list[CitySuggestion]:
        lookup = self.repository.cities_by_prefix(partial)
        if lookup.ok:
            return lookup.value or []
        if lookup.failure is LookupFailure.BACKEND_ERROR:
            logging.error(f"City search failed for {partial!r}: {lookup.message}")
        return []
