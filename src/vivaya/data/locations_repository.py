"""Location lookups against the commune registry, user locations and profiles."""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client

from ..config import settings
from ..models.domain import CitySuggestion, Coordinate, LocationKey, Lookup


def _coerce_coordinate(row: Optional[dict]) -> Optional[Coordinate]:
    if not row:
        return None
    lat, lon = row.get("lat"), row.get("lon")
    if lat is None or lon is None:
        return None
    try:
        return Coordinate(lat=float(lat), lon=float(lon))
    except (TypeError, ValueError):
        return None


def _coerce_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _first_row(response: Any) -> Optional[dict]:
    data = getattr(response, "data", None) if response is not None else None
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None


class LocationRepository:
    """Read-only access to location data.

    Every method returns a ``Lookup`` instead of raising: callers decide whether a
    failure is worth surfacing. Query builders follow the supabase-py fluent API.
    """

    def __init__(self, client: Client | None) -> None:
        self.client = client

    def _unavailable(self) -> Lookup:
        return Lookup.backend_error("Supabase not configured")

    def coordinate_by_city_zip(
        self, city: Optional[str], postal_code: Optional[str]
    ) -> Lookup[Coordinate]:
        """Exact match on (nom_commune, code_postal)."""
        if not city or not postal_code:
            return Lookup.missing_input("city and postal code are both required")
        if self.client is None:
            return self._unavailable()

        try:
            response = (
                self.client.table(settings.communes_table)
                .select("lat, lon")
                .eq("nom_commune", city)
                .eq("code_postal", postal_code)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            return Lookup.backend_error(str(exc))

        coordinate = _coerce_coordinate(_first_row(response))
        if coordinate is None:
            return Lookup.not_found(f"no coordinates for {city} ({postal_code})")
        return Lookup.found(coordinate)

    def cities_by_prefix(
        self, partial: Optional[str], limit: int | None = None
    ) -> Lookup[list[CitySuggestion]]:
        """Communes whose name starts with ``partial`` (case-insensitive), alphabetical."""
        if not partial or len(partial) < settings.city_prefix_min_length:
            return Lookup.missing_input("prefix too short")
        if self.client is None:
            return self._unavailable()

        max_rows = limit or settings.city_suggestion_limit
        try:
            response = (
                self.client.table(settings.communes_table)
                .select("nom_commune, code_postal, lat, lon")
                .ilike("nom_commune", f"{partial}%")
                .order("nom_commune")
                .limit(max_rows)
                .execute()
            )
        except Exception as exc:
            return Lookup.backend_error(str(exc))

        suggestions: list[CitySuggestion] = []
        for row in (response.data or [])[:max_rows]:
            name = row.get("nom_commune")
            if not name:
                continue
            suggestions.append(
                CitySuggestion(
                    city=str(name),
                    postal_code=str(row.get("code_postal") or ""),
                    lat=_coerce_optional_float(row.get("lat")),
                    lon=_coerce_optional_float(row.get("lon")),
                )
            )
        return Lookup.found(suggestions)

    def stored_coordinate(self, user_id: Optional[str]) -> Lookup[Coordinate]:
        """Coordinates the user saved explicitly (self-read under RLS)."""
        if not user_id:
            return Lookup.missing_input("user id is required")
        if self.client is None:
            return self._unavailable()

        try:
            response = (
                self.client.table(settings.user_locations_table)
                .select("lat, lon")
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            return Lookup.backend_error(str(exc))

        coordinate = _coerce_coordinate(_first_row(response))
        if coordinate is None:
            return Lookup.not_found(f"no stored coordinates for user {user_id}")
        return Lookup.found(coordinate)

    def profile_location(self, user_id: Optional[str]) -> Lookup[LocationKey]:
        """City and postal code declared on the user's profile."""
        if not user_id:
            return Lookup.missing_input("user id is required")
        if self.client is None:
            return self._unavailable()

        try:
            response = (
                self.client.table(settings.profiles_table)
                .select("ville, code_postal")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            return Lookup.backend_error(str(exc))

        row = _first_row(response)
        if not row:
            return Lookup.not_found(f"no profile for user {user_id}")
        city = (row.get("ville") or "").strip()
        postal_code = str(row.get("code_postal") or "").strip()
        if not city or not postal_code:
            return Lookup.not_found(f"profile {user_id} has no city/postal code")
        return Lookup.found(LocationKey(city=city, postal_code=postal_code))

    def city_for_postal_code(self, postal_code: Optional[str]) -> Lookup[str]:
        if not postal_code:
            return Lookup.missing_input("postal code is required")
        if self.client is None:
            return self._unavailable()

        try:
            response = (
                self.client.table(settings.communes_table)
                .select("nom_commune")
                .eq("code_postal", postal_code)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            return Lookup.backend_error(str(exc))

        row = _first_row(response)
        if not row or not row.get("nom_commune"):
            return Lookup.not_found(f"unknown postal code {postal_code}")
        return Lookup.found(str(row["nom_commune"]))

    def save_user_location(self, user_id: Optional[str], postal_code: Optional[str]) -> bool:
        """Upsert the user's location from a postal code. Returns False on any failure."""
        if not user_id:
            return False
        city = self.city_for_postal_code(postal_code)
        if not city.ok:
            logging.warning(f"Cannot save location for user {user_id}: {city.message}")
            return False

        try:
            self.client.table(settings.user_locations_table).upsert(
                {
                    "user_id": user_id,
                    "code_postal": postal_code,
                    "ville": city.value,
                },
                on_conflict="user_id",
            ).execute()
        except Exception as exc:
            logging.error(f"Failed to save location for user {user_id}: {exc}")
            return False
        return True
