"""Request-scoped collaborators, overridable through ``app.dependency_overrides``."""

from __future__ import annotations

from fastapi import Depends
from supabase import Client

from ..data.locations_repository import LocationRepository
from ..db.supabase import get_supabase_client
from ..services.proximity import ProximityResolver


def get_client() -> Client | None:
    return get_supabase_client()


def get_location_repository(client: Client | None = Depends(get_client)) -> LocationRepository:
    return LocationRepository(client)


def get_proximity_resolver(
    repository: LocationRepository = Depends(get_location_repository),
) -> ProximityResolver:
    return ProximityResolver(repository)
