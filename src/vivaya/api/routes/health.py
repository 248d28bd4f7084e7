"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from supabase import Client

from ...config import settings
from ..deps import get_client

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(client: Client | None = Depends(get_client)) -> dict:
    """Check that Supabase is configured and the commune registry is readable."""
    if client is None:
        return {
            "configured": False,
            "message": "Supabase not configured. Set VIVAYA_SUPABASE_URL and VIVAYA_SUPABASE_KEY environment variables.",
        }

    try:
        client.table(settings.communes_table).select("code_postal").limit(1).execute()
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {
        "configured": True,
        "connected": True,
        "message": f"Database connected. Table '{settings.communes_table}' is readable.",
    }
