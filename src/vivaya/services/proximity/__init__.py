"""Proximity service exports."""

from .service import ProximityResolver

__all__ = ["ProximityResolver"]
