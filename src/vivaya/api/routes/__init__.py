"""Route group exports."""

from . import billing, health, proximity, tiers

__all__ = ["billing", "health", "proximity", "tiers"]
