"""Persistence helpers."""

from .filesystem import FileStorage

__all__ = ["FileStorage"]
