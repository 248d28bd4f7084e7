"""Vivaya backend services: proximity, accounting pivot, tiers."""
