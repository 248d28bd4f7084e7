"""Accounting service exports."""

from .export import pivot_to_csv, pivot_to_xlsx, save_pivot_report
from .format import cents_fr, format_eur
from .pivot import build_pivot
from .products import PRODUCT_IDS, PRODUCT_REGISTRY, label_for

__all__ = [
    "build_pivot",
    "pivot_to_csv",
    "pivot_to_xlsx",
    "save_pivot_report",
    "format_eur",
    "cents_fr",
    "label_for",
    "PRODUCT_IDS",
    "PRODUCT_REGISTRY",
]
