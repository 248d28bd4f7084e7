"""Accounting API schemas."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class TransactionModel(BaseModel):
    id: str = ""
    recorded_on: Optional[date] = None
    email: str
    invoice_no: str
    sku: str
    qty: Optional[int] = None
    unit_price_ht_cents: Optional[int] = None
    vat_rate_bp: Optional[int] = None
    stripe_fee_cents: Optional[int] = None


class PivotRequest(BaseModel):
    transactions: List[TransactionModel] = Field(default_factory=list)
    columns: Optional[List[str]] = Field(
        default=None,
        description="Product ids to pivot on; defaults to the product registry order.",
    )


class PivotRowModel(BaseModel):
    key: str
    email: str
    invoice_no: str
    cells: dict[str, int]


class PivotTotalsModel(BaseModel):
    count: dict[str, int]
    total_ttc: dict[str, int]
    total_tva: dict[str, int]
    stripe: dict[str, int]
    net: dict[str, int]


class PivotResponse(BaseModel):
    columns: List[str]
    labels: dict[str, str]
    details: List[PivotRowModel]
    totals: PivotTotalsModel
