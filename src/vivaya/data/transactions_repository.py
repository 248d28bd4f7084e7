"""Accounting transactions from Supabase or a CSV export."""

from __future__ import annotations

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional

from supabase import Client

from ..config import settings
from ..models.domain import Transaction


def _coerce_int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(float(str(value).replace(",", ".")))
    except ValueError:
        return default


def _coerce_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def transaction_from_row(row: Mapping[str, Any]) -> Transaction:
    """Build a Transaction from a table row; unusable numerics become zero."""
    return Transaction(
        id=str(row.get("id") or ""),
        recorded_on=_coerce_date(row.get("recorded_on")),
        email=str(row.get("email") or "").strip(),
        invoice_no=str(row.get("invoice_no") or "").strip(),
        sku=str(row.get("sku") or "").strip(),
        qty=_coerce_int(row.get("qty")),
        unit_price_ht_cents=_coerce_int(row.get("unit_price_ht_cents")),
        vat_rate_bp=_coerce_int(row.get("vat_rate_bp")),
        stripe_fee_cents=_coerce_int(row.get("stripe_fee_cents")),
    )


def load_transactions(
    client: Client | None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[Transaction]:
    """Transactions recorded between ``start`` and ``end`` (inclusive), oldest first.

    Returns an empty list when Supabase is not configured or the query fails.
    """
    if client is None:
        logging.warning("Supabase not configured - no transactions loaded")
        return []

    try:
        query = client.table(settings.accounting_table).select("*")
        if start:
            query = query.gte("recorded_on", start.isoformat())
        if end:
            query = query.lte("recorded_on", end.isoformat())
        response = query.order("recorded_on").execute()
    except Exception as exc:
        logging.error(f"Failed to load transactions: {exc}")
        return []

    return [transaction_from_row(row) for row in response.data or []]


def read_transactions_csv(path: Path, *, delimiter: str | None = None) -> list[Transaction]:
    """Read transactions from a CSV file whose header uses the table's column names."""
    if not path.exists():
        raise FileNotFoundError(f"Transactions file not found: {path}")

    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        sample = handle.read(2048)
        handle.seek(0)
        if delimiter is None:
            delimiter = ";" if sample.count(";") > sample.count(",") else ","
        reader = csv.DictReader(handle, delimiter=delimiter)
        if not reader.fieldnames:
            raise ValueError(f"Transactions file '{path}' is missing a header row.")
        return [transaction_from_row(row) for row in reader]
