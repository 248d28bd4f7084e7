"""Accounting pivot: one detail row per purchase plus per-product column totals."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from ...models.domain import PivotResult, PivotRowDetail, PivotTotals, Transaction


def _non_negative_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return number if number > 0 else 0


def compute_ht(tx: Transaction) -> int:
    return _non_negative_int(tx.qty) * _non_negative_int(tx.unit_price_ht_cents)


def compute_tva(ht: int, vat_rate_bp: Any) -> int:
    # half-up to the nearest cent on exact integers
    return (ht * _non_negative_int(vat_rate_bp) + 5000) // 10000


def compute_ttc(ht: int, tva: int) -> int:
    return ht + tva


def compute_net(ht: int, stripe_fee_cents: Any) -> int:
    """Revenue after processor fees; equals TTC - TVA - Stripe."""
    return ht - _non_negative_int(stripe_fee_cents)


def _zeroed(columns: Sequence[str]) -> dict[str, int]:
    return {column: 0 for column in columns}


def empty_totals(columns: Sequence[str]) -> PivotTotals:
    return PivotTotals(
        count=_zeroed(columns),
        total_ttc=_zeroed(columns),
        total_tva=_zeroed(columns),
        stripe=_zeroed(columns),
        net=_zeroed(columns),
    )


def build_pivot(transactions: Iterable[Transaction], columns: Sequence[str]) -> PivotResult:
    """Build the pivot for ``columns`` (product ids, in display order).

    Transactions whose SKU is not a column still get a detail row (all cells 0)
    but do not contribute to any total. Detail keys are not deduplicated.
    """
    column_list = list(columns)
    known = set(column_list)
    totals = empty_totals(column_list)
    details: list[PivotRowDetail] = []

    for tx in transactions:
        ht = compute_ht(tx)
        tva = compute_tva(ht, tx.vat_rate_bp)
        ttc = compute_ttc(ht, tva)
        net = compute_net(ht, tx.stripe_fee_cents)

        row = PivotRowDetail(
            key=f"{tx.email} — {tx.invoice_no}",
            email=tx.email,
            invoice_no=tx.invoice_no,
            cells=_zeroed(column_list),
        )

        if tx.sku in known:
            row.cells[tx.sku] = 1
            totals.count[tx.sku] += 1 if _non_negative_int(tx.qty) > 0 else 0
            totals.total_tva[tx.sku] += tva
            totals.total_ttc[tx.sku] += ttc
            totals.stripe[tx.sku] += _non_negative_int(tx.stripe_fee_cents)
            totals.net[tx.sku] += net

        details.append(row)

    return PivotResult(columns=column_list, details=details, totals=totals)
