"""CSV/XLSX renderings of the accounting pivot."""

from __future__ import annotations

import csv
from dataclasses import asdict
from io import BytesIO, StringIO
from pathlib import Path
from typing import Callable

from openpyxl import Workbook
from openpyxl.styles import Font

from ...config import settings
from ...models.domain import PivotResult
from ...persistence.filesystem import FileStorage
from .format import cents_fr
from .products import PRODUCT_REGISTRY, ProductRegistry, label_for

CSV_FILE_NAME = "comptabilite_recap.csv"
XLSX_FILE_NAME = "comptabilite_recap.xlsx"


def _totals_rows(pivot: PivotResult, money: Callable[[int], object]) -> list[tuple[str, list[object]]]:
    totals = pivot.totals
    columns = pivot.columns
    rows: list[tuple[str, list[object]]] = [
        ("Nb ventes", [totals.count.get(column, 0) for column in columns]),
        ("Total TTC", [money(totals.total_ttc.get(column, 0)) for column in columns]),
        ("Total TVA", [money(totals.total_tva.get(column, 0)) for column in columns]),
    ]
    if any(totals.stripe.get(column, 0) > 0 for column in columns):
        rows.append(("Taxe Stripe", [money(totals.stripe.get(column, 0)) for column in columns]))
    rows.append(("Résultat net", [money(totals.net.get(column, 0)) for column in columns]))
    return rows


def pivot_to_csv(
    pivot: PivotResult,
    registry: ProductRegistry = PRODUCT_REGISTRY,
    *,
    separator: str | None = None,
) -> str:
    """Detail block, blank line, totals block. Amounts use a decimal comma."""

    buffer = StringIO()
    writer = csv.writer(buffer, delimiter=separator or settings.export_separator, lineterminator="\n")
    writer.writerow(["Email", "Facture", *(label_for(column, registry) for column in pivot.columns)])
    for row in pivot.details:
        writer.writerow([row.email, row.invoice_no, *(row.cells.get(column, 0) for column in pivot.columns)])

    writer.writerow([])
    for label, values in _totals_rows(pivot, cents_fr):
        writer.writerow([label, *values])
    return buffer.getvalue()


def pivot_to_xlsx(pivot: PivotResult, registry: ProductRegistry = PRODUCT_REGISTRY) -> bytes:
    """Single-sheet workbook; amounts are euros with two decimals."""

    wb = Workbook()
    sheet = wb.active
    sheet.title = "Récapitulatif"

    sheet.append(["Email", "Facture", *(label_for(column, registry) for column in pivot.columns)])
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    for row in pivot.details:
        sheet.append([row.email, row.invoice_no, *(row.cells.get(column, 0) for column in pivot.columns)])

    # one blank row between details and totals
    row_index = sheet.max_row + 2
    for label, values in _totals_rows(pivot, lambda cents: cents / 100):
        sheet.cell(row=row_index, column=1, value=label).font = Font(bold=True)
        for offset, value in enumerate(values):
            cell = sheet.cell(row=row_index, column=3 + offset, value=value)
            if label != "Nb ventes":
                cell.number_format = "#,##0.00"
        row_index += 1

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def save_pivot_report(pivot: PivotResult, storage: FileStorage | None = None) -> Path:
    """Write both renderings to a fresh run directory and return it."""

    storage = storage or FileStorage()
    run_dir = storage.make_run_directory(prefix="comptabilite")
    storage.write_csv(run_dir / CSV_FILE_NAME, pivot_to_csv(pivot))
    storage.write_bytes(run_dir / XLSX_FILE_NAME, pivot_to_xlsx(pivot))
    storage.write_json(
        run_dir / "summary.json",
        {
            "columns": pivot.columns,
            "transactions": len(pivot.details),
            "totals": asdict(pivot.totals),
        },
    )
    return run_dir
