"""Accounting pivot endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from supabase import Client

from ...data.transactions_repository import load_transactions, transaction_from_row
from ...models.domain import PivotResult
from ...schemas.billing import PivotRequest, PivotResponse
from ...services.billing import PRODUCT_IDS, build_pivot, label_for, pivot_to_csv, pivot_to_xlsx
from ...services.billing.export import CSV_FILE_NAME, XLSX_FILE_NAME
from ..deps import get_client

router = APIRouter(prefix="/billing", tags=["billing"])

_EXPORT_MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def _pivot_from_request(payload: PivotRequest) -> PivotResult:
    transactions = [transaction_from_row(item.model_dump()) for item in payload.transactions]
    return build_pivot(transactions, payload.columns if payload.columns is not None else PRODUCT_IDS)


def _to_response(pivot: PivotResult) -> PivotResponse:
    return PivotResponse(
        columns=pivot.columns,
        labels={column: label_for(column) for column in pivot.columns},
        details=[asdict(row) for row in pivot.details],
        totals=asdict(pivot.totals),
    )


@router.post("/pivot", response_model=PivotResponse, status_code=status.HTTP_200_OK)
def pivot_transactions(payload: PivotRequest) -> PivotResponse:
    return _to_response(_pivot_from_request(payload))


@router.get("/pivot", response_model=PivotResponse, status_code=status.HTTP_200_OK)
def pivot_recorded_transactions(
    start: date | None = Query(default=None, description="First day (inclusive)"),
    end: date | None = Query(default=None, description="Last day (inclusive)"),
    client: Client | None = Depends(get_client),
) -> PivotResponse:
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase not configured. Set VIVAYA_SUPABASE_URL and VIVAYA_SUPABASE_KEY environment variables.",
        )
    if start and end and start > end:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start must not be after end.")
    return _to_response(build_pivot(load_transactions(client, start, end), PRODUCT_IDS))


@router.post("/pivot/export", status_code=status.HTTP_200_OK)
def export_pivot(
    payload: PivotRequest,
    format: str = Query(default="csv", description="csv or xlsx"),
) -> Response:
    export_format = format.strip().lower()
    if export_format not in _EXPORT_MEDIA_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported export format '{format}'. Use csv or xlsx.",
        )

    pivot = _pivot_from_request(payload)
    if export_format == "csv":
        content: bytes = pivot_to_csv(pivot).encode("utf-8-sig")
        file_name = CSV_FILE_NAME
    else:
        content = pivot_to_xlsx(pivot)
        file_name = XLSX_FILE_NAME

    return Response(
        content=content,
        media_type=_EXPORT_MEDIA_TYPES[export_format],
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )
