from datetime import date
from pathlib import Path

import pytest

from vivaya.data.transactions_repository import (
    load_transactions,
    read_transactions_csv,
    transaction_from_row,
)

from conftest import FakeSupabase


def test_transaction_from_row_coerces_numbers():
    tx = transaction_from_row(
        {
            "id": 7,
            "recorded_on": "2025-11-02T10:00:00Z",
            "email": " alice@example.com ",
            "invoice_no": "F-7",
            "sku": "COEUR_UNITE",
            "qty": None,
            "unit_price_ht_cents": "299",
            "vat_rate_bp": "n/a",
            "stripe_fee_cents": "",
        }
    )
    assert tx.id == "7"
    assert tx.recorded_on == date(2025, 11, 2)
    assert tx.email == "alice@example.com"
    assert tx.qty == 0
    assert tx.unit_price_ht_cents == 299
    assert tx.vat_rate_bp == 0
    assert tx.stripe_fee_cents == 0


def test_load_transactions_filters_by_date():
    client = FakeSupabase(
        {
            "table_comptabilite": [
                {"id": "2", "recorded_on": "2025-11-15", "email": "b@x", "invoice_no": "F-2", "sku": "COEUR_PACK"},
                {"id": "1", "recorded_on": "2025-11-01", "email": "a@x", "invoice_no": "F-1", "sku": "COEUR_UNITE"},
                {"id": "3", "recorded_on": "2025-12-01", "email": "c@x", "invoice_no": "F-3", "sku": "COEUR_UNITE"},
            ]
        }
    )
    transactions = load_transactions(client, date(2025, 11, 1), date(2025, 11, 30))
    assert [tx.id for tx in transactions] == ["1", "2"]


def test_load_transactions_degrades_to_empty():
    assert load_transactions(None) == []
    client = FakeSupabase()
    client.failing_tables.add("table_comptabilite")
    assert load_transactions(client) == []


def test_read_transactions_csv_detects_separator(tmp_path: Path):
    path = tmp_path / "compta.csv"
    path.write_text(
        "id;recorded_on;email;invoice_no;sku;qty;unit_price_ht_cents;vat_rate_bp;stripe_fee_cents\n"
        "1;2025-11-02;alice@example.com;F-1;ABO_MOIS_ESSENTIEL;1;1000;2000;50\n",
        encoding="utf-8",
    )
    [tx] = read_transactions_csv(path)
    assert tx.sku == "ABO_MOIS_ESSENTIEL"
    assert tx.unit_price_ht_cents == 1000
    assert tx.stripe_fee_cents == 50


def test_read_transactions_csv_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_transactions_csv(tmp_path / "missing.csv")
