from __future__ import annotations

from collections import Counter
from types import SimpleNamespace
from typing import Any

import pytest

COMMUNES = [
    {"nom_commune": "Paris", "code_postal": "75001", "lat": 48.8626, "lon": 2.3363},
    {"nom_commune": "Paris", "code_postal": "75015", "lat": 48.8412, "lon": 2.3003},
    {"nom_commune": "Parigné", "code_postal": "35133", "lat": 48.4275, "lon": -1.1947},
    {"nom_commune": "Pariset", "code_postal": "38170", "lat": 45.1689, "lon": 5.6386},
    {"nom_commune": "Lyon", "code_postal": "69001", "lat": 45.7676, "lon": 4.8345},
    {"nom_commune": "Marseille", "code_postal": "13001", "lat": 43.2999, "lon": 5.3841},
    {"nom_commune": "Bordeaux", "code_postal": "33000", "lat": 44.8378, "lon": -0.5792},
    {"nom_commune": "Comparis", "code_postal": "99999", "lat": 1.0, "lon": 1.0},
]


class FakeQuery:
    """Minimal stand-in for the supabase-py query builder."""

    def __init__(self, backend: "FakeSupabase", table: str) -> None:
        self.backend = backend
        self.table_name = table
        self.filters: list = []
        self.order_by: str | None = None
        self.row_limit: int | None = None
        self.upsert_payload: dict | None = None

    def select(self, *_columns: str, **_kwargs: Any) -> "FakeQuery":
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def ilike(self, column: str, pattern: str) -> "FakeQuery":
        prefix = pattern.rstrip("%").lower()
        self.filters.append(lambda row: str(row.get(column) or "").lower().startswith(prefix))
        return self

    def gte(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: str(row.get(column)) >= value)
        return self

    def lte(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: str(row.get(column)) <= value)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = column
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.row_limit = count
        return self

    def upsert(self, payload: dict, on_conflict: str | None = None) -> "FakeQuery":
        self.upsert_payload = payload
        return self

    def execute(self) -> SimpleNamespace:
        self.backend.calls[self.table_name] += 1
        if self.table_name in self.backend.failing_tables:
            raise RuntimeError(f"permission denied for table {self.table_name}")

        if self.upsert_payload is not None:
            self.backend.upserts.append((self.table_name, self.upsert_payload))
            return SimpleNamespace(data=[self.upsert_payload])

        rows = [row for row in self.backend.tables.get(self.table_name, []) if all(f(row) for f in self.filters)]
        if self.order_by:
            rows.sort(key=lambda row: row.get(self.order_by))
        if self.row_limit is not None:
            rows = rows[: self.row_limit]
        return SimpleNamespace(data=rows)


class FakeSupabase:
    def __init__(self, tables: dict[str, list[dict]] | None = None) -> None:
        self.tables = tables or {}
        self.calls: Counter[str] = Counter()
        self.failing_tables: set[str] = set()
        self.upserts: list[tuple[str, dict]] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase(
        {
            "communes_fr": [dict(row) for row in COMMUNES],
            "user_localisations": [
                {"user_id": "u-stored", "lat": 45.7640, "lon": 4.8357},
                {"user_id": "u-partial", "lat": None, "lon": None},
            ],
            "profiles": [
                {"id": "u-stored", "ville": "Bordeaux", "code_postal": "33000"},
                {"id": "u-profile", "ville": "Paris", "code_postal": "75001"},
                {"id": "u-partial", "ville": "Marseille", "code_postal": "13001"},
                {"id": "u-nocity", "ville": None, "code_postal": None},
            ],
        }
    )
