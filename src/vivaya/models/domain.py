"""Domain models for locations, accounting transactions and pivot reports."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in degrees."""

    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class LocationKey:
    """City name and postal code as stored in the commune registry."""

    city: str
    postal_code: str


@dataclass(frozen=True, slots=True)
class CitySuggestion:
    city: str
    postal_code: str
    lat: Optional[float]
    lon: Optional[float]


class LookupFailure(str, Enum):
    MISSING_INPUT = "missing_input"
    NOT_FOUND = "not_found"
    BACKEND_ERROR = "backend_error"


@dataclass(frozen=True, slots=True)
class Lookup(Generic[T]):
    """Outcome of a read against the data store: a value or a failure kind."""

    value: Optional[T] = None
    failure: Optional[LookupFailure] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def found(cls, value: T) -> "Lookup[T]":
        return cls(value=value)

    @classmethod
    def missing_input(cls, message: str | None = None) -> "Lookup[T]":
        return cls(failure=LookupFailure.MISSING_INPUT, message=message)

    @classmethod
    def not_found(cls, message: str | None = None) -> "Lookup[T]":
        return cls(failure=LookupFailure.NOT_FOUND, message=message)

    @classmethod
    def backend_error(cls, message: str | None = None) -> "Lookup[T]":
        return cls(failure=LookupFailure.BACKEND_ERROR, message=message)


@dataclass(frozen=True, slots=True)
class Transaction:
    """One accounting line (one purchase) from the bookkeeping table."""

    id: str
    recorded_on: Optional[date]
    email: str
    invoice_no: str
    sku: str
    qty: int = 0
    unit_price_ht_cents: int = 0
    vat_rate_bp: int = 0
    stripe_fee_cents: int = 0


@dataclass(frozen=True, slots=True)
class ProductDef:
    id: str
    label: str


@dataclass(slots=True)
class PivotRowDetail:
    key: str
    email: str
    invoice_no: str
    cells: dict[str, int]


@dataclass(slots=True)
class PivotTotals:
    count: dict[str, int]
    total_ttc: dict[str, int]
    total_tva: dict[str, int]
    stripe: dict[str, int]
    net: dict[str, int]


@dataclass(slots=True)
class PivotResult:
    columns: list[str]
    details: list[PivotRowDetail] = field(default_factory=list)
    totals: Optional[PivotTotals] = None
