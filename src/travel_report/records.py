"""Report record types: the read-only input to the report paginator.

The record shape mirrors what the report-data assembler returns: camelCase
keys at the top level (``reportPeriod``, ``generatedAt``) and in the summary,
snake_case column names inside each row.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .formatting import to_number


@dataclass(frozen=True)
class Employee:
    """Employee basic information."""
    id: Any
    name: str
    department: Optional[str] = None
    position: Optional[str] = None
    join_date: Any = None


@dataclass(frozen=True)
class Passport:
    """Passport held by the employee."""
    passport_number: Optional[str] = None
    nationality: Optional[str] = None
    issue_date: Any = None
    expiry_date: Any = None
    status: Optional[str] = None


@dataclass(frozen=True)
class Flight:
    """A flight taken within the report period."""
    departure_date: Any = None
    flight_number: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    airline_name: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class Ticket:
    """A ticket issued within the report period."""
    reference: Optional[str] = None
    issue_date: Any = None
    departure_date: Any = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    airline_name: Optional[str] = None
    cost: Any = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class Transfer:
    """A money transfer made within the report period."""
    amount: Any = None
    currency: Optional[str] = None
    date: Any = None
    beneficiary_name: Optional[str] = None
    destination: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class ReportPeriod:
    start_date: Any
    end_date: Any


@dataclass(frozen=True)
class Summary:
    """Derived totals shown in the summary boxes."""
    total_flights: int = 0
    total_transfers: int = 0
    total_transfer_amount: float = 0.0
    currencies: Tuple[str, ...] = ()
    destinations: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReportRecord:
    """Aggregated snapshot of one employee's travel data for a date range."""
    employee: Employee
    report_period: ReportPeriod
    summary: Summary
    passport: Optional[Passport] = None
    flights: Tuple[Flight, ...] = ()
    tickets: Tuple[Ticket, ...] = ()
    transfers: Tuple[Transfer, ...] = ()
    generated_at: Any = field(default_factory=datetime.now)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportRecord":
        """Build a record from the assembler's JSON-compatible dict.

        A missing ``summary`` is derived from the flights and transfers.
        """
        flights = tuple(_build(Flight, row) for row in data.get("flights") or [])
        tickets = tuple(_build(Ticket, row) for row in data.get("tickets") or [])
        transfers = tuple(_build(Transfer, row) for row in data.get("transfers") or [])

        passport_data = data.get("passport")
        passport = _build(Passport, passport_data) if passport_data else None

        period = data.get("reportPeriod") or {}
        report_period = ReportPeriod(
            start_date=period.get("startDate"),
            end_date=period.get("endDate"),
        )

        summary_data = data.get("summary")
        if summary_data:
            summary = Summary(
                total_flights=int(summary_data.get("totalFlights") or len(flights)),
                total_transfers=int(summary_data.get("totalTransfers") or len(transfers)),
                total_transfer_amount=to_number(summary_data.get("totalTransferAmount")) or 0.0,
                currencies=tuple(summary_data.get("currencies") or ()),
                destinations=tuple(summary_data.get("destinations") or ()),
            )
        else:
            summary = build_summary(flights, transfers)

        return cls(
            employee=_build(Employee, data["employee"]),
            report_period=report_period,
            summary=summary,
            passport=passport,
            flights=flights,
            tickets=tickets,
            transfers=transfers,
            generated_at=data.get("generatedAt") or datetime.now(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the assembler's JSON-compatible shape."""
        return {
            "reportPeriod": {
                "startDate": _jsonable(self.report_period.start_date),
                "endDate": _jsonable(self.report_period.end_date),
            },
            "employee": _row_dict(self.employee),
            "passport": _row_dict(self.passport) if self.passport else None,
            "flights": [_row_dict(f) for f in self.flights],
            "tickets": [_row_dict(t) for t in self.tickets],
            "transfers": [_row_dict(t) for t in self.transfers],
            "summary": {
                "totalFlights": self.summary.total_flights,
                "totalTransfers": self.summary.total_transfers,
                "totalTransferAmount": self.summary.total_transfer_amount,
                "currencies": list(self.summary.currencies),
                "destinations": list(self.summary.destinations),
                "period": {
                    "startDate": _jsonable(self.report_period.start_date),
                    "endDate": _jsonable(self.report_period.end_date),
                },
            },
            "generatedAt": _jsonable(self.generated_at),
        }


def build_summary(
    flights: Iterable[Flight],
    transfers: Iterable[Transfer],
) -> Summary:
    """Count flights and transfers, total the amounts, collect currencies and destinations."""
    flights = list(flights)
    transfers = list(transfers)

    total_amount = 0.0
    currencies: List[str] = []
    for transfer in transfers:
        total_amount += to_number(transfer.amount) or 0.0
        if transfer.currency not in currencies:
            currencies.append(transfer.currency)

    destinations: List[str] = []
    for flight in flights:
        if flight.destination not in destinations:
            destinations.append(flight.destination)

    return Summary(
        total_flights=len(flights),
        total_transfers=len(transfers),
        total_transfer_amount=total_amount,
        currencies=tuple(c for c in currencies if c),
        destinations=tuple(d for d in destinations if d),
    )


def _build(cls, row: Dict[str, Any]):
    """Instantiate a row dataclass, ignoring columns it does not model."""
    known = cls.__dataclass_fields__
    return cls(**{k: v for k, v in row.items() if k in known})


def _row_dict(obj) -> Dict[str, Any]:
    return {name: _jsonable(getattr(obj, name)) for name in obj.__dataclass_fields__}


def _jsonable(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value
