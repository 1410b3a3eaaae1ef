"""Table specifications for the three report sections."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .formatting import NOT_AVAILABLE, format_date, format_money
from .records import ReportRecord


class SectionKind(Enum):
    """Report sections, in the order they are laid out."""
    FLIGHTS = "flights"
    TICKETS = "tickets"
    TRANSFERS = "transfers"


@dataclass
class TableSpec:
    """A rectangular table: every row has exactly len(headers) cells."""
    kind: SectionKind
    title: str
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)
    empty_message: str = ""

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def add_row(self, cells: List[Any]) -> None:
        """Append a row, padding or cutting it to the column count."""
        cells = [_cell(c) for c in cells[:self.column_count]]
        cells += [NOT_AVAILABLE] * (self.column_count - len(cells))
        self.rows.append(cells)


def _cell(value: Any) -> str:
    if value is None:
        return NOT_AVAILABLE
    text = str(value)
    return text if text.strip() else NOT_AVAILABLE


def _route(origin: Optional[str], destination: Optional[str]) -> str:
    return f"{origin or NOT_AVAILABLE} - {destination or NOT_AVAILABLE}"


def flights_table(record: ReportRecord) -> TableSpec:
    table = TableSpec(
        kind=SectionKind.FLIGHTS,
        title="FLIGHTS",
        headers=["Date", "Flight No.", "Route", "Airline", "Status"],
        empty_message="There is no flight information for this period.",
    )
    for flight in record.flights:
        table.add_row([
            format_date(flight.departure_date),
            flight.flight_number,
            _route(flight.origin, flight.destination),
            flight.airline_name,
            flight.status,
        ])
    return table


def tickets_table(record: ReportRecord) -> TableSpec:
    table = TableSpec(
        kind=SectionKind.TICKETS,
        title="TICKETS",
        headers=["Reference", "Issue Date", "Route", "Departure", "Airline", "Cost"],
        empty_message="There is no ticket information for this period.",
    )
    for ticket in record.tickets:
        # Ticket costs default to USD when the currency column is empty
        cost = format_money(ticket.cost, ticket.currency or "USD") if ticket.cost else None
        table.add_row([
            ticket.reference,
            format_date(ticket.issue_date),
            _route(ticket.origin, ticket.destination),
            format_date(ticket.departure_date),
            ticket.airline_name,
            cost,
        ])
    return table


def transfers_table(record: ReportRecord) -> TableSpec:
    table = TableSpec(
        kind=SectionKind.TRANSFERS,
        title="MONEY TRANSFERS",
        headers=["Date", "Amount", "Beneficiary", "Destination", "Status"],
        empty_message="There is no money transfer information for this period.",
    )
    for transfer in record.transfers:
        table.add_row([
            format_date(transfer.date),
            format_money(transfer.amount, transfer.currency),
            transfer.beneficiary_name,
            transfer.destination,
            transfer.status or "Completed",
        ])
    return table


def report_sections(record: ReportRecord) -> List[TableSpec]:
    """The three section tables in layout order."""
    return [
        flights_table(record),
        tickets_table(record),
        transfers_table(record),
    ]
