"""Generate realistic synthetic report records for demos and tests."""

from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence
import numpy as np
from faker import Faker

from .records import (
    Employee, Flight, Passport, ReportPeriod, ReportRecord, Ticket, Transfer,
    build_summary,
)

# Constants for data generation
AIRPORTS = ["DXB", "DOH", "JFK", "LHR", "CDG", "MNL", "BOM", "KHI", "CAI", "IST", "FRA", "SIN"]
AIRLINES = {
    "EK": "Emirates",
    "QR": "Qatar Airways",
    "BA": "British Airways",
    "AF": "Air France",
    "PR": "Philippine Airlines",
    "TK": "Turkish Airlines",
    "LH": "Lufthansa",
}
FLIGHT_STATUSES = ["Scheduled", "Completed", "Cancelled", "Delayed"]
TRANSFER_STATUSES = ["Completed", "Pending", "Failed", None]
DEPARTMENTS = ["Operations", "Engineering", "Finance", "Logistics", "Human Resources"]
PASSPORT_STATUSES = ["Active", "Expired", "With Employee", "With Company"]


def _random_day(start: date, end: date, rng: np.random.Generator) -> date:
    span = max((end - start).days, 0)
    return start + timedelta(days=int(rng.integers(0, span + 1)))


def _route(rng: np.random.Generator) -> tuple:
    origin, destination = rng.choice(AIRPORTS, size=2, replace=False)
    return str(origin), str(destination)


def generate_flights(
    period_start: date,
    period_end: date,
    rng: np.random.Generator,
    num_rows: int = 10,
) -> List[Flight]:
    """Generate flights ordered by departure date."""
    flights = []
    for _ in range(num_rows):
        code = str(rng.choice(list(AIRLINES)))
        origin, destination = _route(rng)
        flights.append(Flight(
            departure_date=_random_day(period_start, period_end, rng).isoformat(),
            flight_number=f"{code}{rng.integers(100, 999)}",
            origin=origin,
            destination=destination,
            airline_name=AIRLINES[code],
            status=str(rng.choice(FLIGHT_STATUSES)),
        ))
    return sorted(flights, key=lambda f: f.departure_date)


def generate_tickets(
    period_start: date,
    period_end: date,
    rng: np.random.Generator,
    num_rows: int = 5,
) -> List[Ticket]:
    """Generate tickets ordered by issue date."""
    tickets = []
    for _ in range(num_rows):
        issue_date = _random_day(period_start, period_end, rng)
        origin, destination = _route(rng)
        tickets.append(Ticket(
            reference=f"TK-{rng.integers(100000, 999999)}",
            issue_date=issue_date.isoformat(),
            departure_date=(issue_date + timedelta(days=int(rng.integers(1, 30)))).isoformat(),
            origin=origin,
            destination=destination,
            airline_name=str(rng.choice(list(AIRLINES.values()))),
            cost=round(float(rng.uniform(150, 2500)), 2),
            currency="USD",
        ))
    return sorted(tickets, key=lambda t: t.issue_date)


def generate_transfers(
    period_start: date,
    period_end: date,
    rng: np.random.Generator,
    fake: Faker,
    currencies: Sequence[str] = ("USD",),
    num_rows: int = 5,
) -> List[Transfer]:
    """Generate money transfers ordered by date."""
    transfers = []
    for _ in range(num_rows):
        status = rng.choice(TRANSFER_STATUSES)
        transfers.append(Transfer(
            date=_random_day(period_start, period_end, rng).isoformat(),
            amount=round(float(rng.uniform(100, 5000)), 2),
            currency=str(rng.choice(list(currencies))),
            beneficiary_name=fake.name(),
            destination=fake.country(),
            status=str(status) if status is not None else None,
        ))
    return sorted(transfers, key=lambda t: t.date)


def generate_sample_record(
    rng: np.random.Generator,
    fake: Optional[Faker] = None,
    period_start: date = date(2025, 1, 1),
    period_end: date = date(2025, 12, 31),
    num_flights: int = 12,
    num_tickets: int = 6,
    num_transfers: int = 6,
    currencies: Sequence[str] = ("USD",),
    with_passport: bool = True,
) -> ReportRecord:
    """
    Generate a complete report record.

    The same rng seed yields the same record; Faker is seeded from the rng
    when not supplied.
    """
    if fake is None:
        fake = Faker()
        fake.seed_instance(int(rng.integers(0, 2**31)))

    join_date = period_start - timedelta(days=int(rng.integers(90, 3000)))
    employee = Employee(
        id=int(rng.integers(1, 5000)),
        name=fake.name(),
        department=str(rng.choice(DEPARTMENTS)),
        position=fake.job(),
        join_date=join_date.isoformat(),
    )

    passport = None
    if with_passport:
        issue_date = period_start - timedelta(days=int(rng.integers(30, 3000)))
        passport = Passport(
            passport_number=f"{fake.random_uppercase_letter()}{rng.integers(1000000, 9999999)}",
            nationality=fake.country(),
            issue_date=issue_date.isoformat(),
            expiry_date=(issue_date + timedelta(days=3650)).isoformat(),
            status=str(rng.choice(PASSPORT_STATUSES)),
        )

    flights = generate_flights(period_start, period_end, rng, num_flights)
    tickets = generate_tickets(period_start, period_end, rng, num_tickets)
    transfers = generate_transfers(
        period_start, period_end, rng, fake, currencies, num_transfers
    )

    return ReportRecord(
        employee=employee,
        report_period=ReportPeriod(
            start_date=period_start.isoformat(),
            end_date=period_end.isoformat(),
        ),
        summary=build_summary(flights, transfers),
        passport=passport,
        flights=tuple(flights),
        tickets=tuple(tickets),
        transfers=tuple(transfers),
        # Fixed timestamp keeps generation deterministic for a given seed
        generated_at=datetime.combine(period_end, datetime.min.time()),
    )
