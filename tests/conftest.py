"""Shared fixtures for report tests."""

import pytest

from travel_report.records import ReportRecord


def make_record_dict(flights=3, tickets=2, transfers=2, currencies=("USD",), passport=True):
    """Build a record dict in the assembler's JSON shape."""
    data = {
        "reportPeriod": {"startDate": "2024-01-01", "endDate": "2024-12-31"},
        "employee": {
            "id": 7,
            "name": "Jane Doe",
            "department": "Operations",
            "position": "Site Engineer",
            "join_date": "2019-03-05",
        },
        "passport": {
            "passport_number": "P1234567",
            "nationality": "Kenya",
            "issue_date": "2018-06-01",
            "expiry_date": "2028-06-01",
            "status": "Active",
        } if passport else None,
        "flights": [
            {
                "departure_date": f"2024-02-{(i % 28) + 1:02d}",
                "flight_number": f"EK{100 + i}",
                "origin": "DXB",
                "destination": "JFK" if i % 2 == 0 else "LHR",
                "airline_name": "Emirates",
                "status": "Completed",
            }
            for i in range(flights)
        ],
        "tickets": [
            {
                "reference": f"TK-{i}",
                "issue_date": "2024-03-01",
                "departure_date": "2024-03-10",
                "origin": "DOH",
                "destination": "MNL",
                "airline_name": "Qatar Airways",
                "cost": 820,
                "currency": "USD",
            }
            for i in range(tickets)
        ],
        "transfers": [
            {
                "date": "2024-04-01",
                "amount": 500,
                "currency": currencies[i % len(currencies)],
                "beneficiary_name": "John Doe",
                "destination": "Kenya",
                "status": None,
            }
            for i in range(transfers)
        ],
        "generatedAt": "2024-12-31T09:30:00",
    }
    return data


@pytest.fixture
def record_factory():
    """Factory returning a ReportRecord with a derived summary."""
    def factory(**kwargs):
        return ReportRecord.from_dict(make_record_dict(**kwargs))
    return factory


@pytest.fixture
def record(record_factory):
    return record_factory()
