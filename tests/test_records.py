"""Tests for record parsing, summary derivation and table specs."""

from conftest import make_record_dict

from travel_report.records import Flight, ReportRecord, Transfer, build_summary
from travel_report.table_templates import (
    SectionKind, TableSpec, flights_table, report_sections, tickets_table, transfers_table,
)


class TestFromDict:
    def test_parses_sections(self):
        record = ReportRecord.from_dict(make_record_dict(flights=3, tickets=2, transfers=1))
        assert record.employee.name == "Jane Doe"
        assert len(record.flights) == 3
        assert len(record.tickets) == 2
        assert len(record.transfers) == 1
        assert record.passport.passport_number == "P1234567"

    def test_missing_passport(self):
        record = ReportRecord.from_dict(make_record_dict(passport=False))
        assert record.passport is None

    def test_missing_sections_are_empty(self):
        data = make_record_dict()
        del data["tickets"]
        data["transfers"] = None
        record = ReportRecord.from_dict(data)
        assert record.tickets == ()
        assert record.transfers == ()

    def test_unknown_columns_ignored(self):
        data = make_record_dict(flights=1)
        data["flights"][0]["employee_id"] = 7
        record = ReportRecord.from_dict(data)
        assert record.flights[0].flight_number == "EK100"

    def test_summary_taken_from_input(self):
        data = make_record_dict()
        data["summary"] = {
            "totalFlights": 99,
            "totalTransfers": 4,
            "totalTransferAmount": "1234.5",
            "currencies": ["EUR"],
            "destinations": ["CDG"],
        }
        record = ReportRecord.from_dict(data)
        assert record.summary.total_flights == 99
        assert record.summary.total_transfer_amount == 1234.5
        assert record.summary.currencies == ("EUR",)

    def test_null_summary_counts_fall_back_to_rows(self):
        data = make_record_dict(flights=3, transfers=2)
        data["summary"] = {
            "totalFlights": None,
            "totalTransfers": None,
            "totalTransferAmount": None,
        }
        record = ReportRecord.from_dict(data)
        assert record.summary.total_flights == 3
        assert record.summary.total_transfers == 2
        assert record.summary.total_transfer_amount == 0.0

    def test_summary_derived_when_absent(self):
        record = ReportRecord.from_dict(make_record_dict(flights=4, transfers=3))
        assert record.summary.total_flights == 4
        assert record.summary.total_transfers == 3
        assert record.summary.total_transfer_amount == 1500.0
        assert record.summary.destinations == ("JFK", "LHR")

    def test_to_dict_keeps_assembler_shape(self):
        record = ReportRecord.from_dict(make_record_dict(flights=2))
        data = record.to_dict()
        assert data["reportPeriod"] == {"startDate": "2024-01-01", "endDate": "2024-12-31"}
        assert data["summary"]["totalFlights"] == 2
        assert data["flights"][1]["flight_number"] == "EK101"


class TestBuildSummary:
    def test_amounts_from_strings(self):
        summary = build_summary([], [Transfer(amount="100.25", currency="USD"),
                                     Transfer(amount=50, currency="USD")])
        assert summary.total_transfer_amount == 150.25
        assert summary.currencies == ("USD",)

    def test_currency_order_preserved(self):
        summary = build_summary([], [Transfer(amount=1, currency="EUR"),
                                     Transfer(amount=1, currency="USD"),
                                     Transfer(amount=1, currency="EUR")])
        assert summary.currencies == ("EUR", "USD")

    def test_negative_amounts_pass_through(self):
        summary = build_summary([], [Transfer(amount=-20, currency="USD")])
        assert summary.total_transfer_amount == -20.0

    def test_unique_destinations(self):
        flights = [Flight(destination="JFK"), Flight(destination="JFK"), Flight(destination="DOH")]
        assert build_summary(flights, []).destinations == ("JFK", "DOH")


class TestTableSpecs:
    def test_sections_in_order(self, record):
        kinds = [table.kind for table in report_sections(record)]
        assert kinds == [SectionKind.FLIGHTS, SectionKind.TICKETS, SectionKind.TRANSFERS]

    def test_rows_are_rectangular(self, record):
        for table in report_sections(record):
            for row in table.rows:
                assert len(row) == table.column_count

    def test_missing_values_render_placeholder(self):
        data = make_record_dict(flights=1)
        data["flights"][0]["airline_name"] = None
        data["flights"][0]["status"] = ""
        table = flights_table(ReportRecord.from_dict(data))
        assert table.rows[0][3] == "N/A"
        assert table.rows[0][4] == "N/A"

    def test_add_row_pads_short_rows(self):
        table = TableSpec(kind=SectionKind.FLIGHTS, title="T", headers=["A", "B", "C"])
        table.add_row(["x"])
        assert table.rows == [["x", "N/A", "N/A"]]

    def test_flight_row_formatting(self, record):
        row = flights_table(record).rows[0]
        assert row == ["February 1, 2024", "EK100", "DXB - JFK", "Emirates", "Completed"]

    def test_ticket_cost_two_decimals(self, record):
        assert tickets_table(record).rows[0][5] == "820.00 USD"

    def test_transfer_status_defaults_to_completed(self, record):
        row = transfers_table(record).rows[0]
        assert row[1] == "500.00 USD"
        assert row[4] == "Completed"

    def test_empty_ticket_message(self, record_factory):
        table = tickets_table(record_factory(tickets=0))
        assert table.is_empty
        assert "no ticket information" in table.empty_message
