"""Tests for JSON export and page manifests."""

import json

import pytest

from travel_report.layout_engine import layout_report
from travel_report.pdf_renderer import ReportWriteError
from travel_report.report_writer import write_layout_manifest, write_report_json


class TestLayoutManifest:
    def test_one_line_per_page(self, record_factory, tmp_path):
        layout = layout_report(record_factory(flights=120))
        path = tmp_path / "manifest.jsonl"
        write_layout_manifest(layout, path)

        lines = path.read_text().splitlines()
        assert len(lines) == layout.page_count
        entries = [json.loads(line) for line in lines]
        assert entries[0]["page_number"] == 1
        assert entries[-1]["total_pages"] == layout.page_count
        assert sum(e["rows"]["flights"] for e in entries) == 120

    def test_header_rows_counted(self, record, tmp_path):
        entries = write_layout_manifest(layout_report(record), tmp_path / "m.jsonl")
        assert entries[0]["header_rows"] == {"flights": 1, "tickets": 1, "transfers": 1}


class TestReportJson:
    def test_writes_record_with_summary(self, record, tmp_path):
        path = write_report_json(record, tmp_path / "out" / "report.json")
        data = json.loads(path.read_text())
        assert data["employee"]["name"] == "Jane Doe"
        assert data["summary"]["totalTransferAmount"] == 1000.0
        assert data["summary"]["currencies"] == ["USD"]

    def test_unwritable_path_raises_typed_error(self, record, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(ReportWriteError) as excinfo:
            write_report_json(record, blocker / "report.json")
        assert excinfo.value.path == blocker / "report.json"


class TestManifestErrors:
    def test_unwritable_manifest_raises_typed_error(self, record, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(ReportWriteError):
            write_layout_manifest(layout_report(record), blocker / "pages.jsonl")
