"""Tests for PDF rendering and persisting reports."""

import asyncio
import io
import re

import pytest
from reportlab.pdfgen import canvas

from travel_report.layout_engine import layout_report
from travel_report.pdf_renderer import (
    PDFRenderer, ReportWriteError, generate_report, generate_report_pdf, truncate_text,
)

PAGE_OBJECT = re.compile(rb"/Type /Page[^s]")


class TestTruncateText:
    def setup_method(self):
        self.canvas = canvas.Canvas(io.BytesIO())

    def test_short_text_unchanged(self):
        assert truncate_text("EK100", 100, "Helvetica", 8, self.canvas) == "EK100"

    def test_long_text_gets_ellipsis(self):
        text = "An extremely long beneficiary name that will not fit"
        result = truncate_text(text, 60, "Helvetica", 8, self.canvas)
        assert result.endswith("...")
        assert self.canvas.stringWidth(result, "Helvetica", 8) <= 60

    def test_empty_text(self):
        assert truncate_text("", 10, "Helvetica", 8, self.canvas) == ""


class TestRender:
    def test_renders_pdf_bytes(self, record):
        data = PDFRenderer().render(layout_report(record))
        assert data.startswith(b"%PDF")

    def test_pdf_page_count_matches_layout(self, record_factory):
        layout = layout_report(record_factory(flights=120))
        data = PDFRenderer().render(layout)
        assert len(PAGE_OBJECT.findall(data)) == layout.page_count


class TestSave:
    def test_writes_file(self, record, tmp_path):
        path = tmp_path / "report.pdf"
        result = PDFRenderer().save(layout_report(record), path)
        assert result == path
        assert path.read_bytes().startswith(b"%PDF")
        assert not (tmp_path / "report.pdf.part").exists()

    def test_missing_directory_raises_typed_error(self, record, tmp_path):
        path = tmp_path / "missing" / "report.pdf"
        with pytest.raises(ReportWriteError) as excinfo:
            PDFRenderer().save(layout_report(record), path)
        assert excinfo.value.path == path
        assert isinstance(excinfo.value.cause, OSError)
        assert not path.exists()

    def test_overwrites_existing_file(self, record, tmp_path):
        path = tmp_path / "report.pdf"
        path.write_bytes(b"old")
        PDFRenderer().save(layout_report(record), path)
        assert path.read_bytes().startswith(b"%PDF")


class TestGenerateReportPdf:
    def test_resolves_to_output_path(self, record, tmp_path):
        path = tmp_path / "async.pdf"
        result = asyncio.run(generate_report_pdf(record, path))
        assert result == path
        assert path.exists()

    def test_failure_is_raised(self, record, tmp_path):
        with pytest.raises(ReportWriteError):
            asyncio.run(generate_report_pdf(record, tmp_path / "nope" / "r.pdf"))

    def test_generate_report_returns_written_layout(self, record_factory, tmp_path):
        path = tmp_path / "layout.pdf"
        layout = asyncio.run(generate_report(record_factory(flights=70), path))
        assert layout.row_count("flights") == 70
        assert layout.page_count > 1
        assert path.read_bytes().startswith(b"%PDF")
