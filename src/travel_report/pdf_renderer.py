"""PDF rendering using ReportLab."""

import asyncio
import io
import logging
import os
from pathlib import Path
from typing import Optional, Union

from reportlab.pdfgen import canvas

from .config import ReportConfig
from .layout_engine import FilledRect, Line, LayoutEngine, ReportLayout, TextRun
from .records import ReportRecord

logger = logging.getLogger(__name__)


class ReportWriteError(Exception):
    """Raised when a finished report cannot be written to its destination."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Failed to write report to {path}: {cause}")
        self.path = path
        self.cause = cause


def truncate_text(text: str, max_width: float, font_name: str, font_size: float, canvas_obj: canvas.Canvas) -> str:
    """Truncate text to fit within max_width, adding '...' if needed."""
    if not text:
        return text

    if canvas_obj.stringWidth(text, font_name, font_size) <= max_width:
        return text

    ellipsis = "..."
    available_width = max_width - canvas_obj.stringWidth(ellipsis, font_name, font_size)
    if available_width <= 0:
        return ellipsis[:1]

    for i in range(len(text) - 1, 0, -1):
        truncated = text[:i]
        if canvas_obj.stringWidth(truncated, font_name, font_size) <= available_width:
            return truncated + ellipsis

    return ellipsis


class PDFRenderer:
    """Draws a paginated report layout onto a ReportLab canvas."""

    def render(self, layout: ReportLayout) -> bytes:
        """Render every page of the layout and return the PDF bytes."""
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(layout.page_width, layout.page_height))
        c.setTitle(layout.title)
        c.setAuthor(layout.author)
        c.setSubject(layout.subject)

        for page in layout.pages:
            for instruction in page.instructions:
                if isinstance(instruction, TextRun):
                    self._draw_text(c, instruction, layout.page_height)
                elif isinstance(instruction, FilledRect):
                    self._draw_rect(c, instruction, layout.page_height)
                elif isinstance(instruction, Line):
                    self._draw_line(c, instruction, layout.page_height)
            c.showPage()

        c.save()
        return buffer.getvalue()

    def save(self, layout: ReportLayout, path: Union[str, Path]) -> Path:
        """
        Write the rendered report to path.

        The PDF is written to a sibling ".part" file and moved into place only
        once complete; on failure the partial file is removed and
        ReportWriteError is raised. There is no retry.
        """
        path = Path(path)
        data = self.render(layout)
        tmp_path = path.with_name(path.name + ".part")
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass
            logger.error("Failed to write report %s: %s", path, exc)
            raise ReportWriteError(path, exc) from exc

        logger.info("Wrote %d-page report to %s", layout.page_count, path)
        return path

    def _draw_text(self, c: canvas.Canvas, run: TextRun, page_height: float):
        text = run.text
        if run.max_width is not None:
            text = truncate_text(text, run.max_width, run.font, run.size, c)

        c.setFont(run.font, run.size)
        c.setFillColor(run.color)
        y = page_height - run.y
        if run.align == "center":
            c.drawCentredString(run.x, y, text)
        elif run.align == "right":
            c.drawRightString(run.x, y, text)
        else:
            c.drawString(run.x, y, text)

    def _draw_rect(self, c: canvas.Canvas, rect: FilledRect, page_height: float):
        c.setFillColor(rect.fill)
        # ReportLab rects are anchored at the bottom-left corner
        c.rect(rect.x, page_height - rect.y - rect.height, rect.width, rect.height,
               fill=True, stroke=False)

    def _draw_line(self, c: canvas.Canvas, line: Line, page_height: float):
        c.setStrokeColor(line.color)
        c.setLineWidth(line.width)
        c.line(line.x1, page_height - line.y1, line.x2, page_height - line.y2)


async def generate_report(
    record: ReportRecord,
    path: Union[str, Path],
    config: Optional[ReportConfig] = None,
) -> ReportLayout:
    """Lay out, render and write a report; returns the layout that was written."""
    layout = LayoutEngine(config).layout_report(record)
    await asyncio.to_thread(PDFRenderer().save, layout, path)
    return layout


async def generate_report_pdf(
    record: ReportRecord,
    path: Union[str, Path],
    config: Optional[ReportConfig] = None,
) -> Path:
    """
    Lay out, render and write a report for one record.

    Returns the output path; raises ReportWriteError if the file cannot be
    written.
    """
    await generate_report(record, path, config)
    return Path(path)
