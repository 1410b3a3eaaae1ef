"""Layout engine for paginating a report record into positioned draw instructions.

Coordinates here are top-down: y grows from the top edge of the page toward
the bottom. The PDF renderer flips them into ReportLab's bottom-up space.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from reportlab.lib.colors import Color

from .config import ReportConfig
from .formatting import format_date, summary_amount_display
from .records import ReportRecord
from .styles import ReportStyle, get_bold_font, get_report_style
from .table_templates import TableSpec, report_sections

logger = logging.getLogger(__name__)


@dataclass
class PageLayout:
    """Defines the geometry of every page."""
    page_width: float
    page_height: float
    margin_left: float
    margin_right: float
    margin_top: float
    margin_bottom: float

    @classmethod
    def from_config(cls, config: ReportConfig) -> "PageLayout":
        return cls(
            page_width=config.page_width,
            page_height=config.page_height,
            margin_left=config.margin,
            margin_right=config.margin,
            margin_top=config.margin,
            margin_bottom=config.margin,
        )

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_start_x(self) -> float:
        return self.margin_left

    @property
    def content_start_y(self) -> float:
        return self.margin_top

    @property
    def bottom_limit(self) -> float:
        """Lowest y that content may reach before a page break."""
        return self.page_height - self.margin_bottom


@dataclass
class LayoutCursor:
    """Where the next element will be drawn."""
    x: float
    y: float
    page_index: int = 0


@dataclass
class TextRun:
    """A single line of text; y is the baseline."""
    x: float
    y: float
    text: str
    font: str
    size: float
    color: Color
    align: str = "left"  # "left", "center", "right" relative to x
    max_width: Optional[float] = None
    tag: str = ""


@dataclass
class FilledRect:
    """A filled rectangle; (x, y) is its top-left corner."""
    x: float
    y: float
    width: float
    height: float
    fill: Color
    tag: str = ""


@dataclass
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 0.5
    tag: str = ""


DrawInstruction = Union[TextRun, FilledRect, Line]


def _tag_matches(tag: str, prefix: str) -> bool:
    return tag == prefix or tag.startswith(prefix + ":")


@dataclass
class Page:
    """One output page and its draw instructions, in drawing order."""
    index: int
    instructions: List[DrawInstruction] = field(default_factory=list)

    def tagged(self, prefix: str) -> List[DrawInstruction]:
        """Instructions whose tag is prefix or starts with "prefix:"."""
        return [i for i in self.instructions if _tag_matches(i.tag, prefix)]

    def texts(self) -> List[str]:
        return [i.text for i in self.instructions if isinstance(i, TextRun)]

    def row_count(self, section: str) -> int:
        """Number of data rows of a section drawn on this page."""
        return sum(
            1 for i in self.instructions
            if isinstance(i, FilledRect) and i.tag.startswith(f"{section}:row:")
        )

    def header_count(self, section: str) -> int:
        """Number of header rows of a section drawn on this page."""
        return sum(
            1 for i in self.instructions
            if isinstance(i, FilledRect) and i.tag == f"{section}:header"
        )


@dataclass
class ReportLayout:
    """A fully paginated report, ready for rendering."""
    title: str
    pages: List[Page]
    author: str = ""
    subject: str = "Employee Travel Report"
    page_width: float = 0.0
    page_height: float = 0.0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def row_count(self, section: str) -> int:
        return sum(page.row_count(section) for page in self.pages)


class LayoutEngine:
    """Lays out a report record into pages of draw instructions."""

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        style: Optional[ReportStyle] = None,
    ):
        self.config = config or ReportConfig()
        self.layout = PageLayout.from_config(self.config)
        self.style = style or get_report_style(self.config.style)
        self.pages: List[Page] = []
        self.cursor = LayoutCursor(self.layout.content_start_x, self.layout.content_start_y)
        self.reset()

    def reset(self):
        """Reset layout state for a new document."""
        self.pages = [Page(index=0)]
        self.cursor = LayoutCursor(
            x=self.layout.content_start_x,
            y=self.layout.content_start_y,
            page_index=0,
        )

    @property
    def current_page(self) -> Page:
        return self.pages[self.cursor.page_index]

    @property
    def remaining_height(self) -> float:
        return self.layout.bottom_limit - self.cursor.y

    def fits(self, height: float) -> bool:
        """Check if content of given height fits on the current page."""
        return self.cursor.y + height <= self.layout.bottom_limit

    def start_new_page(self) -> int:
        """Move to a new page and return the new page index."""
        page = Page(index=len(self.pages))
        self.pages.append(page)
        self.cursor = LayoutCursor(
            x=self.layout.content_start_x,
            y=self.layout.content_start_y,
            page_index=page.index,
        )
        logger.debug("Page break: now on page %d", page.index + 1)
        return page.index

    def compute_column_widths(
        self,
        column_count: int,
        total_width: Optional[float] = None,
    ) -> List[float]:
        """Equal column widths that partition total_width exactly."""
        if total_width is None:
            total_width = self.layout.content_width
        if column_count <= 0:
            return []

        base = total_width / column_count
        widths = [base] * (column_count - 1)
        # Last column absorbs floating point remainder
        widths.append(total_width - sum(widths))
        return widths

    def layout_report(self, record: ReportRecord) -> ReportLayout:
        """Lay out a complete report, returning every page."""
        self.reset()

        self._layout_header(record)
        self._layout_people(record)
        self._layout_summary(record)

        for table in report_sections(record):
            self._layout_section(table)

        self._stamp_footers(record)

        logger.debug(
            "Laid out report for %s: %d page(s)",
            record.employee.name, len(self.pages),
        )
        return ReportLayout(
            title=f"Employee Report - {record.employee.name}",
            pages=self.pages,
            author=self.config.author,
            page_width=self.layout.page_width,
            page_height=self.layout.page_height,
        )

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _emit(self, instruction: DrawInstruction) -> None:
        self.current_page.instructions.append(instruction)

    def _write_line(
        self,
        text: str,
        size: float,
        color: Color,
        bold: bool = False,
        align: str = "left",
        x: Optional[float] = None,
        max_width: Optional[float] = None,
        line_height: Optional[float] = None,
        tag: str = "",
    ) -> None:
        """Draw one line of text at the cursor and move the cursor below it."""
        font = get_bold_font(self.style.font_family) if bold else self.style.font_family
        if x is None:
            x = self.cursor.x
        self._emit(TextRun(
            x=x,
            y=self.cursor.y + size,
            text=text,
            font=font,
            size=size,
            color=color,
            align=align,
            max_width=max_width,
            tag=tag,
        ))
        self.cursor.y += line_height if line_height is not None else size * 1.4

    # ------------------------------------------------------------------
    # Page 1 blocks
    # ------------------------------------------------------------------

    def _layout_header(self, record: ReportRecord) -> None:
        style = self.style
        center_x = self.layout.page_width / 2

        self._write_line(
            self.config.organization, style.title_font_size, style.accent_color,
            bold=True, align="center", x=center_x, tag="header:title",
        )
        self._write_line(
            self.config.subtitle, style.subtitle_font_size, style.text_color,
            bold=True, align="center", x=center_x, tag="header:subtitle",
        )

        rule_y = self.cursor.y + 4
        self._emit(Line(
            x1=self.layout.content_start_x,
            y1=rule_y,
            x2=self.layout.content_start_x + self.layout.content_width,
            y2=rule_y,
            color=style.rule_color,
            width=1.0,
            tag="header:rule",
        ))
        self.cursor.y = rule_y + 12

        self._write_line(
            f"{record.employee.name} - Travel Report",
            style.heading_font_size + 2, style.accent_color,
            bold=True, align="center", x=center_x,
            max_width=self.layout.content_width, tag="header:employee",
        )
        period = record.report_period
        self._write_line(
            f"Report Period: {format_date(period.start_date)} to {format_date(period.end_date)}",
            style.body_font_size, style.muted_color,
            align="center", x=center_x, tag="header:period",
        )
        self.cursor.y += self.config.section_gap

    def _layout_column(
        self,
        x: float,
        top: float,
        width: float,
        heading: str,
        lines: Sequence[Tuple[str, str]],
        tag: str,
    ) -> float:
        """Draw a heading plus label lines starting at (x, top); return the end y."""
        style = self.style
        self.cursor.x = x
        self.cursor.y = top
        self._write_line(
            heading, style.heading_font_size, style.accent_color,
            bold=True, max_width=width, line_height=style.heading_font_size + 8,
            tag=f"{tag}:heading",
        )
        for label, value in lines:
            self._write_line(
                f"{label}: {value}", style.body_font_size, style.text_color,
                max_width=width, line_height=style.line_height, tag=tag,
            )
        return self.cursor.y

    def _layout_people(self, record: ReportRecord) -> None:
        """Employee info (left) and passport info (right) from the same y."""
        top = self.cursor.y
        half = self.layout.content_width / 2
        column_width = half - self.config.column_gap / 2
        left_x = self.layout.content_start_x

        employee = record.employee
        end_y = self._layout_column(
            left_x, top, column_width, "EMPLOYEE INFORMATION",
            [
                ("Name", employee.name),
                ("ID", employee.id if employee.id is not None else "N/A"),
                ("Department", employee.department or "N/A"),
                ("Position", employee.position or "N/A"),
                ("Join Date", format_date(employee.join_date)),
            ],
            tag="employee",
        )

        passport = record.passport
        if passport is not None:
            passport_end = self._layout_column(
                left_x + half, top, column_width, "PASSPORT INFORMATION",
                [
                    ("Number", passport.passport_number or "N/A"),
                    ("Nationality", passport.nationality or "N/A"),
                    ("Issue Date", format_date(passport.issue_date)),
                    ("Expiry Date", format_date(passport.expiry_date)),
                    ("Status", passport.status or "N/A"),
                ],
                tag="passport",
            )
            end_y = max(end_y, passport_end)

        self.cursor.x = self.layout.content_start_x
        self.cursor.y = end_y + self.config.column_gap

    def _layout_summary(self, record: ReportRecord) -> None:
        """Four fixed-size boxes in one row."""
        style = self.style
        summary = record.summary

        self._write_line(
            "REPORT SUMMARY", style.heading_font_size, style.accent_color,
            bold=True, line_height=style.heading_font_size + 8, tag="summary:heading",
        )

        boxes = [
            ("flights", "Total Flights", str(summary.total_flights)),
            ("transfers", "Total Transfers", str(summary.total_transfers)),
            ("amount", "Transfer Amount",
             summary_amount_display(summary.total_transfer_amount, summary.currencies)),
            ("destinations", "Destinations", str(len(summary.destinations))),
        ]

        gap = self.config.summary_box_gap
        height = self.config.summary_box_height
        box_width = (self.layout.content_width - gap * (len(boxes) - 1)) / len(boxes)
        top = self.cursor.y
        padding = 8.0
        bold_font = get_bold_font(style.font_family)

        for i, (key, label, value) in enumerate(boxes):
            x = self.layout.content_start_x + i * (box_width + gap)
            self._emit(FilledRect(
                x=x, y=top, width=box_width, height=height,
                fill=style.summary_box_color, tag="summary:box",
            ))
            self._emit(TextRun(
                x=x + padding, y=top + padding + style.table_font_size,
                text=label, font=style.font_family, size=style.table_font_size,
                color=style.muted_color, max_width=box_width - 2 * padding,
                tag="summary:label",
            ))
            self._emit(TextRun(
                x=x + padding, y=top + height - padding,
                text=value, font=bold_font, size=style.heading_font_size,
                color=style.accent_color, max_width=box_width - 2 * padding,
                tag=f"summary:{key}",
            ))

        self.cursor.y = top + height

    # ------------------------------------------------------------------
    # Sections and tables
    # ------------------------------------------------------------------

    def _section_title_height(self) -> float:
        return self.style.heading_font_size + 8

    def _layout_section(self, table: TableSpec) -> None:
        """Lay out one section: a table, or the no-data sentence when empty."""
        style = self.style
        kind = table.kind.value

        # The break threshold only applies to sections with rows
        if not table.is_empty and self.remaining_height < self.config.section_break_threshold:
            self.start_new_page()
        else:
            self.cursor.y += self.config.section_gap

        # Keep the title with the header row and first data row, or with the
        # no-data sentence
        if table.is_empty:
            keep_together = self._section_title_height() + style.line_height
        else:
            keep_together = (
                self._section_title_height()
                + self.config.header_row_height
                + self.config.row_height
            )
        if not self.fits(keep_together):
            self.start_new_page()

        self._write_line(
            table.title, style.heading_font_size, style.accent_color,
            bold=True, line_height=self._section_title_height(), tag=f"{kind}:title",
        )

        if table.is_empty:
            self._write_line(
                table.empty_message, style.body_font_size, style.muted_color,
                line_height=style.line_height, tag=f"{kind}:empty",
            )
            return

        self._layout_table(table)

    def _layout_table(self, table: TableSpec) -> None:
        """
        Draw a header row then every data row, breaking pages as needed.

        Row fills alternate by row index within the section, so the pattern
        carries across page breaks rather than restarting on each page.
        """
        kind = table.kind.value
        widths = self.compute_column_widths(table.column_count)

        if not self.fits(self.config.header_row_height + self.config.row_height):
            self.start_new_page()
        self._draw_header_row(table, widths)

        for row_index, row in enumerate(table.rows):
            if not self.fits(self.config.row_height):
                self.start_new_page()
                self._draw_header_row(table, widths)
            self._draw_data_row(table, row_index, row, widths)

        table_width = sum(widths)
        self._emit(Line(
            x1=self.layout.content_start_x,
            y1=self.cursor.y,
            x2=self.layout.content_start_x + table_width,
            y2=self.cursor.y,
            color=self.style.rule_color,
            tag=f"{kind}:rule",
        ))

    def _draw_cells(
        self,
        cells: Sequence[str],
        widths: Sequence[float],
        top: float,
        height: float,
        font: str,
        color: Color,
        tag: str,
    ) -> None:
        size = self.style.table_font_size
        padding = self.style.cell_padding
        baseline = top + (height + size) / 2 - 1
        x = self.layout.content_start_x
        for text, width in zip(cells, widths):
            self._emit(TextRun(
                x=x + padding, y=baseline, text=text, font=font, size=size,
                color=color, max_width=width - 2 * padding, tag=tag,
            ))
            x += width

    def _draw_header_row(self, table: TableSpec, widths: Sequence[float]) -> None:
        """Draw header row with a filled background spanning the table width."""
        style = self.style
        tag = f"{table.kind.value}:header"
        height = self.config.header_row_height
        top = self.cursor.y

        self._emit(FilledRect(
            x=self.layout.content_start_x, y=top, width=sum(widths), height=height,
            fill=style.header_bg_color, tag=tag,
        ))
        self._draw_cells(
            table.headers, widths, top, height,
            get_bold_font(style.font_family), style.header_text_color, tag,
        )
        self.cursor.y += height

    def _draw_data_row(
        self,
        table: TableSpec,
        row_index: int,
        row: Sequence[str],
        widths: Sequence[float],
    ) -> None:
        style = self.style
        tag = f"{table.kind.value}:row:{row_index}"
        height = self.config.row_height
        top = self.cursor.y
        fill = style.row_fill_even if row_index % 2 == 0 else style.row_fill_odd

        self._emit(FilledRect(
            x=self.layout.content_start_x, y=top, width=sum(widths), height=height,
            fill=fill, tag=tag,
        ))
        self._draw_cells(row, widths, top, height, style.font_family, style.text_color, tag)
        self.cursor.y += height

    # ------------------------------------------------------------------
    # Footer
    # ------------------------------------------------------------------

    def _stamp_footers(self, record: ReportRecord) -> None:
        """Stamp generation date and "Page N of Total" on every page."""
        style = self.style
        total = len(self.pages)
        y = self.layout.page_height - self.config.footer_offset
        generated = f"Generated on {format_date(record.generated_at)}"

        for page in self.pages:
            page.instructions.append(TextRun(
                x=self.layout.content_start_x, y=y, text=generated,
                font=style.font_family, size=style.footer_font_size,
                color=style.muted_color, tag="footer:generated",
            ))
            page.instructions.append(TextRun(
                x=self.layout.page_width - self.layout.margin_right, y=y,
                text=f"Page {page.index + 1} of {total}",
                font=style.font_family, size=style.footer_font_size,
                color=style.muted_color, align="right", tag="footer:page",
            ))


def layout_report(
    record: ReportRecord,
    config: Optional[ReportConfig] = None,
) -> ReportLayout:
    """Lay out a record with a fresh engine."""
    return LayoutEngine(config).layout_report(record)
