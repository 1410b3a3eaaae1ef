"""Visual style profiles for the travel report."""

from dataclasses import dataclass
from typing import Dict
from reportlab.lib.colors import Color, black, white, HexColor


@dataclass(frozen=True)
class ReportStyle:
    """Fonts and colours threaded through every draw instruction."""
    name: str
    font_family: str  # Base font name (Helvetica, Times-Roman, Courier)
    title_font_size: int
    subtitle_font_size: int
    heading_font_size: int
    body_font_size: int
    table_font_size: int
    footer_font_size: int
    accent_color: Color  # Titles and section headings
    text_color: Color
    muted_color: Color  # Subtitles, footer, no-data sentences
    rule_color: Color
    header_bg_color: Color
    header_text_color: Color
    row_fill_even: Color
    row_fill_odd: Color
    summary_box_color: Color
    cell_padding: float = 3.0
    line_height: float = 14.0


REPORT_STYLES: Dict[str, ReportStyle] = {
    "classic": ReportStyle(
        name="classic",
        font_family="Helvetica",
        title_font_size=18,
        subtitle_font_size=13,
        heading_font_size=12,
        body_font_size=10,
        table_font_size=8,
        footer_font_size=8,
        accent_color=HexColor("#003366"),
        text_color=HexColor("#333333"),
        muted_color=HexColor("#666666"),
        rule_color=HexColor("#999999"),
        header_bg_color=HexColor("#003366"),
        header_text_color=white,
        row_fill_even=white,
        row_fill_odd=HexColor("#F0F4F8"),
        summary_box_color=HexColor("#E8EEF5"),
    ),
    "monochrome": ReportStyle(
        name="monochrome",
        font_family="Times-Roman",
        title_font_size=18,
        subtitle_font_size=13,
        heading_font_size=12,
        body_font_size=10,
        table_font_size=8,
        footer_font_size=8,
        accent_color=black,
        text_color=black,
        muted_color=HexColor("#555555"),
        rule_color=black,
        header_bg_color=HexColor("#D0D0D0"),
        header_text_color=black,
        row_fill_even=white,
        row_fill_odd=HexColor("#EEEEEE"),
        summary_box_color=HexColor("#F0F0F0"),
        cell_padding=2.0,
    ),
}


def get_report_style(name: str) -> ReportStyle:
    """Get a style by name, with fallback to the classic style."""
    return REPORT_STYLES.get(name, REPORT_STYLES["classic"])


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a font family."""
    if font_family == "Times-Roman":
        return "Times-Bold"
    elif font_family == "Courier":
        return "Courier-Bold"
    else:
        return f"{font_family}-Bold"
