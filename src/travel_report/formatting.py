"""Text formatting helpers for dates and money amounts."""

from datetime import date, datetime
from typing import Any, Optional, Sequence

NOT_AVAILABLE = "N/A"


def parse_date(value: Any) -> Optional[date]:
    """Parse a date-like value, returning None when it cannot be understood."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    # MySQL DATETIME columns serialize as "YYYY-MM-DD HH:MM:SS", JS as "...Z"
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(value: Any) -> str:
    """
    Format a date in long form, e.g. "March 5, 2024".

    Absent values render as "N/A"; strings that do not parse as a date are
    returned unchanged.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return NOT_AVAILABLE

    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def to_number(value: Any) -> Optional[float]:
    """Convert a numeric value or numeric string (DECIMAL columns) to float."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError:
        return None


def format_amount(value: Any) -> str:
    """Format an amount with exactly two decimals."""
    if value is None:
        return NOT_AVAILABLE
    number = to_number(value)
    if number is None:
        return str(value)
    return f"{number:.2f}"


def format_money(value: Any, currency: Optional[str]) -> str:
    """Format an amount followed by its currency code."""
    amount = format_amount(value)
    if amount == NOT_AVAILABLE or not currency:
        return amount
    return f"{amount} {currency}"


def summary_amount_display(total: float, currencies: Sequence[str]) -> str:
    """
    Display text for the transfer-amount summary box.

    A single shared currency is appended to the total; with mixed (or no)
    currencies only the bare number is shown.
    """
    if len(currencies) == 1:
        return format_money(total, currencies[0])
    return format_amount(total)
