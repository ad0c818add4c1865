"""Date-time parsing utilities."""

from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser


def parse_datetime(value: str, date_format: Optional[str] = None) -> datetime:
    """Parse a date-time string.

    The exact ``date_format`` (a ``strptime`` pattern) is tried first; when it
    does not match, the string goes through dateutil's general parser, which
    accepts "2024-01-15 09:30", "15 Jan 2024", ISO 8601 with a "T", etc.

    Args:
        value: Date-time string
        date_format: Optional exact format to try first

    Returns:
        Parsed datetime

    Raises:
        ValueError: If the string cannot be parsed
    """
    if not value or not value.strip():
        raise ValueError("Empty date string")

    text = value.strip()

    if date_format:
        try:
            return datetime.strptime(text, date_format)
        except ValueError:
            pass

    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")


def try_parse_datetime(
    value: Optional[str], date_format: Optional[str] = None
) -> Optional[datetime]:
    """Parse a date-time string, returning None when it is absent or invalid."""
    if value is None:
        return None
    try:
        return parse_datetime(value, date_format)
    except ValueError:
        return None
