"""Number parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re


def parse_decimal(value: str) -> Decimal:
    """Parse a number string into a Decimal using invariant formatting.

    Handles various formats:
    - "1.2345"
    - "+1.5", "-1.5", "1.5-"
    - "1,234.56" (comma grouping)
    - "(12.50)" (negative in parentheses)
    - "$12.50", "12.50 €"
    - "1.5e3"

    Args:
        value: Number string

    Returns:
        Decimal value

    Raises:
        ValueError: If the string is empty, not a number or not finite
    """
    if not value or not value.strip():
        raise ValueError("Empty number string")

    text = value.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    # Remove currency symbols and grouping separators
    text = re.sub(r"[$€£¥¤]", "", text)
    text = text.replace(",", "").strip()

    # No underscore grouping, as in "1_000"
    if "_" in text:
        raise ValueError(f"Could not parse number '{value}'")

    # Trailing sign, as in "12.5-"
    if len(text) > 1 and text[-1] in "+-" and text[0] not in "+-":
        text = text[-1] + text[:-1]

    try:
        number = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse number '{value}'") from e

    if not number.is_finite():
        raise ValueError(f"Could not parse number '{value}': not a finite value")

    return -number if is_negative else number


def try_parse_decimal(value: Optional[str]) -> Optional[Decimal]:
    """Parse a number string, returning None when it is absent or invalid."""
    if value is None:
        return None
    try:
        return parse_decimal(value)
    except ValueError:
        return None
