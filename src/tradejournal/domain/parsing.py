"""Parsing of raw CSV and JSON text into rows of strings."""

import json
from dataclasses import dataclass, field
from typing import Any

from tradejournal.domain.errors import OperationFailedError, ValidationError


RawRow = dict[str, str]


@dataclass
class ParsedRows:
    """Rows read from one input blob.

    ``row_numbers[i]`` is the 1-based position of ``rows[i]`` in the source:
    the non-empty line number for CSV (a header is line 1), the element
    position for JSON.
    """

    columns: list[str] = field(default_factory=list)
    rows: list[RawRow] = field(default_factory=list)
    row_numbers: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def split_csv_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one CSV line into trimmed fields.

    A double quote toggles quoting; the delimiter only separates fields
    outside quotes. Each field is stripped of surrounding whitespace and of
    one leading and one trailing quote. Doubled quotes inside a quoted field
    are kept as they are.
    """
    fields = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == delimiter and not in_quotes:
            fields.append(_clean_field("".join(current)))
            current = []
        else:
            current.append(char)

    fields.append(_clean_field("".join(current)))
    return fields


def _clean_field(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_csv_text(text: str, has_header: bool = True, delimiter: str = ",") -> ParsedRows:
    """Parse CSV text into rows keyed by column name.

    Without a header, columns are named ``column_1``, ``column_2``, ...

    Raises:
        ValidationError: If the text contains no lines or the delimiter is invalid
    """
    if len(delimiter) != 1 or delimiter == '"':
        raise ValidationError(f"Invalid CSV delimiter {delimiter!r}")

    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        raise ValidationError("File is empty")

    parsed = ParsedRows()
    if has_header:
        parsed.columns = split_csv_line(lines[0], delimiter)
        lines = lines[1:]
    else:
        width = max(len(split_csv_line(line, delimiter)) for line in lines)
        parsed.columns = [f"column_{i}" for i in range(1, width + 1)]

    # Row numbers count non-empty lines; a header is row 1.
    first_row_number = 2 if has_header else 1
    for offset, line in enumerate(lines):
        values = split_csv_line(line, delimiter)
        parsed.rows.append(dict(zip(parsed.columns, values)))
        parsed.row_numbers.append(first_row_number + offset)

    return parsed


def parse_json_text(text: str) -> ParsedRows:
    """Parse a JSON array of objects into rows of strings.

    Raises:
        OperationFailedError: If the text is not valid JSON or an element is not an object
        ValidationError: If the root is not a non-empty array
    """
    try:
        # Keep numbers as their source text so "1.30" is not turned into 1.3
        records = json.loads(text, parse_float=str, parse_int=str)
    except json.JSONDecodeError as e:
        raise OperationFailedError("Invalid JSON", details=str(e)) from e

    if not isinstance(records, list) or not records:
        raise ValidationError("File is empty or not a JSON array of records")

    parsed = ParsedRows()
    seen_columns: dict[str, None] = {}
    for index, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            raise OperationFailedError(f"Record {index} is not a JSON object")
        row = {str(key): _json_value_to_str(value) for key, value in record.items()}
        for key in row:
            seen_columns.setdefault(key, None)
        parsed.rows.append(row)
        parsed.row_numbers.append(index)

    parsed.columns = list(seen_columns)
    return parsed


def _json_value_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return json.dumps(value)
