"""Delimited text (CSV) parsing."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from .constants import BYTE_ORDER_MARK, FIELD_DELIMITER, QUOTE_CHAR
from .exceptions import SourceReadError
from .filesystem import safe_read

DEFAULT_ACTIVE_COLUMN = "active"
DEFAULT_ACTIVE_VALUES = ("true", "yes", "1", "x")


def parse_records(text: str) -> list[list[str]]:
    """Parse delimited text into rows of field strings.

    Quoted fields may contain delimiters and line breaks; a doubled quote inside
    quotes is a literal quote. ``\\r`` outside quotes is dropped so both line
    terminator styles work. Content after the last terminator becomes a final
    row. Rows are returned as scanned: field counts are never checked, and an
    unmatched quote swallows the rest of the input.

    Args:
        text: Raw delimited text.

    Returns:
        list[list[str]]: Rows in input order; row 0 is usually the header.

    Examples:
        parse_records('a,"b,c",d')  # [["a", "b,c", "d"]]
        parse_records('x,"say ""hi"" now",y')  # [["x", 'say "hi" now', "y"]]
    """
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK) :]

    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    pending = False
    i = 0

    while i < len(text):
        character = text[i]

        if character == QUOTE_CHAR:
            if in_quotes and i + 1 < len(text) and text[i + 1] == QUOTE_CHAR:
                field.append(QUOTE_CHAR)
                i += 1
            else:
                in_quotes = not in_quotes
            pending = True
        elif in_quotes:
            field.append(character)
        elif character == FIELD_DELIMITER:
            row.append("".join(field))
            field = []
            pending = True
        elif character == "\n":
            row.append("".join(field))
            rows.append(row)
            row = []
            field = []
            pending = False
        elif character != "\r":
            field.append(character)
            pending = True

        i += 1

    if pending:
        row.append("".join(field))
        rows.append(row)

    return rows


def _quote_field(value: str) -> str:
    if any(character in value for character in (FIELD_DELIMITER, QUOTE_CHAR, "\n", "\r")):
        escaped = value.replace(QUOTE_CHAR, QUOTE_CHAR * 2)
        return f"{QUOTE_CHAR}{escaped}{QUOTE_CHAR}"
    return value


def format_records(rows: Iterable[Sequence[str]]) -> str:
    """Serialize rows with minimal quoting, one ``\\n``-terminated line per row.

    Examples:
        format_records([["a", "b,c"]])  # 'a,"b,c"\\n'
    """
    return "".join(
        FIELD_DELIMITER.join(_quote_field(value) for value in row) + "\n" for row in rows
    )


def to_records(rows: Sequence[Sequence[str]]) -> list[dict[str, str]]:
    """Pair each data row with the header row.

    Missing trailing fields are left out of the record and surplus fields are
    ignored, so short rows read as rows with absent optional columns.

    Args:
        rows: Parsed rows, header first.

    Returns:
        list[dict[str, str]]: One mapping per data row.

    Examples:
        to_records([["name", "active"], ["CPO", "true"], ["EMSP"]])
        # [{"name": "CPO", "active": "true"}, {"name": "EMSP"}]
    """
    if not rows:
        return []

    header = [name.strip() for name in rows[0]]
    return [dict(zip(header, row)) for row in rows[1:]]


def filter_active(
    records: Iterable[dict[str, str]],
    column: str = DEFAULT_ACTIVE_COLUMN,
    truthy: Iterable[str] = DEFAULT_ACTIVE_VALUES,
) -> list[dict[str, str]]:
    """Keep the records whose flag column holds a truthy value."""
    accepted = {value.strip().casefold() for value in truthy}
    return [
        record for record in records if record.get(column, "").strip().casefold() in accepted
    ]


def parse_records_file(filepath: Path) -> list[list[str]]:
    """Read a delimited text file and parse its rows.

    Raises:
        SourceReadError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        with safe_read(filepath, newline="") as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise SourceReadError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except IOError as error:
        raise SourceReadError(str(error)) from error

    return parse_records(content)
