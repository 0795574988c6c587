"""Pipe table transcoding from Markdown to AsciiDoc."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import (
    ESCAPED_TABLE_DELIMITER,
    LITERAL_DELIMITER,
    TABLE_DELIMITER,
    TABLE_DELIMITER_LINE,
    TABLE_OPTIONS,
)
from .inline import is_escaped, rewrite_inline_spans
from .models import TableOutcome, TableResult


def split_table_row(line: str) -> list[str]:
    """Split a pipe table row into raw (untrimmed) cells.

    Drops one leading delimiter and the single empty cell left behind by a
    trailing delimiter. Escaped delimiters (``\\|``) stay inside their cell.

    Args:
        line: Raw table row.

    Returns:
        list[str]: Raw cell contents, surrounding whitespace preserved.

    Examples:
        split_table_row("| a | b |")  # [" a ", " b "]
        split_table_row("| a \\| b |")  # [" a \\| b "]
    """
    row = line.strip()
    if row.startswith(TABLE_DELIMITER):
        row = row[1:]

    cells: list[str] = []
    start = 0
    for pos, character in enumerate(row):
        if character == TABLE_DELIMITER and not is_escaped(row, pos):
            cells.append(row[start:pos])
            start = pos + 1
    cells.append(row[start:])

    # The text after a trailing delimiter is empty; it is not a cell.
    if len(cells) > 1 and cells[-1] == "":
        cells.pop()
    elif len(cells) == 1 and cells[0] == "":
        cells.pop()

    return cells


def _is_padded_boundary(before: str, after: str) -> bool:
    return before[-1:].isspace() and after[:1].isspace()


def merge_overflow_cells(cells: list[str], expected: int) -> list[str] | None:
    """Fold surplus cells into the last expected cell.

    Surplus cells usually come from an unescaped delimiter inside free text
    (``string|null``). Only such unpadded delimiters can be absorbed; a
    delimiter with whitespace on both sides is structural, and a row containing
    one among the surplus cells cannot be merged.

    Args:
        cells: Raw cells of a row.
        expected: Column count fixed by the header row.

    Returns:
        list[str] | None: Cells with the overflow merged (joined by an escaped
            delimiter), or None when the overflow cannot be merged.
    """
    if len(cells) <= expected:
        return cells
    if expected < 1:
        return None

    overflow = cells[expected - 1 :]
    for before, after in zip(overflow, overflow[1:]):
        if _is_padded_boundary(before, after):
            return None

    return cells[: expected - 1] + [ESCAPED_TABLE_DELIMITER.join(overflow)]


def format_table_row(cells: Sequence[str]) -> str:
    return " ".join(f"{TABLE_DELIMITER} {cell}" for cell in cells).rstrip()


def literal_block(lines: Sequence[str]) -> list[str]:
    """Wrap lines verbatim in an AsciiDoc literal block."""
    return [LITERAL_DELIMITER, *lines, LITERAL_DELIMITER]


def transcode_table(rows: Sequence[str], raw_lines: Sequence[str] | None = None) -> TableResult:
    """Convert the rows of a Markdown pipe table into an AsciiDoc table.

    The first row is the header and fixes the expected column count. Rows with
    too many cells have the surplus merged into the last column when the extra
    delimiters read as free text; any row that still does not match the header
    makes the whole block fall back to a literal block of the raw lines.

    Args:
        rows: Header line followed by body lines, separator line excluded.
        raw_lines: Lines to reproduce when falling back. Defaults to `rows`;
            the converter passes the separator line here as well.

    Returns:
        TableResult: Rendered lines and whether conversion succeeded.

    Examples:
        transcode_table(["| A | B |", "| 1 | 2 |"]).lines
        # ['[options="header"]', "|===", "| A | B", "| 1 | 2", "|==="]
    """
    raw = list(rows if raw_lines is None else raw_lines)
    expected = 0
    rendered: list[str] = []

    for index, line in enumerate(rows):
        cells = split_table_row(line)
        if index == 0:
            expected = len(cells)
            if expected == 0:
                break
        else:
            cells = merge_overflow_cells(cells, expected)
            if cells is None or len(cells) != expected:
                break

        rendered.append(format_table_row([rewrite_inline_spans(cell.strip()) for cell in cells]))
    else:
        if rendered:
            return TableResult(
                outcome=TableOutcome.CONVERTED,
                lines=[TABLE_OPTIONS, TABLE_DELIMITER_LINE, *rendered, TABLE_DELIMITER_LINE],
                expected_columns=expected,
            )

    return TableResult(
        outcome=TableOutcome.FALLBACK,
        lines=literal_block(raw),
        expected_columns=expected,
    )


def convert_table_block(rows: Sequence[str], raw_lines: Sequence[str] | None = None) -> list[str]:
    """Return only the output lines of `transcode_table`."""
    return transcode_table(rows, raw_lines).lines
