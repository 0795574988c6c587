"""Markdown to AsciiDoc conversion."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from .constants import (
    ARTIFACT_PATTERNS,
    CODE_FENCE_PATTERN,
    HEADING_PATTERN,
    LINE_TERMINATOR_PATTERN,
    LISTING_DELIMITER,
    MAX_SECTION_DEPTH,
    MIN_SECTION_DEPTH,
    SOURCE_BLOCK_TEMPLATE,
    TABLE_DELIMITER,
    TABLE_SEPARATOR_PATTERN,
)
from .exceptions import SourceReadError
from .filesystem import safe_read
from .inline import rewrite_inline_spans
from .models import ConverterContext, ConverterState, TableOutcome
from .tables import transcode_table

logger = logging.getLogger(__name__)


def normalize_heading_depth(level: int, base: int) -> int:
    """Map a Markdown heading level to an AsciiDoc section depth.

    The first heading of a document lands at depth 2 and later headings keep
    their nesting relative to it.

    Args:
        level: Number of ``#`` characters in the heading.
        base: Level of the first heading in the document, or 0 when unknown.

    Returns:
        int: Number of ``=`` characters for the section title.

    Examples:
        normalize_heading_depth(3, 3)  # 2
        normalize_heading_depth(4, 3)  # 3
        normalize_heading_depth(1, 0)  # 2
    """
    if base:
        depth = max(MIN_SECTION_DEPTH, level - base + MIN_SECTION_DEPTH)
    else:
        depth = level + 1
    return min(depth, MAX_SECTION_DEPTH)


def _starts_table_row(line: str) -> bool:
    return line.lstrip().startswith(TABLE_DELIMITER)


def _try_code_fence(
    ctx: ConverterContext, line: str, next_line: str | None, output: list[str]
) -> bool:
    """Open or close a fenced code block.

    Args:
        ctx: Converter context to update.
        line: Current line.
        next_line: Following line, unused.
        output: Lines emitted so far.

    Returns:
        bool: True when the line is a fence marker.

    Examples:
        _try_code_fence(ConverterContext(), "```json", None, [])  # True
    """
    fence_match = CODE_FENCE_PATTERN.match(line)
    if not fence_match:
        return False

    if ctx.state is ConverterState.IN_CODE_FENCE:
        ctx.state = ConverterState.NORMAL
    else:
        lang = fence_match.group("lang")
        if lang:
            output.append(SOURCE_BLOCK_TEMPLATE.format(lang=lang))
        ctx.state = ConverterState.IN_CODE_FENCE

    output.append(LISTING_DELIMITER)
    return True


def _try_code_content(
    ctx: ConverterContext, line: str, next_line: str | None, output: list[str]
) -> bool:
    if ctx.state is not ConverterState.IN_CODE_FENCE:
        return False

    output.append(line)
    return True


def _try_artifact(
    ctx: ConverterContext, line: str, next_line: str | None, output: list[str]
) -> bool:
    """Replace decorative HTML wrapper lines with a blank line."""
    if not any(pattern.match(line) for pattern in ARTIFACT_PATTERNS):
        return False

    output.append("")
    return True


def _try_heading(
    ctx: ConverterContext, line: str, next_line: str | None, output: list[str]
) -> bool:
    """Convert an ATX heading, capturing the heading base on first use.

    Examples:
        ctx = ConverterContext()
        _try_heading(ctx, "### Title", None, out)  # out == ["== Title"]
    """
    heading_match = HEADING_PATTERN.match(line)
    if not heading_match:
        return False

    level = len(heading_match.group("marks"))
    if not ctx.heading_base:
        ctx.heading_base = level

    depth = normalize_heading_depth(level, ctx.heading_base)
    output.append(f"{'=' * depth} {rewrite_inline_spans(heading_match.group('text'))}")
    return True


def _try_table_start(
    ctx: ConverterContext, line: str, next_line: str | None, output: list[str]
) -> bool:
    """Enter table state when a pipe row is followed by a separator row.

    Args:
        ctx: Converter context to update.
        line: Candidate header row.
        next_line: Line after `line`, or None at end of input.
        output: Lines emitted so far, unused.

    Returns:
        bool: True when a table block starts at `line`.
    """
    if not _starts_table_row(line) or next_line is None:
        return False
    if not TABLE_SEPARATOR_PATTERN.match(next_line):
        return False

    ctx.state = ConverterState.IN_TABLE_BLOCK
    ctx.table_rows = [line]
    ctx.table_raw = [line]
    ctx.separator_pending = True
    return True


def _try_continue_table(ctx: ConverterContext, line: str) -> bool:
    """Consume the separator or a body row of the current table.

    Returns:
        bool: True when the line belongs to the table; False when the table
            ended and the line needs normal processing.
    """
    if ctx.state is not ConverterState.IN_TABLE_BLOCK:
        return False

    if ctx.separator_pending:
        ctx.table_raw.append(line)
        ctx.separator_pending = False
        return True

    if not _starts_table_row(line):
        return False

    ctx.table_rows.append(line)
    ctx.table_raw.append(line)
    return True


def _flush_table(ctx: ConverterContext, output: list[str]) -> None:
    result = transcode_table(ctx.table_rows, ctx.table_raw)
    if result.outcome is TableOutcome.FALLBACK:
        logger.debug(
            "Table starting with %r does not fit %d columns; emitting a literal block",
            ctx.table_rows[0],
            result.expected_columns,
        )
    output.extend(result.lines)

    ctx.state = ConverterState.NORMAL
    ctx.table_rows = []
    ctx.table_raw = []
    ctx.separator_pending = False


def _emit_text(ctx: ConverterContext, line: str, next_line: str | None, output: list[str]) -> bool:
    output.append(rewrite_inline_spans(line))
    return True


LineHandler = Callable[[ConverterContext, str, str | None, list[str]], bool]

# Order matters: fences and artifacts short-circuit heading and table checks.
LINE_HANDLERS: tuple[LineHandler, ...] = (
    _try_code_fence,
    _try_code_content,
    _try_artifact,
    _try_heading,
    _try_table_start,
    _emit_text,
)


def convert_lines(lines: Sequence[str]) -> list[str]:
    """Convert Markdown lines into AsciiDoc lines.

    Walks the lines once with one line of lookahead. Fenced code passes through
    verbatim, headings are renumbered relative to the first heading, pipe
    tables are transcoded, and every other line has its inline spans
    rewritten. An unterminated fence is left open.

    Args:
        lines: Markdown lines without line terminators.

    Returns:
        list[str]: AsciiDoc lines without line terminators.

    Examples:
        convert_lines(["### Title", "", "Text"])  # ["== Title", "", "Text"]
    """
    ctx = ConverterContext()
    output: list[str] = []

    for index, line in enumerate(lines):
        if _try_continue_table(ctx, line):
            continue
        if ctx.state is ConverterState.IN_TABLE_BLOCK:
            _flush_table(ctx, output)

        next_line = lines[index + 1] if index + 1 < len(lines) else None
        for handler in LINE_HANDLERS:
            if handler(ctx, line, next_line, output):
                break

    if ctx.state is ConverterState.IN_TABLE_BLOCK:
        _flush_table(ctx, output)
    elif ctx.state is ConverterState.IN_CODE_FENCE:
        logger.warning("Input ended inside a fenced code block; the listing is left open")

    return output


def convert_markdown(content: str) -> str:
    """Convert a Markdown document into AsciiDoc text.

    Args:
        content: Complete Markdown document.

    Returns:
        str: AsciiDoc document. Line terminators are normalized to ``\\n`` and a
            trailing newline is kept when the input had one.

    Examples:
        convert_markdown("# OCPI\\n")  # "== OCPI\\n"
    """
    lines = LINE_TERMINATOR_PATTERN.split(content)
    if lines[-1] == "":
        lines.pop()
    converted = "\n".join(convert_lines(lines))
    if content.endswith(("\n", "\r")):
        converted += "\n"
    return converted


def convert_file(filepath: Path) -> str:
    """Read a Markdown file and return its AsciiDoc conversion.

    Args:
        filepath: Path to the Markdown file.

    Returns:
        str: Converted document.

    Raises:
        SourceReadError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise SourceReadError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except IOError as error:
        raise SourceReadError(str(error)) from error

    return convert_markdown(content)
