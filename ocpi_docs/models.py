"""Data models for ocpi-docs."""

from dataclasses import dataclass, field
from enum import Enum, auto


class ConverterState(Enum):
    """Converter states used while scanning Markdown lines.

    Attributes:
        NORMAL: Default state for regular text.
        IN_CODE_FENCE: Inside a fenced code block.
        IN_TABLE_BLOCK: Collecting the rows of a pipe table.
    """

    NORMAL = auto()
    IN_CODE_FENCE = auto()
    IN_TABLE_BLOCK = auto()


@dataclass
class ConverterContext:
    """Encapsulate converter state while walking Markdown lines.

    Attributes:
        state: Current converter state.
        heading_base: Level of the first heading seen, or 0 before any heading.
        table_rows: Header and body lines of the table being collected.
        table_raw: Every line consumed by the table, separator included.
        separator_pending: True until the separator line after a table header
            has been consumed.
    """

    state: ConverterState = ConverterState.NORMAL
    heading_base: int = 0
    table_rows: list[str] = field(default_factory=list)
    table_raw: list[str] = field(default_factory=list)
    separator_pending: bool = False


class TableOutcome(Enum):
    """How a table block was rendered."""

    CONVERTED = auto()
    FALLBACK = auto()


@dataclass
class TableResult:
    """Structured result of transcoding a pipe table.

    Attributes:
        outcome: Whether the block became an AsciiDoc table or a literal block.
        lines: Output lines, without trailing newlines.
        expected_columns: Column count fixed by the header row.
    """

    outcome: TableOutcome
    lines: list[str]
    expected_columns: int
