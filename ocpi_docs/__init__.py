"""
ocpi-docs: build tooling for the OCPI documentation site.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    ocpi-docs convert sessions.md -o sessions.adoc
    ocpi-docs records parties.csv --active-only

Library Usage:
    from ocpi_docs import convert_markdown, parse_records, to_records

    adoc = convert_markdown("# Sessions\\n\\nSee [CDRs](mod_cdrs.md).\\n")
    rows = parse_records('name,active\\n"CPO, Inc.",true\\n')
    records = to_records(rows)
"""

from .converter import convert_lines, convert_markdown, normalize_heading_depth
from .exceptions import DocsError, FileTooLargeError, SourceReadError
from .inline import rewrite_inline_spans
from .models import TableOutcome, TableResult
from .records import filter_active, format_records, parse_records, to_records
from .references import rewrite_asciidoc_references, title_from_filename, to_adoc_name
from .tables import convert_table_block, transcode_table

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert_markdown",
    "convert_lines",
    "rewrite_inline_spans",
    "transcode_table",
    "convert_table_block",
    "parse_records",
    # Record helpers
    "format_records",
    "to_records",
    "filter_active",
    # AsciiDoc sources
    "rewrite_asciidoc_references",
    "title_from_filename",
    "to_adoc_name",
    # Utilities
    "normalize_heading_depth",
    # Data models
    "TableOutcome",
    "TableResult",
    # Exceptions
    "DocsError",
    "FileTooLargeError",
    "SourceReadError",
    # Version
    "__version__",
]
