"""Constants used across the ocpi-docs package."""

from __future__ import annotations

import re

# Markdown patterns
LINE_TERMINATOR_PATTERN = re.compile(r"\r\n|\r|\n")
CODE_FENCE_PATTERN = re.compile(r"^```\s*(?P<lang>[\w+#.-]+)?\s*$")
HEADING_PATTERN = re.compile(r"^(?P<marks>#{1,6})\s+(?P<text>\S.*?)(?:\s+#+)?\s*$")
TABLE_DELIMITER = "|"
TABLE_SEPARATOR_PATTERN = re.compile(r"^(?=[^|]*\|)(?=[^-]*-)[\s|:-]+$")
ARTIFACT_PATTERNS = (
    re.compile(r"^\s*<div>\s*<!--.*?-->\s*</div>\s*$", re.IGNORECASE),
    re.compile(r"^\s*(?:&nbsp;\s*)+$", re.IGNORECASE),
)

# Inline patterns
LINE_BREAK_PATTERN = re.compile(r"\s*<br\s*/?>\s*", re.IGNORECASE)
WRAPPED_LINK_PATTERN = re.compile(r"\[\s*\[([^\[\]]*)\]\([^()\s]*\)\s*\](?!\()")
IMAGE_PATTERN = re.compile(r"!\[([^\[\]]*)\]\(([^()\s]+)(?:\s+\"[^\"]*\")?\)")
LINK_PATTERN = re.compile(r"(?<![!\\])\[([^\[\]]*)\]\(([^()\s]+)(?:\s+\"[^\"]*\")?\)")
EXTERNAL_TARGET_PATTERN = re.compile(r"^(?:https?://|mailto:)", re.IGNORECASE)
DOCUMENT_TARGET_PATTERN = re.compile(
    r"^(?P<path>[^#]+?)\.(?:md|asciidoc|adoc|ascii)(?P<anchor>#[^#]*)?$", re.IGNORECASE
)

# Cross-references into the specification pages live under this prefix.
XREF_PREFIX = "spec/"
TARGET_EXTENSION = ".adoc"
KNOWN_FILENAME_FIXES = {
    "transport_and_format_not_available": "transport_and_format",
}

# AsciiDoc markers; must match what Asciidoctor/Antora accept.
SOURCE_BLOCK_TEMPLATE = "[source,{lang}]"
LISTING_DELIMITER = "----"
LITERAL_DELIMITER = "...."
TABLE_OPTIONS = '[options="header"]'
TABLE_DELIMITER_LINE = "|==="
ESCAPED_TABLE_DELIMITER = "\\|"
# Asciidoctor renders at most six levels of "=" section titles.
MAX_SECTION_DEPTH = 6
MIN_SECTION_DEPTH = 2

# Records
FIELD_DELIMITER = ","
QUOTE_CHAR = '"'
BYTE_ORDER_MARK = "\ufeff"

# File handling defaults
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
MARKDOWN_EXTENSIONS = (".md", ".markdown")
ASCIIDOC_EXTENSIONS = (".asciidoc", ".adoc")
RECORD_EXTENSIONS = (".csv",)
