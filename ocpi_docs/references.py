"""Reference rewriting for sources that are already AsciiDoc."""

from __future__ import annotations

import re

from .constants import KNOWN_FILENAME_FIXES, TARGET_EXTENSION, XREF_PREFIX

_SOURCE_SUFFIX_PATTERN = re.compile(r"\.(?:asciidoc|adoc|md)$")
_MESSAGE_ROW_PATTERN = re.compile(r"(\|message\|<<[^>]+>>\|\*\|[^\n|]+)\|$", re.MULTILINE)
_ANGLE_XREF_PATTERN = re.compile(
    rf"<<((?!{re.escape(XREF_PREFIX)})[a-z0-9_\-]+\.adoc)([#,])", re.IGNORECASE
)
_MACRO_XREF_PATTERN = re.compile(
    rf"xref:((?!{re.escape(XREF_PREFIX)})[a-z0-9_\-]+\.adoc)", re.IGNORECASE
)


def to_adoc_name(file_name: str) -> str:
    """Swap the ``.asciidoc`` suffix for ``.adoc``.

    Examples:
        to_adoc_name("mod_cdrs.asciidoc")  # "mod_cdrs.adoc"
    """
    if file_name.endswith(".asciidoc"):
        return file_name[: -len(".asciidoc")] + TARGET_EXTENSION
    return file_name


def title_from_filename(file_name: str) -> str:
    """Derive a page title from a specification file name.

    Examples:
        title_from_filename("mod_charging_profiles.asciidoc")  # "Charging Profiles"
        title_from_filename("transport_and_format.md")  # "Transport And Format"
    """
    base_name = _SOURCE_SUFFIX_PATTERN.sub("", file_name)
    if base_name.startswith("mod_"):
        base_name = base_name[len("mod_") :]
    words = re.sub(r"[_-]+", " ", base_name).split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _fix_known_filenames(content: str) -> str:
    for wrong, right in KNOWN_FILENAME_FIXES.items():
        content = content.replace(f"{wrong}{TARGET_EXTENSION}#", f"{right}{TARGET_EXTENSION}#")
    return content


def rewrite_asciidoc_references(content: str) -> str:
    """Point cross-references of an AsciiDoc source at the published pages.

    Rewrites ``.asciidoc`` (and the truncated ``.ascii#``) references to
    ``.adoc``, corrects known filename typos, drops the stray trailing cell
    delimiter of message rows, and prefixes page references with ``spec/``.

    Args:
        content: AsciiDoc document text.

    Returns:
        str: Document text with rewritten references.

    Examples:
        rewrite_asciidoc_references("<<mod_cdrs.asciidoc#cdr_object,CDR>>")
        # "<<spec/mod_cdrs.adoc#cdr_object,CDR>>"
    """
    content = content.replace(".asciidoc", TARGET_EXTENSION)
    content = content.replace(".ascii#", f"{TARGET_EXTENSION}#")
    content = _fix_known_filenames(content)
    content = _MESSAGE_ROW_PATTERN.sub(r"\1", content)
    content = _ANGLE_XREF_PATTERN.sub(rf"<<{XREF_PREFIX}\1\2", content)
    return _MACRO_XREF_PATTERN.sub(rf"xref:{XREF_PREFIX}\1", content)
