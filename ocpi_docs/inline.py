"""Inline span rewriting from Markdown to AsciiDoc."""

from __future__ import annotations

import re

from .constants import (
    DOCUMENT_TARGET_PATTERN,
    EXTERNAL_TARGET_PATTERN,
    IMAGE_PATTERN,
    KNOWN_FILENAME_FIXES,
    LINE_BREAK_PATTERN,
    LINK_PATTERN,
    TARGET_EXTENSION,
    WRAPPED_LINK_PATTERN,
    XREF_PREFIX,
)

_PLACEHOLDER = "\x00CODE_{}\x00"
_PLACEHOLDER_PATTERN = re.compile(r"\x00CODE_(\d+)\x00")


def is_escaped(text: str, pos: int) -> bool:
    """Determine whether a character is escaped by preceding backslashes.

    Counts consecutive backslashes immediately before `pos`; an odd count marks
    the character as escaped.

    Args:
        text: Text containing the character.
        pos: Zero-based index of the character to inspect.

    Returns:
        bool: True when the character is escaped, otherwise False.

    Examples:
        is_escaped("\\\\|", 2)  # False, two backslashes
        is_escaped("\\|", 1)  # True, one backslash
    """
    backslash_count = 0
    i = pos - 1
    while i >= 0 and text[i] == "\\":
        backslash_count += 1
        i -= 1

    return backslash_count % 2 == 1


def find_inline_code_spans(text: str) -> list[tuple[int, int]]:
    """Locate inline code spans using CommonMark-style backticks.

    Inline spans must start and end with backtick sequences of equal length;
    both delimiters must be unescaped.

    Args:
        text: The text to scan for inline code spans.

    Returns:
        list[tuple[int, int]]: Start (inclusive) and end (exclusive) positions
            for each inline code span.

    Examples:
        find_inline_code_spans("`code`")  # [(0, 6)]
        find_inline_code_spans("``more`` text")  # [(0, 8)]
    """
    spans = []
    i = 0

    while i < len(text):
        if text[i] != "`" or is_escaped(text, i):
            i += 1
            continue

        start = i
        opening = 0
        while i < len(text) and text[i] == "`":
            opening += 1
            i += 1

        while i < len(text):
            if text[i] != "`" or is_escaped(text, i):
                i += 1
                continue

            closing = 0
            while i < len(text) and text[i] == "`":
                closing += 1
                i += 1

            if closing == opening:
                spans.append((start, i))
                break

    return spans


def _protect_code_spans(text: str) -> tuple[str, list[str]]:
    code_texts: list[str] = []
    parts: list[str] = []
    offset = 0

    for start, end in find_inline_code_spans(text):
        parts.append(text[offset:start])
        code_texts.append(text[start:end])
        parts.append(_PLACEHOLDER.format(len(code_texts) - 1))
        offset = end

    parts.append(text[offset:])
    return "".join(parts), code_texts


def _restore_code_spans(text: str, code_texts: list[str]) -> str:
    if not code_texts:
        return text

    def _restore(match: re.Match[str]) -> str:
        index = int(match.group(1))
        return code_texts[index] if index < len(code_texts) else match.group(0)

    return _PLACEHOLDER_PATTERN.sub(_restore, text)


def rewrite_document_target(target: str) -> str | None:
    """Build the cross-reference target for a link to another source document.

    The extension becomes ``.adoc``, known filename typos are corrected, and the
    specification prefix is added when missing.

    Args:
        target: Link target as written in the Markdown source.

    Returns:
        str | None: Rewritten target, or None when `target` does not point at a
            source document.

    Examples:
        rewrite_document_target("sessions.md#object")  # "spec/sessions.adoc#object"
        rewrite_document_target("image.png")  # None
    """
    match = DOCUMENT_TARGET_PATTERN.match(target)
    if not match:
        return None

    path = match.group("path")
    if path.startswith("./"):
        path = path[2:]

    directory, _, filename = path.rpartition("/")
    filename = KNOWN_FILENAME_FIXES.get(filename, filename)
    path = f"{directory}/{filename}" if directory else filename

    if not path.startswith(XREF_PREFIX):
        path = f"{XREF_PREFIX}{path}"

    return f"{path}{TARGET_EXTENSION}{match.group('anchor') or ''}"


def rewrite_link(label: str, target: str) -> str:
    """Render a Markdown link as the matching AsciiDoc reference.

    Examples:
        rewrite_link("Top", "#top")  # "<<top,Top>>"
        rewrite_link("Site", "https://ocpi.dev")  # "https://ocpi.dev[Site]"
        rewrite_link("CDRs", "mod_cdrs.md")  # "xref:spec/mod_cdrs.adoc[CDRs]"
        rewrite_link("Schema", "schema.json")  # "link:schema.json[Schema]"
    """
    if target.startswith("#"):
        anchor = target[1:]
        return f"<<{anchor},{label}>>" if label else f"<<{anchor}>>"

    if EXTERNAL_TARGET_PATTERN.match(target):
        return f"{target}[{label}]"

    document_target = rewrite_document_target(target)
    if document_target is not None:
        return f"xref:{document_target}[{label}]"

    return f"link:{target}[{label}]"


def rewrite_image(alt: str, target: str, block: bool = False) -> str:
    """Render a Markdown image as an AsciiDoc image macro.

    Args:
        alt: Alternative text.
        target: Image path or URL.
        block: When True, emit the block macro (``image::``) used for images
            standing on a line of their own.

    Returns:
        str: The image macro.
    """
    separator = "::" if block else ":"
    return f"image{separator}{target}[{alt}]"


def rewrite_inline_spans(text: str) -> str:
    """Rewrite line breaks, images, and links in one line of Markdown.

    Applies, in order: ``<br>`` tags to a space, bracket-wrapped links to their
    label, images to image macros, and links to cross-references or link
    macros. Inline code spans are left untouched.

    Args:
        text: A single line of Markdown, without its line terminator.

    Returns:
        str: The line with inline spans rewritten as AsciiDoc.

    Examples:
        rewrite_inline_spans("See [tokens](mod_tokens.md#token-object).")
        # "See xref:spec/mod_tokens.adoc#token-object[tokens]."
    """
    protected, code_texts = _protect_code_spans(text)

    protected = LINE_BREAK_PATTERN.sub(" ", protected)
    protected = WRAPPED_LINK_PATTERN.sub(lambda match: match.group(1), protected)

    image_only = IMAGE_PATTERN.fullmatch(protected.strip())
    if image_only:
        protected = rewrite_image(image_only.group(1), image_only.group(2), block=True)
    else:
        protected = IMAGE_PATTERN.sub(
            lambda match: rewrite_image(match.group(1), match.group(2)), protected
        )

    protected = LINK_PATTERN.sub(
        lambda match: rewrite_link(match.group(1), match.group(2)), protected
    )

    return _restore_code_spans(protected, code_texts)
