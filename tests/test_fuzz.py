from __future__ import annotations

import os

import pytest
from ocpi_docs.converter import convert_markdown
from ocpi_docs.records import parse_records

atheris = pytest.importorskip("atheris")


def test_parse_records_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    parsed = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        rows = parse_records(text)
        assert all(isinstance(field, str) for row in rows for field in row)
        parsed += 1

    assert parsed


def test_convert_markdown_with_fuzzed_lines():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        prefix = provider.PickValueInList(["", "# ", "## ", "| ", "|---|", "```", "&nbsp;"])
        lines.append(prefix + provider.ConsumeUnicodeNoSurrogates(32))

    content = "\n".join(lines)
    assert convert_markdown(content) == convert_markdown(content)
