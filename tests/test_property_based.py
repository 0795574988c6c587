from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st
from ocpi_docs.converter import convert_lines, convert_markdown
from ocpi_docs.inline import rewrite_inline_spans
from ocpi_docs.records import format_records, parse_records

field_strategy = st.text(
    alphabet=st.characters(exclude_characters="\ufeff", exclude_categories=("Cs",)),
    max_size=12,
)
rows_strategy = st.lists(st.lists(field_strategy, min_size=1, max_size=6), max_size=8)


@given(rows_strategy)
def test_records_round_trip(rows: list[list[str]]):
    assert parse_records(format_records(rows)) == rows


@given(st.text(max_size=200))
def test_parse_records_never_raises_and_is_deterministic(text: str):
    assert parse_records(text) == parse_records(text)


@given(st.text(max_size=300))
def test_convert_markdown_is_deterministic(content: str):
    assert convert_markdown(content) == convert_markdown(content)


plain_line = st.text(
    alphabet=string.ascii_letters + string.digits + " .,;:[]()!<>/*_",
    max_size=40,
)


@given(st.lists(plain_line, max_size=20))
def test_documents_without_structure_only_rewrite_inline(lines: list[str]):
    assert convert_lines(lines) == [rewrite_inline_spans(line) for line in lines]


title_strategy = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=16)


@given(st.integers(min_value=1, max_value=5), title_strategy, title_strategy)
def test_first_heading_is_depth_two_and_child_is_depth_three(
    level: int, first: str, second: str
):
    output = convert_lines([f"{'#' * level} {first}", f"{'#' * (level + 1)} {second}"])

    assert output == [f"== {first}", f"=== {second}"]


@given(
    st.lists(
        st.tuples(st.integers(min_value=1, max_value=6), title_strategy), min_size=1, max_size=10
    )
)
def test_converted_headings_survive_reconversion(headings):
    lines = [f"{'#' * level} {title}" for level, title in headings]
    once = convert_lines(lines)

    assert convert_lines(once) == once
    assert all(line.startswith("==") for line in once)
