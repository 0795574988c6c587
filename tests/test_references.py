from __future__ import annotations

import textwrap

import pytest

from ocpi_docs.references import rewrite_asciidoc_references, title_from_filename, to_adoc_name


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("mod_charging_profiles.asciidoc", "Charging Profiles"),
        ("transport_and_format.md", "Transport And Format"),
        ("version_information_endpoint.adoc", "Version Information Endpoint"),
        ("terminology--and-definitions", "Terminology And Definitions"),
    ],
)
def test_title_from_filename(file_name: str, expected: str):
    assert title_from_filename(file_name) == expected


def test_to_adoc_name():
    assert to_adoc_name("mod_cdrs.asciidoc") == "mod_cdrs.adoc"
    assert to_adoc_name("mod_cdrs.adoc") == "mod_cdrs.adoc"


def test_rewrite_angle_references():
    content = "See <<mod_cdrs.asciidoc#cdr_object,CDR>> and <<types.ascii#types_datetime_type,DateTime>>."

    assert rewrite_asciidoc_references(content) == (
        "See <<spec/mod_cdrs.adoc#cdr_object,CDR>> and "
        "<<spec/types.adoc#types_datetime_type,DateTime>>."
    )


def test_rewrite_xref_macros():
    content = "xref:mod_tariffs.asciidoc[Tariffs] xref:spec/mod_tokens.adoc[Tokens]"

    assert rewrite_asciidoc_references(content) == (
        "xref:spec/mod_tariffs.adoc[Tariffs] xref:spec/mod_tokens.adoc[Tokens]"
    )


def test_rewrite_fixes_known_filename():
    content = "<<transport_and_format_not_available.asciidoc#transport_and_format_not_available,NA>>"

    assert rewrite_asciidoc_references(content) == (
        "<<spec/transport_and_format.adoc#transport_and_format_not_available,NA>>"
    )


def test_rewrite_drops_trailing_delimiter_of_message_rows():
    content = textwrap.dedent(
        """\
        |message|<<types.asciidoc#types_displaytext_class,DisplayText>>|*|Error message.|
        |other|string|1|Kept as is.|
        """
    )

    assert rewrite_asciidoc_references(content) == textwrap.dedent(
        """\
        |message|<<spec/types.adoc#types_displaytext_class,DisplayText>>|*|Error message.
        |other|string|1|Kept as is.|
        """
    )


def test_rewrite_is_stable():
    once = rewrite_asciidoc_references("<<mod_cdrs.asciidoc#x,y>> xref:a.adoc[b]")

    assert rewrite_asciidoc_references(once) == once
