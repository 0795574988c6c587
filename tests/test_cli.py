from __future__ import annotations

import json
import textwrap
from pathlib import Path

from ocpi_docs.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_convert_prints_asciidoc(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "sessions.md",
        """
        ### Sessions

        | Property | Type |
        |----------|------|
        | id | [CiString](types.md#cistring) |
        """,
    )

    result = cli_runner.invoke(cli, ["convert", str(target)])

    assert result.exit_code == 0
    assert result.output == (
        "== Sessions\n"
        "\n"
        '[options="header"]\n'
        "|===\n"
        "| Property | Type\n"
        "| id | xref:spec/types.adoc#cistring[CiString]\n"
        "|===\n"
    )


def test_convert_writes_output_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "cdrs.md", "# CDRs\n")
    output = tmp_path / "build" / "cdrs.adoc"

    result = cli_runner.invoke(cli, ["convert", str(target), "-o", str(output)])

    assert result.exit_code == 0
    assert result.output == ""
    assert output.read_text(encoding="utf-8") == "== CDRs\n"


def test_convert_in_place_uses_configured_suffix(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.ocpi-docs]
        output_suffix = ".asciidoc"
        """,
    )
    target = _write(tmp_path, "tokens.md", "# Tokens\n")

    result = cli_runner.invoke(cli, ["convert", "--in-place", str(target)])

    assert result.exit_code == 0
    assert (tmp_path / "tokens.asciidoc").read_text(encoding="utf-8") == "== Tokens\n"


def test_convert_rejects_output_with_in_place(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "tokens.md", "# Tokens\n")

    result = cli_runner.invoke(cli, ["convert", "--in-place", "-o", "x.adoc", str(target)])

    assert result.exit_code != 0
    assert "mutually exclusive" in result.output


def test_convert_rejects_output_suffix_without_in_place(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "tokens.md", "# Tokens\n")

    result = cli_runner.invoke(cli, ["convert", "--output-suffix", ".asciidoc", str(target)])

    assert result.exit_code != 0
    assert "--output-suffix requires --in-place" in result.output
    assert not (tmp_path / "tokens.asciidoc").exists()


def test_convert_in_place_with_output_suffix(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "tokens.md", "# Tokens\n")

    result = cli_runner.invoke(
        cli, ["convert", "--in-place", "--output-suffix", ".asciidoc", str(target)]
    )

    assert result.exit_code == 0
    assert (tmp_path / "tokens.asciidoc").read_text(encoding="utf-8") == "== Tokens\n"


def test_convert_rejects_wrong_extension(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "notes.txt", "# Notes\n")

    result = cli_runner.invoke(cli, ["convert", str(target)])

    assert result.exit_code != 0
    assert "unsupported extension" in result.output


def test_convert_rejects_large_files(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OCPI_DOCS_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "big.md", "# Too big\n")

    result = cli_runner.invoke(cli, ["convert", str(target)])

    assert result.exit_code != 0
    assert "exceeds the limit" in result.output


def test_convert_reports_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.ocpi-docs]
        max_file_size = -1
        """,
    )
    target = _write(tmp_path, "cdrs.md", "# CDRs\n")

    result = cli_runner.invoke(cli, ["convert", str(target)])

    assert result.exit_code != 0
    assert "max_file_size" in result.output


def test_records_prints_json(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "parties.csv",
        """
        name,country,active
        "Charge, Inc.",NL,true
        Old CPO,DE,false
        """,
    )

    result = cli_runner.invoke(cli, ["records", str(target)])

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"name": "Charge, Inc.", "country": "NL", "active": "true"},
        {"name": "Old CPO", "country": "DE", "active": "false"},
    ]


def test_records_active_only_with_custom_column(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "parties.csv",
        """
        name,enabled
        A,yes
        B,no
        C
        """,
    )

    result = cli_runner.invoke(
        cli, ["records", "--active-only", "--active-column", "enabled", str(target)]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == [{"name": "A", "enabled": "yes"}]


def test_refs_rewrites_asciidoc(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "mod_cdrs.asciidoc", "See <<types.asciidoc#types_price_class,Price>>.\n")

    result = cli_runner.invoke(cli, ["refs", str(target)])

    assert result.exit_code == 0
    assert result.output == "See <<spec/types.adoc#types_price_class,Price>>.\n"


def test_refs_rejects_markdown(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "cdrs.md", "# CDRs\n")

    result = cli_runner.invoke(cli, ["refs", str(target)])

    assert result.exit_code != 0


def test_version_option(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "version" in result.output
