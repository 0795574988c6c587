"""
Converts OCPI specification sources for the documentation site.
Markdown pages become AsciiDoc, CSV tables become JSON records, and AsciiDoc
sources get their cross-references pointed at the published pages.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

import click
from .config import ConfigError, DocsConfig, build_config
from .constants import ASCIIDOC_EXTENSIONS, MARKDOWN_EXTENSIONS, RECORD_EXTENSIONS
from .converter import convert_file
from .exceptions import DocsError
from .filesystem import (
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    safe_read,
    write_text_atomic,
)
from .records import filter_active, parse_records_file, to_records
from .references import rewrite_asciidoc_references

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def _prepare_source(
    raw_path: str, extensions: Sequence[str], **overrides: object
) -> tuple[Path, DocsConfig]:
    """Validate a source path, load its configuration, and check its size.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the size limit is invalid or exceeded.
    """
    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(raw_path, base_dir, extensions)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(filepath.parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        enforce_file_size(filepath, max_file_size)
    except (IOError, ValueError) as error:
        raise click.ClickException(str(error)) from error

    return filepath, config


def _emit(content: str, output: Path | None) -> None:
    if output is None:
        click.echo(content, nl=False)
        return

    try:
        write_text_atomic(output, content)
    except IOError as error:
        raise click.ClickException(str(error)) from error
    logger.info("Wrote %s", output)


@click.group()
@click.version_option(package_name="ocpi-docs")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
def cli(verbose: bool = False):
    """
    Tools for building the OCPI documentation site.

    Examples:
        ocpi-docs convert sessions.md -o build/sessions.adoc
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output file")
@click.option(
    "--in-place",
    is_flag=True,
    help="Write next to the source file, using the configured output suffix",
)
@click.option("--output-suffix", help="Suffix used with --in-place (default: .adoc)")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def convert(
    filepath: str,
    output: Path | None = None,
    in_place: bool = False,
    output_suffix: str | None = None,
):
    """
    Convert a Markdown page into AsciiDoc.

    Prints the result unless --output or --in-place is given.

    Raises:
        click.BadParameter: If the path, options, or configuration are invalid.
        click.ClickException: If the file is too large or cannot be read or
            written.
    """
    if output is not None and in_place:
        raise click.BadParameter("--output and --in-place are mutually exclusive")
    if output_suffix is not None and not in_place:
        raise click.BadParameter("--output-suffix requires --in-place")

    source, config = _prepare_source(filepath, MARKDOWN_EXTENSIONS, output_suffix=output_suffix)

    try:
        converted = convert_file(source)
    except DocsError as error:
        raise click.ClickException(str(error)) from error

    if in_place:
        output = source.with_suffix(config.output_suffix)
    _emit(converted, output)


@cli.command()
@click.option("--active-only", is_flag=True, help="Keep only records flagged as active")
@click.option("--active-column", help="Column holding the active flag (default: active)")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def records(filepath: str, active_only: bool = False, active_column: str | None = None):
    """
    Parse a CSV file and print its records as JSON.

    The first row names the fields of every following row.
    """
    source, config = _prepare_source(filepath, RECORD_EXTENSIONS, active_column=active_column)

    try:
        rows = parse_records_file(source)
    except DocsError as error:
        raise click.ClickException(str(error)) from error

    parsed = to_records(rows)
    if active_only:
        parsed = filter_active(parsed, config.active_column, config.active_values)

    click.echo(json.dumps(parsed, indent=2, ensure_ascii=False))


@cli.command()
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output file")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def refs(filepath: str, output: Path | None = None):
    """
    Rewrite the cross-references of an AsciiDoc source for the site layout.
    """
    source, _ = _prepare_source(filepath, ASCIIDOC_EXTENSIONS)

    try:
        with safe_read(source) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise click.ClickException(f"Invalid UTF-8 sequence in {source}: {error}") from error
    except IOError as error:
        raise click.ClickException(str(error)) from error

    _emit(rewrite_asciidoc_references(content), output)


if __name__ == "__main__":
    cli()
