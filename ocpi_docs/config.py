"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE
from .records import DEFAULT_ACTIVE_COLUMN, DEFAULT_ACTIVE_VALUES

TOOL_NAME = "ocpi-docs"


@dataclass
class DocsConfig:
    """Configuration for converting documentation sources.

    Attributes:
        max_file_size: Maximum file size in bytes that will be processed.
        output_suffix: Suffix given to converted files when no output path is set.
        active_column: Record column holding the "active" flag.
        active_values: Flag values (case-insensitive) that mark a record active.

    Examples:
        DocsConfig(active_column="enabled", active_values=["y"])
    """

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    # Output
    output_suffix: str = ".adoc"

    # Records
    active_column: str = DEFAULT_ACTIVE_COLUMN
    active_values: list[str] = field(default_factory=lambda: list(DEFAULT_ACTIVE_VALUES))


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> DocsConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.ocpi-docs]`` table from `pyproject.toml` and the ``[ocpi-docs]``
    or ``[tool.ocpi-docs]`` table from `.ocpi-docs.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        DocsConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("specifications/ocpi-2.2.1"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", TOOL_NAME)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / f".{TOOL_NAME}.toml",
            table_paths=[(TOOL_NAME,), ("tool", TOOL_NAME)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return DocsConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> DocsConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> DocsConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return DocsConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys use dashes; dataclass fields use underscores.
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return DocsConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: DocsConfig) -> None:
    """Validate a `DocsConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the size limit is not a positive integer, the output
            suffix does not start with a dot, or the record settings are empty
            or of the wrong type.

    Examples:
        validate_config(DocsConfig(max_file_size=1024))
    """
    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")

    if not isinstance(config.output_suffix, str) or not config.output_suffix.startswith("."):
        raise ConfigError("`output_suffix` must be a string starting with '.'")

    if not isinstance(config.active_column, str) or not config.active_column.strip():
        raise ConfigError("`active_column` must not be empty")

    values = config.active_values
    if not isinstance(values, (list, tuple)) or not values:
        raise ConfigError("`active_values` must be a non-empty list of strings")
    if not all(isinstance(value, str) for value in values):
        raise ConfigError("`active_values` must be a non-empty list of strings")


def apply_overrides(config: DocsConfig, **overrides: object) -> DocsConfig:
    """Apply override values to a `DocsConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        DocsConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `DocsConfig`.

    Examples:
        updated = apply_overrides(config, active_column="enabled")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> DocsConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        DocsConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_suffix=".asciidoc")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
