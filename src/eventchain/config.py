"""Configuration loading and management for eventchain.

Configuration sources are merged in priority order:
    1. Defaults (defined in MatrixConfig)
    2. Global config (~/.eventchain.toml)
    3. Project config (./eventchain.toml)
    4. Explicit config file (--config)
    5. Environment variables (EVENTCHAIN_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(delimiter=",", bracketed=False)
    >>> config.delimiter
    ','
    >>> config.layout.timestamp
    10
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError, InvalidDelimiterError

OutputFormat = Literal["csv", "json", "mermaid", "rich"]

OUTPUT_FORMATS = ("csv", "json", "mermaid", "rich")

ENV_PREFIX = "EVENTCHAIN_"


@dataclass(frozen=True)
class FieldLayout:
    """0-indexed positions of the fields an Event is built from.

    The defaults match the event export this tool was written against;
    a different export is a config change, not a code change.
    """

    name: int = 2
    run_id: int = 5
    category_id: int = 6
    timestamp: int = 10

    def __post_init__(self) -> None:
        positions = {
            "name": self.name,
            "run_id": self.run_id,
            "category_id": self.category_id,
            "timestamp": self.timestamp,
        }
        for key, value in positions.items():
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidConfigError(f"layout.{key}", value, "must be a non-negative integer")
        if len(set(positions.values())) != len(positions):
            raise InvalidConfigError("layout", positions, "field positions must be distinct")


@dataclass(frozen=True)
class MatrixConfig:
    """Configuration for loading events and rendering transition matrices.

    Attributes:
        Record source:
            delimiter: Field delimiter of the raw event records
            timestamp_format: strptime format of the timestamp field
            comment: Lines starting with this character are ignored (None = off)
            layout: Field positions (see FieldLayout)

        Builder:
            bracketed: Bracket every run with start/stop sentinel events
            start: Name of the synthetic event preceding each run
            stop: Name of the synthetic event following each run

        Output:
            table_delimiter: Field delimiter of table artifacts
            min_weight: Diagram edges must be strictly heavier than this
            output_format: One of csv, json, mermaid, rich
    """

    # Record source
    delimiter: str = ";"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    comment: Optional[str] = None

    # Builder
    bracketed: bool = True
    start: str = "start"
    stop: str = "stop"

    # Output
    table_delimiter: str = ","
    min_weight: int = 0
    output_format: OutputFormat = "csv"

    layout: FieldLayout = field(default_factory=FieldLayout)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if len(self.delimiter) != 1:
            raise InvalidDelimiterError(self.delimiter, key="delimiter")
        if len(self.table_delimiter) != 1:
            raise InvalidDelimiterError(self.table_delimiter, key="table_delimiter")
        if self.comment is not None and len(self.comment) != 1:
            raise InvalidDelimiterError(self.comment, key="comment")

        if self.bracketed:
            if not self.start or not self.stop:
                raise InvalidConfigError(
                    "start/stop", f"{self.start!r}/{self.stop!r}", "sentinel names must be non-empty"
                )
            if self.start == self.stop:
                raise InvalidConfigError("start/stop", self.start, "sentinel names must differ")

        if self.min_weight < 0:
            raise InvalidConfigError("min_weight", self.min_weight, "must be non-negative")
        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format", self.output_format, f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> MatrixConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated MatrixConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            merged value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".eventchain.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "eventchain.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    merged.update({k: v for k, v in overrides.items() if v is not None})

    # Handle [layout] section from TOML
    layout = merged.pop("layout", None)
    if isinstance(layout, dict):
        try:
            merged["layout"] = FieldLayout(**layout)
        except TypeError as e:
            raise ConfigurationError(f"Invalid [layout] config: {e}")
    elif isinstance(layout, FieldLayout):
        merged["layout"] = layout

    try:
        return MatrixConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from EVENTCHAIN_* environment variables.

    Every scalar MatrixConfig field can be set, e.g. EVENTCHAIN_DELIMITER,
    EVENTCHAIN_BRACKETED (true/false/1/0), EVENTCHAIN_MIN_WEIGHT.
    """
    type_hints = get_type_hints(MatrixConfig)

    result: dict[str, Any] = {}

    for field_name in MatrixConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single variable
    (the nested layout).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
