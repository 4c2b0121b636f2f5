"""Configuration loading and management for dynamic-ati.

Configuration sources are merged in priority order:
    1. Defaults (defined in EngineConfig)
    2. Global config (~/.dynamic-ati.toml)
    3. Project config (./dynamic-ati.toml)
    4. Explicit config file
    5. Environment variables (DYNAMIC_ATI_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, strict_checkout=False)
    >>> config.verbosity
    'verbose'
    >>> config.strict_checkout
    False
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
ReportFormat = Literal["rich", "json", "text"]

ENV_PREFIX = "DYNAMIC_ATI_"
CONFIG_FILENAME = "dynamic-ati.toml"

_VERBOSITIES = ("quiet", "normal", "verbose")
_REPORT_FORMATS = ("rich", "json", "text")


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for one analysis run.

    Attributes:
        strict_checkout: Raise AlreadyCheckedOutError on a second checkout of
            an in-flight site id. When False, the second checkout gets a fresh
            empty site and a warning is logged.
        verbosity: Logging verbosity level
        report_format: Default output format for reports
        demo_iterations: Loop length of the fibonacci worked example
    """

    strict_checkout: bool = True
    verbosity: Verbosity = "normal"
    report_format: ReportFormat = "rich"
    demo_iterations: int = 5

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.strict_checkout, bool):
            raise InvalidConfigError(
                "strict_checkout", self.strict_checkout, "must be true or false"
            )
        if isinstance(self.demo_iterations, bool) or not isinstance(self.demo_iterations, int):
            raise InvalidConfigError(
                "demo_iterations", self.demo_iterations, "must be an integer"
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )
        if self.report_format not in _REPORT_FORMATS:
            raise InvalidConfigError(
                "report_format",
                self.report_format,
                f"expected one of {', '.join(_REPORT_FORMATS)}",
            )
        if self.demo_iterations < 0:
            raise InvalidConfigError(
                "demo_iterations", self.demo_iterations, "must be non-negative"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> EngineConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask file values.

    Returns:
        Validated EngineConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable, or a
            key is unknown
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    # 1. Global config
    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    # 2. Project config
    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    # 3. Explicit config file
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(
                f"Config file not found: {config_file}", details={"path": str(config_file)}
            )
        merged.update(_load_toml_file(config_file))

    # 4. Environment variables
    merged.update(_load_env_vars())

    # 5. CLI overrides
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return EngineConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DYNAMIC_ATI_* environment variables.

    Supported environment variables:
        DYNAMIC_ATI_STRICT_CHECKOUT: bool (true/false/1/0)
        DYNAMIC_ATI_VERBOSITY: quiet/normal/verbose
        DYNAMIC_ATI_REPORT_FORMAT: rich/json/text
        DYNAMIC_ATI_DEMO_ITERATIONS: int
    """
    type_hints = get_type_hints(EngineConfig)
    result: dict[str, Any] = {}

    for field_name in EngineConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"from {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # Literal fields are validated by EngineConfig
    return value


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, reading the [dynamic-ati] table if present."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(
            f"Invalid config file '{path}': {e}", details={"path": str(path)}
        )

    section = data.get("dynamic-ati")
    if isinstance(section, dict):
        return section
    return data
