"""Configuration loading and management for fnarity.

Configuration sources are merged in priority order:
    1. Defaults (defined in ScanConfig)
    2. Global config (~/.fnarity.toml)
    3. Project config (./fnarity.toml)
    4. Explicit config file (--config)
    5. Environment variables (FNARITY_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(Path("src"), 4, workers=2)
    >>> config.min_args
    4
    >>> config.workers
    2
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import FnArityError, InvalidConfigError

ParseErrorPolicy = Literal["abort", "skip"]

PARSE_ERROR_POLICIES = ("abort", "skip")


@dataclass(frozen=True)
class ScanConfig:
    """Everything one scan run needs, fixed at startup.

    Attributes:
        root: Directory to scan
        min_args: Report functions with strictly more parameters than this
        extensions: File suffixes treated as Rust sources
        exclude_patterns: Globs matched against root-relative POSIX paths
        follow_symlinks: Descend into symlinked directories and files
        on_parse_error: "abort" stops the run on the first unparseable file,
            "skip" logs it and marks the report partial
        workers: Number of threads used for per-file extraction
    """

    root: Path
    min_args: int

    extensions: list[str] = field(default_factory=lambda: [".rs"])
    exclude_patterns: list[str] = field(default_factory=list)
    follow_symlinks: bool = True
    on_parse_error: ParseErrorPolicy = "abort"
    workers: int = 1

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if isinstance(self.min_args, bool) or not isinstance(self.min_args, int):
            raise InvalidConfigError("min_args", self.min_args, "must be an integer")
        if self.min_args < 0:
            raise InvalidConfigError("min_args", self.min_args, "must be non-negative")

        for key in ("extensions", "exclude_patterns"):
            value = getattr(self, key)
            if not isinstance(value, (list, tuple)) or not all(
                isinstance(item, str) for item in value
            ):
                raise InvalidConfigError(key, value, "must be a list of strings")

        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "must start with '.'")

        if self.on_parse_error not in PARSE_ERROR_POLICIES:
            raise InvalidConfigError(
                "on_parse_error",
                self.on_parse_error,
                f"must be one of {', '.join(PARSE_ERROR_POLICIES)}",
            )

        if not isinstance(self.follow_symlinks, bool):
            raise InvalidConfigError(
                "follow_symlinks", self.follow_symlinks, "must be true or false"
            )

        if isinstance(self.workers, bool) or not isinstance(self.workers, int):
            raise InvalidConfigError("workers", self.workers, "must be an integer")
        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")

    @property
    def partial_allowed(self) -> bool:
        """True when unparseable files are skipped instead of aborting."""
        return self.on_parse_error == "skip"


def load_config(
    root: Path, min_args: int, config_file: Optional[Path] = None, **overrides
) -> ScanConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        root: Directory to scan
        min_args: Argument-count threshold
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated ScanConfig instance

    Raises:
        FnArityError: If a config file is invalid or missing, or a value
            fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".fnarity.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise FnArityError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "fnarity.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise FnArityError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise FnArityError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise FnArityError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    merged.update({k: v for k, v in overrides.items() if v is not None})
    merged["root"] = Path(root)
    merged["min_args"] = min_args

    try:
        return ScanConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise FnArityError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from FNARITY_* environment variables.

    Supported environment variables:
        FNARITY_FOLLOW_SYMLINKS: bool (true/false/1/0)
        FNARITY_ON_PARSE_ERROR: abort/skip
        FNARITY_WORKERS: int

    ``root`` and ``min_args`` always come from the command line.

    Returns:
        Dict of field_name -> parsed_value for any FNARITY_* vars found.
    """
    type_hints = get_type_hints(ScanConfig)

    result: dict[str, Any] = {}

    for field_name in ScanConfig.__dataclass_fields__:
        if field_name in ("root", "min_args"):
            continue

        env_key = f"FNARITY_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise FnArityError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the field type is not settable from the
        environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Skip list types (like exclude_patterns) - too complex for env vars
    if origin is list or type_hint is list:
        return None

    # Bool: accept true/false/1/0/yes/no
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

    # String (including Literal types like ParseErrorPolicy)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    with open(path, "rb") as f:
        return tomllib.load(f)
