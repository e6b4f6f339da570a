"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ScanConfig, load_config

console = Console()

# Diagnostics only; the report itself goes to stdout through the formatters
err_console = Console(stderr=True)


def resolve_config(
    directory: Path,
    min_args: int,
    config: Optional[Path] = None,
    exclude: Optional[list[str]] = None,
    no_follow_symlinks: bool = False,
    skip_unparseable: bool = False,
    workers: Optional[int] = None,
) -> ScanConfig:
    """Build the scan config from CLI options."""
    overrides = {}
    if exclude:
        overrides["exclude_patterns"] = list(exclude)
    if no_follow_symlinks:
        overrides["follow_symlinks"] = False
    if skip_unparseable:
        overrides["on_parse_error"] = "skip"
    if workers is not None:
        overrides["workers"] = workers
    return load_config(directory, min_args, config_file=config, **overrides)
