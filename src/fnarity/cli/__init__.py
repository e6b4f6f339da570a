"""CLI entry point: registers the scan command."""

import typer

app = typer.Typer(
    name="fnarity",
    help="fnarity - report Rust functions that take too many arguments",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command to register it
from .scan import scan_command as _scan_command  # noqa: F401, E402


def main() -> None:
    """Console script entry point."""
    app()
