"""The scan command: flag functions with more than MIN_ARGS parameters."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..exceptions import FnArityError, ParsingError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..scanner import scan
from . import app
from ._common import console, err_console, resolve_config


def _version_callback(value: bool) -> None:
    if not value:
        return
    from .. import __version__

    console.print(f"[bold cyan]fnarity[/bold cyan] version [green]{__version__}[/green]")
    raise typer.Exit(0)


@app.command()
def scan_command(
    directory: Path = typer.Argument(
        ...,
        help="Root directory to scan",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    min_args: int = typer.Argument(
        ...,
        help="Report functions with strictly more arguments than this",
        min=0,
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text | json",
        click_type=click.Choice(["text", "json"], case_sensitive=False),
    ),
    exclude: Optional[list[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Glob of root-relative paths to skip (repeatable), e.g. 'target/*'",
    ),
    no_follow_symlinks: bool = typer.Option(
        False,
        "--no-follow-symlinks",
        help="Do not descend into symbolic links",
    ),
    skip_unparseable: bool = typer.Option(
        False,
        "--skip-unparseable",
        help="Skip files that fail to parse and mark the report partial",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: 1)",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every declaration found",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Report Rust functions that take more than MIN_ARGS arguments.

    Functions are listed by argument count, worst last. A receiver
    ([cyan]self[/cyan], [cyan]&self[/cyan], [cyan]&mut self[/cyan]) is not counted.

    [bold cyan]Examples:[/bold cyan]

      fnarity src 5

      fnarity . 3 --exclude 'target/*' --format json
    """
    logger = setup_logging(
        verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None
    )

    try:
        settings = resolve_config(
            directory,
            min_args,
            config=config,
            exclude=exclude,
            no_follow_symlinks=no_follow_symlinks,
            skip_unparseable=skip_unparseable,
            workers=workers,
        )
        report = scan(settings)
        get_formatter(output_format.lower()).render(report)

    except FnArityError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        if isinstance(e, ParsingError):
            err_console.print(
                "Re-run with --skip-unparseable to skip files that fail to parse.",
                highlight=False,
            )
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Scan interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during scan")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
