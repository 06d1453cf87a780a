"""Root Typer app with global options."""

from __future__ import annotations

from typing import Optional

import typer

from dirtygate.log import configure_logging

app = typer.Typer(
    name="dirtygate",
    help="Dirty-record tolerance gate for data synchronization jobs.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from dirtygate import __version__

        typer.echo(f"dirtygate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """dirtygate: dirty-record tolerance gate."""
    configure_logging(verbose)


# Import and register commands
from dirtygate.cli.gate import gate  # noqa: E402

app.command()(gate)
