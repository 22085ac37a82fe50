"""Main CLI application entry point.

Defines the Typer application, global options, and logging setup.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from diskcare import __version__
from diskcare.cli.commands import clean, config, init, report, scan
from diskcare.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="diskcare",
    help="Find and safely clean temp directories and tool caches.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"diskcare version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route diskcare log records to stderr through Rich.

    Args:
        verbose: Show debug records.
        quiet: Only show errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    package_logger = logging.getLogger("diskcare")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Path to the rules policy file (JSON).",
        ),
    ] = None,
    logs_dir: Annotated[
        Path | None,
        typer.Option(
            "--logs-dir",
            help="Directory for run logs.",
        ),
    ] = None,
) -> None:
    """diskcare - Find and safely clean temp directories and tool caches.

    Scan reports how much space each target uses. Clean builds a plan
    from your rules policy and only moves old, safe targets to the
    Trash when explicitly asked to.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = config_path
    ctx.obj["logs_dir"] = logs_dir


# Register commands
app.add_typer(scan.app, name="scan")
app.add_typer(clean.app, name="clean")
app.add_typer(report.app, name="report")
app.add_typer(init.app, name="init")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
