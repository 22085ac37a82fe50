"""CLI package for diskcare.

This package contains the Typer application and all subcommands.
"""

from diskcare.cli.main import app

__all__ = ["app"]
