"""CLI commands for diskcare.

This package contains all subcommand implementations.
"""

from diskcare.cli.commands import clean, config, init, report, scan

__all__ = ["clean", "config", "init", "report", "scan"]
