"""Utility modules for diskcare.

This module exports commonly used utility functions.
"""

from diskcare.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from diskcare.utils.shell import CommandResult, run_command
from diskcare.utils.text import format_bytes, format_timestamp_ms, to_one_line, truncate

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "format_bytes",
    "format_timestamp_ms",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "to_one_line",
    "truncate",
]
