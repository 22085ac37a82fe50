"""Core infrastructure for diskcare: paths, settings, errors, and theming."""

from diskcare.core.errors import (
    ApplyError,
    ConfigLoadError,
    ConfigWriteError,
    DiskcareError,
    InputError,
    LogWriteError,
    suggestion_for_code,
)

__all__ = [
    "ApplyError",
    "ConfigLoadError",
    "ConfigWriteError",
    "DiskcareError",
    "InputError",
    "LogWriteError",
    "suggestion_for_code",
]
