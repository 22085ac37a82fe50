"""Error taxonomy for diskcare.

Every error that can change the outcome of a command derives from
DiskcareError and carries a stable code plus a context mapping with
the paths involved. Scan-level problems never show up here: they are
encoded in the analyzer metrics instead.
"""

from typing import Any


class DiskcareError(Exception):
    """Base exception for all diskcare errors.

    Attributes:
        message: Human-readable description.
        code: Stable machine-readable error code.
        context: Extra details (paths, option values) for diagnostics.
    """

    code = "DISKCARE_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class ConfigLoadError(DiskcareError):
    """Raised when a configuration file (rules.json, settings.toml) cannot be loaded."""

    code = "CONFIG_LOAD_ERROR"


class ConfigWriteError(DiskcareError):
    """Raised when a configuration file cannot be written."""

    code = "CONFIG_WRITE_ERROR"


class LogWriteError(DiskcareError):
    """Raised when a run log cannot be persisted."""

    code = "LOG_WRITE_ERROR"


class ApplyError(DiskcareError):
    """Raised when a clean plan cannot be applied at all."""

    code = "APPLY_ERROR"


class InputError(DiskcareError):
    """Raised for invalid command-line input or option combinations."""

    code = "VALIDATION_ERROR"


_SUGGESTIONS: dict[str, str] = {
    ConfigLoadError.code: (
        "Config file is corrupted or missing. Fix it manually or run "
        "'diskcare init --force' to recreate."
    ),
    ConfigWriteError.code: (
        "Could not write config file. Check the path, permissions, and disk space."
    ),
    LogWriteError.code: (
        "Could not write to logs directory. Check permissions, disk space, "
        "or pass a different --logs-dir."
    ),
    ApplyError.code: (
        "Cleanup could not be applied. Try running in dry-run mode first. "
        "To actually clean, use: --apply --no-dry-run --yes."
    ),
    InputError.code: (
        "Invalid input. Check CLI arguments and configuration values. "
        "Run 'diskcare <command> --help' for usage examples."
    ),
}


def suggestion_for_code(code: str) -> str | None:
    """Return a one-line remediation hint for an error code.

    Args:
        code: Error code from a DiskcareError subclass.

    Returns:
        Hint text, or None if the code has no suggestion.
    """
    return _SUGGESTIONS.get(code)
