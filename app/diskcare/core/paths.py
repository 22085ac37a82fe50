"""XDG-compliant path management for diskcare.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage, plus the lookup
order used to find the rules policy file.

XDG defaults:
- Config: ~/.config/diskcare/
- State: ~/.local/state/diskcare/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "diskcare"

RULES_FILENAME = "rules.json"
SETTINGS_FILENAME = "settings.toml"
LOGS_DIRNAME = "logs"
LOG_META_DIRNAME = "meta"
LATEST_RUN_FILENAME = "latest-run.json"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/diskcare/ (or XDG_CONFIG_HOME/diskcare/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes run logs that should persist between runs
    but is not configuration.

    Returns:
        Path to ~/.local/state/diskcare/ (or XDG_STATE_HOME/diskcare/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/diskcare/settings.toml.
    """
    return get_config_dir() / SETTINGS_FILENAME


def get_user_rules_path() -> Path:
    """Get the per-user rules policy path.

    Returns:
        Path to ~/.config/diskcare/rules.json.
    """
    return get_config_dir() / RULES_FILENAME


def get_project_rules_path(cwd: Path) -> Path:
    """Get the project-local rules policy path.

    Args:
        cwd: Working directory of the invocation.

    Returns:
        Path to <cwd>/config/rules.json.
    """
    return cwd / "config" / RULES_FILENAME


def get_default_logs_dir() -> Path:
    """Get the default run-log directory.

    Returns:
        Path to ~/.local/state/diskcare/logs.
    """
    return get_state_dir() / LOGS_DIRNAME


def get_latest_run_path(logs_dir: Path) -> Path:
    """Get the latest-run pointer path for a logs directory.

    Args:
        logs_dir: Directory holding run logs.

    Returns:
        Path to <logs_dir>/meta/latest-run.json.
    """
    return logs_dir / LOG_META_DIRNAME / LATEST_RUN_FILENAME


def resolve_rules_path(
    explicit: Path | None = None,
    *,
    cwd: Path | None = None,
    configured: Path | None = None,
) -> Path:
    """Resolve which rules policy file a run should use.

    Lookup order:
    1. An explicit path (``--config``)
    2. The project-local ``config/rules.json`` when it exists
    3. The ``rules_path`` from settings.toml
    4. The per-user ``rules.json`` in the XDG config directory

    Args:
        explicit: Path passed on the command line.
        cwd: Working directory (defaults to the process cwd).
        configured: Path taken from the settings file.

    Returns:
        Absolute path of the policy file (it may not exist).
    """
    base = cwd if cwd is not None else Path.cwd()

    if explicit is not None:
        return explicit if explicit.is_absolute() else (base / explicit).resolve()

    local = get_project_rules_path(base)
    if local.exists():
        return local

    if configured is not None:
        return configured.expanduser()

    return get_user_rules_path()

