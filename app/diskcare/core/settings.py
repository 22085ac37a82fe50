"""Application settings.

Settings are optional and live in ~/.config/diskcare/settings.toml. A
missing file means "use the defaults"; a broken file is reported as a
SettingsError so the CLI can tell the user which file to fix.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from diskcare.core.errors import ConfigLoadError, ConfigWriteError
from diskcare.core.paths import get_default_logs_dir, get_settings_path

DEFAULT_ANALYZER_WORKERS = 4


class AppSettings(BaseModel):
    """User-level settings for diskcare.

    Attributes:
        logs_dir: Directory for run logs (None = XDG state dir).
        rules_path: Policy file used when no project-local config exists.
        analyzer_workers: Number of targets analyzed concurrently.
        include_npm_cache: Whether to probe the npm cache directory.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    logs_dir: Annotated[
        Path | None,
        Field(description="Directory for run logs (None = XDG state dir)"),
    ] = None
    rules_path: Annotated[
        Path | None,
        Field(description="Fallback rules.json location"),
    ] = None
    analyzer_workers: Annotated[
        int,
        Field(ge=1, le=32, description="Concurrent target analyses (1-32)"),
    ] = DEFAULT_ANALYZER_WORKERS
    include_npm_cache: Annotated[
        bool,
        Field(description="Probe the npm cache directory"),
    ] = True

    @property
    def effective_logs_dir(self) -> Path:
        """Get the logs directory, falling back to the XDG state dir."""
        if self.logs_dir is not None:
            return self.logs_dir.expanduser()
        return get_default_logs_dir()


class SettingsError(ConfigLoadError):
    """Raised when settings.toml exists but cannot be used."""


def load_settings(path: Path | None = None) -> AppSettings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default location.

    Returns:
        Validated AppSettings (defaults when the file does not exist).

    Raises:
        SettingsError: If the file cannot be read, parsed, or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return AppSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(
            f"Invalid TOML syntax: {e}", {"settingsPath": str(settings_path)}
        ) from e
    except OSError as e:
        raise SettingsError(
            f"Failed to read settings: {e}", {"settingsPath": str(settings_path)}
        ) from e

    try:
        return AppSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(
            f"Invalid settings content: {e.error_count()} error(s)",
            {"settingsPath": str(settings_path)},
        ) from e


def save_settings(settings: AppSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        settings: The AppSettings object to save.
        path: Destination path. If None, uses the default location.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigWriteError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigWriteError(
            f"Failed to write settings: {e}", {"settingsPath": str(settings_path)}
        ) from e

    return settings_path


def _settings_to_dict(settings: AppSettings) -> dict[str, object]:
    """Convert AppSettings to a dictionary for TOML serialization.

    TOML has no null, so unset paths are omitted.
    """
    result: dict[str, object] = {
        "analyzer_workers": settings.analyzer_workers,
        "include_npm_cache": settings.include_npm_cache,
    }
    if settings.logs_dir is not None:
        result["logs_dir"] = str(settings.logs_dir)
    if settings.rules_path is not None:
        result["rules_path"] = str(settings.rules_path)
    return result
