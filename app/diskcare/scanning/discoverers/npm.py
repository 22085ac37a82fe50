"""npm cache directory probe.

Asks npm for its cache location and falls back to the platform
defaults when npm is missing or answers with something unusable.
Every fallback is recorded as a diagnostic on the target.
"""

import logging
import os
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path

from diskcare.scanning.discoverers.base import TargetDiscoverer
from diskcare.scanning.models import DiscoveredTarget, TargetKind
from diskcare.utils.shell import run_command
from diskcare.utils.text import error_message

logger = logging.getLogger(__name__)

_EMPTY_VALUES = ("", "undefined", "null")


def normalize_npm_path(value: str, home: Path) -> str | None:
    """Normalize a cache path printed by ``npm config get cache``.

    Removes wrapping quotes, expands a leading ``~`` and normalizes
    separators.

    Args:
        value: Raw value printed by npm.
        home: Home directory used for ``~`` expansion.

    Returns:
        Normalized path, or None if nothing usable remains.
    """
    unquoted = value.strip()
    if len(unquoted) >= 2 and unquoted.startswith('"') and unquoted.endswith('"'):
        unquoted = unquoted[1:-1].strip()
    if not unquoted:
        return None

    if unquoted == "~":
        return str(home)
    if unquoted.startswith(("~/", "~\\")):
        return os.path.normpath(os.path.join(str(home), unquoted[2:]))

    return os.path.normpath(unquoted)


class NpmCacheDiscoverer(TargetDiscoverer):
    """Yields the npm cache directory.

    Args:
        platform: Platform identifier (defaults to sys.platform).
        env: Environment mapping (defaults to os.environ).
        home: Home directory (defaults to Path.home()).
    """

    def __init__(
        self,
        *,
        platform: str | None = None,
        env: Mapping[str, str] | None = None,
        home: Path | None = None,
    ) -> None:
        self._platform = platform if platform is not None else sys.platform
        self._env = env if env is not None else os.environ
        self._home = home if home is not None else Path.home()

    @property
    def name(self) -> str:
        return "npm-cache"

    def discover(self) -> list[DiscoveredTarget]:
        path, diagnostics = self._resolve_cache_path()
        return [
            DiscoveredTarget(
                id="npm-cache",
                kind=TargetKind.NPM_CACHE,
                path=path,
                display_name="npm Cache Directory",
                diagnostics=tuple(diagnostics),
            )
        ]

    def _resolve_cache_path(self) -> tuple[str, list[str]]:
        """Resolve the cache path with fallbacks.

        Order:
        1. ``npm config get cache``
        2. %APPDATA%\\npm-cache, then %LOCALAPPDATA%\\npm-cache (Windows)
        3. ~/.npm
        """
        diagnostics: list[str] = []

        from_npm = self._query_npm(diagnostics)
        if from_npm is not None:
            return from_npm, diagnostics

        if self._platform == "win32":
            roaming = self._env.get("APPDATA")
            if roaming:
                diagnostics.append("npm cache path resolved via APPDATA fallback.")
                return os.path.join(roaming, "npm-cache"), diagnostics
            local = self._env.get("LOCALAPPDATA")
            if local:
                diagnostics.append("npm cache path resolved via LOCALAPPDATA fallback.")
                return os.path.join(local, "npm-cache"), diagnostics

        diagnostics.append("npm cache path resolved via homedir fallback.")
        return str(self._home / ".npm"), diagnostics

    def _query_npm(self, diagnostics: list[str]) -> str | None:
        """Ask npm for its cache directory, appending a diagnostic on failure."""
        try:
            result = run_command(["npm", "config", "get", "cache"])
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.debug("npm config lookup failed: %s", e)
            diagnostics.append(f"npm config lookup failed ({error_message(e)}); falling back.")
            return None

        if not result.success:
            diagnostics.append(
                f"npm config lookup failed (exit code {result.returncode}); falling back."
            )
            return None

        raw = result.stdout.strip()
        if raw in _EMPTY_VALUES:
            diagnostics.append("npm returned empty/undefined cache path; falling back.")
            return None

        normalized = normalize_npm_path(raw, self._home)
        if normalized is None:
            diagnostics.append("npm returned an unparseable cache path; falling back.")
            return None

        return normalized
