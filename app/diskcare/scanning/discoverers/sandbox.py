"""Sandbox cache probe.

The sandbox cache is a disposable ``.sandbox-cache`` directory in the
working directory. It gives demos and end-to-end tests a target that is
safe to trash.
"""

from pathlib import Path

from diskcare.scanning.discoverers.base import TargetDiscoverer
from diskcare.scanning.models import DiscoveredTarget, TargetKind

SANDBOX_DIRNAME = ".sandbox-cache"


class SandboxCacheDiscoverer(TargetDiscoverer):
    """Yields ``<cwd>/.sandbox-cache``.

    Args:
        cwd: Directory to resolve the sandbox against (defaults to the process cwd).
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd = cwd

    @property
    def name(self) -> str:
        return "sandbox-cache"

    def discover(self) -> list[DiscoveredTarget]:
        base = self._cwd if self._cwd is not None else Path.cwd()
        return [
            DiscoveredTarget(
                id="sandbox-cache",
                kind=TargetKind.SANDBOX_CACHE,
                path=str((base / SANDBOX_DIRNAME).resolve()),
                display_name="Sandbox Cache (Test Target)",
            )
        ]
