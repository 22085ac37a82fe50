"""Operating system temp directory probe."""

import tempfile
from pathlib import Path

from diskcare.scanning.discoverers.base import TargetDiscoverer
from diskcare.scanning.models import DiscoveredTarget, TargetKind


class OsTempDiscoverer(TargetDiscoverer):
    """Yields the directory returned by tempfile.gettempdir()."""

    @property
    def name(self) -> str:
        return "os-temp"

    def discover(self) -> list[DiscoveredTarget]:
        return [
            DiscoveredTarget(
                id="os-temp",
                kind=TargetKind.OS_TEMP,
                path=str(Path(tempfile.gettempdir()).resolve()),
                display_name="OS Temp Directory",
            )
        ]
