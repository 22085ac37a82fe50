"""Target discoverers (temp directory, tool caches, custom paths)."""

from diskcare.scanning.discoverers.base import TargetDiscoverer
from diskcare.scanning.discoverers.custom import ConfigPathsDiscoverer
from diskcare.scanning.discoverers.npm import NpmCacheDiscoverer
from diskcare.scanning.discoverers.sandbox import SandboxCacheDiscoverer
from diskcare.scanning.discoverers.temp import OsTempDiscoverer

__all__ = [
    "ConfigPathsDiscoverer",
    "NpmCacheDiscoverer",
    "OsTempDiscoverer",
    "SandboxCacheDiscoverer",
    "TargetDiscoverer",
]
