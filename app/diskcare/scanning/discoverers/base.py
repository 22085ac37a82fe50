"""Abstract base class for target discoverers.

This module defines the TargetDiscoverer interface that every probe
(temp directory, tool caches, policy-declared paths) implements.
"""

from abc import ABC, abstractmethod

from diskcare.scanning.models import DiscoveredTarget


class TargetDiscoverer(ABC):
    """Abstract base class for all target discoverers.

    Discoverers only resolve where a target lives; they never touch the
    target's contents. Environment problems (a missing tool, an odd
    config value) are recorded as diagnostics on the target instead of
    being raised.

    Example:
        >>> discoverer = OsTempDiscoverer()
        >>> for target in discoverer.discover():
        ...     print(f"{target.id}: {target.path}")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short name for logging."""

    @abstractmethod
    def discover(self) -> list[DiscoveredTarget]:
        """Resolve the targets this probe knows about.

        Returns:
            List of discovered targets (possibly empty).
        """
