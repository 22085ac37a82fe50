"""Target discovery and filesystem analysis.

This module provides the discoverers that locate cleanup targets, the
analyzer that measures them, and the service that runs both
concurrently.
"""

from diskcare.scanning.analyzer import FileSystemAnalyzer
from diskcare.scanning.models import DiscoveredTarget, ScanMetrics, ScanTarget, TargetKind
from diskcare.scanning.service import ScannerService, default_discoverers

__all__ = [
    "DiscoveredTarget",
    "FileSystemAnalyzer",
    "ScanMetrics",
    "ScanTarget",
    "ScannerService",
    "TargetKind",
    "default_discoverers",
]
