"""Scan orchestration.

Runs every discoverer concurrently, then checks and analyzes every
discovered target concurrently. Results are sorted by target id before
anyone sees them, so output never depends on completion order.
"""

import logging
import os
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from diskcare.core.settings import DEFAULT_ANALYZER_WORKERS
from diskcare.rules.models import RuleConfig
from diskcare.scanning.analyzer import FileSystemAnalyzer
from diskcare.scanning.discoverers import (
    ConfigPathsDiscoverer,
    NpmCacheDiscoverer,
    OsTempDiscoverer,
    SandboxCacheDiscoverer,
    TargetDiscoverer,
)
from diskcare.scanning.models import DiscoveredTarget, ScanTarget

logger = logging.getLogger(__name__)

SCAN_ONLY_ENV = "DISKCARE_SCAN_ONLY"
_SANDBOX_ONLY_VALUES = ("sandbox", "sandbox-only")


class ScannerService:
    """Fan-out/fan-in scanner over a fixed set of discoverers.

    Args:
        discoverers: Probes to run.
        analyzer: Analyzer used for each target.
        max_workers: Maximum number of concurrent discoveries/analyses.
    """

    def __init__(
        self,
        discoverers: Sequence[TargetDiscoverer],
        *,
        analyzer: FileSystemAnalyzer | None = None,
        max_workers: int = DEFAULT_ANALYZER_WORKERS,
    ) -> None:
        self._discoverers = list(discoverers)
        self._analyzer = analyzer or FileSystemAnalyzer()
        self._max_workers = max(1, max_workers)

    def discover_all(self) -> list[DiscoveredTarget]:
        """Run all discoverers concurrently and merge their targets.

        Targets with an id already seen are dropped with a warning; the
        first one in discoverer order wins.

        Returns:
            Discovered targets sorted by id.
        """
        if not self._discoverers:
            return []

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = [executor.submit(d.discover) for d in self._discoverers]
            batches = [future.result() for future in futures]

        seen: dict[str, DiscoveredTarget] = {}
        for discoverer, batch in zip(self._discoverers, batches, strict=True):
            logger.debug("Discoverer %s found %d target(s)", discoverer.name, len(batch))
            for target in batch:
                if target.id in seen:
                    logger.warning("Duplicate target id %r ignored (%s)", target.id, target.path)
                    continue
                seen[target.id] = target

        return sorted(seen.values(), key=lambda t: t.id)

    def scan_all(self) -> list[ScanTarget]:
        """Discover and analyze every target.

        Returns:
            Enriched targets sorted by id.
        """
        discovered = self.discover_all()
        if not discovered:
            return []

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            results = list(executor.map(self._scan_one, discovered))

        return sorted(results, key=lambda t: t.id)

    def _scan_one(self, target: DiscoveredTarget) -> ScanTarget:
        exists = os.path.exists(target.path)
        metrics = self._analyzer.analyze(target.path)
        logger.debug(
            "Analyzed %s: exists=%s bytes=%d files=%d partial=%s skipped=%s",
            target.id,
            exists,
            metrics.total_bytes,
            metrics.file_count,
            metrics.partial,
            metrics.skipped,
        )
        return ScanTarget(target=target, exists=exists, metrics=metrics)


def default_discoverers(
    *,
    rules_config: RuleConfig | None = None,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    include_npm_cache: bool = True,
) -> list[TargetDiscoverer]:
    """Build the standard discoverer set for a run.

    ``DISKCARE_SCAN_ONLY=sandbox`` restricts discovery to the sandbox
    cache so demos and end-to-end tests never touch real caches.

    Args:
        rules_config: Policy loaded for this run; its rule paths become custom targets.
        cwd: Working directory of the invocation.
        env: Environment mapping (defaults to os.environ).
        include_npm_cache: Whether to probe the npm cache.

    Returns:
        List of discoverers.
    """
    environ = env if env is not None else os.environ
    scan_only = environ.get(SCAN_ONLY_ENV, "").strip().lower()
    if scan_only in _SANDBOX_ONLY_VALUES:
        return [SandboxCacheDiscoverer(cwd=cwd)]

    discoverers: list[TargetDiscoverer] = [OsTempDiscoverer()]
    if include_npm_cache:
        discoverers.append(NpmCacheDiscoverer(env=environ))
    discoverers.append(ConfigPathsDiscoverer(rules_config, cwd=cwd))
    return discoverers
