"""Filesystem analyzer for cleanup targets.

Walks a directory tree and reduces it to size, file count, and newest
timestamps. The analyzer never raises: a root that cannot be analyzed
yields skipped metrics, and subdirectories that cannot be listed are
counted and reported as a partial analysis.
"""

import logging
import os
import stat as stat_module
from collections.abc import Callable, Iterable
from contextlib import AbstractContextManager
from typing import Protocol

from diskcare.scanning.models import ScanMetrics
from diskcare.utils.text import error_message

logger = logging.getLogger(__name__)


class DirEntryLike(Protocol):
    """Subset of os.DirEntry used by the analyzer."""

    @property
    def path(self) -> str: ...

    def is_file(self, *, follow_symlinks: bool = True) -> bool: ...

    def is_dir(self, *, follow_symlinks: bool = True) -> bool: ...


StatFn = Callable[[str], os.stat_result]
ScandirFn = Callable[[str], AbstractContextManager[Iterable[DirEntryLike]]]


def _ns_to_ms(ns: int) -> int:
    return ns // 1_000_000


class FileSystemAnalyzer:
    """Measures a directory tree.

    Only entries classified as regular files or directories by the
    listing call (without following symlinks) are considered. Files
    that vanish between listing and stat are ignored.

    Args:
        stat: Function used to stat paths (defaults to os.stat).
        scandir: Function used to list directories (defaults to os.scandir).
    """

    def __init__(
        self,
        *,
        stat: StatFn = os.stat,
        scandir: ScandirFn = os.scandir,
    ) -> None:
        self._stat = stat
        self._scandir = scandir

    def analyze(self, root_path: str) -> ScanMetrics:
        """Analyze a directory tree.

        Args:
            root_path: Absolute path of the directory to measure.

        Returns:
            ScanMetrics for the tree. Skipped metrics if the root is
            missing, unreadable, or not a directory.
        """
        try:
            root_stat = self._stat(root_path)
        except (OSError, ValueError) as e:
            logger.debug("Cannot stat root %s: %s", root_path, e)
            return ScanMetrics.skipped_with(
                f"Cannot access path: {root_path} ({error_message(e)})"
            )

        if not stat_module.S_ISDIR(root_stat.st_mode):
            return ScanMetrics.skipped_with(f"Path is not a directory: {root_path}")

        total_bytes = 0
        file_count = 0
        newest_mtime: int | None = None
        newest_atime: int | None = None
        skipped_entries = 0

        pending = [root_path]
        while pending:
            current = pending.pop()
            try:
                with self._scandir(current) as it:
                    entries = list(it)
            except (OSError, ValueError) as e:
                logger.debug("Cannot list %s: %s", current, e)
                skipped_entries += 1
                continue

            for entry in entries:
                try:
                    is_file = entry.is_file(follow_symlinks=False)
                    is_dir = not is_file and entry.is_dir(follow_symlinks=False)
                except OSError:
                    continue

                if is_dir:
                    pending.append(entry.path)
                    continue
                if not is_file:
                    continue

                try:
                    st = self._stat(entry.path)
                except (OSError, ValueError):
                    # Deleted or replaced between listing and stat
                    continue

                file_count += 1
                total_bytes += max(st.st_size, 0)
                mtime = _ns_to_ms(st.st_mtime_ns)
                atime = _ns_to_ms(st.st_atime_ns)
                newest_mtime = mtime if newest_mtime is None else max(newest_mtime, mtime)
                newest_atime = atime if newest_atime is None else max(newest_atime, atime)

        return ScanMetrics(
            total_bytes=total_bytes,
            file_count=file_count,
            last_modified_at=newest_mtime,
            last_accessed_at=newest_atime,
            skipped=False,
            partial=skipped_entries > 0,
            skipped_entries=skipped_entries,
        )
