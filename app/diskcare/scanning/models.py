"""Scanning domain models.

This module defines the data structures that flow from target discovery
through the analyzer to the planner: discovered targets, per-directory
metrics, and enriched scan targets.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TargetKind(str, Enum):
    """Kind of cleanup target.

    Attributes:
        OS_TEMP: The operating system temp directory.
        NPM_CACHE: The npm package cache.
        SANDBOX_CACHE: A local ``.sandbox-cache`` directory used for demos and tests.
        CUSTOM_PATH: A path declared in the rules policy file.
    """

    OS_TEMP = "os-temp"
    NPM_CACHE = "npm-cache"
    SANDBOX_CACHE = "sandbox-cache"
    CUSTOM_PATH = "custom-path"


@dataclass(frozen=True, slots=True)
class ScanMetrics:
    """Aggregate size and age metrics for one directory tree.

    ``skipped`` means the root could not be analyzed at all; ``partial``
    means the walk finished but some subdirectories could not be listed.
    The two flags are mutually exclusive.

    Attributes:
        total_bytes: Sum of regular file sizes.
        file_count: Number of regular files.
        last_modified_at: Newest file mtime in epoch milliseconds, None if no file seen.
        last_accessed_at: Newest file atime in epoch milliseconds, None if no file seen.
        skipped: True if the root was missing, unreadable, or not a directory.
        partial: True if at least one subdirectory could not be listed.
        skipped_entries: Number of subdirectories that could not be listed.
        error: Description of why the root was skipped.
    """

    total_bytes: int = 0
    file_count: int = 0
    last_modified_at: int | None = None
    last_accessed_at: int | None = None
    skipped: bool = False
    partial: bool = False
    skipped_entries: int = 0
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate metric invariants after initialization."""
        if self.total_bytes < 0 or self.file_count < 0 or self.skipped_entries < 0:
            msg = "Scan metrics cannot be negative"
            raise ValueError(msg)
        if self.skipped and self.partial:
            msg = "Metrics cannot be both skipped and partial"
            raise ValueError(msg)
        if self.partial and self.skipped_entries == 0:
            msg = "Partial metrics must report at least one skipped entry"
            raise ValueError(msg)

    @classmethod
    def skipped_with(cls, error: str) -> "ScanMetrics":
        """Build zeroed metrics for a root that could not be analyzed."""
        return cls(skipped=True, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {
            "totalBytes": self.total_bytes,
            "fileCount": self.file_count,
            "lastModifiedAt": self.last_modified_at,
            "lastAccessedAt": self.last_accessed_at,
            "skipped": self.skipped,
            "partial": self.partial,
            "skippedEntries": self.skipped_entries,
        }
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass(frozen=True, slots=True)
class DiscoveredTarget:
    """A cleanup location found by a discoverer, before analysis.

    Attributes:
        id: Stable identifier used in logs and rule lookups.
        kind: Target kind.
        path: Absolute filesystem path.
        display_name: Human-friendly label.
        rule_id: Rule to consult when it differs from ``id`` (custom paths).
        diagnostics: Notes about how the path was resolved.
    """

    id: str
    kind: TargetKind
    path: str
    display_name: str
    rule_id: str | None = None
    diagnostics: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.id:
            msg = "Target id cannot be empty"
            raise ValueError(msg)
        if not self.path:
            msg = "Target path cannot be empty"
            raise ValueError(msg)

    @property
    def policy_id(self) -> str:
        """Identifier used to look up the policy rule for this target."""
        return self.rule_id or self.id


@dataclass(frozen=True, slots=True)
class ScanTarget:
    """A discovered target enriched with existence and metrics.

    Attributes:
        target: The discovered target.
        exists: Whether the path existed at scan time.
        metrics: Analyzer output for the path.
    """

    target: DiscoveredTarget
    exists: bool
    metrics: ScanMetrics

    @property
    def id(self) -> str:
        """Target identifier."""
        return self.target.id

    @property
    def path(self) -> str:
        """Target path."""
        return self.target.path

    @property
    def display_name(self) -> str:
        """Target display name."""
        return self.target.display_name

    @property
    def policy_id(self) -> str:
        """Identifier used to look up the policy rule."""
        return self.target.policy_id

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {
            "id": self.target.id,
            "kind": self.target.kind.value,
            "path": self.target.path,
            "displayName": self.target.display_name,
            "exists": self.exists,
            "metrics": self.metrics.to_dict(),
        }
        if self.target.rule_id is not None:
            result["ruleId"] = self.target.rule_id
        if self.target.diagnostics:
            result["diagnostics"] = list(self.target.diagnostics)
        return result
