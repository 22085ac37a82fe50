"""Clean plan and apply result models.

A CleanPlan is rebuilt from scratch on every run and never mutated.
Apply results record what happened to each eligible plan item.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from diskcare.rules.models import RiskLevel

PARTIAL_ESTIMATE_REASON = "Estimated size may be inaccurate due to partial analysis."


class PlanStatus(str, Enum):
    """Verdict for one plan item.

    Attributes:
        ELIGIBLE: May be moved to Trash when apply is confirmed.
        CAUTION: Kept; needs a human decision.
        BLOCKED: Never touched.
    """

    ELIGIBLE = "eligible"
    CAUTION = "caution"
    BLOCKED = "blocked"


class ApplyStatus(str, Enum):
    """Outcome of applying one eligible item."""

    TRASHED = "trashed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CleanPlanItem:
    """Per-target verdict with its justification.

    Attributes:
        id: Target identifier.
        display_name: Human-friendly target label.
        path: Target path.
        exists: Whether the path existed at scan time.
        risk: Risk tier from the policy decision.
        safe_after_days: Age threshold from the policy decision.
        status: Final verdict.
        estimated_bytes: Reclaimable bytes (0 unless eligible).
        reasons: Ordered explanations; the last one is always the policy's own.
    """

    id: str
    display_name: str
    path: str
    exists: bool
    risk: RiskLevel
    safe_after_days: int
    status: PlanStatus
    estimated_bytes: int
    reasons: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate plan item invariants after initialization."""
        if self.estimated_bytes < 0:
            msg = "Estimated bytes cannot be negative"
            raise ValueError(msg)
        if self.estimated_bytes > 0 and self.status != PlanStatus.ELIGIBLE:
            msg = "Only eligible items may carry estimated bytes"
            raise ValueError(msg)

    @property
    def is_eligible(self) -> bool:
        """Check if this item may be moved to Trash."""
        return self.status == PlanStatus.ELIGIBLE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "path": self.path,
            "exists": self.exists,
            "risk": self.risk.value,
            "safeAfterDays": self.safe_after_days,
            "status": self.status.value,
            "estimatedBytes": self.estimated_bytes,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True, slots=True)
class PlanSummary:
    """Counts per status and the total reclaimable estimate."""

    eligible_count: int = 0
    caution_count: int = 0
    blocked_count: int = 0
    estimated_bytes_total: int = 0

    @classmethod
    def from_items(cls, items: tuple[CleanPlanItem, ...] | list[CleanPlanItem]) -> "PlanSummary":
        """Reduce plan items to a summary."""
        return cls(
            eligible_count=sum(1 for i in items if i.status == PlanStatus.ELIGIBLE),
            caution_count=sum(1 for i in items if i.status == PlanStatus.CAUTION),
            blocked_count=sum(1 for i in items if i.status == PlanStatus.BLOCKED),
            estimated_bytes_total=sum(i.estimated_bytes for i in items),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "eligibleCount": self.eligible_count,
            "cautionCount": self.caution_count,
            "blockedCount": self.blocked_count,
            "estimatedBytesTotal": self.estimated_bytes_total,
        }


@dataclass(frozen=True, slots=True)
class CleanPlan:
    """Full set of verdicts for one clean invocation.

    Attributes:
        dry_run: Whether the run was a dry-run.
        apply: Whether apply was requested.
        summary: Aggregate counts.
        items: Plan items sorted by id.
    """

    dry_run: bool
    apply: bool
    summary: PlanSummary
    items: tuple[CleanPlanItem, ...]

    @property
    def eligible_items(self) -> list[CleanPlanItem]:
        """Items that may be moved to Trash."""
        return [item for item in self.items if item.is_eligible]

    @property
    def has_partial_estimates(self) -> bool:
        """Check if any item was downgraded because of a partial analysis."""
        return any(PARTIAL_ESTIMATE_REASON in item.reasons for item in self.items)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "command": "clean",
            "dryRun": self.dry_run,
            "apply": self.apply,
            "summary": self.summary.to_dict(),
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True, slots=True)
class ApplyResult:
    """Outcome of applying one eligible plan item.

    Attributes:
        id: Target identifier.
        path: Target path.
        status: trashed, skipped, or failed.
        estimated_bytes: The plan item's estimate.
        message: Explanation for skipped and failed items.
    """

    id: str
    path: str
    status: ApplyStatus
    estimated_bytes: int
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {
            "id": self.id,
            "path": self.path,
            "status": self.status.value,
            "estimatedBytes": self.estimated_bytes,
        }
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass(frozen=True, slots=True)
class ApplySummary:
    """Aggregate apply outcome."""

    trashed: int = 0
    failed: int = 0
    trashed_estimated_bytes: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "trashed": self.trashed,
            "failed": self.failed,
            "trashedEstimatedBytes": self.trashed_estimated_bytes,
        }
