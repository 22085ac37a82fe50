"""Run log payload builders.

Every scan and clean invocation is persisted as one JSON document. The
payload shape is the only contract between the commands that write
logs and the reporting service that reads them.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from diskcare import __version__
from diskcare.cleaning.models import ApplyResult, ApplySummary, CleanPlan
from diskcare.scanning.models import ScanTarget

LOG_SCHEMA_VERSION = 2


def iso_timestamp(moment: datetime | None = None) -> str:
    """Format a moment as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    value = (moment or datetime.now(UTC)).astimezone(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _base(command: str, timestamp: datetime | None, dry_run: bool) -> dict[str, Any]:
    return {
        "version": LOG_SCHEMA_VERSION,
        "appVersion": __version__,
        "timestamp": iso_timestamp(timestamp),
        "command": command,
        "dryRun": dry_run,
    }


def build_scan_log(
    targets: Sequence[ScanTarget], *, timestamp: datetime | None = None
) -> dict[str, Any]:
    """Build the run log payload for a scan."""
    payload = _base("scan", timestamp, dry_run=True)
    payload["targets"] = [target.to_dict() for target in targets]
    return payload


def build_clean_log(
    plan: CleanPlan,
    *,
    apply_results: Sequence[ApplyResult] = (),
    apply_summary: ApplySummary | None = None,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Build the run log payload for a clean.

    ``applyResults`` and ``applySummary`` are only present when apply
    was requested.

    Args:
        plan: The plan that was built.
        apply_results: Per-item apply outcomes.
        apply_summary: Aggregate apply outcome.
        timestamp: Run time (defaults to now).

    Returns:
        JSON-serializable payload.
    """
    payload = _base("clean", timestamp, dry_run=plan.dry_run)
    payload["apply"] = plan.apply
    payload["plan"] = plan.to_dict()
    if plan.apply:
        payload["applyResults"] = [result.to_dict() for result in apply_results]
        payload["applySummary"] = (apply_summary or ApplySummary()).to_dict()
    return payload
