"""Historical reporting over persisted run logs.

The report is a stateless fold: every ``*.json`` file in the logs
directory is parsed on its own, unreadable or malformed files are
skipped, and older log versions are migrated in memory before they are
aggregated.
"""

import json
import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from diskcare.core.paths import get_latest_run_path
from diskcare.runlog.models import LOG_SCHEMA_VERSION

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReportSummary:
    """Aggregate view over all run logs.

    Attributes:
        run_count: Number of valid run logs.
        latest_run_at: Timestamp of the most recent run.
        latest_run_file: File name of the most recent run log.
        latest_scan_at: Timestamp of the most recent scan.
        scan_total_bytes: Bytes across non-skipped targets of the latest scan.
        scan_missing_targets: Targets missing in the latest scan.
        scan_skipped_targets: Targets the latest scan could not analyze.
        apply_runs: Clean runs with apply requested.
        trashed_count: Items moved to Trash across all apply runs.
        failed_count: Items that failed across all apply runs.
        trashed_estimated_bytes: Estimated bytes moved to Trash.
        latest_apply_at: Timestamp of the most recent non-dry-run apply.
    """

    run_count: int = 0
    latest_run_at: str | None = None
    latest_run_file: str | None = None
    latest_scan_at: str | None = None
    scan_total_bytes: int = 0
    scan_missing_targets: int = 0
    scan_skipped_targets: int = 0
    apply_runs: int = 0
    trashed_count: int = 0
    failed_count: int = 0
    trashed_estimated_bytes: int = 0
    latest_apply_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "runCount": self.run_count,
            "latestRunAt": self.latest_run_at,
            "latestRunFile": self.latest_run_file,
            "latestScanAt": self.latest_scan_at,
            "scanTotalBytes": self.scan_total_bytes,
            "scanMissingTargets": self.scan_missing_targets,
            "scanSkippedTargets": self.scan_skipped_targets,
            "applyRuns": self.apply_runs,
            "trashedCount": self.trashed_count,
            "failedCount": self.failed_count,
            "trashedEstimatedBytes": self.trashed_estimated_bytes,
            "latestApplyAt": self.latest_apply_at,
        }


@dataclass(frozen=True, slots=True)
class ParsedLog:
    """Fields of one run log needed for reporting."""

    file: Path
    command: str
    timestamp: str
    dry_run: bool
    apply: bool
    version: int
    data: dict[str, Any]


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value if math.isfinite(value) else None


def _as_int(value: Any) -> int:
    number = _as_number(value)
    return int(number) if number is not None else 0


def _parse_time(value: str) -> datetime | None:
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        return None
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


def _pick_latest(logs: list[ParsedLog]) -> ParsedLog | None:
    best: ParsedLog | None = None
    best_time: datetime | None = None
    for log in logs:
        moment = _parse_time(log.timestamp)
        if moment is None:
            continue
        if best_time is None or moment > best_time:
            best, best_time = log, moment
    return best


def derive_apply_summary(apply_results: Any) -> dict[str, int] | None:
    """Compute an applySummary record from raw applyResults."""
    if not isinstance(apply_results, list):
        return None
    results = [r for r in apply_results if isinstance(r, dict)]
    trashed = [r for r in results if r.get("status") == "trashed"]
    return {
        "trashed": len(trashed),
        "failed": sum(1 for r in results if r.get("status") == "failed"),
        "trashedEstimatedBytes": sum(_as_int(r.get("estimatedBytes")) for r in trashed),
    }


def migrate_log(data: dict[str, Any], version: int) -> tuple[dict[str, Any], int]:
    """Bring a raw run log up to the current schema version.

    Version 1 logs may lack ``applySummary``; it is derived from
    ``applyResults``.

    Args:
        data: Raw log document.
        version: Version read from the document (1 when absent or not numeric).

    Returns:
        Tuple of (migrated document, new version).
    """
    if version < 2:
        migrated = dict(data)
        if not isinstance(migrated.get("applySummary"), dict):
            derived = derive_apply_summary(migrated.get("applyResults"))
            if derived is not None:
                migrated["applySummary"] = derived
        data, version = migrated, 2
    return data, max(version, LOG_SCHEMA_VERSION)


class ReportService:
    """Summarizes run logs found in a logs directory.

    Args:
        logs_dir: Directory containing ``run-*.json`` files.
    """

    def __init__(self, logs_dir: Path) -> None:
        self._logs_dir = logs_dir

    def summarize(self) -> ReportSummary:
        """Fold every readable run log into a ReportSummary."""
        logs = self.load_logs()

        latest = _pick_latest(logs)
        scan_logs = [log for log in logs if log.command == "scan"]
        latest_scan = _pick_latest(scan_logs)

        scan_total = 0
        scan_missing = 0
        scan_skipped = 0
        if latest_scan is not None:
            targets = latest_scan.data.get("targets")
            for target in targets if isinstance(targets, list) else []:
                if not isinstance(target, dict):
                    continue
                if target.get("exists") is not True:
                    scan_missing += 1
                metrics = target.get("metrics")
                if not isinstance(metrics, dict):
                    continue
                if metrics.get("skipped") is True:
                    scan_skipped += 1
                else:
                    scan_total += _as_int(metrics.get("totalBytes"))

        apply_logs = [log for log in logs if log.command == "clean" and log.apply]
        latest_apply = _pick_latest([log for log in apply_logs if not log.dry_run])

        trashed = failed = trashed_bytes = 0
        for log in apply_logs:
            summary = log.data.get("applySummary")
            if not isinstance(summary, dict):
                continue
            trashed += _as_int(summary.get("trashed"))
            failed += _as_int(summary.get("failed"))
            trashed_bytes += _as_int(summary.get("trashedEstimatedBytes"))

        return ReportSummary(
            run_count=len(logs),
            latest_run_at=latest.timestamp if latest else None,
            latest_run_file=latest.file.name if latest else None,
            latest_scan_at=latest_scan.timestamp if latest_scan else None,
            scan_total_bytes=scan_total,
            scan_missing_targets=scan_missing,
            scan_skipped_targets=scan_skipped,
            apply_runs=len(apply_logs),
            trashed_count=trashed,
            failed_count=failed,
            trashed_estimated_bytes=trashed_bytes,
            latest_apply_at=latest_apply.timestamp if latest_apply else None,
        )

    def load_logs(self) -> list[ParsedLog]:
        """Parse every candidate log file, skipping invalid ones."""
        candidates = set(self._list_json_files())
        pointed = self._read_latest_pointer()
        if pointed is not None:
            candidates.add(pointed)

        logs: list[ParsedLog] = []
        for path in sorted(candidates):
            parsed = self._parse_file(path)
            if parsed is not None:
                logs.append(parsed)
        return logs

    def _list_json_files(self) -> list[Path]:
        try:
            return [p for p in self._logs_dir.glob("*.json") if p.is_file()]
        except OSError as e:
            logger.debug("Cannot list logs directory %s: %s", self._logs_dir, e)
            return []

    def _read_latest_pointer(self) -> Path | None:
        """Resolve the log file named by meta/latest-run.json, if it is safe."""
        try:
            data = json.loads(get_latest_run_path(self._logs_dir).read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        if not isinstance(data, dict):
            return None

        log_file = data.get("logFile")
        if not isinstance(log_file, str) or not log_file.endswith(".json"):
            return None
        # Plain file name only; nothing that could escape the logs directory
        if "/" in log_file or "\\" in log_file or log_file in (".", ".."):
            return None
        return self._logs_dir / log_file

    def _parse_file(self, path: Path) -> ParsedLog | None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Skipping unreadable run log %s: %s", path.name, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Skipping run log %s: not a JSON object", path.name)
            return None

        command = data.get("command")
        timestamp = data.get("timestamp")
        if not (isinstance(command, str) and command and isinstance(timestamp, str) and timestamp):
            logger.warning("Skipping run log %s: missing command or timestamp", path.name)
            return None

        raw_version = _as_number(data.get("version"))
        data, version = migrate_log(data, int(raw_version) if raw_version is not None else 1)

        dry_run = data.get("dryRun")
        apply = data.get("apply")
        return ParsedLog(
            file=path,
            command=command,
            timestamp=timestamp,
            dry_run=dry_run if isinstance(dry_run, bool) else True,
            apply=apply if isinstance(apply, bool) else False,
            version=version,
            data=data,
        )
