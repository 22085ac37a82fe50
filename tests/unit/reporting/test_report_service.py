"""Unit tests for ReportService."""

import json
from pathlib import Path
from typing import Any

from diskcare.reporting.service import ReportService, derive_apply_summary, migrate_log


def _write_log(logs_dir: Path, name: str, data: Any) -> Path:
    logs_dir.mkdir(parents=True, exist_ok=True)
    path = logs_dir / name
    path.write_text(json.dumps(data))
    return path


def _scan(timestamp: str, targets: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "version": 2,
        "timestamp": timestamp,
        "command": "scan",
        "dryRun": True,
        "targets": targets,
    }


def _target(total: int, *, exists: bool = True, skipped: bool = False) -> dict[str, Any]:
    return {"id": "t", "exists": exists, "metrics": {"totalBytes": total, "skipped": skipped}}


def _clean(
    timestamp: str, *, dry_run: bool, apply: bool, summary: dict[str, int] | None = None
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "version": 2,
        "timestamp": timestamp,
        "command": "clean",
        "dryRun": dry_run,
        "apply": apply,
    }
    if summary is not None:
        data["applySummary"] = summary
    return data


class TestReportService:
    """Tests for ReportService.summarize."""

    def test_empty_directory(self, tmp_path: Path) -> None:
        """No logs yields an all-zero summary."""
        summary = ReportService(tmp_path / "missing").summarize()

        assert summary.run_count == 0
        assert summary.latest_run_at is None
        assert summary.latest_scan_at is None

    def test_latest_scan_totals(self, tmp_path: Path) -> None:
        """Only the newest scan contributes snapshot totals."""
        _write_log(tmp_path, "run-1.json", _scan("2026-01-01T00:00:00.000Z", [_target(999)]))
        _write_log(
            tmp_path,
            "run-2.json",
            _scan(
                "2026-01-02T00:00:00.000Z",
                [_target(100), _target(0, exists=False, skipped=True), _target(50, skipped=True)],
            ),
        )

        summary = ReportService(tmp_path).summarize()

        assert summary.run_count == 2
        assert summary.latest_scan_at == "2026-01-02T00:00:00.000Z"
        assert summary.latest_run_file == "run-2.json"
        assert summary.scan_total_bytes == 100
        assert summary.scan_missing_targets == 1
        assert summary.scan_skipped_targets == 2

    def test_apply_totals(self, tmp_path: Path) -> None:
        """Apply runs are counted and their summaries added up."""
        plan_only = _clean("2026-01-01T00:00:00Z", dry_run=True, apply=False)
        _write_log(tmp_path, "run-1.json", plan_only)
        _write_log(
            tmp_path,
            "run-2.json",
            _clean(
                "2026-01-02T00:00:00Z",
                dry_run=False,
                apply=True,
                summary={"trashed": 2, "failed": 1, "trashedEstimatedBytes": 300},
            ),
        )
        _write_log(
            tmp_path,
            "run-3.json",
            _clean(
                "2026-01-03T00:00:00Z",
                dry_run=True,
                apply=True,
                summary={"trashed": 0, "failed": 0, "trashedEstimatedBytes": 0},
            ),
        )

        summary = ReportService(tmp_path).summarize()

        assert summary.apply_runs == 2
        assert summary.trashed_count == 2
        assert summary.failed_count == 1
        assert summary.trashed_estimated_bytes == 300
        assert summary.latest_apply_at == "2026-01-02T00:00:00Z"
        assert summary.latest_run_at == "2026-01-03T00:00:00Z"

    def test_corrupt_files_are_skipped(self, tmp_path: Path) -> None:
        """Broken or foreign files do not fail the report."""
        _write_log(tmp_path, "run-ok.json", _scan("2026-01-01T00:00:00Z", [_target(10)]))
        (tmp_path / "run-broken.json").write_text("{not json")
        _write_log(tmp_path, "run-array.json", [1, 2, 3])
        _write_log(tmp_path, "run-partial.json", {"command": "scan"})

        summary = ReportService(tmp_path).summarize()

        assert summary.run_count == 1
        assert summary.scan_total_bytes == 10

    def test_v1_log_is_migrated(self, tmp_path: Path) -> None:
        """Logs without applySummary get one derived from applyResults."""
        _write_log(
            tmp_path,
            "run-old.json",
            {
                "timestamp": "2025-06-01T00:00:00Z",
                "command": "clean",
                "dryRun": False,
                "apply": True,
                "applyResults": [
                    {"status": "trashed", "estimatedBytes": 40},
                    {"status": "trashed", "estimatedBytes": 2},
                    {"status": "failed", "estimatedBytes": 7},
                    {"status": "skipped", "estimatedBytes": 9},
                ],
            },
        )

        summary = ReportService(tmp_path).summarize()

        assert summary.trashed_count == 2
        assert summary.failed_count == 1
        assert summary.trashed_estimated_bytes == 42

    def test_pointer_is_not_double_counted(self, tmp_path: Path) -> None:
        """The latest-run pointer names a file that is already listed."""
        log = _write_log(tmp_path, "run-1.json", _scan("2026-01-01T00:00:00Z", []))
        _write_log(tmp_path / "meta", "latest-run.json", {"logFile": log.name})

        summary = ReportService(tmp_path).summarize()

        assert summary.run_count == 1

    def test_pointer_cannot_escape(self, tmp_path: Path) -> None:
        """A pointer with a path component is ignored."""
        outside = _write_log(tmp_path, "outside.json", _scan("2026-01-01T00:00:00Z", []))
        logs_dir = tmp_path / "logs"
        _write_log(logs_dir / "meta", "latest-run.json", {"logFile": f"../{outside.name}"})

        summary = ReportService(logs_dir).summarize()

        assert summary.run_count == 0


class TestMigration:
    """Tests for the migration helpers."""

    def test_current_version_untouched(self) -> None:
        """Version 2 logs pass through unchanged."""
        data = {"command": "clean", "applyResults": [{"status": "trashed"}]}

        migrated, version = migrate_log(data, 2)

        assert migrated is data
        assert version == 2

    def test_existing_summary_kept(self) -> None:
        """A v1 log that already has a summary keeps it."""
        summary = {"trashed": 5, "failed": 0, "trashedEstimatedBytes": 1}

        migrated, _ = migrate_log({"applySummary": summary, "applyResults": []}, 1)

        assert migrated["applySummary"] == summary

    def test_derive_ignores_garbage(self) -> None:
        """Non-list results yield no summary, non-dict entries are ignored."""
        assert derive_apply_summary(None) is None
        assert derive_apply_summary(["x", {"status": "trashed", "estimatedBytes": "big"}]) == {
            "trashed": 1,
            "failed": 0,
            "trashedEstimatedBytes": 0,
        }

    def test_to_dict_keys(self, tmp_path: Path) -> None:
        """The summary serializes with camelCase keys."""
        data = ReportService(tmp_path).summarize().to_dict()

        assert set(data) >= {"runCount", "applyRuns", "trashedEstimatedBytes", "latestApplyAt"}
