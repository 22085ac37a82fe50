"""Unit tests for cli/display.py.

Tests for the shared Rich tables and summaries used by scan, clean and report.
"""

import io
from collections.abc import Callable

import pytest
from diskcare.cleaning.models import (
    ApplyResult,
    ApplyStatus,
    CleanPlan,
    CleanPlanItem,
    PlanStatus,
    PlanSummary,
)
from diskcare.cli import display
from diskcare.core.theme import get_theme
from diskcare.reporting.service import ReportSummary
from diskcare.rules.engine import RulesEngine
from diskcare.rules.models import RiskLevel, RuleConfig
from diskcare.scanning.models import ScanTarget
from diskcare.utils import formatting
from rich.console import Console
from rich.table import Table

MakeTarget = Callable[..., ScanTarget]


def _render(table: Table) -> str:
    buf = io.StringIO()
    Console(theme=get_theme(), file=buf, color_system=None, width=200).print(table)
    return buf.getvalue()


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Route both shared consoles into one buffer."""
    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=200)
    monkeypatch.setattr(display, "console", test_console)
    monkeypatch.setattr(formatting, "err_console", test_console)
    return buf


def _item(
    target_id: str,
    status: PlanStatus,
    *,
    estimated_bytes: int = 0,
    reasons: tuple[str, ...] = ("policy reason",),
) -> CleanPlanItem:
    return CleanPlanItem(
        id=target_id,
        display_name=f"Target {target_id}",
        path=f"/tmp/targets/{target_id}",
        exists=True,
        risk=RiskLevel.SAFE if status == PlanStatus.ELIGIBLE else RiskLevel.CAUTION,
        safe_after_days=7,
        status=status,
        estimated_bytes=estimated_bytes,
        reasons=reasons,
    )


def _plan(items: list[CleanPlanItem], *, dry_run: bool = True) -> CleanPlan:
    return CleanPlan(
        dry_run=dry_run,
        apply=False,
        summary=PlanSummary.from_items(items),
        items=tuple(items),
    )


class TestCreateScanTable:
    """Tests for create_scan_table."""

    def test_columns(self, make_target: MakeTarget) -> None:
        """Table has one column per reported field."""
        table = display.create_scan_table([make_target()], None)
        assert [col.header for col in table.columns] == [
            "Target",
            "Path",
            "Exists",
            "Size",
            "Files",
            "Modified",
            "Risk",
            "Safe After",
        ]
        assert table.row_count == 1

    def test_row_uses_rule_decision(
        self, make_target: MakeTarget, rules_config: RuleConfig
    ) -> None:
        """A matched rule shows its risk tier and threshold."""
        output = _render(
            display.create_scan_table([make_target("npm-cache")], RulesEngine(rules_config))
        )
        assert "npm-cache" in output
        assert "safe" in output
        assert "7d" in output

    def test_row_without_engine_uses_fallback(self, make_target: MakeTarget) -> None:
        """No loaded policy renders the caution fallback."""
        output = _render(display.create_scan_table([make_target("npm-cache")], None))
        assert "caution" in output
        assert "30d" in output

    def test_skipped_and_partial_markers(self, make_target: MakeTarget) -> None:
        """Skipped and partial analyses are flagged next to Exists."""
        targets = [
            make_target("a-skipped", skipped=True, error="Permission denied"),
            make_target("b-partial", partial=True, skipped_entries=2),
        ]
        output = _render(display.create_scan_table(targets, None))
        assert "(skipped)" in output
        assert "(partial)" in output


class TestPrintScanNotes:
    """Tests for print_scan_notes."""

    def test_notes_for_skipped_and_partial(
        self, make_target: MakeTarget, captured: io.StringIO
    ) -> None:
        """Analyzer errors and partial counts become warnings."""
        display.print_scan_notes(
            [
                make_target("a-skipped", skipped=True, error="Permission denied"),
                make_target("b-partial", partial=True, skipped_entries=2),
            ]
        )
        output = captured.getvalue()
        assert "a-skipped: Permission denied" in output
        assert "b-partial: 2 subpath(s) could not be read" in output

    def test_no_notes_for_clean_target(
        self, make_target: MakeTarget, captured: io.StringIO
    ) -> None:
        """A fully analyzed target prints nothing."""
        display.print_scan_notes([make_target()])
        assert captured.getvalue() == ""


class TestCreatePlanTable:
    """Tests for create_plan_table."""

    def test_dry_run_title(self) -> None:
        """Dry-run plans are labelled as such."""
        table = display.create_plan_table(_plan([_item("a", PlanStatus.CAUTION)]))
        assert table.title == "Clean Plan (Dry Run)"

    def test_live_title(self) -> None:
        """Non-dry-run plans use the plain title."""
        table = display.create_plan_table(_plan([], dry_run=False))
        assert table.title == "Clean Plan"

    def test_reasons_are_capped(self) -> None:
        """Only the first few reasons are shown per row."""
        reasons = tuple(f"reason-{n}" for n in range(5))
        output = _render(
            display.create_plan_table(_plan([_item("a", PlanStatus.BLOCKED, reasons=reasons)]))
        )
        assert "reason-0" in output
        assert "reason-2" in output
        assert "reason-3" not in output


class TestPrintPlanSummary:
    """Tests for print_plan_summary."""

    def test_eligible_summary(self, captured: io.StringIO) -> None:
        """Eligible items report reclaimable size and how to apply."""
        plan = _plan(
            [
                _item("a", PlanStatus.ELIGIBLE, estimated_bytes=2048),
                _item("b", PlanStatus.CAUTION),
            ]
        )
        display.print_plan_summary(plan)
        output = captured.getvalue()
        assert "1 eligible" in output
        assert "1 caution" in output
        assert "2.0 KB can be freed." in output
        assert display.APPLY_HOW_TO in output

    def test_nothing_eligible(self, captured: io.StringIO) -> None:
        """Without eligible items no apply hint is shown."""
        display.print_plan_summary(_plan([_item("b", PlanStatus.BLOCKED)]))
        output = captured.getvalue()
        assert "No eligible items to clean." in output
        assert display.APPLY_HOW_TO not in output


class TestCreateApplyTable:
    """Tests for create_apply_table."""

    def test_statuses_render(self) -> None:
        """Each apply status gets its own label."""
        results = [
            ApplyResult(id="a", path="/a", status=ApplyStatus.TRASHED, estimated_bytes=10),
            ApplyResult(
                id="b",
                path="/b",
                status=ApplyStatus.FAILED,
                estimated_bytes=5,
                message="Permission denied",
            ),
        ]
        output = _render(display.create_apply_table(results))
        assert "trashed" in output
        assert "failed" in output
        assert "Permission denied" in output


class TestPrintApplyBlocked:
    """Tests for print_apply_blocked."""

    def test_dry_run_message(self, captured: io.StringIO) -> None:
        """Dry-run is named as the reason nothing moved."""
        display.print_apply_blocked(dry_run=True)
        assert "dry-run is enabled" in captured.getvalue()

    def test_missing_confirmation_message(self, captured: io.StringIO) -> None:
        """Missing confirmation is named as the reason nothing moved."""
        display.print_apply_blocked(dry_run=False)
        assert "confirmation is missing" in captured.getvalue()


class TestCreateReportTable:
    """Tests for create_report_table."""

    def test_empty_summary(self) -> None:
        """An empty report renders zeros and placeholders."""
        output = _render(display.create_report_table(ReportSummary()))
        assert "Runs" in output
        assert "Latest run" in output
        assert "0 B" in output

    def test_populated_summary(self) -> None:
        """Report values appear in the table."""
        summary = ReportSummary(
            run_count=3,
            latest_run_at="2026-01-01T12:30:45.000Z",
            apply_runs=1,
            trashed_count=2,
            trashed_estimated_bytes=1024,
        )
        output = _render(display.create_report_table(summary))
        assert "2026-01-01T12:30:45.000Z" in output
        assert "1.0 KB" in output
