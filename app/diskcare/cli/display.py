"""Shared Rich display functions for scan, clean, and report output.

Provides table builders and summary printers so that the commands only
decide what to show, not how.
"""

from rich.table import Table

from diskcare.cleaning.models import (
    ApplyResult,
    ApplyStatus,
    CleanPlan,
    CleanPlanItem,
    PlanStatus,
)
from diskcare.reporting.service import ReportSummary
from diskcare.rules.engine import RulesEngine
from diskcare.rules.models import RiskLevel
from diskcare.rules.provider import decide_or_fallback
from diskcare.scanning.models import ScanTarget
from diskcare.utils.formatting import console, print_warning
from diskcare.utils.text import format_bytes, format_timestamp_ms, truncate

MAX_DISPLAYED_REASONS = 3
MAX_DIAGNOSTIC_LINES = 3
NOTE_TRUNCATE_LIMIT = 160

APPLY_HOW_TO = "To actually apply, run: diskcare clean --apply --no-dry-run --yes"

_STATUS_STYLES: dict[PlanStatus, str] = {
    PlanStatus.ELIGIBLE: "status.eligible",
    PlanStatus.CAUTION: "status.caution",
    PlanStatus.BLOCKED: "status.blocked",
}

_RISK_STYLES: dict[RiskLevel, str] = {
    RiskLevel.SAFE: "risk.safe",
    RiskLevel.CAUTION: "risk.caution",
    RiskLevel.DO_NOT_TOUCH: "risk.do-not-touch",
}


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _risk_text(risk: RiskLevel) -> str:
    style = _RISK_STYLES[risk]
    return f"[{style}]{risk.value}[/{style}]"


def create_scan_table(targets: list[ScanTarget], engine: RulesEngine | None) -> Table:
    """Create a Rich table of scanned targets with their rule decision.

    Args:
        targets: Analyzed targets, sorted by id.
        engine: Loaded rules engine, or None for the fallback decision.

    Returns:
        Rich Table configured for scan display.
    """
    table = Table(
        title="Scan Report",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Target", no_wrap=True)
    table.add_column("Path")
    table.add_column("Exists", justify="center")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Modified")
    table.add_column("Risk")
    table.add_column("Safe After", justify="right")

    for target in targets:
        metrics = target.metrics
        decision = decide_or_fallback(engine, target.policy_id)

        exists = _yes_no(target.exists)
        if metrics.skipped:
            exists += " [warning](skipped)[/warning]"
        elif metrics.partial:
            exists += " [warning](partial)[/warning]"

        table.add_row(
            f"{target.display_name}\n[muted]{target.id}[/muted]",
            f"[muted]{target.path}[/muted]",
            exists,
            format_bytes(metrics.total_bytes),
            str(metrics.file_count),
            format_timestamp_ms(metrics.last_modified_at),
            _risk_text(decision.risk),
            f"{decision.safe_after_days}d",
        )

    return table


def print_scan_notes(targets: list[ScanTarget]) -> None:
    """Print per-target warnings: diagnostics, analyzer errors, partial notes."""
    for target in targets:
        for diagnostic in target.target.diagnostics[:MAX_DIAGNOSTIC_LINES]:
            print_warning(f"{target.id}: {truncate(diagnostic, NOTE_TRUNCATE_LIMIT)}")
        if target.metrics.skipped and target.metrics.error:
            print_warning(f"{target.id}: {truncate(target.metrics.error, NOTE_TRUNCATE_LIMIT)}")
        if target.metrics.partial:
            print_warning(
                f"{target.id}: {target.metrics.skipped_entries} subpath(s) could not be read; "
                "totals are a lower bound."
            )


def _reasons_text(item: CleanPlanItem) -> str:
    shown = item.reasons[:MAX_DISPLAYED_REASONS]
    return "\n".join(truncate(reason, NOTE_TRUNCATE_LIMIT) for reason in shown)


def create_plan_table(plan: CleanPlan) -> Table:
    """Create a Rich table displaying a clean plan.

    Args:
        plan: The plan to display.

    Returns:
        Rich Table configured for plan display.
    """
    title = "Clean Plan (Dry Run)" if plan.dry_run else "Clean Plan"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", justify="center")
    table.add_column("Target", no_wrap=True)
    table.add_column("Risk")
    table.add_column("Estimate", justify="right")
    table.add_column("Why")

    for item in plan.items:
        style = _STATUS_STYLES[item.status]
        table.add_row(
            f"[{style}]{item.status.value}[/{style}]",
            f"{item.display_name}\n[muted]{item.path}[/muted]",
            f"{_risk_text(item.risk)} ({item.safe_after_days}d)",
            format_bytes(item.estimated_bytes),
            f"[muted]{_reasons_text(item)}[/muted]",
        )

    return table


def print_plan_summary(plan: CleanPlan) -> None:
    """Print plan totals and how to proceed."""
    summary = plan.summary
    console.print(
        f"\nSummary: [status.eligible]{summary.eligible_count} eligible[/status.eligible], "
        f"[status.caution]{summary.caution_count} caution[/status.caution], "
        f"[status.blocked]{summary.blocked_count} blocked[/status.blocked]"
    )

    if plan.has_partial_estimates:
        print_warning("Estimated sizes may be inaccurate due to partial analysis.")

    if summary.eligible_count > 0:
        console.print(
            f"[bold]{format_bytes(summary.estimated_bytes_total)} can be freed.[/bold] "
            f"[muted]{APPLY_HOW_TO}[/muted]"
        )
    else:
        console.print("[muted]No eligible items to clean.[/muted]")


def create_apply_table(results: list[ApplyResult]) -> Table:
    """Create a Rich table displaying apply results."""
    table = Table(
        title="Apply Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", justify="center")
    table.add_column("Target", no_wrap=True)
    table.add_column("Estimate", justify="right")
    table.add_column("Message")

    for result in results:
        if result.status == ApplyStatus.TRASHED:
            status = "[success]trashed[/success]"
        elif result.status == ApplyStatus.FAILED:
            status = "[error]failed[/error]"
        else:
            status = "[warning]skipped[/warning]"

        table.add_row(
            status,
            f"{result.id}\n[muted]{result.path}[/muted]",
            format_bytes(result.estimated_bytes),
            f"[muted]{result.message or ''}[/muted]",
        )

    return table


def print_apply_blocked(dry_run: bool) -> None:
    """Explain why an apply request did not move anything."""
    if dry_run:
        print_warning("apply requested, but dry-run is enabled; nothing was moved to Trash.")
    else:
        print_warning("apply requested, but confirmation is missing; nothing was moved to Trash.")
    console.print(f"[muted]{APPLY_HOW_TO}[/muted]")


def create_report_table(summary: ReportSummary) -> Table:
    """Create a Rich table displaying the run-log report."""
    table = Table(
        title="Report",
        show_header=False,
        border_style="border",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Runs", str(summary.run_count))
    table.add_row("Latest run", summary.latest_run_at or "-")
    table.add_row("Latest log", summary.latest_run_file or "-")
    table.add_section()
    table.add_row("Latest scan", summary.latest_scan_at or "-")
    table.add_row("Scanned size", format_bytes(summary.scan_total_bytes))
    table.add_row("Missing targets", str(summary.scan_missing_targets))
    table.add_row("Skipped targets", str(summary.scan_skipped_targets))
    table.add_section()
    table.add_row("Apply runs", str(summary.apply_runs))
    table.add_row("Latest apply", summary.latest_apply_at or "-")
    table.add_row("Trashed items", str(summary.trashed_count))
    table.add_row("Failed items", str(summary.failed_count))
    table.add_row("Trashed size (est.)", format_bytes(summary.trashed_estimated_bytes))

    return table
