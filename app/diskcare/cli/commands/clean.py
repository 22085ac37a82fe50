"""Clean command implementation.

Builds a clean plan from a fresh scan and, only when every apply gate
is open, moves eligible targets to the Trash. Dry-run is the default.
"""

import json
from datetime import UTC, datetime
from typing import Annotated

import typer

from diskcare.cleaning.applier import apply_plan, can_apply, summarize_apply
from diskcare.cleaning.models import ApplyStatus
from diskcare.cleaning.planner import build_clean_plan
from diskcare.cli.context import build_run_context, fail
from diskcare.cli.display import (
    create_apply_table,
    create_plan_table,
    print_apply_blocked,
    print_plan_summary,
)
from diskcare.core.errors import LogWriteError
from diskcare.runlog.models import build_clean_log
from diskcare.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Plan (and optionally apply) cleanup of eligible targets.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_targets(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
    apply: Annotated[
        bool,
        typer.Option(
            "--apply",
            help="Move eligible targets to the Trash (needs --no-dry-run and --yes).",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Only show the plan. Disable to allow --apply.",
        ),
    ] = True,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Confirm moving eligible targets to the Trash.",
        ),
    ] = False,
) -> None:
    """Build a clean plan for all targets.

    Targets are only ever moved to the Trash, never deleted, and only
    when --apply, --no-dry-run and --yes are all given.

    Examples:
        diskcare clean                                # Show the plan
        diskcare clean --json                         # Plan as JSON
        diskcare clean --apply --no-dry-run --yes     # Move eligible targets to Trash
    """
    if ctx.invoked_subcommand is not None:
        return

    run = build_run_context(ctx)

    if not json_output and not run.quiet:
        print_info("Building clean plan...")
    engine = run.load_rules()
    targets = run.scan_targets(engine)

    plan = build_clean_plan(targets, engine, datetime.now(UTC), dry_run=dry_run, apply=apply)
    applied = can_apply(apply=apply, dry_run=dry_run, yes=yes)
    results = apply_plan(plan, yes=yes)
    summary = summarize_apply(results, applied=applied)

    payload = build_clean_log(plan, apply_results=results, apply_summary=summary)
    try:
        log_path = run.log_writer().write_run_log(payload)
    except LogWriteError as e:
        fail(e)

    failed = summary.failed > 0

    if json_output:
        console.print_json(json.dumps({**payload, "logFile": str(log_path)}))
        if failed:
            raise typer.Exit(code=1)
        return

    console.print(create_plan_table(plan))
    print_plan_summary(plan)

    if apply:
        if not applied:
            print_apply_blocked(dry_run)
        elif results:
            console.print()
            console.print(create_apply_table(results))
            skipped = sum(1 for r in results if r.status == ApplyStatus.SKIPPED)
            console.print(
                f"\nApply results: trashed={summary.trashed} "
                f"failed={summary.failed} skipped={skipped}"
            )

    console.print(f"\n[muted]Saved log: {log_path}[/muted]")

    if failed:
        print_error(f"{summary.failed} item(s) could not be moved to Trash.")
        raise typer.Exit(code=1)
    if applied and summary.trashed:
        print_success(f"Moved {summary.trashed} item(s) to Trash.")
