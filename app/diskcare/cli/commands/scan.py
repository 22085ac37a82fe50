"""Scan command implementation.

Discovers cleanup targets, measures them, and records the result as a
scan run log. Scanning never changes anything on disk.
"""

import json
from typing import Annotated

import typer

from diskcare.cli.context import build_run_context, fail
from diskcare.cli.display import create_scan_table, print_scan_notes
from diskcare.core.errors import LogWriteError
from diskcare.runlog.models import build_scan_log
from diskcare.utils.formatting import console, print_info

app = typer.Typer(
    help="Scan cleanup targets and estimate their size.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_targets(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Scan temp directories and tool caches.

    Every target is measured (size, file count, newest timestamps) and
    classified by the rules policy. The results are saved as a run log.

    Examples:
        diskcare scan              # Table output
        diskcare scan --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    run = build_run_context(ctx)

    if not json_output and not run.quiet:
        print_info("Scanning targets...")
    engine = run.load_rules()
    targets = run.scan_targets(engine)

    payload = build_scan_log(targets)
    try:
        log_path = run.log_writer().write_run_log(payload)
    except LogWriteError as e:
        fail(e)

    if json_output:
        console.print_json(
            json.dumps(
                {
                    "command": "scan",
                    "dryRun": True,
                    "configPath": str(run.rules_path),
                    "logFile": str(log_path),
                    "targets": payload["targets"],
                }
            )
        )
        return

    console.print(f"[muted]Rules: {run.rules_path}[/muted]")
    console.print(create_scan_table(targets, engine))
    print_scan_notes(targets)
    console.print(f"\n[muted]Saved log: {log_path}[/muted]")
