"""Report command implementation.

Summarizes all run logs in the logs directory.
"""

import json
from typing import Annotated

import typer

from diskcare.cli.context import build_run_context
from diskcare.cli.display import create_report_table
from diskcare.reporting.service import ReportService
from diskcare.utils.formatting import console, print_info

app = typer.Typer(
    help="Summarize past scan and clean runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def report(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show a summary of all recorded runs.

    Unreadable or corrupt log files are skipped.

    Examples:
        diskcare report
        diskcare report --json
    """
    if ctx.invoked_subcommand is not None:
        return

    run = build_run_context(ctx)
    summary = ReportService(run.logs_dir).summarize()

    if json_output:
        console.print_json(json.dumps(summary.to_dict()))
        return

    if summary.run_count == 0:
        print_info(f"No run logs found in {run.logs_dir}")
        return

    console.print(create_report_table(summary))
    console.print(f"\n[muted]Logs: {run.logs_dir}[/muted]")
