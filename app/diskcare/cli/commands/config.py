"""Config inspection commands.

Shows where diskcare reads its policy, settings, and logs from, and
creates a default settings file.
"""

import json
from typing import Annotated

import typer

from diskcare.cli.context import build_run_context, fail
from diskcare.core.errors import ConfigWriteError, InputError
from diskcare.core.paths import get_settings_path
from diskcare.core.settings import AppSettings, save_settings
from diskcare.utils.formatting import console, print_success

app = typer.Typer(
    help="Inspect and create configuration files.",
    no_args_is_help=True,
)


@app.command("path")
def show_path(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Print the resolved rules policy path and related locations."""
    run = build_run_context(ctx)
    rules_path = run.rules_path
    exists = rules_path.exists()

    if json_output:
        console.print_json(
            json.dumps(
                {
                    "configPath": str(rules_path),
                    "exists": exists,
                    "isFile": rules_path.is_file(),
                    "settingsPath": str(get_settings_path()),
                    "logsDir": str(run.logs_dir),
                }
            )
        )
        return

    console.print(f"configPath: {rules_path}")
    if exists:
        console.print(f"exists: yes (file={'yes' if rules_path.is_file() else 'no'})")
    else:
        console.print("exists: no")
        console.print("[muted]Run 'diskcare init' to create it.[/muted]")
    console.print(f"[muted]settings: {get_settings_path()}[/muted]")
    console.print(f"[muted]logs:     {run.logs_dir}[/muted]")


@app.command("init-settings")
def init_settings(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings.toml with default values."""
    settings_path = get_settings_path()

    if settings_path.exists() and not force:
        fail(
            InputError(
                "Settings file already exists. Use --force to overwrite.",
                {"settingsPath": str(settings_path)},
            )
        )

    try:
        written = save_settings(AppSettings(), settings_path)
    except ConfigWriteError as e:
        fail(e)

    print_success(f"Created settings: {written}")
