"""Init command implementation.

Writes a starter rules policy to the resolved policy path.
"""

from typing import Annotated

import typer

from diskcare.cli.context import build_run_context, fail
from diskcare.core.errors import ConfigWriteError, InputError
from diskcare.rules.policies import PolicyName, build_policy, write_policy
from diskcare.utils.formatting import console, print_success

app = typer.Typer(
    help="Create a starter rules policy.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_policy(
    ctx: typer.Context,
    policy: Annotated[
        PolicyName,
        typer.Option(
            "--policy",
            "-p",
            help="Starter policy to write.",
            case_sensitive=False,
        ),
    ] = PolicyName.CONSERVATIVE,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing rules file.",
        ),
    ] = False,
) -> None:
    """Create a rules policy file from a template.

    The file is written to the path that scan and clean would use
    (``--config``, ``./config/rules.json``, the settings file, or
    ``~/.config/diskcare/rules.json``).

    Examples:
        diskcare init                          # Conservative policy
        diskcare init --policy aggressive
        diskcare --config ./rules.json init --force
    """
    if ctx.invoked_subcommand is not None:
        return

    run = build_run_context(ctx)
    target = run.rules_path

    if target.exists() and not target.is_file():
        fail(InputError("Rules path exists but is not a file", {"rulesPath": str(target)}))
    if target.exists() and not force:
        fail(
            InputError(
                "Rules config already exists. Use --force to overwrite.",
                {"rulesPath": str(target)},
            )
        )

    try:
        written = write_policy(build_policy(policy), target)
    except ConfigWriteError as e:
        fail(e)

    print_success(f"Created rules config: {written}")
    console.print(f"[muted]Policy: {policy.value}[/muted]")
