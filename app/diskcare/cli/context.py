"""Per-invocation state shared by CLI commands.

The main callback stores raw global options in ``ctx.obj``; commands
turn them into a RunContext that resolves settings, the policy file,
and the logs directory in one place.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer

from diskcare.core.errors import DiskcareError, suggestion_for_code
from diskcare.core.paths import resolve_rules_path
from diskcare.core.settings import AppSettings, load_settings
from diskcare.rules.engine import RulesEngine
from diskcare.rules.provider import RulesProvider
from diskcare.runlog.writer import RunLogWriter
from diskcare.scanning.models import ScanTarget
from diskcare.scanning.service import ScannerService, default_discoverers
from diskcare.utils.formatting import err_console, print_error, print_warning

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunContext:
    """Resolved inputs for one command invocation.

    Attributes:
        settings: Loaded user settings.
        rules_path: Policy file used for this run.
        logs_dir: Directory receiving run logs.
        cwd: Working directory of the invocation.
        verbose: Whether --verbose was given.
        quiet: Whether --quiet was given.
    """

    settings: AppSettings
    rules_path: Path
    logs_dir: Path
    cwd: Path
    verbose: bool = False
    quiet: bool = False

    def scan_targets(self, engine: RulesEngine | None) -> list[ScanTarget]:
        """Discover and analyze every configured target.

        Args:
            engine: Rules loaded by load_rules; custom paths come from its policy.
        """
        service = ScannerService(
            default_discoverers(
                rules_config=engine.config if engine is not None else None,
                cwd=self.cwd,
                include_npm_cache=self.settings.include_npm_cache,
            ),
            max_workers=self.settings.analyzer_workers,
        )
        return service.scan_all()

    def load_rules(self) -> RulesEngine | None:
        """Load the policy, printing one warning when it cannot be used."""
        provider = RulesProvider(self.rules_path)
        engine = provider.try_load()
        if provider.warning is not None:
            print_warning(provider.warning)
        return engine

    def log_writer(self) -> RunLogWriter:
        """Create the run log writer for this invocation."""
        return RunLogWriter(self.logs_dir)


def build_run_context(ctx: typer.Context) -> RunContext:
    """Resolve the RunContext from the global options in ``ctx.obj``.

    Raises:
        typer.Exit: If the settings file is broken.
    """
    options = ctx.obj if isinstance(ctx.obj, dict) else {}
    cwd = Path.cwd()

    try:
        settings = load_settings()
    except DiskcareError as e:
        fail(e)

    config_opt: Path | None = options.get("config")
    logs_opt: Path | None = options.get("logs_dir")

    rules_path = resolve_rules_path(
        config_opt.expanduser() if config_opt else None,
        cwd=cwd,
        configured=settings.rules_path,
    )
    logs_dir = logs_opt.expanduser().resolve() if logs_opt else settings.effective_logs_dir

    logger.debug("Using rules %s, logs %s", rules_path, logs_dir)
    return RunContext(
        settings=settings,
        rules_path=rules_path,
        logs_dir=logs_dir,
        cwd=cwd,
        verbose=bool(options.get("verbose", False)),
        quiet=bool(options.get("quiet", False)),
    )


def fail(error: DiskcareError, exit_code: int = 1) -> NoReturn:
    """Print an error with its remediation hint and exit.

    Args:
        error: The error to report.
        exit_code: Process exit code.

    Raises:
        typer.Exit: Always.
    """
    print_error(str(error))
    suggestion = suggestion_for_code(error.code)
    if suggestion:
        err_console.print(f"[muted]{suggestion}[/muted]")
    raise typer.Exit(code=exit_code) from error
