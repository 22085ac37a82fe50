"""Subprocess helper for tool probes.

Discoverers shell out to package-manager CLIs (``npm config get cache``)
to learn where caches live. Output is captured as text and a non-zero
exit is reported through the result, never raised.
"""

import logging
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a probe command.

    Attributes:
        stdout: Standard output.
        stderr: Standard error.
        returncode: Exit code.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0


def run_command(args: list[str], *, timeout: float | None = PROBE_TIMEOUT_SECONDS) -> CommandResult:
    """Run a probe command and capture its output.

    Args:
        args: Command and arguments.
        timeout: Seconds to wait before giving up.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds timeout.
        FileNotFoundError: If the executable is not found.
    """
    logger.debug("Running probe: %s", " ".join(args))
    result = subprocess.run(  # nosec: B603
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    if result.returncode != 0:
        logger.debug("Probe %s exited with %d", args[0], result.returncode)
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )
