"""DevOps tasks for diskcare.

Usage: uv run devops.py <task>
Tasks: fmt, lint, test, clean
"""

import subprocess
import sys
from collections.abc import Callable


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of shell commands, exiting on first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format the codebase with Ruff."""
    _run(
        [
            ["ruff", "format", "app", "tests", "devops.py"],
            ["ruff", "check", "--fix", "app", "tests", "devops.py"],
        ]
    )


def lint() -> None:
    """Check formatting and lint rules without modifying files."""
    _run(
        [
            ["ruff", "format", "--check", "app", "tests"],
            ["ruff", "check", "app", "tests"],
        ]
    )


def test() -> None:
    """Run the unit tests with PyTest."""
    _run([["uv", "run", "pytest", "-q", "tests"]])


def clean() -> None:
    """Remove caches, build artifacts, and the local sandbox target."""
    _run(
        [
            ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
            ["find", ".", "-type", "f", "-name", "*.pyc", "-delete"],
            ["rm", "-rf", ".pytest_cache", ".ruff_cache", "build", "dist", ".sandbox-cache"],
            ["find", ".", "-type", "d", "-name", "*.egg-info", "-exec", "rm", "-rf", "{}", "+"],
        ]
    )


TASKS: dict[str, Callable[[], None]] = {
    "fmt": format_code,
    "lint": lint,
    "test": test,
    "clean": clean,
}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(f"Usage: devops.py <{'|'.join(TASKS)}>", file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
