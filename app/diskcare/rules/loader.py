"""Rules policy file loading.

Reads a JSON policy file and validates it against the RuleConfig
schema. Every failure surfaces as a single RulesConfigError carrying
the file path and, for JSON syntax errors, the line and column.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from diskcare.rules.models import RuleConfig


class RulesConfigError(Exception):
    """Raised when a rules policy file cannot be loaded or is invalid.

    Attributes:
        file_path: Path of the offending file.
        line: 1-based line of a JSON syntax error, if known.
        column: 1-based column of a JSON syntax error, if known.
    """

    def __init__(
        self,
        message: str,
        file_path: Path,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.file_path = file_path
        self.line = line
        self.column = column


def _describe_validation_error(error: ValidationError) -> str:
    """Condense a pydantic ValidationError into one line."""
    parts: list[str] = []
    for detail in error.errors():
        location = ".".join(str(p) for p in detail["loc"]) or "<root>"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def load_rules_config(path: Path) -> RuleConfig:
    """Load and validate a rules policy file.

    Args:
        path: Path to the JSON policy file.

    Returns:
        Validated RuleConfig.

    Raises:
        RulesConfigError: If the file cannot be read, is not valid JSON,
            or does not match the schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RulesConfigError(f"Cannot read rules config file: {path} ({e})", path) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RulesConfigError(
            f"Invalid JSON in rules config: {path} (line {e.lineno}, column {e.colno}: {e.msg})",
            path,
            line=e.lineno,
            column=e.colno,
        ) from e

    if not isinstance(data, dict):
        raise RulesConfigError(f"Invalid rules config schema in: {path} (expected an object)", path)

    try:
        return RuleConfig.model_validate(data)
    except ValidationError as e:
        raise RulesConfigError(
            f"Invalid rules config schema in: {path} ({_describe_validation_error(e)})",
            path,
        ) from e
