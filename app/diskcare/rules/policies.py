"""Starter policy templates written by ``diskcare init``."""

import json
from enum import Enum
from pathlib import Path

from diskcare.core.errors import ConfigWriteError
from diskcare.rules.models import RuleConfig
from diskcare.runlog.atomic import AtomicWriteError, durable_write


class PolicyName(str, Enum):
    """Available starter policies."""

    CONSERVATIVE = "conservative"
    AGGRESSIVE = "aggressive"
    CUSTOM = "custom"


_TEMP_DESCRIPTION = "OS temp can include in-use files; only clean older items."
_NPM_DESCRIPTION = "npm cache is reproducible; safe to clean when old."

_POLICIES: dict[PolicyName, dict[str, object]] = {
    PolicyName.CONSERVATIVE: {
        "rules": [
            {
                "id": "npm-cache",
                "risk": "safe",
                "safeAfterDays": 30,
                "description": _NPM_DESCRIPTION,
            },
            {
                "id": "sandbox-cache",
                "risk": "safe",
                "safeAfterDays": 14,
                "description": "sandbox cache is safe to remove when old.",
            },
            {
                "id": "os-temp",
                "risk": "caution",
                "safeAfterDays": 30,
                "description": _TEMP_DESCRIPTION,
            },
        ],
        "defaults": {"risk": "caution", "safeAfterDays": 30},
    },
    PolicyName.AGGRESSIVE: {
        "rules": [
            {
                "id": "npm-cache",
                "risk": "safe",
                "safeAfterDays": 7,
                "description": _NPM_DESCRIPTION,
            },
            {
                "id": "sandbox-cache",
                "risk": "safe",
                "safeAfterDays": 1,
                "description": "sandbox cache is safe to remove; keep at least a day.",
            },
            {
                "id": "os-temp",
                "risk": "caution",
                "safeAfterDays": 14,
                "description": _TEMP_DESCRIPTION,
            },
        ],
        "defaults": {"risk": "caution", "safeAfterDays": 14},
    },
    PolicyName.CUSTOM: {
        "rules": [],
        "defaults": {"risk": "caution", "safeAfterDays": 30},
    },
}


def build_policy(name: PolicyName) -> RuleConfig:
    """Build the validated starter policy for a template name."""
    return RuleConfig.model_validate(_POLICIES[name])


def write_policy(config: RuleConfig, path: Path) -> Path:
    """Write a policy file atomically.

    Args:
        config: Policy to write.
        path: Destination path; parent directories are created.

    Returns:
        Path where the policy was written.

    Raises:
        ConfigWriteError: If the directory or the file cannot be written.
    """
    content = json.dumps(config.to_dict(), indent=2) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        durable_write(path, content)
    except AtomicWriteError as e:
        raise ConfigWriteError(
            "Failed to write rules config",
            {"rulesPath": str(path), "tempPath": str(e.temp_path)},
        ) from e
    except OSError as e:
        raise ConfigWriteError(
            f"Failed to create config directory: {e}", {"rulesPath": str(path)}
        ) from e
    return path
