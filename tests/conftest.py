"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import logging
import os
import time
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from diskcare.rules.models import RuleConfig
from diskcare.scanning.models import DiscoveredTarget, ScanMetrics, ScanTarget, TargetKind

NOW_MS = 1_767_225_600_000  # 2026-01-01T00:00:00Z
DAY_MS = 86_400_000


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    """Point XDG config/state dirs into a temp dir so tests never touch $HOME."""
    xdg_root = tmp_path_factory.mktemp("xdg")
    env = {
        "XDG_CONFIG_HOME": str(xdg_root / "config"),
        "XDG_STATE_HOME": str(xdg_root / "state"),
    }
    with patch.dict(os.environ, env):
        os.environ.pop("DISKCARE_SCAN_ONLY", None)
        yield xdg_root


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo the handler and level changes made by the CLI callback."""
    package_logger = logging.getLogger("diskcare")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def make_target() -> Callable[..., ScanTarget]:
    """Factory for analyzed targets with sensible defaults."""

    def _make(
        target_id: str = "npm-cache",
        *,
        exists: bool = True,
        total_bytes: int = 100,
        last_modified_at: int | None = NOW_MS - 10 * DAY_MS,
        skipped: bool = False,
        partial: bool = False,
        skipped_entries: int = 0,
        error: str | None = None,
        rule_id: str | None = None,
        path: str | None = None,
    ) -> ScanTarget:
        metrics = ScanMetrics(
            total_bytes=0 if skipped else total_bytes,
            file_count=0 if skipped else 1,
            last_modified_at=None if skipped else last_modified_at,
            last_accessed_at=None if skipped else last_modified_at,
            skipped=skipped,
            partial=partial,
            skipped_entries=skipped_entries,
            error=error,
        )
        return ScanTarget(
            target=DiscoveredTarget(
                id=target_id,
                kind=TargetKind.CUSTOM_PATH if rule_id else TargetKind.NPM_CACHE,
                path=path or f"/tmp/targets/{target_id}",
                display_name=f"Target {target_id}",
                rule_id=rule_id,
            ),
            exists=exists,
            metrics=metrics,
        )

    return _make


@pytest.fixture
def rules_data() -> dict[str, object]:
    """Raw policy document with one rule per risk tier."""
    return {
        "rules": [
            {
                "id": "npm-cache",
                "risk": "safe",
                "safeAfterDays": 7,
                "description": "npm cache is reproducible; safe to clean when old.",
            },
            {
                "id": "os-temp",
                "risk": "caution",
                "safeAfterDays": 30,
                "description": "OS temp can include in-use files.",
            },
            {
                "id": "keep-me",
                "risk": "do-not-touch",
                "safeAfterDays": 0,
                "description": "Never clean this.",
            },
        ],
        "defaults": {"risk": "caution", "safeAfterDays": 30},
    }


@pytest.fixture
def rules_config(rules_data: dict[str, object]) -> RuleConfig:
    """Validated policy built from rules_data."""
    return RuleConfig.model_validate(rules_data)


@pytest.fixture
def sandbox_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Working directory whose only scan target is a 60-day-old .sandbox-cache."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DISKCARE_SCAN_ONLY", "sandbox")

    cache = tmp_path / ".sandbox-cache"
    cache.mkdir()
    blob = cache / "blob.bin"
    blob.write_bytes(b"x" * 100)
    old = time.time() - 60 * 86_400
    os.utime(blob, (old, old))
    return tmp_path


@pytest.fixture
def sandbox_rules(tmp_path: Path) -> Path:
    """Policy file marking the sandbox cache safe after 7 days."""
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps(
            {
                "rules": [
                    {
                        "id": "sandbox-cache",
                        "risk": "safe",
                        "safeAfterDays": 7,
                        "description": "sandbox cache is safe to remove when old.",
                    }
                ],
                "defaults": {"risk": "caution", "safeAfterDays": 30},
            }
        )
    )
    return path
