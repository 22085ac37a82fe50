"""Policy-declared custom path probe.

Rules in the policy file may list extra ``paths`` to scan. Each path
becomes a ``custom-path`` target whose decisions are resolved through
the declaring rule.
"""

import logging
from pathlib import Path

from diskcare.rules.models import RuleConfig
from diskcare.scanning.discoverers.base import TargetDiscoverer
from diskcare.scanning.models import DiscoveredTarget, TargetKind

logger = logging.getLogger(__name__)


class ConfigPathsDiscoverer(TargetDiscoverer):
    """Yields one target per path declared in the rules policy.

    A single path under rule ``foo`` gets id ``custom:foo``; several
    paths get ``custom:foo:1``, ``custom:foo:2`` and so on. Relative
    paths are resolved against ``cwd``. Paths the OS cannot represent
    are logged and left out.

    Args:
        config: Policy loaded for this run, or None when it could not be loaded.
        cwd: Base directory for relative paths (defaults to the process cwd).
    """

    def __init__(self, config: RuleConfig | None, cwd: Path | None = None) -> None:
        self._config = config
        self._cwd = cwd

    @property
    def name(self) -> str:
        return "custom-paths"

    def discover(self) -> list[DiscoveredTarget]:
        if self._config is None:
            return []

        base = self._cwd if self._cwd is not None else Path.cwd()
        targets: list[DiscoveredTarget] = []

        for rule in self._config.rules:
            valid_paths = [p for p in rule.paths or [] if p.strip()]
            for index, raw in enumerate(valid_paths, start=1):
                try:
                    absolute = _absolute_path(raw.strip(), base)
                except (OSError, RuntimeError, ValueError) as e:
                    logger.warning("Ignoring custom path %r of rule %s: %s", raw, rule.id, e)
                    continue

                target_id = (
                    f"custom:{rule.id}" if len(valid_paths) == 1 else f"custom:{rule.id}:{index}"
                )
                targets.append(
                    DiscoveredTarget(
                        id=target_id,
                        kind=TargetKind.CUSTOM_PATH,
                        path=str(absolute),
                        display_name=f"Custom Path ({rule.id})",
                        rule_id=rule.id,
                    )
                )

        return targets


def _absolute_path(raw: str, base: Path) -> Path:
    if "\x00" in raw:
        msg = "embedded null byte"
        raise ValueError(msg)
    candidate = Path(raw).expanduser()
    return candidate if candidate.is_absolute() else (base / candidate).resolve()
