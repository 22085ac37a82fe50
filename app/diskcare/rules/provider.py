"""Rules loading for commands.

Wraps the loader so that a missing or broken policy never aborts a
run: the failure is logged, remembered as a one-line warning for the
CLI, and the caller falls back to FALLBACK_DECISION.
"""

import logging
from pathlib import Path

from diskcare.core.errors import ConfigLoadError
from diskcare.rules.engine import RulesEngine
from diskcare.rules.loader import RulesConfigError, load_rules_config
from diskcare.rules.models import Decision, RiskLevel
from diskcare.utils.text import error_message, to_one_line, truncate

logger = logging.getLogger(__name__)

FALLBACK_SAFE_AFTER_DAYS = 30
FALLBACK_REASON = "Rules config not loaded; using defaults."
FALLBACK_DECISION = Decision(
    risk=RiskLevel.CAUTION,
    safe_after_days=FALLBACK_SAFE_AFTER_DAYS,
    reasons=(FALLBACK_REASON,),
)

_WARNING_TRUNCATE_LIMIT = 140


def decide_or_fallback(engine: RulesEngine | None, target_id: str) -> Decision:
    """Resolve a decision, using the caution fallback when no policy is loaded."""
    if engine is None:
        return FALLBACK_DECISION
    return engine.decide(target_id)


class RulesProvider:
    """Loads the rules engine for one run.

    Args:
        rules_path: Path to the JSON policy file.

    Attributes:
        warning: One-line warning set when the last load failed.
        error: Wrapped ConfigLoadError from the last failed load.
    """

    def __init__(self, rules_path: Path) -> None:
        self.rules_path = rules_path
        self.warning: str | None = None
        self.error: ConfigLoadError | None = None

    def try_load(self) -> RulesEngine | None:
        """Load the policy, returning None instead of raising on failure.

        Returns:
            RulesEngine for the policy, or None when it could not be loaded.
        """
        self.warning = None
        self.error = None
        try:
            config = load_rules_config(self.rules_path)
        except RulesConfigError as e:
            context: dict[str, object] = {"rulesPath": str(self.rules_path)}
            if e.line is not None:
                context["line"] = e.line
                context["column"] = e.column
            wrapped = ConfigLoadError("rules: config not loaded", context)
            wrapped.__cause__ = e
            self.error = wrapped

            message = truncate(to_one_line(error_message(e)), _WARNING_TRUNCATE_LIMIT)
            self.warning = f"rules: config not loaded ({message})"
            logger.warning("Rules config not loaded from %s: %s", self.rules_path, e)
            return None

        logger.debug("Loaded %d rule(s) from %s", len(config.rules), self.rules_path)
        return RulesEngine(config)
