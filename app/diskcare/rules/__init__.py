"""Rules policy: schema, loading, and risk resolution."""

from diskcare.rules.engine import RulesEngine
from diskcare.rules.loader import RulesConfigError, load_rules_config
from diskcare.rules.models import Decision, RiskLevel, Rule, RuleConfig, RuleDefaults
from diskcare.rules.provider import FALLBACK_DECISION, RulesProvider, decide_or_fallback

__all__ = [
    "FALLBACK_DECISION",
    "Decision",
    "RiskLevel",
    "Rule",
    "RuleConfig",
    "RuleDefaults",
    "RulesConfigError",
    "RulesEngine",
    "RulesProvider",
    "decide_or_fallback",
    "load_rules_config",
]
