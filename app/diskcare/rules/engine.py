"""Risk resolver.

Maps a target id to a policy Decision using a loaded RuleConfig.
"""

from diskcare.rules.models import Decision, RuleConfig


class RulesEngine:
    """Pure lookup over a loaded policy.

    Args:
        config: Validated rules policy.
    """

    def __init__(self, config: RuleConfig) -> None:
        self._config = config

    @property
    def config(self) -> RuleConfig:
        """The policy this engine resolves against."""
        return self._config

    def decide(self, target_id: str) -> Decision:
        """Resolve the policy decision for a target.

        The first rule whose id equals ``target_id`` wins. Without a
        match, the policy defaults apply.

        Args:
            target_id: Target (or rule) identifier.

        Returns:
            Decision with the rule's description, or a defaults notice, as reason.
        """
        for rule in self._config.rules:
            if rule.id == target_id:
                return Decision(
                    risk=rule.risk,
                    safe_after_days=rule.safe_after_days,
                    reasons=(rule.description,),
                )

        defaults = self._config.defaults
        return Decision(
            risk=defaults.risk,
            safe_after_days=defaults.safe_after_days,
            reasons=(f"No specific rule found for '{target_id}'. Using defaults.",),
        )
