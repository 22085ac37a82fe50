"""Clean plan builder.

Fuses scan metrics with policy decisions into one verdict per target.
The gates run in a fixed order:

1. missing path, analyzer skip, or do-not-touch risk block the target;
2. otherwise safe risk is eligible and anything else is caution;
3. a partial analysis downgrades to caution;
4. an eligible target must be at least ``safeAfterDays`` old.

Every item ends with the policy's own explanation so the user always
sees how the rule engine classified the target.
"""

import math
from collections.abc import Iterable
from datetime import datetime

from diskcare.cleaning.models import (
    PARTIAL_ESTIMATE_REASON,
    CleanPlan,
    CleanPlanItem,
    PlanStatus,
    PlanSummary,
)
from diskcare.rules.engine import RulesEngine
from diskcare.rules.models import Decision, RiskLevel
from diskcare.rules.provider import decide_or_fallback
from diskcare.scanning.models import ScanTarget
from diskcare.utils.text import to_one_line, truncate

MS_PER_DAY = 86_400_000

MISSING_REASON = "Target path does not exist."
DO_NOT_TOUCH_REASON = "Rule risk is do-not-touch."
UNKNOWN_AGE_REASON = "Cannot determine lastModifiedAt; not eligible for apply."
NO_RULE_DESCRIPTION = "No rule description."

_ANALYZER_ERROR_TRUNCATE_LIMIT = 160


def to_epoch_ms(now: datetime | int | float) -> float:
    """Convert a datetime or epoch milliseconds to epoch milliseconds."""
    if isinstance(now, datetime):
        return now.timestamp() * 1000
    return float(now)


def age_in_days(now_ms: float, past_ms: float) -> int:
    """Whole days between two epoch-millisecond instants.

    Non-positive or non-finite deltas count as zero days.
    """
    delta = now_ms - past_ms
    if not math.isfinite(delta) or delta <= 0:
        return 0
    return int(delta // MS_PER_DAY)


def _blocking_reason(target: ScanTarget, decision: Decision) -> str | None:
    if not target.exists:
        return MISSING_REASON
    if target.metrics.skipped:
        error = target.metrics.error
        detail = to_one_line(error) if error else "Unknown error"
        return f"Target analysis skipped: {truncate(detail, _ANALYZER_ERROR_TRUNCATE_LIMIT)}"
    if decision.risk == RiskLevel.DO_NOT_TOUCH:
        return DO_NOT_TOUCH_REASON
    return None


def plan_item(target: ScanTarget, decision: Decision, now_ms: float) -> CleanPlanItem:
    """Build the plan item for a single target.

    Args:
        target: Analyzed target.
        decision: Policy decision for the target.
        now_ms: Reference time in epoch milliseconds.

    Returns:
        Immutable plan item.
    """
    reasons: list[str] = []
    metrics = target.metrics

    blocked = _blocking_reason(target, decision)
    if blocked is not None:
        status = PlanStatus.BLOCKED
        reasons.append(blocked)
    else:
        status = PlanStatus.ELIGIBLE if decision.risk == RiskLevel.SAFE else PlanStatus.CAUTION

        if metrics.partial:
            status = PlanStatus.CAUTION
            reasons.append(
                f"Partial analysis: {metrics.skipped_entries} subpath(s) could not be read; "
                "not eligible for apply."
            )
            reasons.append(PARTIAL_ESTIMATE_REASON)

        if status == PlanStatus.ELIGIBLE:
            if metrics.last_modified_at is None:
                status = PlanStatus.CAUTION
                reasons.append(UNKNOWN_AGE_REASON)
            else:
                age = age_in_days(now_ms, metrics.last_modified_at)
                if age < decision.safe_after_days:
                    status = PlanStatus.CAUTION
                    reasons.append(
                        f"Too recent: last modified {age} day(s) ago "
                        f"(< safeAfterDays={decision.safe_after_days})."
                    )

    reasons.append(decision.reasons[0] if decision.reasons else NO_RULE_DESCRIPTION)

    return CleanPlanItem(
        id=target.id,
        display_name=target.display_name,
        path=target.path,
        exists=target.exists,
        risk=decision.risk,
        safe_after_days=decision.safe_after_days,
        status=status,
        estimated_bytes=metrics.total_bytes if status == PlanStatus.ELIGIBLE else 0,
        reasons=tuple(reasons),
    )


def build_clean_plan(
    targets: Iterable[ScanTarget],
    engine: RulesEngine | None,
    now: datetime | int | float,
    *,
    dry_run: bool,
    apply: bool,
) -> CleanPlan:
    """Build the clean plan for a set of analyzed targets.

    Args:
        targets: Analyzed targets, in any order.
        engine: Loaded rules engine, or None to use the caution fallback.
        now: Reference time (aware datetime or epoch milliseconds).
        dry_run: Whether the run is a dry-run.
        apply: Whether apply was requested.

    Returns:
        CleanPlan with exactly one item per target, sorted by id.
    """
    now_ms = to_epoch_ms(now)
    items = sorted(
        (plan_item(t, decide_or_fallback(engine, t.policy_id), now_ms) for t in targets),
        key=lambda item: item.id,
    )
    return CleanPlan(
        dry_run=dry_run,
        apply=apply,
        summary=PlanSummary.from_items(items),
        items=tuple(items),
    )
