"""Clean planning and apply orchestration."""

from diskcare.cleaning.applier import apply_plan, can_apply, summarize_apply
from diskcare.cleaning.models import (
    ApplyResult,
    ApplyStatus,
    ApplySummary,
    CleanPlan,
    CleanPlanItem,
    PlanStatus,
    PlanSummary,
)
from diskcare.cleaning.planner import build_clean_plan

__all__ = [
    "ApplyResult",
    "ApplyStatus",
    "ApplySummary",
    "CleanPlan",
    "CleanPlanItem",
    "PlanStatus",
    "PlanSummary",
    "apply_plan",
    "build_clean_plan",
    "can_apply",
    "summarize_apply",
]
