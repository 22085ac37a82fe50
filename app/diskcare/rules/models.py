"""Pydantic models for the rules policy file.

The policy file is a JSON document::

    {
      "rules": [
        {"id": "npm-cache", "risk": "safe", "safeAfterDays": 30,
         "description": "npm cache is reproducible; safe to clean when old."}
      ],
      "defaults": {"risk": "caution", "safeAfterDays": 30}
    }

Rule ids are expected to be unique; the engine uses the first match.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

MIN_SAFE_AFTER_DAYS = 0
MAX_SAFE_AFTER_DAYS = 9999


class RiskLevel(str, Enum):
    """Risk tier assigned to a target by policy.

    Attributes:
        SAFE: Reproducible data; eligible for cleanup once old enough.
        CAUTION: Might hold in-use or user data; never cleaned automatically.
        DO_NOT_TOUCH: Must never be cleaned.
    """

    SAFE = "safe"
    CAUTION = "caution"
    DO_NOT_TOUCH = "do-not-touch"


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
SafeAfterDays = Annotated[int, Field(ge=MIN_SAFE_AFTER_DAYS, le=MAX_SAFE_AFTER_DAYS)]


def _check_days(value: Any) -> Any:
    """Reject booleans, strings, and non-finite numbers before int coercion."""
    if isinstance(value, bool):
        msg = "safeAfterDays must be a number, not a boolean"
        raise ValueError(msg)
    if isinstance(value, str):
        msg = "safeAfterDays must be a number, not a string"
        raise ValueError(msg)
    if isinstance(value, float) and not math.isfinite(value):
        msg = "safeAfterDays must be a finite number"
        raise ValueError(msg)
    return value


class RuleDefaults(BaseModel):
    """Decision applied when no rule matches a target.

    Attributes:
        risk: Default risk tier.
        safe_after_days: Default minimum age in days.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    risk: RiskLevel
    safe_after_days: Annotated[SafeAfterDays, Field(alias="safeAfterDays")]

    @field_validator("safe_after_days", mode="before")
    @classmethod
    def validate_days(cls, v: Any) -> Any:
        """Validate safeAfterDays type."""
        return _check_days(v)


class Rule(BaseModel):
    """Policy rule for one target id.

    Attributes:
        id: Target id (or rule id for custom paths) this rule applies to.
        risk: Risk tier.
        safe_after_days: Minimum age in days before a safe target is eligible.
        description: Human-readable explanation shown in plans.
        paths: Optional custom paths to scan under this rule.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: NonEmptyStr
    risk: RiskLevel
    safe_after_days: Annotated[SafeAfterDays, Field(alias="safeAfterDays")]
    description: NonEmptyStr
    paths: list[str] | None = None

    @field_validator("safe_after_days", mode="before")
    @classmethod
    def validate_days(cls, v: Any) -> Any:
        """Validate safeAfterDays type."""
        return _check_days(v)


class RuleConfig(BaseModel):
    """Complete rules policy.

    Attributes:
        rules: Ordered list of rules.
        defaults: Fallback decision for unmatched targets.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    rules: list[Rule]
    defaults: RuleDefaults

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON policy shape (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True, slots=True)
class Decision:
    """Policy verdict for a single target.

    Attributes:
        risk: Risk tier.
        safe_after_days: Minimum age in days.
        reasons: Ordered explanation strings.
    """

    risk: RiskLevel
    safe_after_days: int
    reasons: tuple[str, ...]
