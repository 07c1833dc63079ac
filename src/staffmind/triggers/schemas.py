from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from staffmind.triggers.engine.evaluator import ConditionEvaluator


class RuleScope(str, Enum):
    FRAMEWORK = "framework"  # evaluated once per framework capacity
    TEAM = "team"  # evaluated once per pass over the whole roster


class RuleKind(str, Enum):
    CRITICAL_FRAMEWORK_BALANCING = "critical_framework_balancing"
    EXPERTISE_CROSS_TRAINING = "expertise_cross_training"
    WORKLOAD_SMOOTHING = "workload_smoothing"

    @property
    def scope(self) -> RuleScope:
        if self == RuleKind.WORKLOAD_SMOOTHING:
            return RuleScope.TEAM
        return RuleScope.FRAMEWORK


# Action types each rule kind may be configured with
ALLOWED_ACTIONS: Dict[RuleKind, set] = {
    RuleKind.CRITICAL_FRAMEWORK_BALANCING: {"reassign_capacity"},
    RuleKind.EXPERTISE_CROSS_TRAINING: {"recommend_cross_training"},
    RuleKind.WORKLOAD_SMOOTHING: {"redistribute_work"},
}

_evaluator = ConditionEvaluator()


class AllocationRule(BaseModel):
    """
    A condition -> action rebalancing rule.

    The condition is JSONLogic evaluated against the rule scope's context.
    Lower priority values are evaluated first.
    """
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    kind: RuleKind
    priority: int = Field(..., ge=0)
    enabled: bool = True
    condition: Dict[str, Any] = Field(..., description="JSONLogic condition")
    action: Dict[str, Any] = Field(..., description="Action configuration e.g. {'type': 'redistribute_work'}")
    success_rate: float = Field(0.0, ge=0, le=100)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("condition")
    @classmethod
    def condition_must_be_jsonlogic(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        if not _evaluator.validate_condition(v):
            raise ValueError(f"Invalid JSONLogic condition: {v}")
        return v

    @model_validator(mode="after")
    def action_must_match_kind(self) -> "AllocationRule":
        action_type = self.action.get("type")
        if action_type not in ALLOWED_ACTIONS[self.kind]:
            raise ValueError(
                f"Action type '{action_type}' is not valid for rule kind '{self.kind.value}'"
            )
        return self

    @property
    def action_type(self) -> str:
        return self.action["type"]


class RuleUpdate(BaseModel):
    enabled: bool
