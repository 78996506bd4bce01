"""Context rules and the per-request context they are evaluated against."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

RuleType = Literal["skill_boost", "experience_boost", "minimum_requirement", "skill_combination"]
ConditionType = Literal["skill_present", "experience_years", "skill_count", "skill_combination"]
Operator = Literal["equals", "greater_than", "less_than", "greater_or_equal", "less_or_equal", "all", "any"]
EffectType = Literal["score_multiplier", "minimum_score", "bonus_points"]


class RuleCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ConditionType
    value: str | float | tuple[str, ...]
    operator: Operator | None = None


class RuleEffect(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: EffectType
    value: float
    target: Literal["skill", "experience", "overall"] | None = None


class ContextRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: RuleType
    conditions: tuple[RuleCondition, ...] = ()
    effect: RuleEffect
    priority: int = 0
    description: str = ""


class EvaluationContext(BaseModel):
    skills: list[str] = []
    experience_years: dict[str, float] = {}
    job_context: str = ""
    job_level: str = ""
    industry: str = ""


class RuleEvaluationResult(BaseModel):
    rule_id: str
    matched: bool = False
    applied_effect: RuleEffect | None = None
    score: float = 0.0  # effect strength when matched, 0 otherwise
    explanation: str = ""
