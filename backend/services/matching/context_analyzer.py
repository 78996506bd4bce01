"""Context rule engine.

Rules are collected with ContextAnalyzerBuilder and frozen into a
ContextAnalyzer whose rule set is sorted by descending priority. Equal
priorities keep insertion order. Evaluation never mutates the analyzer.
"""

import logging
from collections.abc import Iterable

from models.schemas.context_rule import (
    ContextRule,
    EvaluationContext,
    RuleCondition,
    RuleEffect,
    RuleEvaluationResult,
)
from services.matching.skill_normalizer import normalize_skill

logger = logging.getLogger(__name__)

BASE_CONTEXT_SCORE = 1.0


def _compare(actual: float, expected: float, operator: str) -> bool:
    if operator == "equals":
        return actual == expected
    if operator == "greater_than":
        return actual > expected
    if operator == "less_than":
        return actual < expected
    if operator == "greater_or_equal":
        return actual >= expected
    if operator == "less_or_equal":
        return actual <= expected
    return False


def _evaluate_condition(condition: RuleCondition, context: EvaluationContext, skills: set[str]) -> bool:
    operator = condition.operator or "greater_than"

    if condition.type == "skill_present":
        return normalize_skill(str(condition.value)) in skills

    if condition.type == "experience_years":
        threshold = float(condition.value)
        return any(_compare(years, threshold, operator) for years in context.experience_years.values())

    if condition.type == "skill_count":
        return _compare(len(context.skills), float(condition.value), operator)

    if condition.type == "skill_combination":
        required = [normalize_skill(s) for s in condition.value]
        if condition.operator == "all":
            return all(s in skills for s in required)
        return any(s in skills for s in required)

    return False


def _effect_score(effect: RuleEffect) -> float:
    if effect.type == "bonus_points":
        return 1 + effect.value
    return effect.value


def _apply_effect(score: float, effect: RuleEffect) -> float:
    if effect.type == "score_multiplier":
        return score * effect.value
    if effect.type == "bonus_points":
        return score + effect.value
    if effect.type == "minimum_score":
        return max(score, effect.value)
    return score


def _clamp(score: float) -> float:
    return min(1.0, max(0.0, score))


def evaluate_rule(rule: ContextRule, context: EvaluationContext) -> RuleEvaluationResult:
    """Evaluate one rule. All conditions must hold for it to match."""
    try:
        skills = {normalize_skill(s) for s in context.skills}
        matched = all(_evaluate_condition(c, context, skills) for c in rule.conditions)
    except Exception as e:
        logger.warning("Error evaluating rule %s: %s", rule.id, e)
        return RuleEvaluationResult(rule_id=rule.id, matched=False, explanation="Error evaluating rule")

    if matched:
        return RuleEvaluationResult(
            rule_id=rule.id,
            matched=True,
            applied_effect=rule.effect,
            score=_effect_score(rule.effect),
            explanation=f'Rule "{rule.name}" matched: {rule.description}',
        )
    return RuleEvaluationResult(
        rule_id=rule.id,
        matched=False,
        explanation=f'Rule "{rule.name}" did not match',
    )


class ContextAnalyzer:
    """Immutable, priority-sorted rule set."""

    def __init__(self, rules: Iterable[ContextRule] = ()):
        self._rules: tuple[ContextRule, ...] = tuple(sorted(rules, key=lambda r: -r.priority))

    @property
    def rules(self) -> tuple[ContextRule, ...]:
        return self._rules

    def add_rule(self, rule: ContextRule) -> "ContextAnalyzer":
        """Return a new analyzer with the rule inserted."""
        return ContextAnalyzer((*self._rules, rule))

    def evaluate_rules(self, context: EvaluationContext) -> list[RuleEvaluationResult]:
        return [evaluate_rule(rule, context) for rule in self._rules]

    def calculate_context_score(
        self,
        context: EvaluationContext,
        base_score: float = BASE_CONTEXT_SCORE,
    ) -> float:
        """Apply matched effects in priority order to base_score, clamped to [0, 1].

        With the default base of 1.0 the result is a neutral context factor.
        Passing a component score as the base lets rules adjust it directly.
        """
        score = base_score
        try:
            for result in self.evaluate_rules(context):
                if result.matched and result.applied_effect is not None:
                    score = _apply_effect(score, result.applied_effect)
        except Exception as e:
            logger.error("Context score calculation failed: %s", e)
        return _clamp(score)


class ContextAnalyzerBuilder:
    def __init__(self):
        self._rules: list[ContextRule] = []

    def add_rule(self, rule: ContextRule) -> "ContextAnalyzerBuilder":
        self._rules.append(rule)
        return self

    def add_rules(self, rules: Iterable[ContextRule]) -> "ContextAnalyzerBuilder":
        self._rules.extend(rules)
        return self

    def build(self) -> ContextAnalyzer:
        return ContextAnalyzer(self._rules)


def default_rules() -> list[ContextRule]:
    """Stock rules applied to resume skill scoring."""
    return [
        ContextRule(
            id="thin_skill_list",
            name="Thin skill list",
            type="skill_boost",
            conditions=(RuleCondition(type="skill_count", value=3, operator="less_than"),),
            effect=RuleEffect(type="score_multiplier", value=0.85, target="skill"),
            priority=30,
            description="Fewer than three listed skills weakens the skill evidence",
        ),
        ContextRule(
            id="full_stack_combination",
            name="Full stack combination",
            type="skill_combination",
            conditions=(
                RuleCondition(type="skill_combination", value=("react", "vue", "angular"), operator="any"),
                RuleCondition(
                    type="skill_combination",
                    value=("node.js", "python", "django", "express", "java"),
                    operator="any",
                ),
            ),
            effect=RuleEffect(type="bonus_points", value=0.1, target="skill"),
            priority=20,
            description="Frontend and backend skills together",
        ),
        ContextRule(
            id="deep_experience",
            name="Deep experience",
            type="minimum_requirement",
            conditions=(RuleCondition(type="experience_years", value=5, operator="greater_or_equal"),),
            effect=RuleEffect(type="minimum_score", value=0.6, target="overall"),
            priority=10,
            description="Five or more years in an area sets a score floor",
        ),
    ]


DEFAULT_CONTEXT_ANALYZER = ContextAnalyzerBuilder().add_rules(default_rules()).build()
