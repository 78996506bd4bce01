"""Skill analysis against job requirements with taxonomy-aware partial credit.

For every required skill:
1. Direct fuzzy match against the candidate's skills
2. Otherwise, related matches from the same taxonomy subcategory
3. Relevance of the skill's group to the job context

On top of per-skill scores, stack and workflow combinations add a bonus.
"""

import logging

from pydantic import BaseModel, ConfigDict

from models.schemas.skill_analysis import SkillAnalysisDetail, SkillAnalysisResult, SkillCombination
from services.matching.skill_normalizer import are_similar_skills, normalize_skill_list, skill_aliases
from services.matching.technology_mapper import DEFAULT_TAXONOMY, TechnologyTaxonomy

logger = logging.getLogger(__name__)

UNKNOWN_RELEVANCE = 0.5

_WORD_PUNCTUATION = ".,;:!?()[]\"'"


class SkillAnalyzerConfig(BaseModel):
    base_weight: float = 1.0
    context_weight: float = 0.3
    combination_bonus: float = 0.2
    fuzzy_match_threshold: float = 0.8
    relevance_floor_boost: float = 0.3
    related_base_score: float = 0.7
    related_step: float = 0.1
    related_max_bonus: float = 0.3
    combination_threshold: float = 0.7  # combinations below this get suggestions


class WorkflowPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    categories: tuple[str, ...]
    min_skills: int = 2


WORKFLOW_PATTERNS: tuple[WorkflowPattern, ...] = (
    WorkflowPattern(name="Full Stack", categories=("frontend", "backend")),
    WorkflowPattern(name="DevOps", categories=("backend", "devops")),
    WorkflowPattern(name="Cloud Native", categories=("cloud", "devops")),
)


def context_relevance(terms: list[str] | tuple[str, ...], context: str, floor_boost: float = 0.3) -> float:
    """Share of terms found in the context words, boosted and capped at 1.

    A term counts when some whitespace-separated context word contains it,
    or, for multi-word terms, when the context contains the phrase. A term
    also counts when one of its aliases appears as a whole word or phrase,
    so "AWS" in the context credits "amazon web services".
    """
    if not terms:
        return UNKNOWN_RELEVANCE
    text = context.lower()
    words = text.split()
    tokens = {w.strip(_WORD_PUNCTUATION) for w in words}
    hits = 0
    for term in terms:
        term = term.lower()
        if any(term in w for w in words) or (" " in term and term in text):
            hits += 1
        elif any(_mentions_alias(alias, text, tokens) for alias in skill_aliases(term)):
            hits += 1
    return min(1.0, hits / len(terms) + floor_boost)


def _mentions_alias(alias: str, text: str, tokens: set[str]) -> bool:
    # Single-word aliases match whole words only
    if " " in alias:
        return alias in text
    return alias in tokens


class SkillAnalyzer:
    def __init__(
        self,
        config: SkillAnalyzerConfig | None = None,
        taxonomy: TechnologyTaxonomy = DEFAULT_TAXONOMY,
        workflow_patterns: tuple[WorkflowPattern, ...] = WORKFLOW_PATTERNS,
    ):
        self.config = config or SkillAnalyzerConfig()
        self.taxonomy = taxonomy
        self.workflow_patterns = workflow_patterns

    def analyze_skills(
        self,
        required_skills: list[str],
        candidate_skills: list[str],
        context: str = "",
    ) -> SkillAnalysisResult:
        required = normalize_skill_list(required_skills)
        candidate = normalize_skill_list(candidate_skills)

        details = [self._analyze_skill(skill, candidate, context) for skill in required]
        combinations = self._stack_combinations(candidate) + self._workflow_combinations(details)

        if details:
            context_score = sum(d.relevance for d in details) / len(details)
            match_score = sum(d.score for d in details) / len(details)
        else:
            context_score = match_score = 0.0

        score = self._overall_score(match_score, context_score, combinations)

        return SkillAnalysisResult(
            score=score,
            context_score=context_score,
            match_score=match_score,
            details=details,
            combinations=combinations,
            suggestions=self._suggestions(details, combinations),
        )

    def _matches(self, a: str, b: str) -> bool:
        return are_similar_skills(a, b, self.config.fuzzy_match_threshold)

    def _analyze_skill(self, skill: str, candidate: list[str], context: str) -> SkillAnalysisDetail:
        matched = any(self._matches(c, skill) for c in candidate)

        related_matches: list[str] = []
        if not matched:
            related = self.taxonomy.get_related_skills(skill)
            related_matches = [c for c in candidate if any(self._matches(c, r) for r in related)]

        relevance = self.skill_relevance(skill, context)

        if matched:
            raw = 1.0
        elif related_matches:
            cfg = self.config
            raw = cfg.related_base_score + min(cfg.related_max_bonus, cfg.related_step * len(related_matches))
        else:
            raw = 0.0
        cw = self.config.context_weight
        score = raw * (relevance * cw + (1 - cw))

        return SkillAnalysisDetail(
            skill=skill,
            matched=matched,
            relevance=relevance,
            context=self.taxonomy.get_skill_context(skill),
            related_matches=related_matches,
            score=score,
        )

    def skill_relevance(self, skill: str, context: str) -> float:
        """Relevance of the skill's group context words to the job context."""
        match = self.taxonomy.find_group_for_skill(skill)
        if match is None:
            return UNKNOWN_RELEVANCE
        return context_relevance(match.group.context, context, self.config.relevance_floor_boost)

    def _stack_combinations(self, candidate: list[str]) -> list[SkillCombination]:
        combinations = []
        for category in self.taxonomy.categories():
            stack_skills = self.taxonomy.category_skills(category)
            if not stack_skills:
                continue
            matched = [s for s in stack_skills if any(self._matches(c, s) for c in candidate)]
            if len(matched) < 2:
                continue
            missing = [p for p in self.taxonomy.category_primaries(category) if p not in matched]
            combinations.append(SkillCombination(
                skills=matched,
                type="stack",
                name=category,
                score=len(matched) / len(stack_skills),
                explanation=f"Found {len(matched)} skills from {category} stack",
                missing=missing,
            ))
        return combinations

    def _workflow_combinations(self, details: list[SkillAnalysisDetail]) -> list[SkillCombination]:
        """Workflow patterns counted over directly matched required skills.

        A pattern registers only when every one of its categories contributes
        a direct match and the total reaches the pattern minimum.
        """
        combinations = []
        for pattern in self.workflow_patterns:
            matched: list[str] = []
            missing: list[str] = []
            covered: set[str] = set()
            for detail in details:
                group = self.taxonomy.find_group_for_skill(detail.skill)
                if group is None or group.category not in pattern.categories:
                    continue
                if detail.matched:
                    matched.append(detail.skill)
                    covered.add(group.category)
                else:
                    missing.append(detail.skill)

            if len(matched) < pattern.min_skills or covered != set(pattern.categories):
                continue
            combinations.append(SkillCombination(
                skills=matched,
                type="workflow",
                name=pattern.name,
                score=min(1.0, len(matched) / (pattern.min_skills * 2)),
                explanation=f"Matched {pattern.name} workflow pattern",
                missing=missing,
            ))
        return combinations

    def _overall_score(
        self,
        match_score: float,
        context_score: float,
        combinations: list[SkillCombination],
    ) -> float:
        cw = self.config.context_weight
        score = (match_score * (1 - cw) + context_score * cw) * self.config.base_weight
        if combinations:
            average = sum(c.score for c in combinations) / len(combinations)
            score += average * self.config.combination_bonus
        return min(1.0, max(0.0, score))

    def _suggestions(
        self,
        details: list[SkillAnalysisDetail],
        combinations: list[SkillCombination],
    ) -> list[str]:
        suggestions = []
        for detail in details:
            if detail.matched or detail.related_matches:
                continue
            alternatives = self.taxonomy.get_related_skills(detail.skill)[:2]
            if alternatives:
                suggestions.append(
                    f"Consider learning {detail.skill} or related technologies like {', '.join(alternatives)}"
                )
            else:
                suggestions.append(f"Consider learning {detail.skill}")

        for combo in combinations:
            if combo.score < self.config.combination_threshold and combo.missing:
                suggestions.append(
                    f"Consider learning {', '.join(combo.missing[:3])} to complete the {combo.name} {combo.type}"
                )
        return suggestions
