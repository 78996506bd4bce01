"""Experience evaluation: years per area against requirements, weighted by relevance."""

import logging

from pydantic import BaseModel

from models.schemas.experience_evaluation import ExperienceDetail, ExperienceEvaluation
from services.matching.skill_analyzer import UNKNOWN_RELEVANCE, context_relevance
from services.matching.technology_mapper import DEFAULT_TAXONOMY, TechnologyTaxonomy

logger = logging.getLogger(__name__)


class ExperienceAnalyzerConfig(BaseModel):
    base_weight: float = 1.0
    years_weight: float = 0.6
    relevance_weight: float = 0.4
    max_years_bonus: float = 0.3
    min_years_penalty: float = 0.4
    relevance_threshold: float = 0.7  # areas scoring below this get suggestions
    relevance_floor_boost: float = 0.3
    bonus_rate: float = 0.1
    penalty_rate: float = 0.2


def _format_years(years: float) -> str:
    return f"{round(years, 1):g}"


class ExperienceAnalyzer:
    def __init__(
        self,
        config: ExperienceAnalyzerConfig | None = None,
        taxonomy: TechnologyTaxonomy = DEFAULT_TAXONOMY,
    ):
        self.config = config or ExperienceAnalyzerConfig()
        self.taxonomy = taxonomy

    def evaluate_experience(
        self,
        requirements: dict[str, float],
        experience: dict[str, float],
        context: str = "",
    ) -> ExperienceEvaluation:
        details: list[ExperienceDetail] = []
        ratios: list[float] = []
        suggestions: list[str] = []

        for area, required in requirements.items():
            actual = max(0.0, float(experience.get(area, 0.0)))
            ratio = self.years_ratio(required, actual)
            relevance = self.area_relevance(area, context)
            score = self.area_score(ratio, relevance)
            ratios.append(ratio)
            details.append(ExperienceDetail(
                area=area,
                required_years=required,
                actual_years=actual,
                relevance=relevance,
                score=score,
                explanation=self._explanation(area, required, actual, relevance),
            ))
            if score < self.config.relevance_threshold:
                suggestions.append(self._suggestion(area, required, actual))

        if not details:
            return ExperienceEvaluation()

        years_score = min(1.0, sum(ratios) / len(ratios))
        relevance_score = sum(d.relevance for d in details) / len(details)
        cfg = self.config
        score = (years_score * cfg.years_weight + relevance_score * cfg.relevance_weight) * cfg.base_weight

        return ExperienceEvaluation(
            score=min(1.0, max(0.0, score)),
            years_score=years_score,
            relevance_score=relevance_score,
            details=details,
            suggestions=suggestions,
        )

    @staticmethod
    def years_ratio(required: float, actual: float) -> float:
        if required <= 0:
            return 1.0
        return actual / required

    def area_score(self, ratio: float, relevance: float) -> float:
        cfg = self.config
        score = ratio
        if ratio > 1:
            score += min(cfg.max_years_bonus, (ratio - 1) * cfg.bonus_rate)
        elif ratio < 1:
            score -= min(cfg.min_years_penalty, (1 - ratio) * cfg.penalty_rate)
        score *= relevance * cfg.relevance_weight + (1 - cfg.relevance_weight)
        return min(1.0, max(0.0, score))

    def area_relevance(self, area: str, context: str) -> float:
        """Share of the area's skills mentioned in the job context.

        An area may be a skill (resolved to its group) or a taxonomy category.
        """
        match = self.taxonomy.find_group_for_skill(area)
        if match is not None:
            skills = [match.group.primary, *match.group.related]
        else:
            skills = self.taxonomy.category_skills(area.lower().strip())
        if not skills:
            return UNKNOWN_RELEVANCE
        return context_relevance(skills, context, self.config.relevance_floor_boost)

    def _explanation(self, area: str, required: float, actual: float, relevance: float) -> str:
        if relevance >= 0.8:
            level = "highly"
        elif relevance >= 0.5:
            level = "moderately"
        else:
            level = "less"
        text = f"{_format_years(actual)} years of {level} relevant experience in {area}"
        if actual == required:
            return f"{text}, meeting the required {_format_years(required)} years"
        if actual > required:
            return f"{text}, exceeding the required {_format_years(required)} years"
        return f"{text}, {_format_years(required - actual)} years below the required {_format_years(required)} years"

    def _suggestion(self, area: str, required: float, actual: float) -> str:
        gap = max(0.0, required - actual)
        related = self.taxonomy.get_related_skills(area)[:2]
        if gap > 0 and related:
            return (
                f"Consider gaining {_format_years(gap)} more years of experience in {area} "
                f"or related areas like {', '.join(related)}"
            )
        if gap > 0:
            return f"Gain {_format_years(gap)} more years of experience in {area}"
        return f"Highlight how your {area} experience applies to this role"
