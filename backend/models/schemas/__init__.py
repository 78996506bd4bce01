"""Pydantic contracts shared by the matching and scoring services."""

from models.schemas.component_scores import ComponentScoreResult, ComponentScores
from models.schemas.context_rule import (
    ContextRule,
    EvaluationContext,
    RuleCondition,
    RuleEffect,
    RuleEvaluationResult,
)
from models.schemas.experience_evaluation import ExperienceDetail, ExperienceEvaluation
from models.schemas.job_classification import JobClassification
from models.schemas.penalties import AppliedPenalty, PenaltyApplication, PenaltyResult
from models.schemas.resume import CoverLetter, Resume
from models.schemas.skill_analysis import SkillAnalysisDetail, SkillAnalysisResult, SkillCombination
from models.schemas.technology import GroupMatch, TechnologyGroup

__all__ = [
    "AppliedPenalty",
    "ComponentScoreResult",
    "ComponentScores",
    "ContextRule",
    "CoverLetter",
    "EvaluationContext",
    "ExperienceDetail",
    "ExperienceEvaluation",
    "GroupMatch",
    "JobClassification",
    "PenaltyApplication",
    "PenaltyResult",
    "Resume",
    "RuleCondition",
    "RuleEffect",
    "RuleEvaluationResult",
    "SkillAnalysisDetail",
    "SkillAnalysisResult",
    "SkillCombination",
    "TechnologyGroup",
]
