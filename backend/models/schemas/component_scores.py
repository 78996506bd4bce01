"""Weighted component scores for a resume against a job description."""

from pydantic import BaseModel


class ComponentScores(BaseModel):
    skills: float = 0.0
    experience: float = 0.0
    projects: float = 0.0
    job_title: float = 0.0
    education: float = 0.0


class ComponentScoreResult(BaseModel):
    score: float = 0.0  # weighted sum, 0.0-1.0
    component_scores: ComponentScores = ComponentScores()
    analysis: dict[str, dict] = {}
