"""Experience Analyzer output."""

from pydantic import BaseModel


class ExperienceDetail(BaseModel):
    area: str
    required_years: float = 0.0
    actual_years: float = 0.0
    relevance: float = 0.0
    score: float = 0.0
    explanation: str = ""


class ExperienceEvaluation(BaseModel):
    score: float = 0.0
    years_score: float = 0.0
    relevance_score: float = 0.0
    details: list[ExperienceDetail] = []
    suggestions: list[str] = []
