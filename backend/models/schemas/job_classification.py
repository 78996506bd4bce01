"""Job category classification."""

from pydantic import BaseModel


class JobClassification(BaseModel):
    category: str = "GENERAL"
    confidence: float = 0.0
    matched_keywords: list[str] = []
    suggested_skills: list[str] = []
