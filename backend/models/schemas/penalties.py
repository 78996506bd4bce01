"""Mismatch penalty records."""

from pydantic import BaseModel


class PenaltyResult(BaseModel):
    has_severe_mismatch: bool = False
    penalty: float = 0.0  # 0.0-1.0 fraction removed from the score
    analysis: dict = {}


class AppliedPenalty(BaseModel):
    type: str  # technical | experience
    impact: float
    reason: str = ""


class PenaltyApplication(BaseModel):
    final_score: float
    original_score: float
    applied: list[AppliedPenalty] = []
    total_impact: float = 0.0
