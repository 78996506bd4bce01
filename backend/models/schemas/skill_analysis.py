"""Skill Analyzer output: per-skill details, combinations and suggestions."""

from typing import Literal

from pydantic import BaseModel


class SkillAnalysisDetail(BaseModel):
    skill: str
    matched: bool = False
    relevance: float = 0.0  # 0.0-1.0 fit of the skill to the job context
    context: list[str] = []
    related_matches: list[str] = []  # candidate skills standing in for an unmatched one
    score: float = 0.0


class SkillCombination(BaseModel):
    skills: list[str] = []
    type: Literal["stack", "workflow"]
    name: str
    score: float = 0.0
    explanation: str = ""
    missing: list[str] = []


class SkillAnalysisResult(BaseModel):
    score: float = 0.0
    context_score: float = 0.0
    match_score: float = 0.0
    details: list[SkillAnalysisDetail] = []
    combinations: list[SkillCombination] = []
    suggestions: list[str] = []
