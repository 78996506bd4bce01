"""Keyword-based job category classification."""

import logging
import re
from types import MappingProxyType

from models.schemas.job_classification import JobClassification

logger = logging.getLogger(__name__)

GENERAL = "GENERAL"

JOB_CATEGORIES: MappingProxyType = MappingProxyType({
    "TECHNICAL": {
        "keywords": (
            "engineer", "developer", "programmer", "software", "coding", "technical",
            "data scientist", "devops", "qa", "testing", "analyst", "administrator",
            "architect", "security", "network", "database", "systems", "infrastructure",
        ),
        "related_skills": (
            "programming", "software development", "coding", "testing", "debugging",
            "system design", "algorithms", "data structures", "databases", "apis",
        ),
    },
    "MANAGEMENT": {
        "keywords": (
            "manager", "director", "lead", "supervisor", "executive", "head of",
            "vp", "president", "chief", "coordinator", "principal", "team lead",
            "project manager", "program manager", "scrum master",
        ),
        "related_skills": (
            "leadership", "team management", "strategy", "planning", "budgeting",
            "project management", "stakeholder management", "decision making",
        ),
    },
    "CREATIVE": {
        "keywords": (
            "designer", "creative", "artist", "writer", "content", "marketing",
            "brand", "copywriter", "ux", "ui", "graphic", "visual", "product designer",
            "interaction designer", "art director", "creative director",
        ),
        "related_skills": (
            "design", "creativity", "visual design", "user experience", "branding",
            "typography", "illustration", "wireframing", "prototyping",
        ),
    },
    GENERAL: {"keywords": (), "related_skills": ()},
})


def _normalize_text(text: str) -> str:
    text = re.sub(r"[^\w\s]", " ", text.lower())
    return re.sub(r"\s+", " ", text).strip()


def classify_job(job_title: str, job_description: str) -> JobClassification:
    """Pick the category whose keywords appear most often.

    A keyword counts when all of its words appear in the title or
    description. Ties keep the earlier category; no hits gives GENERAL.
    """
    words = set(_normalize_text(f"{job_title or ''} {job_description or ''}").split())

    best = GENERAL
    best_matches: list[str] = []
    for category, config in JOB_CATEGORIES.items():
        if category == GENERAL:
            continue
        matches = [
            keyword for keyword in config["keywords"]
            if all(word in words for word in _normalize_text(keyword).split())
        ]
        if len(matches) > len(best_matches):
            best, best_matches = category, matches

    keywords = JOB_CATEGORIES[best]["keywords"]
    count = len(best_matches)
    confidence = min(1.0, count / len(keywords) + (0.3 if count > 2 else 0.0)) if keywords else 0.0

    return JobClassification(
        category=best,
        confidence=confidence,
        matched_keywords=best_matches,
        suggested_skills=list(JOB_CATEGORIES[best]["related_skills"]),
    )
