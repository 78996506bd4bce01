"""Mismatch penalties applied to the combined job-fit score.

Technical mismatch compares keyword density of the job description and the
resume. Experience mismatch compares the role's seniority with total years.
"""

import logging

from models.schemas.penalties import AppliedPenalty, PenaltyApplication, PenaltyResult
from models.schemas.resume import WorkExperience
from services.experience_dates import calculate_total_experience
from services.scoring.technical_keywords import (
    calculate_technical_density,
    contains_keyword,
    is_technical_role,
)

logger = logging.getLogger(__name__)

MAX_TECHNICAL_PENALTY = 0.8
SEVERE_TECHNICAL_PENALTY = 0.6
TECHNICAL_GAP_MULTIPLIER = 2.0
SEVERE_SCORE_CAP = 4.0

SENIOR_INDICATORS = ("senior", "lead", "principal", "architect", "head of", "manager")
JUNIOR_INDICATORS = ("junior", "entry", "associate", "intern", "trainee")
SENIOR_MIN_YEARS = 5
JUNIOR_MAX_YEARS = 8
SENIOR_SHORTFALL_PENALTY = 0.4
OVERQUALIFIED_PENALTY = 0.2


def calculate_technical_mismatch_penalty(job_description: str, resume_content: str, job_title: str) -> PenaltyResult:
    job_profile = calculate_technical_density(job_description)
    resume_profile = calculate_technical_density(resume_content)
    role = is_technical_role(job_title)

    gap = max(0.0, job_profile["score"] - resume_profile["score"])
    severe = (
        role["is_technical"]
        and role["confidence"] > 0.7
        and job_profile["score"] > 0.3
        and resume_profile["score"] < 0.2
    )

    penalty = gap * TECHNICAL_GAP_MULTIPLIER
    if severe:
        penalty = max(penalty, SEVERE_TECHNICAL_PENALTY)
    penalty = min(MAX_TECHNICAL_PENALTY, penalty)

    if severe:
        reason = "Resume shows little technical depth for a highly technical role"
    elif penalty > 0:
        reason = "Resume is less technical than the job description"
    else:
        reason = ""

    missing = [m for m in job_profile["matches"] if m not in resume_profile["matches"]]
    return PenaltyResult(
        has_severe_mismatch=severe,
        penalty=penalty,
        analysis={
            "reason": reason,
            "job_density": job_profile["score"],
            "resume_density": resume_profile["score"],
            "density_gap": gap,
            "is_job_technical": role["is_technical"],
            "job_technical_confidence": role["confidence"],
            "missing_keywords": missing,
        },
    )


def _mentions_any(text: str, indicators: tuple[str, ...]) -> bool:
    return any(contains_keyword(text, indicator) for indicator in indicators)


def detect_seniority(job_title: str, job_description: str) -> str:
    """Return "senior", "junior" or "mid" from indicator words."""
    title = (job_title or "").lower()
    description = (job_description or "").lower()
    if _mentions_any(title, SENIOR_INDICATORS) or _mentions_any(description, SENIOR_INDICATORS):
        return "senior"
    if _mentions_any(title, JUNIOR_INDICATORS) or _mentions_any(description, JUNIOR_INDICATORS):
        return "junior"
    return "mid"


def calculate_experience_mismatch_penalty(
    work_experience: list[WorkExperience],
    job_description: str,
    job_title: str,
) -> PenaltyResult:
    level = detect_seniority(job_title, job_description)
    total_years = calculate_total_experience(work_experience)

    penalty = 0.0
    reason = ""
    severe = False
    if level == "senior" and total_years < SENIOR_MIN_YEARS:
        penalty = SENIOR_SHORTFALL_PENALTY
        reason = "Insufficient experience for senior role"
        severe = True
    elif level == "junior" and total_years > JUNIOR_MAX_YEARS:
        penalty = OVERQUALIFIED_PENALTY
        reason = "Overqualified for junior role"

    return PenaltyResult(
        has_severe_mismatch=severe,
        penalty=penalty,
        analysis={
            "reason": reason,
            "total_years": total_years,
            "is_senior_role": level == "senior",
            "is_junior_role": level == "junior",
        },
    )


def apply_penalties(
    score: float,
    technical: PenaltyResult,
    experience: PenaltyResult,
    max_score: float = 10.0,
) -> PenaltyApplication:
    """Cap severe technical mismatches, then scale by each penalty, clamped to [0, max_score]."""
    final = score
    if technical.has_severe_mismatch:
        final = min(final, SEVERE_SCORE_CAP)
    final *= 1 - technical.penalty
    applied = [AppliedPenalty(
        type="technical",
        impact=score - final,
        reason=technical.analysis.get("reason", ""),
    )]

    after_experience = final * (1 - experience.penalty)
    applied.append(AppliedPenalty(
        type="experience",
        impact=final - after_experience,
        reason=experience.analysis.get("reason", ""),
    ))

    final = min(max_score, max(0.0, after_experience))
    return PenaltyApplication(
        final_score=final,
        original_score=score,
        applied=applied,
        total_impact=score - final,
    )
