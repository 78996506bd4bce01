"""Weighted component scores: skills, experience, projects, education, job title.

Each component lands in [0, 1]. A component that cannot be computed scores 0
and records the reason in its analysis entry.
"""

import logging
import math
import re
from collections.abc import Callable
from datetime import date
from types import MappingProxyType

from models.schemas.component_scores import ComponentScoreResult, ComponentScores
from models.schemas.context_rule import EvaluationContext
from models.schemas.resume import Resume, WorkExperience
from services.experience_dates import (
    SKILL_CATEGORIES,
    entry_months,
    extract_area_requirements,
    extract_required_years,
    parse_date,
    years_since,
)
from services.matching.context_analyzer import DEFAULT_CONTEXT_ANALYZER, ContextAnalyzer
from services.matching.experience_analyzer import ExperienceAnalyzer
from services.matching.skill_analyzer import SkillAnalyzer
from services.matching.skill_normalizer import normalize_skill
from services.scoring.penalties import detect_seniority
from services.scoring.technical_keywords import extract_technical_keywords, is_technical_role

logger = logging.getLogger(__name__)

COMPONENT_WEIGHTS: MappingProxyType = MappingProxyType({
    "skills": 0.30,
    "experience": 0.25,
    "projects": 0.20,
    "education": 0.15,
    "job_title": 0.10,
})

EDUCATION_RECENCY_YEARS = 5
EDUCATION_RECENCY_BONUS = 0.2
TITLE_PARTIAL_CAP = 0.5
TITLE_MATCH_WEIGHT = 1.0
TITLE_MISMATCH_WEIGHT = 0.5

_SKILL_SPLIT_RE = re.compile(r"[,;|\n]")
_PUNCT_RE = re.compile(r"[^\w\s]")

_skill_analyzer = SkillAnalyzer()
_experience_analyzer = ExperienceAnalyzer()


def split_skills(skills_text: str) -> list[str]:
    return [s.strip() for s in _SKILL_SPLIT_RE.split(skills_text or "") if s.strip()]


def _clean_title(title: str) -> str:
    return re.sub(r"\s+", " ", _PUNCT_RE.sub(" ", (title or "").lower())).strip()


def _entry_years(entry: WorkExperience, today: date | None = None) -> float:
    return entry_months(entry.start_date, entry.end_date, today) / 12


def area_experience_years(work_experience: list[WorkExperience], today: date | None = None) -> dict[str, float]:
    """Years per technical keyword, summed over the roles that mention it."""
    years: dict[str, float] = {}
    for entry in work_experience:
        duration = _entry_years(entry, today)
        if duration <= 0:
            continue
        for keyword in extract_technical_keywords(f"{entry.job_title} {entry.description}", SKILL_CATEGORIES):
            years[keyword] = years.get(keyword, 0.0) + duration
    return years


def most_recent_title(resume: Resume) -> str:
    if resume.personal_details.title.strip():
        return resume.personal_details.title
    dated = [(parse_date(e.start_date) or (0, 0), i, e) for i, e in enumerate(resume.work_experience)]
    if not dated:
        return ""
    # Latest start wins; equal starts keep list order
    latest = max(dated, key=lambda item: (item[0], -item[1]))
    return latest[2].job_title


def calculate_skills_score(
    resume: Resume,
    job_description: str,
    job_title: str = "",
    skill_analyzer: SkillAnalyzer | None = None,
    context_analyzer: ContextAnalyzer | None = None,
) -> tuple[float, dict]:
    candidate = split_skills(resume.skills.skills_)
    if not candidate or not job_description.strip():
        return 0.0, {"reason": "Missing skills or job description"}

    required = extract_technical_keywords(job_description, SKILL_CATEGORIES)
    if not required:
        jd_lower = job_description.lower()
        contained = [s for s in candidate if s.lower() in jd_lower]
        return len(contained) / len(candidate), {"method": "containment", "matched_skills": contained}

    analyzer = skill_analyzer or _skill_analyzer
    result = analyzer.analyze_skills(required, candidate, job_description)

    context = EvaluationContext(
        skills=[normalize_skill(s) for s in candidate],
        experience_years=area_experience_years(resume.work_experience),
        job_context=job_description,
        job_level=detect_seniority(job_title, job_description),
    )
    # Context rules adjust the analysis score directly
    analyzer_rules = context_analyzer or DEFAULT_CONTEXT_ANALYZER
    score = analyzer_rules.calculate_context_score(context, base_score=result.score)

    return score, {
        "method": "skill_analysis",
        "required_skills": required,
        "matched_skills": [d.skill for d in result.details if d.matched],
        "missing_skills": [d.skill for d in result.details if not d.matched and not d.related_matches],
        "analysis_score": result.score,
        "context_adjusted_score": score,
        "combinations": [c.name for c in result.combinations],
        "suggestions": result.suggestions,
    }


def calculate_experience_score(
    resume: Resume,
    job_description: str,
    job_title: str = "",
    experience_analyzer: ExperienceAnalyzer | None = None,
) -> tuple[float, dict]:
    entries = resume.work_experience
    if not entries or not job_description.strip():
        return 0.0, {"reason": "Missing experience or job description"}

    requirements = extract_area_requirements(job_description)
    if requirements:
        analyzer = experience_analyzer or _experience_analyzer
        evaluation = analyzer.evaluate_experience(
            requirements, area_experience_years(entries), job_description
        )
        return evaluation.score, {
            "method": "area_requirements",
            "requirements": requirements,
            "details": [d.explanation for d in evaluation.details],
            "suggestions": evaluation.suggestions,
        }

    # No per-area requirement: weight each role's years by title relevance
    target = _clean_title(job_title)
    required = extract_required_years(job_description)
    weighted = 0.0
    for entry in entries:
        years = _entry_years(entry) or 1.0
        relevant = bool(target) and target in _clean_title(entry.job_title)
        weighted += years * (TITLE_MATCH_WEIGHT if relevant else TITLE_MISMATCH_WEIGHT)
    score = min(1.0, weighted / max(1.0, required))
    return score, {"method": "title_weighted_years", "weighted_years": weighted, "required_years": required}


def calculate_project_score(resume: Resume, job_description: str) -> tuple[float, dict]:
    projects = resume.projects
    if not projects or not job_description.strip():
        return 0.0, {"reason": "Missing projects or job description"}

    jd_keywords = extract_technical_keywords(job_description)
    if not jd_keywords:
        jd_lower = job_description.lower()
        technologies = [t for p in projects for t in p.technologies]
        if not technologies:
            return 0.0, {"method": "containment", "matching_technologies": []}
        contained = [t for t in technologies if t.lower() in jd_lower]
        return len(contained) / len(technologies), {"method": "containment", "matching_technologies": contained}

    total = 0.0
    per_project = []
    for project in projects:
        text = f"{project.title} {project.description} {' '.join(project.technologies)}"
        terms = set(extract_technical_keywords(text)) | {normalize_skill(t) for t in project.technologies}
        matching = [k for k in jd_keywords if k in terms or normalize_skill(k) in terms]
        relevance = len(matching) / len(jd_keywords)
        total += relevance
        per_project.append({"title": project.title, "matching_technologies": matching, "relevance": relevance})

    score = math.sqrt(total / len(projects))
    return score, {"method": "technology_overlap", "projects": per_project}


def calculate_education_score(resume: Resume, job_description: str) -> tuple[float, dict]:
    entries = resume.education
    if not entries or not job_description.strip():
        return 0.0, {"reason": "Missing education or job description"}

    jd_lower = job_description.lower()
    jd_keywords = extract_technical_keywords(job_description)
    total = 0.0
    per_entry = []
    for edu in entries:
        field = edu.field_of_study.lower().strip()
        if field and field in jd_lower:
            relevance = 1.0
        elif jd_keywords:
            edu_keywords = extract_technical_keywords(f"{edu.degree} {edu.field_of_study}")
            relevance = len([k for k in edu_keywords if k in jd_keywords]) / len(jd_keywords)
        else:
            relevance = 0.0

        since = years_since(edu.graduation_date)
        bonus = EDUCATION_RECENCY_BONUS if since is not None and since < EDUCATION_RECENCY_YEARS else 0.0
        entry_score = min(1.0, relevance + bonus)
        total += entry_score
        per_entry.append({"field_relevance": relevance, "recency_bonus": bonus, "score": entry_score})

    return total / len(entries), {"entries": per_entry}


def calculate_job_title_score(resume: Resume, job_title: str) -> tuple[float, dict]:
    candidate = _clean_title(most_recent_title(resume))
    target = _clean_title(job_title)
    if not candidate or not target:
        return 0.0, {"reason": "Missing resume title or job title"}

    if candidate in target or target in candidate:
        return 1.0, {"method": "containment", "candidate_title": candidate}

    target_words = set(target.split())
    overlap = len(target_words & set(candidate.split())) / len(target_words)
    score = min(TITLE_PARTIAL_CAP, overlap)

    candidate_role = is_technical_role(candidate)
    target_role = is_technical_role(target)
    if candidate_role["is_technical"] and target_role["is_technical"]:
        agreement = min(candidate_role["confidence"], target_role["confidence"])
        score = max(score, min(TITLE_PARTIAL_CAP, agreement))

    return score, {
        "method": "word_overlap",
        "candidate_title": candidate,
        "word_overlap": overlap,
        "both_technical": candidate_role["is_technical"] and target_role["is_technical"],
    }


def _safe_component(name: str, compute: Callable[[], tuple[float, dict]]) -> tuple[float, dict]:
    try:
        score, analysis = compute()
    except Exception as e:
        logger.error("Component %s scoring failed: %s", name, e)
        return 0.0, {"reason": f"Error scoring {name}"}
    return min(1.0, max(0.0, score)), analysis


def calculate_component_scores(
    resume: Resume,
    job_description: str,
    job_title: str = "",
    skill_analyzer: SkillAnalyzer | None = None,
    experience_analyzer: ExperienceAnalyzer | None = None,
    context_analyzer: ContextAnalyzer | None = None,
) -> ComponentScoreResult:
    """Score every resume section against the job and combine with COMPONENT_WEIGHTS."""
    job_description = job_description or ""
    job_title = job_title or ""

    components = {
        "skills": _safe_component("skills", lambda: calculate_skills_score(
            resume, job_description, job_title, skill_analyzer, context_analyzer)),
        "experience": _safe_component("experience", lambda: calculate_experience_score(
            resume, job_description, job_title, experience_analyzer)),
        "projects": _safe_component("projects", lambda: calculate_project_score(resume, job_description)),
        "education": _safe_component("education", lambda: calculate_education_score(resume, job_description)),
        "job_title": _safe_component("job_title", lambda: calculate_job_title_score(resume, job_title)),
    }

    scores = ComponentScores(**{name: score for name, (score, _) in components.items()})
    weighted = sum(COMPONENT_WEIGHTS[name] * score for name, (score, _) in components.items())

    return ComponentScoreResult(
        score=min(1.0, max(0.0, weighted)),
        component_scores=scores,
        analysis={name: analysis for name, (_, analysis) in components.items()},
    )
