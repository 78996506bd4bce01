"""Tests for explanation prompts and resume flattening."""

from models.schemas.component_scores import ComponentScores
from models.schemas.penalties import PenaltyResult
from models.schemas.resume import CoverLetter, Resume
from services.prompt_builder import EXPLANATION_SYSTEM_PROMPT, build_explanation_prompt, prepare_resume_content


def test_prepare_resume_content(sample_resume):
    text = prepare_resume_content(Resume.model_validate(sample_resume))
    assert text.startswith("PROFESSIONAL TITLE: Software Engineer")
    assert "SKILLS: Python, Django" in text
    assert "WORK EXPERIENCE: Senior Software Engineer at Globex" in text
    assert "Technologies: React, Python, PostgreSQL" in text
    assert "EDUCATION: Bachelor of Science in Computer Science from State University" in text


def test_prepare_resume_content_empty():
    assert prepare_resume_content(Resume()) == ""


def test_prompt_uses_ten_point_scale(sample_resume, sample_cover_letter):
    system, user = build_explanation_prompt(
        Resume.model_validate(sample_resume),
        CoverLetter.model_validate(sample_cover_letter),
        6.4,
        ComponentScores(skills=0.5, experience=0.82, projects=0.0, job_title=1.0, education=1.0),
        0.75,
    )
    assert system == EXPLANATION_SYSTEM_PROMPT
    assert "job fit score of 6.4/10" in user
    assert "- Skills match: 5.0/10" in user
    assert "- Work experience match: 8.2/10" in user
    assert "- Semantic similarity: 7.5/10" in user
    assert "- Company: Initech" in user
    assert "Detected Mismatches" not in user


def test_prompt_lists_mismatches():
    technical = PenaltyResult(
        penalty=0.3,
        analysis={"reason": "Resume is less technical than the job description", "missing_keywords": ["kubernetes"]},
    )
    experience = PenaltyResult(
        penalty=0.4,
        analysis={"reason": "Insufficient experience for senior role", "total_years": 2.0},
    )
    _, user = build_explanation_prompt(Resume(), CoverLetter(), 2.0, ComponentScores(), 0.5, technical, experience)
    assert "Detected Mismatches" in user
    assert "job mentions kubernetes not found in the resume" in user
    assert "Insufficient experience for senior role (2.0 years of total experience)" in user
    assert "- Work Experience: Not provided" in user
