"""Prompt templates for job-fit explanations and the resume text they summarize."""

from models.schemas.component_scores import ComponentScores
from models.schemas.penalties import PenaltyResult
from models.schemas.resume import CoverLetter, Resume

EXPLANATION_SYSTEM_PROMPT = "You are a helpful career advisor providing job fit analysis."

_COMPONENT_LABELS = (
    ("skills", "Skills match"),
    ("experience", "Work experience match"),
    ("projects", "Projects match"),
    ("job_title", "Job title match"),
    ("education", "Education match"),
)


def prepare_resume_content(resume: Resume) -> str:
    """Flatten a resume into labelled sections for embedding and keyword scans."""
    sections = []

    if resume.personal_details.title:
        sections.append(f"PROFESSIONAL TITLE: {resume.personal_details.title}")

    if resume.skills.skills_:
        sections.append(f"SKILLS: {resume.skills.skills_}")

    if resume.work_experience:
        sections.append("\n\n".join(
            f"WORK EXPERIENCE: {exp.job_title} at {exp.company_name}\n{exp.description}"
            for exp in resume.work_experience
        ))

    if resume.projects:
        sections.append("\n\n".join(
            f"PROJECT: {proj.title}\n{proj.description}\nTechnologies: {', '.join(proj.technologies)}"
            for proj in resume.projects
        ))

    if resume.education:
        sections.append("\n\n".join(
            f"EDUCATION: {edu.degree} in {edu.field_of_study} from {edu.institution_name}"
            for edu in resume.education
        ))

    return "\n\n".join(sections)


def _or_not_provided(items: list[str]) -> str:
    items = [i for i in items if i.strip()]
    return ", ".join(items) if items else "Not provided"


def _mismatch_section(technical: PenaltyResult | None, experience: PenaltyResult | None) -> str:
    lines = []
    if technical is not None and technical.penalty > 0:
        line = f"- Technical mismatch: {technical.analysis.get('reason') or 'technical gap'}"
        missing = technical.analysis.get("missing_keywords") or []
        if missing:
            line += f" (job mentions {', '.join(missing[:8])} not found in the resume)"
        lines.append(line)
    if experience is not None and experience.penalty > 0:
        total = experience.analysis.get("total_years", 0)
        lines.append(f"- Experience mismatch: {experience.analysis.get('reason')} ({total} years of total experience)")
    if not lines:
        return ""
    return "\nDetected Mismatches:\n" + "\n".join(lines) + "\n"


def build_explanation_prompt(
    resume: Resume,
    cover_letter: CoverLetter,
    score: float,
    component_scores: ComponentScores,
    semantic_similarity: float,
    technical: PenaltyResult | None = None,
    experience: PenaltyResult | None = None,
) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) asking for a job-fit explanation.

    Component scores and similarity are shown on the same 0-10 scale as the score.
    """
    components = "\n".join(
        f"- {label}: {getattr(component_scores, name) * 10:.1f}/10"
        for name, label in _COMPONENT_LABELS
    )

    user_prompt = f"""Based on the following information, explain why the candidate received a job fit score of {score:.1f}/10.

Job Details:
- Title: {cover_letter.job_title or "Not provided"}
- Company: {cover_letter.company or "Not provided"}
- Description: {cover_letter.job_description or "Not provided"}

Candidate's Resume:
- Skills: {resume.skills.skills_ or "Not provided"}
- Work Experience: {_or_not_provided([f"{e.job_title} at {e.company_name}" for e in resume.work_experience])}
- Projects: {_or_not_provided([p.title for p in resume.projects])}
- Education: {_or_not_provided([f"{e.degree} in {e.field_of_study}" for e in resume.education])}

Component Match Scores (0-10 scale):
{components}
- Semantic similarity: {semantic_similarity * 10:.1f}/10
{_mismatch_section(technical, experience)}
Write a friendly, constructive explanation of 3 to 7 sentences. Highlight the candidate's strengths, name the qualifications that align well with the job, and suggest specific ways to close any gaps."""

    return EXPLANATION_SYSTEM_PROMPT, user_prompt
