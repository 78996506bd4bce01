"""Job-fit orchestration: resume + cover letter -> 0-10 score with explanation.

Pipeline:
1. Require a job description (otherwise a null score, no collaborator calls)
2. Job classification (auxiliary, failures are logged and skipped)
3. Component scores (skills, experience, projects, education, job title)
4. Technical and experience mismatch penalties
5. Embedding similarity of resume text vs job description
6. Blend similarity and component score on the 0-10 scale
7. Apply penalties and clamp to [0, 10]
8. Natural-language explanation (apology string on failure)
"""

import logging

from pydantic import ValidationError

from config import settings
from models.responses import JobFitResult, ScoreBreakdown
from models.schemas.job_classification import JobClassification
from models.schemas.resume import CoverLetter, Resume
from services import prompt_builder
from services.providers import (
    EmbeddingProvider,
    ProviderErrorKind,
    ProviderResult,
    ProviderUnavailableError,
    TextGenerator,
)
from services.scoring.component_scoring import calculate_component_scores
from services.scoring.job_categories import classify_job
from services.scoring.penalties import (
    apply_penalties,
    calculate_experience_mismatch_penalty,
    calculate_technical_mismatch_penalty,
)
from services.similarity import compute_embedding_similarity

logger = logging.getLogger(__name__)

MAX_SCORE = 10.0
JOB_DESCRIPTION_REQUIRED = "Job description is required for scoring"
EXPLANATION_FALLBACK = "Unable to generate explanation for the job fit score at this time."


async def generate_explanation(
    text_generator: TextGenerator,
    system_prompt: str,
    user_prompt: str,
) -> ProviderResult[str]:
    """Ask the text generator for an explanation, falling back to a fixed apology."""
    try:
        text = await text_generator.complete(system_prompt, user_prompt)
    except ProviderUnavailableError as e:
        logger.warning("Explanation generator unavailable: %s", e)
        return ProviderResult.failure(ProviderErrorKind.MISSING_CREDENTIALS, EXPLANATION_FALLBACK, str(e))
    except Exception as e:
        logger.error("Explanation generation failed: %s", e)
        return ProviderResult.failure(ProviderErrorKind.PROVIDER_FAILURE, EXPLANATION_FALLBACK, str(e))

    if not text or not text.strip():
        return ProviderResult.failure(ProviderErrorKind.EMPTY_RESPONSE, EXPLANATION_FALLBACK, "Empty explanation")
    return ProviderResult.success(text.strip())


def _classify(cover_letter: CoverLetter) -> JobClassification | None:
    try:
        return classify_job(cover_letter.job_title, cover_letter.job_description)
    except Exception as e:
        logger.warning("Job classification failed: %s", e)
        return None


def _default_text_generator() -> TextGenerator:
    from services.gemini_client import GeminiTextGenerator

    return GeminiTextGenerator()


def combine_scores(similarity: float, component_score: float) -> float:
    """Blend similarity and component score (both 0-1) into a 0-10 score before penalties."""
    base_score = component_score * MAX_SCORE
    weighted_similarity = similarity * MAX_SCORE * settings.similarity_weight
    weighted_component = base_score * settings.component_weight
    return weighted_similarity + weighted_component


async def calculate_job_fit_score(
    resume: Resume | dict,
    cover_letter: CoverLetter | dict,
    embedder: EmbeddingProvider | None = None,
    text_generator: TextGenerator | None = None,
) -> JobFitResult:
    """Score a resume against the job on a cover letter. Never raises.

    A null score means scoring could not run; the explanation says why.
    """
    try:
        letter = cover_letter if isinstance(cover_letter, CoverLetter) else CoverLetter.model_validate(cover_letter or {})
    except ValidationError:
        return JobFitResult(score=None, explanation="Unable to calculate job fit score: invalid cover letter data")

    job_description = letter.job_description
    if not job_description or not job_description.strip():
        return JobFitResult(score=None, explanation=JOB_DESCRIPTION_REQUIRED)

    try:
        classification = _classify(letter)

        candidate = resume if isinstance(resume, Resume) else Resume.model_validate(resume or {})
        components = calculate_component_scores(candidate, job_description, letter.job_title)

        resume_text = prompt_builder.prepare_resume_content(candidate)
        technical = calculate_technical_mismatch_penalty(job_description, resume_text, letter.job_title)
        experience = calculate_experience_mismatch_penalty(
            candidate.work_experience, job_description, letter.job_title
        )

        similarity = await compute_embedding_similarity(resume_text, job_description, embedder)
        if not similarity.ok:
            logger.info("Using neutral similarity (%s): %s", similarity.error.value, similarity.detail)

        combined = combine_scores(similarity.value, components.score)
        application = apply_penalties(combined, technical, experience, MAX_SCORE)
        score = round(application.final_score, 1)

        system_prompt, user_prompt = prompt_builder.build_explanation_prompt(
            candidate,
            letter,
            score,
            components.component_scores,
            similarity.value,
            technical,
            experience,
        )
        explanation = await generate_explanation(
            text_generator or _default_text_generator(), system_prompt, user_prompt
        )

        breakdown = ScoreBreakdown(
            component_score=components.score,
            component_scores=components.component_scores,
            semantic_similarity=similarity.value,
            similarity_degraded=not similarity.ok,
            combined_score=combined,
            technical_penalty=technical.penalty,
            experience_penalty=experience.penalty,
            severe_mismatch=technical.has_severe_mismatch or experience.has_severe_mismatch,
            mismatch_reasons=[
                r for r in (technical.analysis.get("reason"), experience.analysis.get("reason")) if r
            ],
        )
        return JobFitResult(
            score=score,
            explanation=explanation.value,
            job_classification=classification,
            breakdown=breakdown,
        )

    except ValidationError as e:
        logger.warning("Invalid resume data: %s", e)
        return JobFitResult(score=None, explanation="Unable to calculate job fit score: invalid resume data")
    except Exception as e:
        logger.error("Job fit calculation failed: %s", e)
        return JobFitResult(score=None, explanation=f"Unable to calculate job fit score: {e}")
