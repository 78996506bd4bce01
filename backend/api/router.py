from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_embedder, get_text_generator
from config import settings
from models.requests import JobFitRequest
from models.responses import JobFitResult
from services import job_fit
from services.providers import EmbeddingProvider, TextGenerator

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "embedding_backend": settings.embedding_backend,
    }


@router.post("/job-fit", response_model=JobFitResult)
@limiter.limit(settings.rate_limit)
async def job_fit_score(
    request: Request,
    body: JobFitRequest,
    embedder: EmbeddingProvider = Depends(get_embedder),
    text_generator: TextGenerator = Depends(get_text_generator),
):
    return await job_fit.calculate_job_fit_score(
        body.resume,
        body.cover_letter,
        embedder=embedder,
        text_generator=text_generator,
    )
