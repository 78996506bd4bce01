from pydantic import BaseModel

from models.schemas.component_scores import ComponentScores
from models.schemas.job_classification import JobClassification


class ScoreBreakdown(BaseModel):
    component_score: float = 0.0  # 0.0-1.0 weighted component sum
    component_scores: ComponentScores = ComponentScores()
    semantic_similarity: float = 0.0  # 0.0-1.0 transformed embedding similarity
    similarity_degraded: bool = False  # True when the embedding provider fell back
    combined_score: float = 0.0  # 0-10 before penalties
    technical_penalty: float = 0.0
    experience_penalty: float = 0.0
    severe_mismatch: bool = False
    mismatch_reasons: list[str] = []


class JobFitResult(BaseModel):
    score: float | None = None  # 0-10, None only when scoring could not run
    explanation: str = ""
    job_classification: JobClassification | None = None
    breakdown: ScoreBreakdown | None = None
