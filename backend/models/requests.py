from pydantic import AliasChoices, BaseModel, Field

from models.schemas.resume import CoverLetter, Resume


class JobFitRequest(BaseModel):
    resume: Resume = Field(..., description="Structured resume record")
    cover_letter: CoverLetter = Field(
        ...,
        validation_alias=AliasChoices("cover_letter", "coverLetter"),
        description="Cover letter carrying the target job description",
    )
