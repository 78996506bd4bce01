"""Resume and cover-letter records as supplied by the data layer.

The data layer stores records with mixed key casing (``jobdescription``,
``jobDescription``, ``fieldOfStudy``), so every field accepts its known
spellings through validation aliases. Unknown keys are ignored.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # Null fields fall back to their defaults
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class PersonalDetails(_Record):
    name: str = ""
    title: str = Field(default="", validation_alias=AliasChoices("title", "jobTitle", "job_title"))
    email: str = ""
    summary: str = ""


class WorkExperience(_Record):
    job_title: str = Field(default="", validation_alias=AliasChoices("job_title", "jobTitle", "jobtitle", "title"))
    company_name: str = Field(
        default="", validation_alias=AliasChoices("company_name", "companyName", "companyname", "company")
    )
    description: str = ""
    start_date: str = Field(default="", validation_alias=AliasChoices("start_date", "startDate", "startdate"))
    end_date: str = Field(default="", validation_alias=AliasChoices("end_date", "endDate", "enddate"))


class Education(_Record):
    degree: str = ""
    field_of_study: str = Field(
        default="", validation_alias=AliasChoices("field_of_study", "fieldOfStudy", "fieldofstudy")
    )
    institution_name: str = Field(
        default="",
        validation_alias=AliasChoices("institution_name", "institutionName", "institutionname", "institution"),
    )
    graduation_date: str = Field(
        default="", validation_alias=AliasChoices("graduation_date", "graduationDate", "graduationdate")
    )


class Project(_Record):
    title: str = Field(default="", validation_alias=AliasChoices("title", "name"))
    description: str = ""
    technologies: list[str] = []

    @field_validator("technologies", mode="before")
    @classmethod
    def _split_technologies(cls, value):
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        return value or []


class SkillsSection(_Record):
    skills_: str = Field(default="", validation_alias=AliasChoices("skills_", "skills"))


class Resume(_Record):
    personal_details: PersonalDetails = Field(
        default=PersonalDetails(),
        validation_alias=AliasChoices("personal_details", "personalDetails", "personaldetails"),
    )
    work_experience: list[WorkExperience] = Field(
        default=[], validation_alias=AliasChoices("work_experience", "workExperience", "workexperience")
    )
    education: list[Education] = []
    skills: SkillsSection = SkillsSection()
    projects: list[Project] = []


class CoverLetter(_Record):
    job_title: str = Field(default="", validation_alias=AliasChoices("job_title", "jobTitle", "jobtitle"))
    company: str = Field(default="", validation_alias=AliasChoices("company", "companyName", "company_name"))
    job_description: str = Field(
        default="", validation_alias=AliasChoices("job_description", "jobDescription", "jobdescription")
    )
