"""Shared test configuration, fixtures and fake collaborators."""

import pytest

from services.providers import ProviderUnavailableError


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads real ML models or calls external APIs (slow)"
    )


class FakeEmbedder:
    """Deterministic letter-frequency embedding."""

    def __init__(self):
        self.calls = 0

    async def embed(self, text: str) -> list[float]:
        self.calls += 1
        vector = [0.0] * 26
        for ch in text.lower():
            if "a" <= ch <= "z":
                vector[ord(ch) - ord("a")] += 1.0
        return vector


class FailingEmbedder:
    def __init__(self, error: Exception | None = None):
        self.error = error or RuntimeError("embedding service unreachable")
        self.calls = 0

    async def embed(self, text: str) -> list[float]:
        self.calls += 1
        raise self.error


class FakeTextGenerator:
    def __init__(self, reply: str = "You are a strong fit for this role."):
        self.reply = reply
        self.calls = 0
        self.prompts: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls += 1
        self.prompts.append((system_prompt, user_prompt))
        return self.reply


class FailingTextGenerator:
    def __init__(self, error: Exception | None = None):
        self.error = error or ProviderUnavailableError("GEMINI_API_KEY is not configured")
        self.calls = 0

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls += 1
        raise self.error


SAMPLE_RESUME = {
    "personalDetails": {"name": "Jane Doe", "title": "Software Engineer"},
    "workExperience": [
        {
            "jobTitle": "Software Engineer",
            "companyName": "Acme",
            "description": "Built Python and Django services on AWS with Docker. Designed REST APIs.",
            "startDate": "2018-01-01",
            "endDate": "2021-06-01",
        },
        {
            "jobTitle": "Senior Software Engineer",
            "companyName": "Globex",
            "description": "Led React frontend work and Node.js microservices backed by PostgreSQL.",
            "startDate": "2021-07-01",
            "endDate": None,
        },
    ],
    "education": [
        {
            "degree": "Bachelor of Science",
            "fieldOfStudy": "Computer Science",
            "institutionName": "State University",
            "graduationDate": "2017-05-01",
        }
    ],
    "skills": {"skills_": "Python, Django, React, Node.js, PostgreSQL, Docker, AWS"},
    "projects": [
        {
            "title": "Job board",
            "description": "A full stack job board with a REST API.",
            "technologies": ["React", "Python", "PostgreSQL"],
        }
    ],
}

SAMPLE_COVER_LETTER = {
    "jobTitle": "Senior Software Engineer",
    "company": "Initech",
    "jobdescription": (
        "We are hiring a Senior Software Engineer.\n"
        "- 5+ years of experience with Python and Django\n"
        "- 3+ years of React experience\n"
        "- Experience with PostgreSQL, Docker and AWS\n"
        "- Bachelor's degree in Computer Science"
    ),
}


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_text_generator():
    return FakeTextGenerator()


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def sample_cover_letter():
    return SAMPLE_COVER_LETTER


@pytest.fixture
def failing_embedder():
    return FailingEmbedder()


@pytest.fixture
def unavailable_embedder():
    return FailingEmbedder(ProviderUnavailableError("Embedding model unavailable"))


@pytest.fixture
def failing_text_generator():
    return FailingTextGenerator(RuntimeError("quota exceeded"))
