import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_embedder, get_text_generator
from main import app

client = TestClient(app)


@pytest.fixture(autouse=True)
def fake_providers(fake_embedder, fake_text_generator):
    app.dependency_overrides[get_embedder] = lambda: fake_embedder
    app.dependency_overrides[get_text_generator] = lambda: fake_text_generator
    yield
    app.dependency_overrides.clear()


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "gemini_configured" in data
    assert data["embedding_backend"] in ("sbert", "gemini")


def test_job_fit(sample_resume, sample_cover_letter):
    response = client.post("/job-fit", json={"resume": sample_resume, "coverLetter": sample_cover_letter})
    assert response.status_code == 200
    data = response.json()
    assert 0 <= data["score"] <= 10
    assert data["explanation"] == "You are a strong fit for this role."
    assert data["job_classification"]["category"] == "TECHNICAL"
    assert set(data["breakdown"]["component_scores"]) == {
        "skills", "experience", "projects", "job_title", "education",
    }


def test_job_fit_without_job_description(sample_resume, fake_embedder):
    response = client.post("/job-fit", json={"resume": sample_resume, "cover_letter": {"jobdescription": ""}})
    assert response.status_code == 200
    data = response.json()
    assert data["score"] is None
    assert data["explanation"] == "Job description is required for scoring"
    assert fake_embedder.calls == 0


def test_job_fit_rejects_missing_resume(sample_cover_letter):
    response = client.post("/job-fit", json={"coverLetter": sample_cover_letter})
    assert response.status_code == 422
