import random

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.conftest import NARRATIVE_JSON, FakeGateway, score_json
from voiceinterview.api import dependencies
from voiceinterview.api.router import api_router
from voiceinterview.core.audio_processor import AudioProcessor
from voiceinterview.core.interview_orchestrator import InterviewOrchestrator
from voiceinterview.core.response_scorer import ResponseScorer
from voiceinterview.core.resume_parser import ResumeParser
from voiceinterview.prompts.interviewer import InterviewerPrompts


LONG_ANSWER = (
    "I led the rewrite of our checkout flow in React, which took about six months "
    "and lifted conversion by a few points once it shipped."
)

RESUME_PAYLOAD = {
    "personal_info": {"name": "Jane Doe", "email": "jane@example.com"},
    "experience": [{"company": "Acme Corp", "role": "Frontend Engineer", "duration": "2019-2023"}],
    "skills": ["React", "TypeScript"],
}


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway(by_trace={
        "follow_up_question": "What was the hardest part of that?",
        "topic_transition": "Thanks! How do you usually collaborate with designers?",
        "score_response": score_json(),
        "final_feedback": NARRATIVE_JSON,
    })


@pytest.fixture
def client(monkeypatch, gateway):
    monkeypatch.setattr(dependencies, "_orchestrator", InterviewOrchestrator(gateway, rng=random.Random(5)))
    monkeypatch.setattr(dependencies, "_resume_parser", ResumeParser(gateway))
    monkeypatch.setattr(dependencies, "_scorer", ResponseScorer(gateway))
    monkeypatch.setattr(
        dependencies,
        "_audio_processor",
        AudioProcessor(transport=httpx.MockTransport(_fake_audio_provider)),
    )

    app = FastAPI()
    app.include_router(api_router, prefix="/api")
    with TestClient(app) as test_client:
        yield test_client


def _fake_audio_provider(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/audio/transcriptions"):
        return httpx.Response(200, json={"text": "I built the checkout flow"})
    return httpx.Response(200, content=b"mp3-bytes")


def _setup(client: TestClient) -> str:
    response = client.post("/api/interview/setup", json={"role": "Frontend Engineer", "resume": RESUME_PAYLOAD})
    assert response.status_code == 200
    return response.json()["session_id"]


def test_full_interview_over_http(client: TestClient) -> None:
    session_id = _setup(client)

    start = client.post(f"/api/interview/{session_id}/start")
    assert start.status_code == 200
    assert start.json()["question"] == InterviewerPrompts().opening_question("Frontend Engineer")

    turns = []
    for _ in range(7):
        response = client.post(f"/api/interview/{session_id}/answer", json={"transcript": LONG_ANSWER})
        assert response.status_code == 200
        turns.append(response.json())
    assert turns[-1]["should_end"] is True
    assert turns[-1]["progress"] == {"current": 8, "total": 8, "percentage": 100.0}

    report = client.get(f"/api/report/{session_id}")
    assert report.status_code == 200
    body = report.json()
    assert body["total_answers"] == 7
    assert body["final_score"]["overall_score"] == 80
    assert body["final_score"]["breakdown"] == {
        "communication": 20, "content": 25, "experience": 20, "performance": 15,
    }

    status = client.get(f"/api/interview/{session_id}/status").json()
    assert status["state"] == "finished"
    assert status["answers_recorded"] == 7


def test_unknown_session_is_404(client: TestClient) -> None:
    assert client.post("/api/interview/nope/start").status_code == 404
    assert client.post("/api/interview/nope/answer", json={"transcript": "hi"}).status_code == 404
    assert client.get("/api/interview/nope/progress").status_code == 404
    assert client.get("/api/report/nope").status_code == 404


def test_out_of_order_calls_are_409(client: TestClient) -> None:
    session_id = _setup(client)

    assert client.post(f"/api/interview/{session_id}/answer", json={"transcript": LONG_ANSWER}).status_code == 409
    assert client.get(f"/api/report/{session_id}").status_code == 409

    client.post(f"/api/interview/{session_id}/start")
    assert client.post(f"/api/interview/{session_id}/start").status_code == 409


def test_end_early_then_report(client: TestClient) -> None:
    session_id = _setup(client)
    client.post(f"/api/interview/{session_id}/start")
    client.post(f"/api/interview/{session_id}/answer", json={"transcript": LONG_ANSWER})

    ended = client.post(f"/api/interview/{session_id}/end")
    assert ended.json()["action"] == "ended"
    assert client.post(f"/api/interview/{session_id}/end").json()["action"] == "already_ended"

    report = client.get(f"/api/report/{session_id}")
    assert report.status_code == 200
    assert report.json()["total_answers"] == 1


def test_setup_validation(client: TestClient) -> None:
    response = client.post("/api/interview/setup", json={"role": "", "resume": RESUME_PAYLOAD})

    assert response.status_code == 422


def test_resume_upload(client: TestClient) -> None:
    text = b"Jane Doe\njane@example.com\nReact and Docker at Acme Corp\n"

    response = client.post("/api/resume/parse", files={"resume": ("resume.txt", text, "text/plain")})

    assert response.status_code == 200
    body = response.json()
    assert body["personal_info"]["email"] == "jane@example.com"
    assert "Docker" in body["skills"]


def test_resume_upload_rejects_images(client: TestClient) -> None:
    response = client.post("/api/resume/parse", files={"resume": ("photo.png", b"\x89PNG", "image/png")})

    assert response.status_code == 400


def test_standalone_scoring(client: TestClient) -> None:
    response = client.post(
        "/api/report/score",
        json={"transcript": LONG_ANSWER, "question": "What are you proud of?", "role": "Frontend Engineer"},
    )

    assert response.status_code == 200
    assert response.json()["score"] == 80


def test_speech_endpoints(client: TestClient) -> None:
    tts = client.post("/api/audio/tts", json={"text": "Great!"})
    assert tts.status_code == 200
    assert tts.json()["cached"] is False
    assert client.post("/api/audio/tts", json={"text": "Great!"}).json()["cached"] is True

    stt = client.post("/api/audio/stt", files={"audio": ("answer.webm", b"fake-audio", "audio/webm")})
    assert stt.json() == {"transcript": "I built the checkout flow", "word_count": 5}

    empty = client.post("/api/audio/stt", files={"audio": ("answer.webm", b"", "audio/webm")})
    assert empty.status_code == 400

    stats = client.get("/api/audio/cache/stats").json()
    assert stats["total_cached"] == 1


def test_health() -> None:
    from main import app

    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
