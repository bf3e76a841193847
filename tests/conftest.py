import json
from types import SimpleNamespace
from typing import Any, Callable

import pytest

from voiceinterview.config.settings import get_settings
from voiceinterview.core.llm_gateway import LLMGatewayError
from voiceinterview.models.resume import ParsedResume, PersonalInfo, WorkExperience


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings (no key, no tracing)."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("LANGFUSE_ENABLED", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def configure(monkeypatch) -> Callable[..., None]:
    """Set environment overrides and reload settings."""

    def _configure(**env: Any) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key.upper(), str(value))
        get_settings.cache_clear()

    return _configure


class FakeGateway:
    """
    Scripted stand-in for the language model gateway.

    Replies are taken from `by_trace[trace_name]` when present, then from
    the `responses` queue, then `default`. A reply may be a string, an
    exception instance (raised) or a callable taking the call record.
    """

    def __init__(
        self,
        responses: list[Any] | None = None,
        by_trace: dict[str, Any] | None = None,
        default: Any = "",
    ):
        self.responses = list(responses or [])
        self.by_trace = dict(by_trace or {})
        self.default = default
        self.calls: list[SimpleNamespace] = []
        self.scores: list[tuple[str, float]] = []

    async def generate_completion(
        self,
        system_instruction: str,
        user_instruction: str,
        temperature: float = 0.7,
        trace_name: str = "completion",
    ) -> str:
        call = SimpleNamespace(
            system=system_instruction,
            user=user_instruction,
            temperature=temperature,
            trace_name=trace_name,
        )
        self.calls.append(call)

        if trace_name in self.by_trace:
            reply = self.by_trace[trace_name]
        elif self.responses:
            reply = self.responses.pop(0)
        else:
            reply = self.default

        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(call)
            if hasattr(reply, "__await__"):
                reply = await reply
        return reply

    def record_score(self, name: str, value: float, comment: str | None = None) -> None:
        self.scores.append((name, value))

    def calls_for(self, trace_name: str) -> list[SimpleNamespace]:
        return [call for call in self.calls if call.trace_name == trace_name]


class FailingGateway(FakeGateway):
    """Gateway whose every call fails."""

    def __init__(self):
        super().__init__(default=LLMGatewayError("provider unavailable"))


def score_json(communication=20, content=25, experience=20, performance=15, feedback="Clear, specific answer.") -> str:
    return json.dumps({
        "score": communication + content + experience + performance,
        "feedback": feedback,
        "analysis": {
            "communication": communication,
            "content": content,
            "experience": experience,
            "performance": performance,
        },
    })


NARRATIVE_JSON = json.dumps({
    "strengths": ["Explained the dashboard architecture well", "Quantified results"],
    "improvement_areas": ["Go deeper on testing"],
    "detailed_feedback": "Strong, concrete answers throughout the interview.",
    "recommendations": ["Practice system design", "Prepare a failure story"],
})


@pytest.fixture
def resume() -> ParsedResume:
    return ParsedResume(
        personal_info=PersonalInfo(name="Jane Doe", email="jane@example.com"),
        experience=[
            WorkExperience(company="Acme Corp", role="Frontend Engineer", duration="2019-2023"),
        ],
        skills=["React", "Node.js", "GraphQL"],
        raw_text="Jane Doe - Frontend Engineer at Acme Corp",
    )


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway(default="What was the hardest part of that?")


@pytest.fixture
def failing_gateway() -> FailingGateway:
    return FailingGateway()
