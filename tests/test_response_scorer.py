import asyncio
import json

from tests.conftest import FakeGateway, score_json
from voiceinterview.core.response_scorer import (
    DEFAULT_FEEDBACK,
    SCORING_TEMPERATURE,
    ResponseScorer,
    fallback_score,
)
from voiceinterview.models.resume import ResumeContext
from voiceinterview.models.scoring import CategoryScores, ResponseRecord


CONTEXT = ResumeContext(name="Jane Doe", experience="Frontend Engineer at Acme Corp", skills=["React"])


def _score(gateway, transcript="I led the migration to React.", question="What did you lead?"):
    scorer = ResponseScorer(gateway)
    return asyncio.run(scorer.score_response(transcript, question, "Frontend Engineer", CONTEXT))


def test_total_is_recomputed_from_categories() -> None:
    reply = "Here is my evaluation:\n" + json.dumps({
        "score": 99,
        "feedback": "  Specific and well structured.  ",
        "analysis": {"communication": 20, "content": 25, "experience": 20, "performance": 15},
    }) + "\nHope this helps."

    result = _score(FakeGateway(default=reply))

    assert result.score == 80
    assert result.feedback == "Specific and well structured."
    assert result.analysis == CategoryScores(communication=20, content=25, experience=20, performance=15)


def test_out_of_range_categories_are_clamped() -> None:
    reply = score_json(communication=40, content=-5, experience=25.6, performance=10.5)

    result = _score(FakeGateway(default=reply))

    assert result.analysis == CategoryScores(communication=25, content=0, experience=25, performance=11)
    assert result.score == 61


def test_unparseable_reply_gives_neutral_score() -> None:
    result = _score(FakeGateway(default="I would rate this answer quite highly."))

    assert result == fallback_score()
    assert result.score == 60
    assert result.analysis.total == 60


def test_schema_violations_give_neutral_score() -> None:
    missing_category = json.dumps({"analysis": {"communication": 20, "content": 25, "experience": 20}})
    wrong_type = json.dumps({
        "analysis": {"communication": "high", "content": 25, "experience": 20, "performance": 15},
    })
    no_analysis = json.dumps({"score": 75, "feedback": "Fine."})

    for reply in (missing_category, wrong_type, no_analysis):
        assert _score(FakeGateway(default=reply)) == fallback_score()


def test_gateway_failure_gives_neutral_score(failing_gateway) -> None:
    assert _score(failing_gateway) == fallback_score()


def test_missing_feedback_uses_default() -> None:
    reply = json.dumps({"analysis": {"communication": 10, "content": 10, "experience": 10, "performance": 10}})

    result = _score(FakeGateway(default=reply))

    assert result.feedback == DEFAULT_FEEDBACK
    assert result.score == 40


def test_prompt_and_score_event() -> None:
    gateway = FakeGateway(default=score_json())

    _score(gateway, transcript="We cut build times in half.", question="What was the impact?")

    call = gateway.calls[0]
    assert call.trace_name == "score_response"
    assert call.temperature == SCORING_TEMPERATURE
    assert "Frontend Engineer" in call.system
    assert "We cut build times in half." in call.user
    assert "What was the impact?" in call.user
    assert gateway.scores == [("response_score", 80)]


def test_score_record_fills_the_record() -> None:
    record = ResponseRecord(question="What was the impact?", transcript="We cut build times in half.")
    scorer = ResponseScorer(FakeGateway(default=score_json(feedback="Good.")))

    returned = asyncio.run(scorer.score_record(record, "Frontend Engineer", CONTEXT))

    assert returned is record
    assert record.is_scored
    assert record.score == 80
    assert record.feedback == "Good."


def test_malformed_feedback_keeps_the_category_scores() -> None:
    reply = json.dumps({
        "feedback": 5,
        "analysis": {"communication": 20, "content": 20, "experience": 20, "performance": 10},
    })

    result = _score(FakeGateway(default=reply))

    assert result.score == 70
    assert result.analysis == CategoryScores(communication=20, content=20, experience=20, performance=10)
    assert result.feedback == DEFAULT_FEEDBACK
