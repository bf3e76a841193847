"""
Response Scorer - rubric scoring of a single answer.

One model call per answer. The model's category scores are clamped to
their ranges and the total is recomputed from them, so a result always
satisfies score == sum(categories). Any failure yields a neutral score
instead of an error; scoring runs in the background and must never break
the interview.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from voiceinterview.core.llm_gateway import CompletionGateway, parse_json_object
from voiceinterview.models.resume import ResumeContext
from voiceinterview.models.scoring import (
    CATEGORY_LIMITS,
    CategoryScores,
    ResponseRecord,
    ScoreResult,
    round_half_up,
)
from voiceinterview.prompts.scorer import ScorerPrompts

logger = logging.getLogger(__name__)

SCORING_TEMPERATURE = 0.7
DEFAULT_FEEDBACK = "Analysis completed."
FALLBACK_FEEDBACK = "Response provided good insights with room for more specific examples."


class _RawCategoryScores(BaseModel):
    communication: float = Field(allow_inf_nan=False)
    content: float = Field(allow_inf_nan=False)
    experience: float = Field(allow_inf_nan=False)
    performance: float = Field(allow_inf_nan=False)


class _RawScorePayload(BaseModel):
    # Only the categories are required to be well formed
    feedback: Any = None
    analysis: _RawCategoryScores


def fallback_score() -> ScoreResult:
    """Neutral score used when the model's answer is unusable."""
    return ScoreResult(
        score=60,
        feedback=FALLBACK_FEEDBACK,
        analysis=CategoryScores(communication=15, content=18, experience=15, performance=12),
    )


class ResponseScorer:
    """Scores answers with the language model."""

    def __init__(self, gateway: CompletionGateway):
        self.gateway = gateway
        self.prompts = ScorerPrompts()

    async def score_response(
        self,
        transcript: str,
        question: str,
        role: str,
        resume_context: ResumeContext,
    ) -> ScoreResult:
        """
        Score one answer.

        Args:
            transcript: Candidate's answer text
            question: The question that was asked
            role: Target role title
            resume_context: Compact resume summary

        Returns:
            ScoreResult (never raises)
        """
        try:
            response = await self.gateway.generate_completion(
                self.prompts.system_prompt(role),
                self.prompts.user_prompt(transcript, question, resume_context),
                SCORING_TEMPERATURE,
                trace_name="score_response",
            )
        except Exception as e:
            logger.warning(f"Scoring call failed, using fallback score: {e}")
            return fallback_score()

        result = self._parse_score(response)
        logger.info(f"Response scored: {result.score}/100")

        record_score = getattr(self.gateway, "record_score", None)
        if record_score:
            record_score("response_score", result.score, comment=result.feedback)

        return result

    async def score_record(
        self,
        record: ResponseRecord,
        role: str,
        resume_context: ResumeContext,
    ) -> ResponseRecord:
        """Score a stored answer in place and return it."""
        result = await self.score_response(record.transcript, record.question, role, resume_context)
        record.score = result.score
        record.feedback = result.feedback
        record.analysis = result.analysis
        return record

    def _parse_score(self, response: str) -> ScoreResult:
        """Parse and normalize the model's JSON score."""
        try:
            payload = _RawScorePayload.model_validate(parse_json_object(response))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to parse score response: {e}")
            logger.debug(f"Raw score response: {response}")
            return fallback_score()

        raw = payload.analysis.model_dump()
        clamped = {
            category: max(0, min(limit, round_half_up(raw[category])))
            for category, limit in CATEGORY_LIMITS.items()
        }
        analysis = CategoryScores(**clamped)
        feedback = payload.feedback if isinstance(payload.feedback, str) else ""

        return ScoreResult(
            score=max(0, min(100, analysis.total)),
            feedback=feedback.strip() or DEFAULT_FEEDBACK,
            analysis=analysis,
        )
