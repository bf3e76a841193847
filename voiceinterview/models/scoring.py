"""
Scoring models for VoiceInterview

Scoring rubric (weights sum to 100):
- Communication: 0-25
- Content: 0-30
- Experience: 0-25
- Performance: 0-20
"""

import math
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


# Upper bound for each scoring category
CATEGORY_LIMITS: dict[str, int] = {
    "communication": 25,
    "content": 30,
    "experience": 25,
    "performance": 20,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (round() is banker's)."""
    return int(math.floor(value + 0.5))


class CategoryScores(BaseModel):
    """Per-category scores for one response or a whole interview."""

    communication: int = Field(default=0, ge=0, le=25, description="Clarity and structure")
    content: int = Field(default=0, ge=0, le=30, description="Relevance and depth")
    experience: int = Field(default=0, ge=0, le=25, description="Concrete examples")
    performance: int = Field(default=0, ge=0, le=20, description="Confidence and delivery")

    @property
    def total(self) -> int:
        return self.communication + self.content + self.experience + self.performance


class ScoreResult(BaseModel):
    """Score for a single answer. `score` always equals `analysis.total`."""

    score: int = Field(..., ge=0, le=100)
    feedback: str
    analysis: CategoryScores


class ResponseRecord(BaseModel):
    """One answered question, scored asynchronously after submission."""

    question_id: str = Field(default_factory=lambda: str(uuid4()))
    question: str
    transcript: str
    audio_url: str | None = None

    # Filled in by the response scorer
    score: int | None = None
    feedback: str | None = None
    analysis: CategoryScores | None = None

    @property
    def is_scored(self) -> bool:
        return self.analysis is not None


class FinalScore(BaseModel):
    """Aggregate interview result with narrative feedback."""

    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(..., ge=0, le=100)
    breakdown: CategoryScores
    strengths: list[str]
    improvement_areas: list[str]
    detailed_feedback: str
    recommendations: list[str]
