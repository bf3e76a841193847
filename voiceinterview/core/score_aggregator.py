"""
Final Score Aggregator - combines per-answer scores into the final report.

Two steps:
1. Numeric breakdown: per-category means across scored answers and the
   overall mean of per-answer totals (pure, deterministic).
2. Narrative: strengths, improvement areas, assessment and
   recommendations written by the language model.

The numbers from step 1 are always reported, whatever happens in step 2.
"""

import json
import logging
from typing import Any

from voiceinterview.core.llm_gateway import CompletionGateway, parse_json_object
from voiceinterview.models.resume import ResumeContext
from voiceinterview.models.scoring import (
    CategoryScores,
    FinalScore,
    ResponseRecord,
    round_half_up,
)
from voiceinterview.prompts.report import ReportPrompts

logger = logging.getLogger(__name__)

NARRATIVE_TEMPERATURE = 0.8

# Used per field when the model omits it
DEFAULT_NARRATIVE: dict[str, Any] = {
    "strengths": [
        "Demonstrated good communication skills",
        "Showed relevant experience",
        "Provided concrete examples",
    ],
    "improvement_areas": [
        "Could provide more specific technical details",
        "Consider structuring responses more clearly",
    ],
    "detailed_feedback": "The candidate showed solid performance with good potential for growth in key areas.",
    "recommendations": [
        "Practice explaining technical concepts clearly",
        "Prepare more specific examples from past experience",
        "Focus on quantifying achievements and impact",
    ],
}

# Used when the narrative call fails or returns unusable output
FALLBACK_NARRATIVE: dict[str, Any] = {
    "strengths": [
        "Engaged well in the interview conversation",
        "Demonstrated relevant background knowledge",
        "Showed professional communication skills",
    ],
    "improvement_areas": [
        "Could provide more detailed technical explanations",
        "Consider adding more specific examples from experience",
    ],
    "detailed_feedback": (
        "The candidate demonstrated good foundational skills with opportunities to "
        "enhance technical depth and provide more specific examples in future interviews."
    ),
    "recommendations": [
        "Practice explaining technical concepts with specific examples",
        "Prepare stories that highlight problem-solving abilities",
        "Focus on quantifying achievements and business impact",
        "Continue developing expertise in core technical skills",
    ],
}

# Accepted spellings for each narrative field
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "strengths": ("strengths",),
    "improvement_areas": ("improvement_areas", "improvementAreas"),
    "detailed_feedback": ("detailed_feedback", "detailedFeedback"),
    "recommendations": ("recommendations",),
}


def compute_breakdown(responses: list[ResponseRecord]) -> tuple[CategoryScores, int]:
    """
    Compute the numeric part of the final score.

    Only scored responses count. Each category mean and the overall mean
    of per-response totals are rounded half-up.

    Args:
        responses: Interview answers

    Returns:
        Tuple of (per-category breakdown, overall score)
    """
    scored = [record.analysis for record in responses if record.analysis is not None]
    if not scored:
        return CategoryScores(), 0

    count = len(scored)
    breakdown = CategoryScores(
        communication=round_half_up(sum(a.communication for a in scored) / count),
        content=round_half_up(sum(a.content for a in scored) / count),
        experience=round_half_up(sum(a.experience for a in scored) / count),
        performance=round_half_up(sum(a.performance for a in scored) / count),
    )
    overall = round_half_up(sum(a.total for a in scored) / count)
    return breakdown, max(0, min(100, overall))


class FinalScoreAggregator:
    """Builds the FinalScore for a finished interview."""

    def __init__(self, gateway: CompletionGateway):
        self.gateway = gateway
        self.prompts = ReportPrompts()

    async def aggregate(
        self,
        responses: list[ResponseRecord],
        role: str,
        resume_context: ResumeContext,
    ) -> FinalScore:
        """
        Aggregate answers into the final score.

        Args:
            responses: Scored interview answers
            role: Target role title
            resume_context: Compact resume summary

        Returns:
            FinalScore (never raises)
        """
        breakdown, overall_score = compute_breakdown(responses)
        logger.info(f"Aggregated {len(responses)} responses: overall={overall_score}")

        narrative = await self._generate_narrative(responses, breakdown, overall_score, role, resume_context)

        return FinalScore(
            overall_score=overall_score,
            breakdown=breakdown,
            strengths=narrative["strengths"],
            improvement_areas=narrative["improvement_areas"],
            detailed_feedback=narrative["detailed_feedback"],
            recommendations=narrative["recommendations"],
        )

    async def _generate_narrative(
        self,
        responses: list[ResponseRecord],
        breakdown: CategoryScores,
        overall_score: int,
        role: str,
        resume_context: ResumeContext,
    ) -> dict[str, Any]:
        try:
            response = await self.gateway.generate_completion(
                self.prompts.system_prompt(role),
                self.prompts.user_prompt(responses, breakdown, overall_score, resume_context),
                NARRATIVE_TEMPERATURE,
                trace_name="final_feedback",
            )
        except Exception as e:
            logger.warning(f"Feedback generation failed, using fallback narrative: {e}")
            return dict(FALLBACK_NARRATIVE)

        try:
            data = parse_json_object(response)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse feedback response: {e}")
            logger.debug(f"Raw feedback response: {response}")
            return dict(FALLBACK_NARRATIVE)

        return {field: self._read_field(data, field) for field in _FIELD_ALIASES}

    def _read_field(self, data: dict[str, Any], field: str) -> Any:
        """Take a narrative field from the model output or its default."""
        default = DEFAULT_NARRATIVE[field]
        for key in _FIELD_ALIASES[field]:
            value = data.get(key)
            if isinstance(default, str):
                if isinstance(value, str) and value.strip():
                    return value.strip()
            elif isinstance(value, list):
                items = [str(item).strip() for item in value if str(item).strip()]
                if items:
                    return items
        return list(default) if isinstance(default, list) else default
