"""
Report API endpoints

Handles:
- Final score generation and retrieval
- Standalone scoring of a single answer
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from voiceinterview.api.dependencies import get_orchestrator, get_scorer
from voiceinterview.core.interview_orchestrator import StateTransitionError
from voiceinterview.models.interview import InterviewState
from voiceinterview.models.resume import ResumeContext
from voiceinterview.models.scoring import FinalScore, ScoreResult

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class ReportResponse(BaseModel):
    """Full report response."""
    session_id: str
    role: str
    final_score: FinalScore
    total_answers: int
    interview_duration_minutes: float


class ScoreResponseRequest(BaseModel):
    """Request to score one answer outside a session."""
    transcript: str
    question: str
    role: str
    resume_context: ResumeContext = Field(default_factory=ResumeContext)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/{session_id}", response_model=ReportResponse)
async def get_report(session_id: str) -> ReportResponse:
    """
    Get the final interview report.

    Generated on first request after the interview has ended.
    """
    orchestrator = get_orchestrator()
    session = orchestrator.get_session(session_id)

    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if session.state not in [InterviewState.COMPLETED, InterviewState.FINISHED]:
        raise HTTPException(
            status_code=409,
            detail=f"Interview not complete. Current state: {session.state.value}"
        )

    try:
        final_score = await orchestrator.generate_report(session_id)

    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ReportResponse(
        session_id=session_id,
        role=session.role,
        final_score=final_score,
        total_answers=len(session.responses),
        interview_duration_minutes=round(session.get_duration_seconds() / 60, 1),
    )


@router.post("/score", response_model=ScoreResult)
async def score_response(request: ScoreResponseRequest) -> ScoreResult:
    """Score a single answer against the rubric."""
    scorer = get_scorer()
    return await scorer.score_response(
        transcript=request.transcript,
        question=request.question,
        role=request.role,
        resume_context=request.resume_context,
    )
