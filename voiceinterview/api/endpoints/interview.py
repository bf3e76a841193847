"""
Interview API endpoints

Handles interview session lifecycle:
- Creating sessions
- Starting interviews
- Submitting answers
- Ending interviews
"""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from voiceinterview.api.dependencies import get_orchestrator
from voiceinterview.core.interview_orchestrator import StateTransitionError
from voiceinterview.models.interview import InterviewProgress, InterviewState
from voiceinterview.models.resume import ParsedResume

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class SetupRequest(BaseModel):
    """Request model for interview setup."""
    role: str = Field(..., min_length=1)
    role_description: str = ""
    resume: ParsedResume


class SetupResponse(BaseModel):
    """Response model for interview setup."""
    session_id: str
    status: str
    message: str


class TurnResponse(BaseModel):
    """What the interviewer says next."""
    session_id: str
    question: str
    should_end: bool
    progress: InterviewProgress


class SubmitAnswerRequest(BaseModel):
    """Request model for submitting an answer."""
    transcript: str
    audio_url: str | None = None


class SessionStatusResponse(BaseModel):
    """Response for session status."""
    session_id: str
    state: str
    role: str
    questions_asked: int
    answers_recorded: int
    duration_seconds: float


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.post("/setup", response_model=SetupResponse)
async def setup_interview(request: SetupRequest) -> SetupResponse:
    """
    Create a new interview session.

    This stores the role and resume but does not start the interview yet.
    """
    try:
        orchestrator = get_orchestrator()
        session = await orchestrator.create_session(
            role=request.role,
            resume=request.resume,
            role_description=request.role_description,
        )

        return SetupResponse(
            session_id=session.session_id,
            status="created",
            message="Interview session created. Call /start to begin.",
        )

    except Exception as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{session_id}/start", response_model=TurnResponse)
async def start_interview(session_id: str) -> TurnResponse:
    """
    Start the interview.

    Returns the opening question.
    """
    orchestrator = get_orchestrator()
    session = orchestrator.get_session(session_id)

    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if session.state != InterviewState.READY:
        raise HTTPException(
            status_code=409,
            detail=f"Cannot start interview in state: {session.state.value}"
        )

    try:
        result = await orchestrator.start_interview(session_id)
        return TurnResponse(**result)

    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{session_id}/answer", response_model=TurnResponse)
async def submit_answer(
    session_id: str,
    request: SubmitAnswerRequest
) -> TurnResponse:
    """
    Submit an answer to the current question.

    The answer is scored in the background; the next question comes back
    immediately.
    """
    orchestrator = get_orchestrator()
    session = orchestrator.get_session(session_id)

    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if session.state != InterviewState.IN_PROGRESS:
        raise HTTPException(
            status_code=409,
            detail=f"Cannot submit answer in state: {session.state.value}"
        )

    try:
        result = await orchestrator.submit_answer(
            session_id=session_id,
            transcript=request.transcript,
            audio_url=request.audio_url,
        )
        return TurnResponse(**result)

    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{session_id}/end")
async def end_interview(session_id: str) -> dict[str, Any]:
    """
    End the interview early.

    Transitions to COMPLETED and prepares for report generation.
    """
    orchestrator = get_orchestrator()
    session = orchestrator.get_session(session_id)

    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if session.state in [InterviewState.COMPLETED, InterviewState.FINISHED]:
        return {"action": "already_ended", "session_id": session_id}

    try:
        return await orchestrator.end_interview(session_id)

    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{session_id}/status", response_model=SessionStatusResponse)
async def get_session_status(session_id: str) -> SessionStatusResponse:
    """Get the current status of an interview session."""
    orchestrator = get_orchestrator()
    session = orchestrator.get_session(session_id)

    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    progress = orchestrator.get_progress(session_id)

    return SessionStatusResponse(
        session_id=session.session_id,
        state=session.state.value,
        role=session.role,
        questions_asked=progress.current,
        answers_recorded=len(session.responses),
        duration_seconds=session.get_duration_seconds(),
    )


@router.get("/{session_id}/progress", response_model=InterviewProgress)
async def get_progress(session_id: str) -> InterviewProgress:
    """Get interview progress (questions asked out of the cap)."""
    orchestrator = get_orchestrator()

    if not orchestrator.get_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")

    return orchestrator.get_progress(session_id)
