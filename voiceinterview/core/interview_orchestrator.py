"""
Interview Orchestrator - session layer over the conversational interviewer.

Owns the in-memory session store and the session lifecycle, routes each
submitted answer to the session's interviewer, scores answers in the
background and builds the final report once the interview is over.
"""

import asyncio
import logging
import random
from datetime import datetime
from typing import Any

from voiceinterview.core.conversational_interviewer import ConversationalInterviewer
from voiceinterview.core.llm_gateway import CompletionGateway
from voiceinterview.core.response_scorer import ResponseScorer
from voiceinterview.core.score_aggregator import FinalScoreAggregator
from voiceinterview.models.interview import (
    InterviewProgress,
    InterviewSession,
    InterviewState,
)
from voiceinterview.models.resume import ParsedResume
from voiceinterview.models.scoring import FinalScore, ResponseRecord

logger = logging.getLogger(__name__)


class StateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


class SessionNotFoundError(KeyError):
    """Raised when a session ID is unknown."""
    pass


class InterviewOrchestrator:
    """
    Manages interview sessions using a state machine pattern.

    States:
        READY → IN_PROGRESS → COMPLETED → FINISHED
          ↓          ↓
        ABANDONED ←──┘

    Scoring is fire-and-forget: a turn never waits for its answer to be
    scored. Report generation waits for every outstanding score first.
    """

    # Valid state transitions
    VALID_TRANSITIONS: dict[InterviewState, list[InterviewState]] = {
        InterviewState.READY: [InterviewState.IN_PROGRESS, InterviewState.COMPLETED, InterviewState.ABANDONED],
        InterviewState.IN_PROGRESS: [InterviewState.COMPLETED, InterviewState.ABANDONED],
        InterviewState.COMPLETED: [InterviewState.FINISHED],
        InterviewState.FINISHED: [],  # Terminal state
        InterviewState.ABANDONED: [],  # Terminal state
    }

    def __init__(
        self,
        gateway: CompletionGateway,
        scorer: ResponseScorer | None = None,
        aggregator: FinalScoreAggregator | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the orchestrator with component dependencies.

        Args:
            gateway: Language model gateway shared by every session
            scorer: Response scorer (built on the gateway when omitted)
            aggregator: Final score aggregator (built on the gateway when omitted)
            rng: Random source handed to each session's interviewer
        """
        self.gateway = gateway
        self.scorer = scorer or ResponseScorer(gateway)
        self.aggregator = aggregator or FinalScoreAggregator(gateway)
        self.rng = rng

        # Session storage (in-memory)
        self._sessions: dict[str, InterviewSession] = {}
        self._interviewers: dict[str, ConversationalInterviewer] = {}
        self._scoring_tasks: dict[str, set[asyncio.Task]] = {}
        self._report_locks: dict[str, asyncio.Lock] = {}

    # =========================================================================
    # SESSION MANAGEMENT
    # =========================================================================

    async def create_session(
        self,
        role: str,
        resume: ParsedResume,
        role_description: str = "",
    ) -> InterviewSession:
        """
        Create a new interview session.

        Args:
            role: Target role title
            resume: Candidate's parsed resume
            role_description: Key skills or description of the role

        Returns:
            New InterviewSession instance
        """
        session = InterviewSession(role=role, role_description=role_description, resume=resume)

        self._sessions[session.session_id] = session
        self._interviewers[session.session_id] = ConversationalInterviewer(
            gateway=self.gateway,
            resume=resume,
            role=role,
            role_description=role_description,
            rng=self.rng,
        )
        self._scoring_tasks[session.session_id] = set()

        logger.info(f"Created interview session: {session.session_id} (role={role})")
        return session

    def get_session(self, session_id: str) -> InterviewSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def _require_session(self, session_id: str) -> InterviewSession:
        session = self._sessions.get(session_id)
        if not session:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    def get_interviewer(self, session_id: str) -> ConversationalInterviewer:
        """Get the interviewer driving a session."""
        self._require_session(session_id)
        return self._interviewers[session_id]

    def get_progress(self, session_id: str) -> InterviewProgress:
        return self.get_interviewer(session_id).get_progress()

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    def transition_state(self, session_id: str, new_state: InterviewState) -> InterviewSession:
        """
        Transition a session to a new state.

        Raises:
            SessionNotFoundError: If the session is unknown
            StateTransitionError: If transition is invalid
        """
        session = self._require_session(session_id)
        old_state = session.state

        valid_next_states = self.VALID_TRANSITIONS.get(old_state, [])
        if new_state not in valid_next_states:
            raise StateTransitionError(
                f"Invalid transition from {old_state.value} to {new_state.value}. "
                f"Valid transitions: {[state.value for state in valid_next_states]}"
            )

        session.state = new_state

        if new_state == InterviewState.IN_PROGRESS:
            session.started_at = datetime.utcnow()
        elif new_state in (InterviewState.COMPLETED, InterviewState.ABANDONED):
            session.completed_at = datetime.utcnow()

        logger.info(f"Session {session_id}: {old_state.value} → {new_state.value}")
        return session

    # =========================================================================
    # INTERVIEW FLOW
    # =========================================================================

    async def start_interview(self, session_id: str) -> dict[str, Any]:
        """
        Start the interview and return the opening question.

        Returns:
            Dict with question, should_end and progress
        """
        self.transition_state(session_id, InterviewState.IN_PROGRESS)
        interviewer = self._interviewers[session_id]

        next_question = await interviewer.generate_next_question()
        return self._turn_result(session_id, next_question.question, next_question.should_end)

    async def submit_answer(
        self,
        session_id: str,
        transcript: str,
        audio_url: str | None = None,
    ) -> dict[str, Any]:
        """
        Submit the candidate's answer and get the next question.

        The answer is scored in the background. A blank transcript records
        nothing and returns the interviewer's request to repeat.

        Args:
            session_id: Session ID
            transcript: Transcribed answer
            audio_url: Where the answer recording is stored, if anywhere

        Returns:
            Dict with question, should_end and progress
        """
        session = self._require_session(session_id)
        if session.state != InterviewState.IN_PROGRESS:
            raise StateTransitionError(f"Cannot submit answer in state: {session.state.value}")

        interviewer = self._interviewers[session_id]

        if transcript and transcript.strip():
            record = ResponseRecord(
                question=interviewer.current_question or "",
                transcript=transcript.strip(),
                audio_url=audio_url,
            )
            session.responses.append(record)
            self._schedule_scoring(session, record)

        next_question = await interviewer.generate_next_question(transcript)

        if next_question.should_end:
            self.transition_state(session_id, InterviewState.COMPLETED)

        return self._turn_result(session_id, next_question.question, next_question.should_end)

    async def end_interview(self, session_id: str) -> dict[str, Any]:
        """
        End the interview early.

        Returns:
            Completion status
        """
        session = self.transition_state(session_id, InterviewState.COMPLETED)
        self._interviewers[session_id].tracker.mark_complete()

        return {
            "action": "ended",
            "session_id": session_id,
            "questions_answered": len(session.responses),
        }

    def abandon(self, session_id: str) -> None:
        """Mark a session abandoned; outstanding scoring still completes."""
        self.transition_state(session_id, InterviewState.ABANDONED)

    def _turn_result(self, session_id: str, question: str, should_end: bool) -> dict[str, Any]:
        progress = self._interviewers[session_id].get_progress()
        return {
            "session_id": session_id,
            "question": question,
            "should_end": should_end,
            "progress": progress.model_dump(),
        }

    # =========================================================================
    # SCORING
    # =========================================================================

    def _schedule_scoring(self, session: InterviewSession, record: ResponseRecord) -> None:
        """Score an answer without blocking the turn."""
        tasks = self._scoring_tasks.setdefault(session.session_id, set())
        task = asyncio.create_task(self._score_record(session, record))
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    async def _score_record(self, session: InterviewSession, record: ResponseRecord) -> None:
        try:
            await self.scorer.score_record(record, session.role, session.resume.to_context())
        except Exception as e:
            logger.error(f"Background scoring failed for {record.question_id}: {e}")

    async def wait_for_scoring(self, session_id: str) -> None:
        """Wait until every outstanding score for a session is in."""
        tasks = list(self._scoring_tasks.get(session_id, ()))
        if tasks:
            logger.info(f"Waiting for {len(tasks)} pending scores in session {session_id}")
            await asyncio.gather(*tasks)

    # =========================================================================
    # REPORT
    # =========================================================================

    async def generate_report(self, session_id: str) -> FinalScore:
        """
        Generate (once) the final score for a completed interview.

        Returns:
            FinalScore for the session

        Raises:
            StateTransitionError: If the interview is not over yet
        """
        session = self._require_session(session_id)
        lock = self._report_locks.setdefault(session_id, asyncio.Lock())

        async with lock:
            if session.final_score is not None:
                return session.final_score

            if session.state != InterviewState.COMPLETED:
                raise StateTransitionError("Interview must be complete to generate report")

            await self.wait_for_scoring(session_id)

            resume_context = session.resume.to_context()
            for record in session.responses:
                if not record.is_scored:
                    await self.scorer.score_record(record, session.role, resume_context)

            session.final_score = await self.aggregator.aggregate(
                session.responses,
                session.role,
                resume_context,
            )
            self.transition_state(session_id, InterviewState.FINISHED)

        logger.info(f"Report ready for {session_id}: {session.final_score.overall_score}/100")
        return session.final_score
