"""
Interview session and state models for VoiceInterview
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from voiceinterview.models.resume import ParsedResume
from voiceinterview.models.scoring import FinalScore, ResponseRecord


class InterviewState(str, Enum):
    """Interview session lifecycle states."""

    READY = "ready"  # Session created, waiting for the first question
    IN_PROGRESS = "in_progress"  # Questions being asked and answered
    COMPLETED = "completed"  # Interview ended, report not generated yet
    FINISHED = "finished"  # Report ready
    ABANDONED = "abandoned"  # Candidate walked away


class ConversationEntry(BaseModel):
    """A question and, once given, the candidate's answer."""

    question: str
    answer: str = ""  # Backfilled when the next answer arrives
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_answered(self) -> bool:
        return bool(self.answer.strip())


class InterviewContext(BaseModel):
    """Per-session interview context owned by the interviewer."""

    resume: ParsedResume
    role: str
    role_description: str = ""
    conversation_history: list[ConversationEntry] = Field(default_factory=list)
    questions_asked: int = Field(default=0, ge=0)

    def answered_entries(self) -> list[ConversationEntry]:
        """History entries that carry an answer."""
        return [entry for entry in self.conversation_history if entry.is_answered]

    def average_answer_words(self) -> float:
        """Mean word count over answered entries (0 when nothing answered)."""
        answered = self.answered_entries()
        if not answered:
            return 0.0
        total_words = sum(len(entry.answer.split()) for entry in answered)
        return total_words / len(answered)


class NextQuestion(BaseModel):
    """What the interviewer says next."""

    question: str
    should_end: bool = False


class InterviewProgress(BaseModel):
    """Interview progress for display."""

    current: int
    total: int
    percentage: float = Field(..., ge=0, le=100)


class InterviewSession(BaseModel):
    """Complete interview session state."""

    # Identification
    session_id: str = Field(default_factory=lambda: str(uuid4()))

    # Setup
    role: str
    role_description: str = ""
    resume: ParsedResume

    # State
    state: InterviewState = Field(default=InterviewState.READY)

    # Timing
    created_at: datetime = Field(default_factory=datetime.utcnow)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    # Answers (scored in the background)
    responses: list[ResponseRecord] = Field(default_factory=list)

    # Report
    final_score: FinalScore | None = None

    def get_duration_seconds(self) -> float:
        """Get interview duration in seconds."""
        if not self.started_at:
            return 0.0
        end = self.completed_at or datetime.utcnow()
        return (end - self.started_at).total_seconds()
