"""
Data models and schemas for VoiceInterview

Contains Pydantic models for:
- Parsed resumes
- Interview sessions and context
- Conversation tracking
- Response scores and the final report
"""

from voiceinterview.models.resume import (
    ParsedResume,
    PersonalInfo,
    WorkExperience,
    Education,
    ResumeFeedback,
    ResumeContext,
)
from voiceinterview.models.conversation import (
    ConversationPhase,
    ConversationMemory,
    ConversationState,
    CoreTopic,
    CORE_TOPICS,
    ExtractedMentions,
    FollowUpType,
    ResponseAnalysis,
)
from voiceinterview.models.scoring import (
    CategoryScores,
    ScoreResult,
    ResponseRecord,
    FinalScore,
)
from voiceinterview.models.interview import (
    ConversationEntry,
    InterviewContext,
    InterviewProgress,
    InterviewSession,
    InterviewState,
    NextQuestion,
)

__all__ = [
    # Resume
    "ParsedResume",
    "PersonalInfo",
    "WorkExperience",
    "Education",
    "ResumeFeedback",
    "ResumeContext",
    # Conversation
    "ConversationPhase",
    "ConversationMemory",
    "ConversationState",
    "CoreTopic",
    "CORE_TOPICS",
    "ExtractedMentions",
    "FollowUpType",
    "ResponseAnalysis",
    # Scoring
    "CategoryScores",
    "ScoreResult",
    "ResponseRecord",
    "FinalScore",
    # Interview
    "ConversationEntry",
    "InterviewContext",
    "InterviewProgress",
    "InterviewSession",
    "InterviewState",
    "NextQuestion",
]
