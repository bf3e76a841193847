"""
Conversation tracking models for VoiceInterview

These describe the interviewer's working memory: which topic is being
discussed, how deep the discussion has gone and what the candidate has
mentioned so far.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ConversationPhase(str, Enum):
    """Where the interviewer is within the current topic."""

    INITIAL = "initial"
    FOLLOW_UP = "follow_up"
    TRANSITION = "transition"
    COMPLETION = "completion"


class CoreTopic(str, Enum):
    """Topics the interview walks through, in order."""

    TECHNICAL_EXPERIENCE = "technical_experience"
    PROJECT_DEEP_DIVE = "project_deep_dive"
    PROBLEM_SOLVING = "problem_solving"
    TEAM_COLLABORATION = "team_collaboration"
    WRAP_UP = "wrap_up"  # Sentinel once every core topic is covered


# Ordered core topics, WRAP_UP excluded
CORE_TOPICS: list[CoreTopic] = [
    CoreTopic.TECHNICAL_EXPERIENCE,
    CoreTopic.PROJECT_DEEP_DIVE,
    CoreTopic.PROBLEM_SOLVING,
    CoreTopic.TEAM_COLLABORATION,
]


class FollowUpType(str, Enum):
    """Kind of follow-up question to ask next."""

    CLARIFICATION = "clarification"
    EXAMPLE = "example"
    CHALLENGE = "challenge"
    OUTCOME = "outcome"
    TECHNICAL = "technical"


class ExtractedMentions(BaseModel):
    """Entities pulled out of a single answer, in first-found order."""

    technologies: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    companies: list[str] = Field(default_factory=list)
    challenges: list[str] = Field(default_factory=list)
    outcomes: list[str] = Field(default_factory=list)
    timeframes: list[str] = Field(default_factory=list)
    key_details: list[str] = Field(default_factory=list)


class ConversationMemory(BaseModel):
    """What was learned while a topic was being discussed."""

    topic: CoreTopic | None = None
    details: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    companies: list[str] = Field(default_factory=list)
    challenges: list[str] = Field(default_factory=list)
    outcomes: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    @property
    def topic_label(self) -> str:
        return self.topic.value if self.topic else "introduction"


class ConversationState(BaseModel):
    """Interviewer state machine data."""

    phase: ConversationPhase = ConversationPhase.INITIAL
    current_topic: CoreTopic | None = None  # None during the introduction
    topic_depth: int = Field(default=0, ge=0)
    follow_up_count: int = Field(default=0, ge=0)
    conversation_memory: list[ConversationMemory] = Field(default_factory=list)
    total_topics_covered: list[CoreTopic] = Field(default_factory=list)


class ResponseAnalysis(BaseModel):
    """Result of analyzing one candidate answer."""

    acknowledgment: str
    should_follow_up: bool
    follow_up_type: FollowUpType = FollowUpType.CLARIFICATION
    extracted_info: ExtractedMentions = Field(default_factory=ExtractedMentions)
