"""
Conversation State Tracker - per-interview topic state machine.

Phases:
    INITIAL → FOLLOW_UP* → TRANSITION → FOLLOW_UP* → ... → COMPLETION

Tracks the current core topic, how deep the discussion has gone
(topic depth, follow-up count), what the candidate mentioned for each
answer, and which topics have been covered. One tracker per session.
"""

import logging
import random

from voiceinterview.config.settings import get_settings
from voiceinterview.core.response_analyzer import MentionExtractor, PatternMentionExtractor
from voiceinterview.models.conversation import (
    ConversationMemory,
    ConversationPhase,
    ConversationState,
    CoreTopic,
    ExtractedMentions,
    FollowUpType,
    ResponseAnalysis,
)

logger = logging.getLogger(__name__)


# ============================================================================
# ACKNOWLEDGMENT POOLS
# ============================================================================

GENERIC_ACKNOWLEDGMENTS = [
    "That's interesting!",
    "I see.",
    "Great example!",
    "That sounds like valuable experience.",
    "Excellent!",
    "That's a good approach.",
    "Nice work!",
    "That makes sense.",
]

CHALLENGE_ACKNOWLEDGMENTS = [
    "That sounds challenging!",
    "Those kinds of problems can be tricky to solve.",
    "Complex issues like that really test your skills.",
]

TECH_ACKNOWLEDGMENTS = [
    "Great technology choices!",
    "That's a solid tech stack.",
    "Those are excellent tools for that kind of project.",
]

PROJECT_ACKNOWLEDGMENTS = [
    "That project sounds really interesting!",
    "What a great project to work on!",
    "That must have been an engaging project.",
]

INTERESTING_KEYWORDS = [
    "project", "challenge", "problem", "built", "created", "developed",
    "team", "solution", "implementation", "architecture",
]

SHORT_ANSWER_WORDS = 5
CONTEXT_MEMORY_WINDOW = 3


class ConversationStateTracker:
    """
    Owns the ConversationState of one interview.

    The phase is advanced by the interviewer: `reset_topic` on a topic
    change, `record_follow_up` after a follow-up question, `mark_complete`
    when the interview ends.
    """

    def __init__(
        self,
        extractor: MentionExtractor | None = None,
        max_follow_ups: int | None = None,
        max_topic_depth: int | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the tracker.

        Args:
            extractor: Mention extraction strategy
            max_follow_ups: Follow-ups allowed per topic (defaults to settings)
            max_topic_depth: Depth allowed per topic (defaults to settings)
            rng: Random source for acknowledgment selection
        """
        settings = get_settings()
        self.extractor = extractor or PatternMentionExtractor()
        self.max_follow_ups = settings.max_follow_ups if max_follow_ups is None else max_follow_ups
        self.max_topic_depth = settings.max_topic_depth if max_topic_depth is None else max_topic_depth
        self.rng = rng or random.Random()
        self._state = ConversationState()

    @property
    def state(self) -> ConversationState:
        """Read-only snapshot of the current state."""
        return self._state.model_copy(deep=True)

    # =========================================================================
    # STATE MUTATIONS
    # =========================================================================

    def reset_topic(self, new_topic: CoreTopic) -> None:
        """
        Switch to a new topic.

        Depth and follow-up counters restart at zero. The phase is INITIAL
        for the very first topic and TRANSITION afterwards.
        """
        state = self._state
        state.phase = (
            ConversationPhase.INITIAL
            if not state.total_topics_covered
            else ConversationPhase.TRANSITION
        )
        state.current_topic = new_topic
        state.topic_depth = 0
        state.follow_up_count = 0
        if new_topic not in state.total_topics_covered:
            state.total_topics_covered.append(new_topic)

        logger.debug(f"Topic reset to {new_topic.value} (phase={state.phase.value})")

    def record_follow_up(self) -> None:
        """Register that a follow-up question was asked on the current topic."""
        state = self._state
        state.phase = ConversationPhase.FOLLOW_UP
        state.follow_up_count = min(state.follow_up_count + 1, self.max_follow_ups)
        state.topic_depth = min(state.topic_depth + 1, self.max_topic_depth)

    def mark_complete(self) -> None:
        """Enter the terminal COMPLETION phase."""
        self._state.phase = ConversationPhase.COMPLETION

    # =========================================================================
    # ANALYSIS
    # =========================================================================

    def analyze_response(self, answer_text: str) -> ResponseAnalysis:
        """
        Analyze a candidate answer against the current topic state.

        Always appends one memory entry for the current topic.

        Args:
            answer_text: The candidate's answer

        Returns:
            ResponseAnalysis with acknowledgment and follow-up decision
        """
        mentions = self.extractor.extract(answer_text)
        acknowledgment = self._choose_acknowledgment(mentions)
        should_follow_up = self._should_follow_up(answer_text)
        follow_up_type = self._follow_up_type(answer_text, mentions)

        self._state.conversation_memory.append(
            ConversationMemory(
                topic=self._state.current_topic,
                details=mentions.key_details,
                technologies=mentions.technologies,
                projects=mentions.projects,
                companies=mentions.companies,
                challenges=mentions.challenges,
                outcomes=mentions.outcomes,
            )
        )

        return ResponseAnalysis(
            acknowledgment=acknowledgment,
            should_follow_up=should_follow_up,
            follow_up_type=follow_up_type,
            extracted_info=mentions,
        )

    def should_transition_topic(self) -> bool:
        """True once the current topic has exhausted follow-ups or depth."""
        return (
            self._state.follow_up_count >= self.max_follow_ups
            or self._state.topic_depth >= self.max_topic_depth
        )

    def _choose_acknowledgment(self, mentions: ExtractedMentions) -> str:
        if mentions.challenges:
            pool = CHALLENGE_ACKNOWLEDGMENTS
        elif mentions.technologies:
            pool = TECH_ACKNOWLEDGMENTS
        elif mentions.projects:
            pool = PROJECT_ACKNOWLEDGMENTS
        else:
            pool = GENERIC_ACKNOWLEDGMENTS
        return self.rng.choice(pool)

    def _should_follow_up(self, answer_text: str) -> bool:
        if self._state.follow_up_count >= self.max_follow_ups:
            return False

        lowered = (answer_text or "").lower()
        is_short = len(lowered.split()) < SHORT_ANSWER_WORDS
        is_interesting = any(keyword in lowered for keyword in INTERESTING_KEYWORDS)

        return is_short or is_interesting or self._state.topic_depth < self.max_topic_depth

    def _follow_up_type(self, answer_text: str, mentions: ExtractedMentions) -> FollowUpType:
        depth = self._state.topic_depth
        lowered = (answer_text or "").lower()

        if depth == 0:
            if "project" in lowered or "built" in lowered:
                return FollowUpType.TECHNICAL
            return FollowUpType.CLARIFICATION
        if depth == 1:
            return FollowUpType.CHALLENGE if mentions.challenges else FollowUpType.EXAMPLE
        if depth == 2:
            return FollowUpType.OUTCOME
        return FollowUpType.CLARIFICATION

    # =========================================================================
    # PROMPT CONTEXT
    # =========================================================================

    def get_conversation_context(self) -> str:
        """
        Render the last few memory entries for inclusion in prompts.

        Returns:
            Context block, oldest entry first
        """
        recent = self._state.conversation_memory[-CONTEXT_MEMORY_WINDOW:]

        lines = ["=== CONVERSATION CONTEXT ==="]
        if not recent:
            lines.append("No previous discussion yet.")
            return "\n".join(lines) + "\n"

        lines.append("Previously discussed:")
        for index, memory in enumerate(recent, start=1):
            lines.append(f"{index}. Topic: {memory.topic_label}")
            if memory.technologies:
                lines.append(f"   Technologies: {', '.join(memory.technologies)}")
            if memory.projects:
                lines.append(f"   Projects: {', '.join(memory.projects)}")
            if memory.companies:
                lines.append(f"   Companies: {', '.join(memory.companies)}")

        return "\n".join(lines) + "\n"
