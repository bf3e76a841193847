"""
Conversational Interviewer - drives one interview turn by turn.

Each call to generate_next_question() takes the candidate's latest answer
and returns what the interviewer says next:

    opening → (follow-up | topic transition)* → closing remark

Follow-ups dig into something the candidate just said; transitions move
to the next uncovered core topic. A failed model call never aborts the
interview: a deterministic question built from the extracted mentions is
used instead.
"""

import logging
import random
import re

from voiceinterview.config.settings import get_settings
from voiceinterview.core.conversation_state import ConversationStateTracker
from voiceinterview.core.llm_gateway import CompletionGateway
from voiceinterview.core.response_analyzer import PatternMentionExtractor
from voiceinterview.models.conversation import (
    CORE_TOPICS,
    ConversationPhase,
    ConversationState,
    CoreTopic,
    ResponseAnalysis,
)
from voiceinterview.models.interview import (
    ConversationEntry,
    InterviewContext,
    InterviewProgress,
    NextQuestion,
)
from voiceinterview.models.resume import ParsedResume
from voiceinterview.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)

FOLLOW_UP_TEMPERATURE = 0.85
TRANSITION_TEMPERATURE = 0.8

_QUESTION_PREFIX = re.compile(r"^\s*(?:question|q\d*)\s*:\s*", re.IGNORECASE)
_NUMBER_PREFIX = re.compile(r"^\s*\d+\.\s*")
_QUOTES = "\"'“”"


def clean_question(text: str | None) -> str:
    """
    Normalize raw model output into a single spoken question.

    Strips "Question:"/"Q1:" labels, list numbering and wrapping quotes,
    and makes sure the text ends with punctuation.
    """
    if not text:
        return ""

    question = text.strip().strip(_QUOTES).strip()
    question = _QUESTION_PREFIX.sub("", question)
    question = _NUMBER_PREFIX.sub("", question)
    question = question.strip().strip(_QUOTES).strip()

    if question and question[-1] not in "?.!":
        question += "?"
    return question


class ConversationalInterviewer:
    """
    Owns the InterviewContext and the ConversationStateTracker of one session.

    Not safe for concurrent calls on the same instance; a session submits
    its turns one at a time.
    """

    def __init__(
        self,
        gateway: CompletionGateway,
        resume: ParsedResume,
        role: str,
        role_description: str = "",
        tracker: ConversationStateTracker | None = None,
        max_questions: int | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the interviewer.

        Args:
            gateway: Language model gateway
            resume: Candidate's parsed resume
            role: Target role title
            role_description: Key skills or description of the role
            tracker: Conversation state tracker (one is built from the
                resume skills when omitted)
            max_questions: Question cap including opening and closing (at least 2)
            rng: Random source for closing remark and acknowledgment choice
        """
        settings = get_settings()
        self.gateway = gateway
        self.rng = rng or random.Random()
        self.max_questions = settings.max_questions if max_questions is None else max_questions
        if self.max_questions < 2:
            raise ValueError("max_questions must leave room for an opening question and a closing remark")
        self.fatigue_min_questions = settings.fatigue_min_questions
        self.fatigue_min_words = settings.fatigue_min_words

        self.tracker = tracker or ConversationStateTracker(
            extractor=PatternMentionExtractor(resume.skills),
            rng=self.rng,
        )
        self.prompts = InterviewerPrompts()
        self._context = InterviewContext(
            resume=resume,
            role=role,
            role_description=role_description,
        )

    # =========================================================================
    # READ-ONLY VIEWS
    # =========================================================================

    @property
    def context(self) -> InterviewContext:
        return self._context.model_copy(deep=True)

    @property
    def conversation_state(self) -> ConversationState:
        return self.tracker.state

    @property
    def current_question(self) -> str | None:
        """The most recently asked question."""
        history = self._context.conversation_history
        return history[-1].question if history else None

    @property
    def is_complete(self) -> bool:
        return (
            self._context.questions_asked >= self.max_questions
            or self.tracker.state.phase == ConversationPhase.COMPLETION
        )

    def get_progress(self) -> InterviewProgress:
        """Get interview progress as questions asked out of the cap."""
        current = self._context.questions_asked
        percentage = min(100.0, current / self.max_questions * 100)
        return InterviewProgress(current=current, total=self.max_questions, percentage=percentage)

    # =========================================================================
    # TURN HANDLING
    # =========================================================================

    async def generate_next_question(self, previous_answer: str | None = None) -> NextQuestion:
        """
        Produce the interviewer's next utterance.

        Args:
            previous_answer: Candidate's answer to the last question
                (ignored for the opening question)

        Returns:
            NextQuestion; should_end is True for the closing remark
        """
        context = self._context

        if context.questions_asked == 0:
            question = self.prompts.opening_question(context.role)
            self._ask(question)
            logger.info(f"Opening question asked for role '{context.role}'")
            return NextQuestion(question=question, should_end=False)

        if self.is_complete:
            return NextQuestion(question=self._closing_remark(), should_end=True)

        if previous_answer is None or not previous_answer.strip():
            logger.warning("No answer received, asking the candidate to repeat")
            return NextQuestion(question=self.prompts.CLARIFICATION_REQUEST, should_end=False)

        self._record_answer(previous_answer)

        if context.questions_asked + 1 >= self.max_questions or self._is_fatigued():
            closing = self._closing_remark()
            self.tracker.mark_complete()
            self._ask(closing)
            logger.info(f"Interview closing after {context.questions_asked} questions")
            return NextQuestion(question=closing, should_end=True)

        analysis = self.tracker.analyze_response(previous_answer)

        if analysis.should_follow_up and not self.tracker.should_transition_topic():
            question = await self._generate_follow_up(previous_answer, analysis)
            self.tracker.record_follow_up()
        else:
            question = await self._generate_transition(previous_answer, analysis)

        self._ask(question)
        return NextQuestion(question=question, should_end=False)

    def _ask(self, question: str) -> None:
        self._context.conversation_history.append(ConversationEntry(question=question))
        self._context.questions_asked += 1

    def _record_answer(self, answer: str) -> None:
        history = self._context.conversation_history
        if history:
            history[-1].answer = answer

    def _is_fatigued(self) -> bool:
        """Short answers late in the interview suggest a tired candidate."""
        if self._context.questions_asked < self.fatigue_min_questions:
            return False
        return self._context.average_answer_words() < self.fatigue_min_words

    def _closing_remark(self) -> str:
        return self.rng.choice(self.prompts.CLOSING_REMARKS)

    def _next_topic(self) -> CoreTopic:
        covered = self.tracker.state.total_topics_covered
        for topic in CORE_TOPICS:
            if topic not in covered:
                return topic
        return CoreTopic.WRAP_UP

    # =========================================================================
    # QUESTION GENERATION
    # =========================================================================

    async def _generate_follow_up(self, answer: str, analysis: ResponseAnalysis) -> str:
        """Ask about something specific from the answer."""
        system_prompt = self.prompts.follow_up_system_prompt(self._context.role)
        user_prompt = self.prompts.follow_up_user_prompt(
            self.tracker.get_conversation_context(),
            answer,
            analysis,
        )

        logger.info(f"Generating follow-up ({analysis.follow_up_type.value})")
        try:
            response = await self.gateway.generate_completion(
                system_prompt,
                user_prompt,
                FOLLOW_UP_TEMPERATURE,
                trace_name="follow_up_question",
            )
        except Exception as e:
            logger.warning(f"Follow-up generation failed, using fallback: {e}")
            return self._fallback_follow_up(analysis)

        question = clean_question(response)
        if not question:
            logger.warning("Empty follow-up from model, using fallback")
            return self._fallback_follow_up(analysis)
        return question

    async def _generate_transition(self, answer: str, analysis: ResponseAnalysis) -> str:
        """Move on to the next uncovered topic."""
        next_topic = self._next_topic()
        self.tracker.reset_topic(next_topic)

        system_prompt = self.prompts.transition_system_prompt(self._context.role)
        user_prompt = self.prompts.transition_user_prompt(
            self.tracker.get_conversation_context(),
            answer,
            next_topic,
            self._context.resume,
            self._context.role,
        )

        logger.info(f"Transitioning to topic: {next_topic.value}")
        try:
            response = await self.gateway.generate_completion(
                system_prompt,
                user_prompt,
                TRANSITION_TEMPERATURE,
                trace_name="topic_transition",
            )
        except Exception as e:
            logger.warning(f"Transition generation failed, using fallback: {e}")
            return self._fallback_transition(next_topic, analysis)

        question = clean_question(response)
        if not question:
            logger.warning("Empty transition from model, using fallback")
            return self._fallback_transition(next_topic, analysis)
        return question

    # =========================================================================
    # FALLBACKS
    # =========================================================================

    def _fallback_follow_up(self, analysis: ResponseAnalysis) -> str:
        mentions = analysis.extracted_info
        if mentions.projects:
            return (
                f"That's interesting! Tell me more about that {mentions.projects[0]} "
                f"- what challenges did you face?"
            )
        if mentions.technologies:
            return f"Great! How did you work with {mentions.technologies[0]} in that project?"
        return (
            "That sounds fascinating! Can you elaborate on the most challenging "
            "part of what you just described?"
        )

    def _fallback_transition(self, next_topic: CoreTopic, analysis: ResponseAnalysis) -> str:
        return (
            f"{analysis.acknowledgment} Now I'd like to learn about a different aspect "
            f"of your background. {self.prompts.TOPIC_QUESTIONS[next_topic]}"
        )
