"""
Core business logic modules for VoiceInterview

Contains:
- LLM Gateway: Chat completions against the model provider
- Response Analyzer: Entity extraction from answers
- Conversation State: Per-interview topic state machine
- Conversational Interviewer: Turn-by-turn question generation
- Response Scorer / Score Aggregator: Per-answer and final scoring
- Resume Parser: Upload validation, text extraction and structuring
- Audio Processing: STT/TTS integration
- Interview Orchestrator: Session lifecycle
"""

from voiceinterview.core.llm_gateway import LLMGateway, LLMGatewayError
from voiceinterview.core.response_analyzer import PatternMentionExtractor, extract_mentions
from voiceinterview.core.conversation_state import ConversationStateTracker
from voiceinterview.core.conversational_interviewer import ConversationalInterviewer
from voiceinterview.core.response_scorer import ResponseScorer
from voiceinterview.core.score_aggregator import FinalScoreAggregator
from voiceinterview.core.resume_parser import ResumeParser
from voiceinterview.core.audio_processor import AudioProcessor
from voiceinterview.core.media_cache import MediaCache
from voiceinterview.core.interview_orchestrator import InterviewOrchestrator

__all__ = [
    "LLMGateway",
    "LLMGatewayError",
    "PatternMentionExtractor",
    "extract_mentions",
    "ConversationStateTracker",
    "ConversationalInterviewer",
    "ResponseScorer",
    "FinalScoreAggregator",
    "ResumeParser",
    "AudioProcessor",
    "MediaCache",
    "InterviewOrchestrator",
]
