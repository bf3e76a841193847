"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

from voiceinterview.core.audio_processor import AudioProcessor
from voiceinterview.core.interview_orchestrator import InterviewOrchestrator
from voiceinterview.core.llm_gateway import LLMGateway
from voiceinterview.core.response_scorer import ResponseScorer
from voiceinterview.core.resume_parser import ResumeParser


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_gateway: LLMGateway | None = None
_orchestrator: InterviewOrchestrator | None = None
_audio_processor: AudioProcessor | None = None
_resume_parser: ResumeParser | None = None
_scorer: ResponseScorer | None = None


def get_gateway() -> LLMGateway:
    """Get the shared language model gateway."""
    global _gateway

    if _gateway is None:
        _gateway = LLMGateway()

    return _gateway


def get_orchestrator() -> InterviewOrchestrator:
    """
    Get the interview orchestrator singleton.

    Lazily initializes the shared gateway.
    """
    global _orchestrator

    if _orchestrator is None:
        _orchestrator = InterviewOrchestrator(gateway=get_gateway())

    return _orchestrator


def get_resume_parser() -> ResumeParser:
    """Get the resume parser singleton."""
    global _resume_parser

    if _resume_parser is None:
        _resume_parser = ResumeParser(get_gateway())

    return _resume_parser


def get_scorer() -> ResponseScorer:
    """Get the standalone response scorer singleton."""
    global _scorer

    if _scorer is None:
        _scorer = ResponseScorer(get_gateway())

    return _scorer


def get_audio_processor() -> AudioProcessor:
    """Get the audio processor singleton."""
    global _audio_processor

    if _audio_processor is None:
        _audio_processor = AudioProcessor()

    return _audio_processor


async def cleanup():
    """Cleanup resources on shutdown."""
    global _gateway, _orchestrator, _audio_processor, _resume_parser, _scorer

    if _audio_processor:
        await _audio_processor.close()
        _audio_processor = None

    if _gateway:
        await _gateway.close()
        _gateway = None

    _orchestrator = None
    _resume_parser = None
    _scorer = None
