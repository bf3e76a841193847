"""
Audio API endpoints

Handles:
- Text-to-speech generation
- Speech-to-text transcription
"""

from typing import Any

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from voiceinterview.api.dependencies import get_audio_processor
from voiceinterview.core.audio_processor import AudioProcessingError

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class TTSRequest(BaseModel):
    """Request for text-to-speech."""
    text: str = Field(..., min_length=1)
    voice: str | None = None


class TTSResponse(BaseModel):
    """Response with generated audio."""
    audio_base64: str
    format: str
    duration_seconds: float
    cached: bool = False


class STTResponse(BaseModel):
    """Response with transcribed text."""
    transcript: str
    word_count: int


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/tts", response_model=TTSResponse)
async def text_to_speech(request: TTSRequest) -> TTSResponse:
    """
    Convert text to speech.

    Returns base64-encoded audio data.
    """
    try:
        processor = get_audio_processor()
        result = await processor.text_to_speech(
            text=request.text,
            voice=request.voice,
        )

    except AudioProcessingError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return TTSResponse(
        audio_base64=result.get("audio_data", ""),
        format=result.get("format", "mp3"),
        duration_seconds=result.get("duration_seconds", 0),
        cached=result.get("cached", False),
    )


@router.post("/stt", response_model=STTResponse)
async def speech_to_text(
    audio: UploadFile = File(...),
    language: str = "en"
) -> STTResponse:
    """
    Transcribe audio to text.

    Accepts audio file upload.
    """
    audio_data = await audio.read()

    if not audio_data:
        raise HTTPException(status_code=400, detail="Audio file is empty")

    try:
        processor = get_audio_processor()
        transcript = await processor.speech_to_text(
            audio_data=audio_data,
            filename=audio.filename or "audio.webm",
            content_type=audio.content_type or "audio/webm",
            language=language,
        )

    except AudioProcessingError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return STTResponse(transcript=transcript, word_count=len(transcript.split()))


@router.get("/cache/stats")
async def cache_stats() -> dict[str, Any]:
    """Get statistics of the synthesized phrase cache."""
    processor = get_audio_processor()
    processor.cache.cleanup_expired()
    return processor.cache.stats()
