"""
Audio Processing Layer for VoiceInterview

Handles:
- Speech-to-Text (STT) of candidate answers using the Whisper API
- Text-to-Speech (TTS) of interviewer questions using the speech API

Both go through the same OpenAI-compatible provider as the chat model.
Synthesized audio for common phrases is served from the media cache.
"""

import base64
import logging
from typing import Any

import httpx

from voiceinterview.config.settings import get_settings
from voiceinterview.core.media_cache import MediaCache

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 150


class AudioProcessingError(Exception):
    """Raised when audio cannot be transcribed or synthesized."""
    pass


def estimate_duration_seconds(text: str) -> float:
    """Rough spoken duration of text at 150 words per minute."""
    return len(text.split()) / WORDS_PER_MINUTE * 60


class AudioProcessor:
    """
    Central audio processing component.

    STT: Whisper transcription endpoint
    TTS: Speech synthesis endpoint, with a cache for common phrases
    """

    def __init__(
        self,
        cache: MediaCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize audio processor.

        Args:
            cache: Phrase cache (built from settings when omitted)
            transport: Optional httpx transport (used to stub the provider)
        """
        self.settings = get_settings()
        self.cache = cache or MediaCache(
            max_entries=self.settings.media_cache_max_entries,
            ttl_hours=self.settings.media_cache_ttl_hours,
        )

        # HTTP client for API-based services
        self.client = httpx.AsyncClient(
            base_url=self.settings.openai_base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {self.settings.openai_api_key}"},
            timeout=self.settings.llm_timeout_seconds,
            transport=transport,
        )

    async def close(self):
        """Clean up resources."""
        await self.client.aclose()

    # =========================================================================
    # SPEECH-TO-TEXT (Whisper)
    # =========================================================================

    async def speech_to_text(
        self,
        audio_data: bytes,
        filename: str = "audio.webm",
        content_type: str = "audio/webm",
        language: str = "en",
    ) -> str:
        """
        Transcribe audio to text using Whisper.

        Args:
            audio_data: Raw audio bytes
            filename: Original file name (format hint for the provider)
            content_type: MIME type of the audio
            language: Language code

        Returns:
            Transcribed text (may be empty for silence)

        Raises:
            AudioProcessingError: Empty or oversized audio, or provider failure
        """
        if not audio_data:
            raise AudioProcessingError("Audio file is empty")

        max_bytes = self.settings.max_audio_bytes
        if len(audio_data) > max_bytes:
            raise AudioProcessingError(
                f"Audio file too large. Maximum size is {max_bytes // (1024 * 1024)}MB"
            )

        try:
            files = {
                "file": (filename, audio_data, content_type),
            }
            data = {
                "model": self.settings.whisper_model,
                "language": language,
                "response_format": "json",
            }

            response = await self.client.post(
                "/audio/transcriptions",
                files=files,
                data=data,
            )
            response.raise_for_status()

            result = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Whisper API error: {e}")
            raise AudioProcessingError(f"Transcription failed: {e}") from e
        except ValueError as e:
            logger.error(f"Whisper API returned invalid JSON: {e}")
            raise AudioProcessingError("Transcription failed: invalid response") from e

        transcript = (result.get("text") or "").strip()
        logger.info(f"Transcribed {len(audio_data)} bytes into {len(transcript.split())} words")
        return transcript

    # =========================================================================
    # TEXT-TO-SPEECH
    # =========================================================================

    async def text_to_speech(
        self,
        text: str,
        voice: str | None = None,
    ) -> dict[str, Any]:
        """
        Convert text to speech.

        Args:
            text: Text to synthesize
            voice: Voice to use (optional, uses default)

        Returns:
            Dict with audio_data (base64), format, duration_seconds and cached

        Raises:
            AudioProcessingError: Empty text or provider failure
        """
        if not text or not text.strip():
            raise AudioProcessingError("Text is required")

        voice = voice or self.settings.tts_voice

        cached = self.cache.get(text, voice)
        if cached is not None:
            logger.debug(f"Serving cached speech for: {text[:40]}")
            return {**cached, "cached": True}

        try:
            response = await self.client.post(
                "/audio/speech",
                json={
                    "model": self.settings.tts_model,
                    "voice": voice,
                    "input": text,
                    "response_format": "mp3",
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Speech API error: {e}")
            raise AudioProcessingError(f"Speech synthesis failed: {e}") from e

        result = {
            "audio_data": base64.b64encode(response.content).decode("utf-8"),
            "format": "mp3",
            "duration_seconds": estimate_duration_seconds(text),
        }
        self.cache.put(text, voice, result)

        return {**result, "cached": False}
