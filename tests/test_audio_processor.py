import asyncio
import base64
import json

import httpx
import pytest

from voiceinterview.core.audio_processor import (
    AudioProcessingError,
    AudioProcessor,
    estimate_duration_seconds,
)


def _processor(handler) -> AudioProcessor:
    return AudioProcessor(transport=httpx.MockTransport(handler))


def test_estimate_duration() -> None:
    assert estimate_duration_seconds("one two three four five") == pytest.approx(2.0)
    assert estimate_duration_seconds("") == 0


def test_speech_to_text_posts_multipart_upload() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"text": "  I built the checkout flow.  "})

    async def run():
        processor = _processor(handler)
        try:
            return await processor.speech_to_text(b"fake-audio", filename="answer.webm")
        finally:
            await processor.close()

    transcript = asyncio.run(run())

    assert transcript == "I built the checkout flow."
    assert seen[0].url.path.endswith("/audio/transcriptions")
    body = seen[0].read()
    assert b"whisper-1" in body
    assert b"answer.webm" in body


def test_speech_to_text_rejects_empty_and_oversized_audio(configure) -> None:
    configure(max_audio_bytes=4)
    processor = _processor(lambda request: httpx.Response(200, json={"text": "x"}))

    with pytest.raises(AudioProcessingError, match="empty"):
        asyncio.run(processor.speech_to_text(b""))
    with pytest.raises(AudioProcessingError, match="too large"):
        asyncio.run(processor.speech_to_text(b"12345"))


def test_speech_to_text_provider_error() -> None:
    processor = _processor(lambda request: httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(AudioProcessingError, match="Transcription failed"):
        asyncio.run(processor.speech_to_text(b"fake-audio"))


def test_text_to_speech_caches_common_phrases() -> None:
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        return httpx.Response(200, content=b"mp3-bytes")

    async def run():
        processor = _processor(handler)
        try:
            first = await processor.text_to_speech("Great!")
            second = await processor.text_to_speech("great!")
            return first, second
        finally:
            await processor.close()

    first, second = asyncio.run(run())

    assert len(requests) == 1
    assert requests[0]["voice"] == "alloy"
    assert requests[0]["input"] == "Great!"
    assert first["audio_data"] == base64.b64encode(b"mp3-bytes").decode("utf-8")
    assert first["format"] == "mp3"
    assert first["cached"] is False
    assert second["cached"] is True
    assert second["audio_data"] == first["audio_data"]


def test_text_to_speech_does_not_cache_questions() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, content=b"mp3-bytes")

    async def run():
        processor = _processor(handler)
        try:
            await processor.text_to_speech("How did you test the checkout flow?", voice="nova")
            return await processor.text_to_speech("How did you test the checkout flow?", voice="nova")
        finally:
            await processor.close()

    result = asyncio.run(run())

    assert len(calls) == 2
    assert result["cached"] is False


def test_text_to_speech_errors() -> None:
    processor = _processor(lambda request: httpx.Response(503))

    with pytest.raises(AudioProcessingError):
        asyncio.run(processor.text_to_speech("   "))
    with pytest.raises(AudioProcessingError, match="Speech synthesis failed"):
        asyncio.run(processor.text_to_speech("Hello there, how are you?"))
