from voiceinterview.core.media_cache import MediaCache
from voiceinterview.prompts.interviewer import InterviewerPrompts


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


PAYLOAD = {"audio_data": "QUJD", "format": "mp3", "duration_seconds": 0.8}


def test_only_common_phrases_are_cached() -> None:
    cache = MediaCache()

    assert cache.put("Tell me about your last project in detail.", "alloy", PAYLOAD) is False
    assert cache.put("Great!", "alloy", PAYLOAD) is True
    assert cache.put(InterviewerPrompts.CLARIFICATION_REQUEST, "alloy", PAYLOAD) is True
    assert len(cache) == 2


def test_lookup_normalizes_text_and_separates_voices() -> None:
    cache = MediaCache()
    cache.put("That's interesting!", "alloy", PAYLOAD)

    assert cache.get("  that's INTERESTING!  ", "alloy") == PAYLOAD
    assert cache.get("That's interesting!", "nova") is None


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = MediaCache(ttl_hours=1, clock=clock)
    cache.put("I see.", "alloy", PAYLOAD)

    clock.now += 3600
    assert cache.get("I see.", "alloy") == PAYLOAD

    clock.now += 1
    assert cache.get("I see.", "alloy") is None
    assert len(cache) == 0


def test_oldest_entry_is_evicted_when_full() -> None:
    clock = FakeClock()
    cache = MediaCache(max_entries=2, clock=clock)

    cache.put("Great!", "alloy", PAYLOAD)
    clock.now += 1
    cache.put("Excellent!", "alloy", PAYLOAD)
    clock.now += 1
    cache.put("I understand.", "alloy", PAYLOAD)

    assert len(cache) == 2
    assert cache.get("Great!", "alloy") is None
    assert cache.get("Excellent!", "alloy") == PAYLOAD
    assert cache.get("I understand.", "alloy") == PAYLOAD


def test_cleanup_and_stats() -> None:
    clock = FakeClock()
    cache = MediaCache(max_entries=10, ttl_hours=2, clock=clock)
    cache.put("Great!", "alloy", PAYLOAD)
    clock.now += 2 * 3600 + 1
    cache.put("Excellent!", "alloy", PAYLOAD)

    assert cache.stats() == {"total_cached": 2, "expired_count": 1, "max_size": 10, "expiry_hours": 2}
    assert cache.cleanup_expired() == 1
    assert cache.stats()["total_cached"] == 1

    cache.clear()
    assert len(cache) == 0
