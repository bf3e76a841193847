"""
Media Cache - keeps synthesized audio for phrases the interviewer repeats.

Only a fixed set of common phrases is cached. Entries expire after a TTL
and the oldest entry is evicted once the cache is full.
"""

import logging
import time
from collections import OrderedDict
from typing import Any, Callable

from pydantic import BaseModel

from voiceinterview.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)


CACHEABLE_PHRASES: list[str] = [
    # Greetings
    "Hello! I'm excited to interview you today.",
    "Welcome to your interview!",
    "Thank you for joining me today.",
    # Acknowledgments
    "That's interesting!",
    "Great!",
    "I see.",
    "That sounds fascinating!",
    "Excellent!",
    "That's a good point.",
    "Interesting approach.",
    "I understand.",
    # Transitions
    "Let me ask you about something else.",
    "Moving on to the next topic.",
    # Conclusions
    "Thank you for sharing that with me.",
    "That concludes our interview.",
    "I appreciate your time today.",
    "This has been very insightful.",
    # Fixed interviewer utterances
    InterviewerPrompts.CLARIFICATION_REQUEST,
    *InterviewerPrompts.CLOSING_REMARKS,
]

_NORMALIZED_PHRASES = {phrase.lower().strip() for phrase in CACHEABLE_PHRASES}


class CachedMedia(BaseModel):
    """A cached synthesis result."""

    text: str
    voice: str
    payload: dict[str, Any]
    created_at: float


class MediaCache:
    """Bounded, expiring cache keyed by voice and normalized text."""

    def __init__(
        self,
        max_entries: int = 100,
        ttl_hours: float = 24.0,
        clock: Callable[[], float] = time.time,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_hours * 3600
        self.clock = clock
        self._entries: OrderedDict[str, CachedMedia] = OrderedDict()

    @staticmethod
    def _key(text: str, voice: str) -> str:
        return f"{voice}:{text.lower().strip()}"

    def is_cacheable(self, text: str) -> bool:
        return text.lower().strip() in _NORMALIZED_PHRASES

    def _is_expired(self, entry: CachedMedia, now: float) -> bool:
        return now - entry.created_at > self.ttl_seconds

    def get(self, text: str, voice: str) -> dict[str, Any] | None:
        """Return the cached payload, dropping it if expired."""
        key = self._key(text, voice)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._is_expired(entry, self.clock()):
            del self._entries[key]
            return None

        return entry.payload

    def put(self, text: str, voice: str, payload: dict[str, Any]) -> bool:
        """
        Store a payload for a cacheable phrase.

        Returns:
            True if stored, False for phrases that are not cacheable
        """
        if not self.is_cacheable(text):
            return False

        key = self._key(text, voice)
        if key not in self._entries and len(self._entries) >= self.max_entries:
            oldest_key, _ = self._entries.popitem(last=False)
            logger.debug(f"Media cache full, evicted {oldest_key}")

        self._entries[key] = CachedMedia(text=text, voice=voice, payload=payload, created_at=self.clock())
        self._entries.move_to_end(key)
        return True

    def cleanup_expired(self) -> int:
        """Remove expired entries and return how many were removed."""
        now = self.clock()
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info(f"Removed {len(expired)} expired media cache entries")
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> dict[str, Any]:
        now = self.clock()
        return {
            "total_cached": len(self._entries),
            "expired_count": sum(1 for entry in self._entries.values() if self._is_expired(entry, now)),
            "max_size": self.max_entries,
            "expiry_hours": self.ttl_seconds / 3600,
        }

    def __len__(self) -> int:
        return len(self._entries)
