"""
Response Analyzer - heuristic entity extraction from candidate answers.

Pulls technologies, projects, companies, challenge and outcome words,
timeframes and key sentences out of free text so the interviewer can ask
follow-ups about what the candidate actually said.

Extraction is pattern based, deterministic and never raises. The
extractor is a strategy object so a smarter implementation (NER, an LLM)
can be swapped in behind the same `extract()` method.
"""

import re
from typing import Iterable, Protocol

from voiceinterview.models.conversation import ExtractedMentions


# ============================================================================
# VOCABULARY
# ============================================================================

TECH_KEYWORDS: list[str] = [
    "react", "vue", "angular", "javascript", "typescript", "python", "java",
    "node", "express", "django", "flask", "spring", "docker", "kubernetes",
    "aws", "azure", "mongodb", "postgresql", "mysql", "redis",
    "elasticsearch", "graphql", "rest api", "microservices",
]

CHALLENGE_KEYWORDS: list[str] = [
    "challenge", "problem", "difficult", "issue", "bug", "error",
    "struggle", "hard", "complex",
]

OUTCOME_KEYWORDS: list[str] = [
    "solved", "fixed", "improved", "increased", "reduced", "successful",
    "achieved", "delivered",
]

_PROJECT_PATTERN = re.compile(
    r"\b(?:built|created|developed|worked on|project was)\s+"
    r"(?:an?\s+|the\s+)?"
    r"(?P<phrase>[^,.!?;]+?)"
    r"(?=\s+(?:using|with|for|that)\b|[,.!?;]|$)",
    re.IGNORECASE,
)

_COMPANY_PATTERN = re.compile(
    r"\b(?:[Aa]t|[Ff]or|[Ww]ith)\s+"
    r"(?P<name>[A-Z][\w&-]*(?:\s+[A-Z][\w&-]*)*)"
)

_COMPANY_STOP_WORDS = {"we", "where", "i", "the"}

_TIMEFRAME_PATTERN = re.compile(r"\b\d+\s+(?:years?|months?|weeks?)\b", re.IGNORECASE)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")

_WORD_PATTERN = re.compile(r"[A-Za-z]+")

MIN_PROJECT_LENGTH = 4
MIN_COMPANY_LENGTH = 3
MIN_DETAIL_LENGTH = 16
MAX_KEY_DETAILS = 3


class MentionExtractor(Protocol):
    """Strategy for turning an answer into structured mentions."""

    def extract(self, text: str | None) -> ExtractedMentions:
        ...


class PatternMentionExtractor:
    """
    Keyword and regular-expression based extractor.

    Args:
        resume_skills: Candidate skills matched as technologies in addition
            to the static vocabulary
    """

    def __init__(self, resume_skills: Iterable[str] | None = None):
        self.resume_skills = [skill for skill in (resume_skills or []) if skill and skill.strip()]

    def extract(self, text: str | None) -> ExtractedMentions:
        """
        Extract all mention categories from an answer.

        Args:
            text: Candidate answer (may be empty or None)

        Returns:
            ExtractedMentions with every list empty for blank input
        """
        if not text or not text.strip():
            return ExtractedMentions()

        return ExtractedMentions(
            technologies=self._technologies(text),
            projects=self._projects(text),
            companies=self._companies(text),
            challenges=self._keyword_words(text, CHALLENGE_KEYWORDS),
            outcomes=self._keyword_words(text, OUTCOME_KEYWORDS),
            timeframes=_TIMEFRAME_PATTERN.findall(text),
            key_details=self._key_details(text),
        )

    # =========================================================================
    # CATEGORY RULES
    # =========================================================================

    def _technologies(self, text: str) -> list[str]:
        lowered = text.lower()
        found = []
        for keyword in TECH_KEYWORDS + self.resume_skills:
            if keyword.lower() in lowered:
                found.append(keyword)
        return found

    def _projects(self, text: str) -> list[str]:
        projects = []
        for match in _PROJECT_PATTERN.finditer(text):
            phrase = match.group("phrase").strip()
            if len(phrase) >= MIN_PROJECT_LENGTH:
                projects.append(phrase)
        return projects

    def _companies(self, text: str) -> list[str]:
        companies = []
        for match in _COMPANY_PATTERN.finditer(text):
            name = match.group("name").strip().rstrip(".,;:!?&-")
            if len(name) < MIN_COMPANY_LENGTH or name.lower() in _COMPANY_STOP_WORDS:
                continue
            companies.append(name)
        return companies

    def _keyword_words(self, text: str, keywords: list[str]) -> list[str]:
        """
        Record, once per keyword, the first word of the answer containing it.

        The keyword's trailing "e" is dropped before matching so inflections
        such as "challenging" or "issues" are caught.
        """
        words = _WORD_PATTERN.findall(text)
        found = []
        for keyword in keywords:
            stem = keyword[:-1] if keyword.endswith("e") else keyword
            for word in words:
                if stem in word.lower():
                    found.append(word.lower())
                    break
        return found

    def _key_details(self, text: str) -> list[str]:
        sentences = (sentence.strip() for sentence in _SENTENCE_SPLIT.split(text))
        details = [sentence for sentence in sentences if len(sentence) >= MIN_DETAIL_LENGTH]
        return details[:MAX_KEY_DETAILS]


def extract_mentions(answer_text: str | None, resume_skills: Iterable[str] | None = None) -> ExtractedMentions:
    """Extract mentions with the default pattern extractor."""
    return PatternMentionExtractor(resume_skills).extract(answer_text)
