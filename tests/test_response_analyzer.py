from voiceinterview.core.response_analyzer import (
    MAX_KEY_DETAILS,
    PatternMentionExtractor,
    extract_mentions,
)
from voiceinterview.models.conversation import ExtractedMentions


DASHBOARD_ANSWER = (
    "I built a React dashboard at Acme Corp using Node.js, it was challenging "
    "because of performance issues, but we solved it."
)


def test_extracts_every_category_from_a_rich_answer() -> None:
    mentions = extract_mentions(DASHBOARD_ANSWER, ["React", "Node.js"])

    assert {"react", "node"} <= set(mentions.technologies)
    assert {"React", "Node.js"} <= set(mentions.technologies)
    assert mentions.companies == ["Acme Corp"]
    assert "challenging" in mentions.challenges
    assert "issues" in mentions.challenges
    assert mentions.outcomes == ["solved"]
    assert mentions.projects == ["React dashboard at Acme Corp"]


def test_blank_or_missing_answer_yields_empty_mentions() -> None:
    extractor = PatternMentionExtractor(["Python"])

    assert extractor.extract("") == ExtractedMentions()
    assert extractor.extract("   \n ") == ExtractedMentions()
    assert extractor.extract(None) == ExtractedMentions()


def test_resume_skills_are_matched_case_insensitively() -> None:
    mentions = extract_mentions("Mostly terraform and some kafka lately", ["Terraform", "Kafka", "  "])

    assert mentions.technologies == ["Terraform", "Kafka"]


def test_timeframes() -> None:
    mentions = extract_mentions("I spent 3 years at Globex and 6 months on a side project.")

    assert mentions.timeframes == ["3 years", "6 months"]
    assert mentions.companies == ["Globex"]


def test_company_stop_words_and_short_names_are_dropped() -> None:
    mentions = extract_mentions("I worked with The team for AB on weekends.")

    assert mentions.companies == []


def test_short_project_phrases_are_dropped() -> None:
    mentions = extract_mentions("I built it. Then we developed a payments service that scaled.")

    assert mentions.projects == ["payments service"]


def test_key_details_keep_long_sentences_only() -> None:
    text = (
        "Short one. This sentence is definitely long enough. Another long sentence goes here! "
        "A fourth sentence that is also long. ok?"
    )

    details = extract_mentions(text).key_details

    assert details == [
        "This sentence is definitely long enough",
        "Another long sentence goes here",
        "A fourth sentence that is also long",
    ][:MAX_KEY_DETAILS]
    assert "Short one" not in details


def test_punctuation_only_input_does_not_raise() -> None:
    for text in ("!!!???", "{}[]()", "...", "@#$%^&*"):
        mentions = extract_mentions(text)
        assert mentions.technologies == []
        assert mentions.projects == []


def test_extraction_is_deterministic() -> None:
    inputs = [
        DASHBOARD_ANSWER,
        "I spent 3 years at Globex and 6 months on a side project.",
        "!!!???",
        "{\"unterminated\": [",
        "at at at with for The",
        "",
    ]

    for text in inputs:
        assert extract_mentions(text, ["React"]) == extract_mentions(text, ["React"])
