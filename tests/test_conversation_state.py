import random

from voiceinterview.core.conversation_state import (
    CHALLENGE_ACKNOWLEDGMENTS,
    GENERIC_ACKNOWLEDGMENTS,
    PROJECT_ACKNOWLEDGMENTS,
    TECH_ACKNOWLEDGMENTS,
    ConversationStateTracker,
)
from voiceinterview.models.conversation import ConversationPhase, CoreTopic, FollowUpType


def _tracker(**kwargs) -> ConversationStateTracker:
    kwargs.setdefault("rng", random.Random(7))
    return ConversationStateTracker(**kwargs)


def test_first_topic_is_initial_then_transitions() -> None:
    tracker = _tracker()

    tracker.reset_topic(CoreTopic.TECHNICAL_EXPERIENCE)
    assert tracker.state.phase == ConversationPhase.INITIAL

    tracker.record_follow_up()
    tracker.reset_topic(CoreTopic.PROJECT_DEEP_DIVE)
    state = tracker.state

    assert state.phase == ConversationPhase.TRANSITION
    assert state.current_topic == CoreTopic.PROJECT_DEEP_DIVE
    assert state.topic_depth == 0
    assert state.follow_up_count == 0
    assert state.total_topics_covered == [CoreTopic.TECHNICAL_EXPERIENCE, CoreTopic.PROJECT_DEEP_DIVE]


def test_reset_to_covered_topic_does_not_duplicate() -> None:
    tracker = _tracker()

    tracker.reset_topic(CoreTopic.PROBLEM_SOLVING)
    tracker.reset_topic(CoreTopic.PROBLEM_SOLVING)

    assert tracker.state.total_topics_covered == [CoreTopic.PROBLEM_SOLVING]


def test_follow_up_counters_are_capped() -> None:
    tracker = _tracker(max_follow_ups=3, max_topic_depth=3)

    for _ in range(5):
        tracker.record_follow_up()

    state = tracker.state
    assert state.phase == ConversationPhase.FOLLOW_UP
    assert state.follow_up_count == 3
    assert state.topic_depth == 3
    assert tracker.should_transition_topic() is True


def test_no_follow_up_once_limit_reached() -> None:
    tracker = _tracker(max_follow_ups=2, max_topic_depth=5)

    assert tracker.analyze_response("Yes").should_follow_up is True
    tracker.record_follow_up()
    tracker.record_follow_up()

    assert tracker.analyze_response("Yes").should_follow_up is False
    assert tracker.should_transition_topic() is True


def test_follow_up_type_follows_depth() -> None:
    tracker = _tracker(max_follow_ups=5, max_topic_depth=5)

    assert tracker.analyze_response("I built a scheduler").follow_up_type == FollowUpType.TECHNICAL
    assert tracker.analyze_response("I like my job").follow_up_type == FollowUpType.CLARIFICATION

    tracker.record_follow_up()
    assert tracker.analyze_response("There was a nasty bug in it").follow_up_type == FollowUpType.CHALLENGE
    assert tracker.analyze_response("We shipped it on time").follow_up_type == FollowUpType.EXAMPLE

    tracker.record_follow_up()
    assert tracker.analyze_response("Anything").follow_up_type == FollowUpType.OUTCOME

    tracker.record_follow_up()
    assert tracker.analyze_response("Anything").follow_up_type == FollowUpType.CLARIFICATION


def test_acknowledgment_pool_matches_mentions() -> None:
    tracker = _tracker()

    assert tracker.analyze_response("It was a difficult migration").acknowledgment in CHALLENGE_ACKNOWLEDGMENTS
    assert tracker.analyze_response("Mostly Python and Docker").acknowledgment in TECH_ACKNOWLEDGMENTS
    assert tracker.analyze_response("I created a budgeting app").acknowledgment in PROJECT_ACKNOWLEDGMENTS
    assert tracker.analyze_response("I like cooking").acknowledgment in GENERIC_ACKNOWLEDGMENTS


def test_every_analysis_appends_memory() -> None:
    tracker = _tracker()

    tracker.analyze_response("")
    tracker.reset_topic(CoreTopic.TEAM_COLLABORATION)
    tracker.analyze_response("We paired daily with Docker")

    memory = tracker.state.conversation_memory
    assert len(memory) == 2
    assert memory[0].topic is None
    assert memory[0].topic_label == "introduction"
    assert memory[1].topic == CoreTopic.TEAM_COLLABORATION
    assert memory[1].technologies == ["docker"]


def test_empty_context() -> None:
    context = _tracker().get_conversation_context()

    assert context.startswith("=== CONVERSATION CONTEXT ===")
    assert "No previous discussion yet." in context


def test_context_shows_last_three_entries_oldest_first() -> None:
    tracker = _tracker()
    for answer in ("I used Redis", "I used Django", "I used Flask", "I used Kubernetes at Initech"):
        tracker.analyze_response(answer)

    context = tracker.get_conversation_context()

    assert "redis" not in context
    assert context.index("django") < context.index("flask") < context.index("kubernetes")
    assert "1. Topic: introduction" in context
    assert "3. Topic: introduction" in context
    assert "4. Topic" not in context
    assert "   Companies: Initech" in context


def test_state_snapshot_is_a_copy() -> None:
    tracker = _tracker()
    snapshot = tracker.state
    snapshot.follow_up_count = 99
    snapshot.total_topics_covered.append(CoreTopic.WRAP_UP)

    assert tracker.state.follow_up_count == 0
    assert tracker.state.total_topics_covered == []
