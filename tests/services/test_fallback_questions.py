"""Tests for the fallback question set."""

from prompt_refiner_api.services.fallback_questions import (
    FALLBACK_QUESTIONS,
    build_fallback_questions,
)


def test_build_fallback_questions_respects_limit() -> None:
    questions = build_fallback_questions(3)

    assert [q.text for q in questions] == [q["text"] for q in FALLBACK_QUESTIONS[:3]]
    assert [q.order for q in questions] == [0, 1, 2]


def test_build_fallback_questions_uses_whole_set_when_limit_is_larger() -> None:
    questions = build_fallback_questions(10)

    assert len(questions) == len(FALLBACK_QUESTIONS)
    for question in questions:
        assert len(question.options) == 3
        assert question.default_option == 1


def test_fallback_questions_get_fresh_ids() -> None:
    """Test that each build yields new question ids."""
    first = {q.id for q in build_fallback_questions(5)}
    second = {q.id for q in build_fallback_questions(5)}

    assert len(first) == 5
    assert first.isdisjoint(second)
