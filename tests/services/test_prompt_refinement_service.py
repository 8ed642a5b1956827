"""Tests for PromptRefinementService."""

from datetime import timedelta

import pytest

from prompt_refiner_api.models.answer import Answer
from prompt_refiner_api.providers.base import (
    GenerationParseError,
    QuestionGenerationError,
    RefinementError,
)
from prompt_refiner_api.providers.prompts import format_transcript
from prompt_refiner_api.providers.registry import ProviderRegistry
from prompt_refiner_api.repositories.refinement_session_repository import (
    InMemorySessionRepository,
    RefinementSessionNotFoundError,
)
from prompt_refiner_api.services.prompt_refinement_service import (
    PromptRefinementService,
    ProviderUnavailableError,
    QuestionNotFoundError,
)
from tests.fakes import FakeClock, FakeProvider, make_raw_questions

PROMPT = "Write a blog post about AI"


class TestCreateSession:
    """Tests for session creation."""

    def test_create_session_happy_path(
        self,
        service: PromptRefinementService,
        repository: InMemorySessionRepository,
        fake_provider: FakeProvider,
        clock: FakeClock,
    ) -> None:
        """Test the session is stored as refining with its generated questions."""
        fake_provider.question_batches = [make_raw_questions(6)]

        session, questions = service.create_session(PROMPT, "fake", model="fake-large")

        assert session.status == "refining"
        assert session.original_prompt == PROMPT
        assert session.llm_provider == "fake"
        assert session.model == "fake-large"
        assert session.refined_prompt == ""
        assert session.expires_at == clock.now + timedelta(hours=24)
        assert len(questions) == 6
        assert all(len(q.options) == 3 and q.default_option in (0, 1, 2) for q in questions)
        assert [q.id for q in session.questions] == [q.id for q in questions]

        stored = repository.get(session.id)
        assert stored.status == "refining"
        assert len(stored.questions) == 6

    def test_create_session_generation_call(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        service.create_session(PROMPT, "fake", model="fake-large")

        call = fake_provider.generate_calls[0]
        assert call.prompt == PROMPT
        assert call.model == "fake-large"
        assert call.max_questions == 10
        assert call.temperature == 0.7

    def test_unavailable_provider_creates_no_session(
        self,
        service: PromptRefinementService,
        repository: InMemorySessionRepository,
    ) -> None:
        """Test that an unknown provider fails before any session is stored."""
        with pytest.raises(ProviderUnavailableError) as exc_info:
            service.create_session(PROMPT, "nonexistent")

        assert exc_info.value.provider_id == "nonexistent"
        assert "nonexistent" in str(exc_info.value)
        assert repository.count() == 0

    def test_generation_failure_creates_no_session(
        self,
        service: PromptRefinementService,
        repository: InMemorySessionRepository,
        fake_provider: FakeProvider,
    ) -> None:
        fake_provider.generation_error = QuestionGenerationError(
            "Rate limit exceeded", provider="fake", model="fake-small"
        )

        with pytest.raises(QuestionGenerationError):
            service.create_session(PROMPT, "fake")

        assert repository.count() == 0


class TestGenerateQuestions:
    """Tests for standalone question generation."""

    def test_requested_limit_below_ceiling_wins(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        fake_provider.question_batches = [make_raw_questions(8)]

        questions = service.generate_questions(PROMPT, "fake", max_questions=3)

        assert len(questions) == 3
        assert fake_provider.generate_calls[0].max_questions == 3

    def test_requested_limit_is_capped_by_ceiling(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        service.generate_questions(PROMPT, "fake", max_questions=15)

        assert fake_provider.generate_calls[0].max_questions == 10

    def test_unavailable_provider(self, service: PromptRefinementService) -> None:
        with pytest.raises(ProviderUnavailableError):
            service.generate_questions(PROMPT, "openai")

    def test_parse_errors_propagate_by_default(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        fake_provider.generation_error = GenerationParseError(
            "unparseable", provider="fake", model="fake-small"
        )

        with pytest.raises(GenerationParseError):
            service.generate_questions(PROMPT, "fake")

    def test_fallback_questions_replace_parse_errors_when_enabled(
        self,
        registry: ProviderRegistry,
        repository: InMemorySessionRepository,
        fake_provider: FakeProvider,
    ) -> None:
        """Test the opt-in fallback question set."""
        service = PromptRefinementService(
            registry, repository, max_questions=4, use_fallback_questions=True
        )
        fake_provider.generation_error = GenerationParseError(
            "unparseable", provider="fake", model="fake-small"
        )

        questions = service.generate_questions(PROMPT, "fake")

        assert len(questions) == 4
        assert questions[0].text == "What level of detail do you want in the response?"
        assert all(len(q.options) == 3 and q.default_option == 1 for q in questions)

    def test_fallback_does_not_hide_vendor_failures(
        self,
        registry: ProviderRegistry,
        repository: InMemorySessionRepository,
        fake_provider: FakeProvider,
    ) -> None:
        service = PromptRefinementService(registry, repository, use_fallback_questions=True)
        fake_provider.generation_error = QuestionGenerationError(
            "Authentication failed", provider="fake", model="fake-small"
        )

        with pytest.raises(QuestionGenerationError):
            service.generate_questions(PROMPT, "fake")


class TestAnswerQuestion:
    """Tests for recording answers."""

    def test_answer_is_recorded(
        self, service: PromptRefinementService, repository: InMemorySessionRepository
    ) -> None:
        session, questions = service.create_session(PROMPT, "fake")

        answer = service.answer_question(session.id, questions[0].id, "Detailed")

        assert answer.question_id == questions[0].id
        assert answer.response == "Detailed"
        stored = repository.get(session.id)
        assert [(a.question_id, a.response) for a in stored.answers] == [
            (questions[0].id, "Detailed")
        ]

    def test_repeated_answers_keep_one_entry_per_question(
        self, service: PromptRefinementService, repository: InMemorySessionRepository
    ) -> None:
        """Test that the last answer to a question replaces earlier ones."""
        session, questions = service.create_session(PROMPT, "fake")

        service.answer_question(session.id, questions[0].id, True)
        service.answer_question(session.id, questions[1].id, "Medium")
        service.answer_question(session.id, questions[0].id, False)

        stored = repository.get(session.id)
        assert len(stored.answers) == 2
        assert {a.question_id: a.response for a in stored.answers} == {
            questions[0].id: False,
            questions[1].id: "Medium",
        }

    def test_same_answer_twice_is_idempotent(
        self, service: PromptRefinementService, repository: InMemorySessionRepository
    ) -> None:
        session, questions = service.create_session(PROMPT, "fake")

        service.answer_question(session.id, questions[0].id, "High")
        first = [(a.question_id, a.response) for a in repository.get(session.id).answers]
        service.answer_question(session.id, questions[0].id, "High")
        second = [(a.question_id, a.response) for a in repository.get(session.id).answers]

        assert first == second

    def test_unknown_session(self, service: PromptRefinementService) -> None:
        with pytest.raises(RefinementSessionNotFoundError):
            service.answer_question("missing", "q1", True)

    def test_unknown_question(self, service: PromptRefinementService) -> None:
        session, _ = service.create_session(PROMPT, "fake")

        with pytest.raises(QuestionNotFoundError):
            service.answer_question(session.id, "not-a-question", True)

    def test_expired_session(
        self, service: PromptRefinementService, clock: FakeClock
    ) -> None:
        """Test that an expired session behaves as if it never existed."""
        session, questions = service.create_session(PROMPT, "fake")
        clock.advance(timedelta(hours=24, seconds=1))

        with pytest.raises(RefinementSessionNotFoundError):
            service.answer_question(session.id, questions[0].id, True)
        with pytest.raises(RefinementSessionNotFoundError):
            service.get_session(session.id)


class TestRefinePrompt:
    """Tests for the refine-and-regenerate cycle."""

    def test_refine_happy_path(
        self,
        service: PromptRefinementService,
        repository: InMemorySessionRepository,
        fake_provider: FakeProvider,
    ) -> None:
        """Test refinement replaces the question set and stores the refined prompt."""
        fake_provider.question_batches = [
            make_raw_questions(5, prefix="Initial"),
            make_raw_questions(6, prefix="Follow-up"),
        ]
        session, questions = service.create_session(PROMPT, "fake")
        answers = [Answer(question_id=q.id, response="Medium") for q in questions]

        refined, updated = service.refine_prompt(session.id, answers, "fake")

        assert refined == "A refined, more specific prompt"
        assert refined != PROMPT
        assert updated.refined_prompt == refined
        assert updated.status == "refining"
        assert len(updated.questions) == 6
        assert all(q.text.startswith("Follow-up") for q in updated.questions)
        assert {q.id for q in updated.questions}.isdisjoint({q.id for q in questions})
        assert len(updated.answers) == 5

        stored = repository.get(session.id)
        assert stored.refined_prompt == refined
        assert [q.id for q in stored.questions] == [q.id for q in updated.questions]

    def test_refine_uses_original_prompt_and_previous_questions(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        session, questions = service.create_session(PROMPT, "fake")
        answers = [Answer(question_id=questions[0].id, response=True)]

        service.refine_prompt(session.id, answers, "fake", model="fake-large")

        refine_call = fake_provider.refine_calls[0]
        assert refine_call.original_prompt == PROMPT
        assert [q.id for q in refine_call.questions] == [q.id for q in questions]
        assert refine_call.temperature == 0.3
        assert refine_call.model == "fake-large"
        regenerate_call = fake_provider.generate_calls[-1]
        assert regenerate_call.prompt == "A refined, more specific prompt"
        assert regenerate_call.temperature == 0.7

    def test_second_refine_still_starts_from_original_prompt(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        session, _ = service.create_session(PROMPT, "fake")
        service.refine_prompt(session.id, [], "fake")
        fake_provider.refined_prompt = "An even more refined prompt"

        refined, updated = service.refine_prompt(session.id, [], "fake")

        assert fake_provider.refine_calls[1].original_prompt == PROMPT
        assert refined == "An even more refined prompt"
        assert updated.refined_prompt == refined

    def test_partial_answers_render_not_answered(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        """Test refining with 2 of 6 answers marks the rest as Not answered."""
        fake_provider.question_batches = [make_raw_questions(6)]
        session, questions = service.create_session(PROMPT, "fake")
        answers = [
            Answer(question_id=questions[0].id, response="Low"),
            Answer(question_id=questions[3].id, response=True),
        ]

        refined, _ = service.refine_prompt(session.id, answers, "fake")

        assert refined
        call = fake_provider.refine_calls[0]
        transcript = format_transcript(call.questions, call.answers)
        assert transcript.count("A: Not answered") == 4
        assert "A: Low" in transcript
        assert "A: Yes" in transcript

    def test_submitted_answers_replace_recorded_answers(
        self, service: PromptRefinementService, fake_provider: FakeProvider
    ) -> None:
        session, questions = service.create_session(PROMPT, "fake")
        service.answer_question(session.id, questions[0].id, "Recorded")
        submitted = [
            Answer(question_id=questions[1].id, response="First"),
            Answer(question_id=questions[1].id, response="Second"),
        ]

        _, updated = service.refine_prompt(session.id, submitted, "fake")

        assert [(a.question_id, a.response) for a in updated.answers] == [
            (questions[1].id, "Second")
        ]

    def test_refine_records_provider_of_the_call(
        self,
        service: PromptRefinementService,
        registry: ProviderRegistry,
    ) -> None:
        other = FakeProvider("other")
        registry.register(other)
        session, _ = service.create_session(PROMPT, "fake")

        _, updated = service.refine_prompt(session.id, [], "other", model="fake-large")

        assert updated.llm_provider == "other"
        assert updated.model == "fake-large"
        assert len(other.refine_calls) == 1

    def test_refinement_error_propagates_and_session_is_unchanged(
        self,
        service: PromptRefinementService,
        repository: InMemorySessionRepository,
        fake_provider: FakeProvider,
    ) -> None:
        """Test that a failed refinement leaves the stored session untouched."""
        session, questions = service.create_session(PROMPT, "fake")
        fake_provider.refinement_error = RefinementError(
            "Anthropic service is experiencing issues", provider="fake", model="fake-small"
        )

        with pytest.raises(RefinementError):
            service.refine_prompt(
                session.id, [Answer(question_id=questions[0].id, response=True)], "fake"
            )

        stored = repository.get(session.id)
        assert stored.refined_prompt == ""
        assert stored.answers == []
        assert [q.id for q in stored.questions] == [q.id for q in questions]

    def test_regeneration_failure_leaves_session_unchanged(
        self,
        service: PromptRefinementService,
        repository: InMemorySessionRepository,
        fake_provider: FakeProvider,
    ) -> None:
        session, questions = service.create_session(PROMPT, "fake")
        fake_provider.generation_error = GenerationParseError(
            "unparseable", provider="fake", model="fake-small"
        )

        with pytest.raises(GenerationParseError):
            service.refine_prompt(session.id, [], "fake")

        stored = repository.get(session.id)
        assert stored.refined_prompt == ""
        assert [q.id for q in stored.questions] == [q.id for q in questions]

    def test_unknown_session(self, service: PromptRefinementService) -> None:
        with pytest.raises(RefinementSessionNotFoundError):
            service.refine_prompt("missing", [], "fake")

    def test_unavailable_provider(self, service: PromptRefinementService) -> None:
        session, _ = service.create_session(PROMPT, "fake")

        with pytest.raises(ProviderUnavailableError):
            service.refine_prompt(session.id, [], "nonexistent")


class TestSessionManagement:
    """Tests for reading, deleting and counting sessions."""

    def test_get_session(self, service: PromptRefinementService) -> None:
        session, _ = service.create_session(PROMPT, "fake")

        assert service.get_session(session.id).id == session.id

    def test_delete_session_is_idempotent(self, service: PromptRefinementService) -> None:
        session, _ = service.create_session(PROMPT, "fake")

        service.delete_session(session.id)
        service.delete_session(session.id)

        with pytest.raises(RefinementSessionNotFoundError):
            service.get_session(session.id)

    def test_session_stats(
        self,
        service: PromptRefinementService,
        repository: InMemorySessionRepository,
        clock: FakeClock,
    ) -> None:
        first, _ = service.create_session(PROMPT, "fake")
        service.create_session(PROMPT, "fake")
        completed = repository.get(first.id)
        completed.status = "completed"
        repository.update(completed)

        stats = service.get_session_stats()

        assert stats.total_sessions == 2
        assert stats.active_sessions == 1
        assert stats.completed_sessions == 1

        clock.advance(timedelta(hours=25))

        stats = service.get_session_stats()
        assert stats.total_sessions == 0
        assert stats.active_sessions == 0
