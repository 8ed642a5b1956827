"""PromptRefinementService for orchestrating question generation and refinement."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from prompt_refiner_api.models.answer import Answer
from prompt_refiner_api.models.question import Question
from prompt_refiner_api.models.refinement_session import RefinementSession
from prompt_refiner_api.providers.base import (
    DEFAULT_GENERATION_TEMPERATURE,
    DEFAULT_REFINEMENT_TEMPERATURE,
    GenerationParseError,
    LLMProvider,
)
from prompt_refiner_api.providers.registry import ProviderRegistry
from prompt_refiner_api.repositories.refinement_session_repository import (
    Clock,
    SessionRepository,
    utc_now,
)
from prompt_refiner_api.services.fallback_questions import build_fallback_questions

logger = logging.getLogger(__name__)


class ProviderUnavailableError(Exception):
    """Raised when a request names a provider that is not registered."""

    def __init__(self, provider_id: str) -> None:
        super().__init__(f"LLM provider '{provider_id}' is not available")
        self.provider_id = provider_id


class QuestionNotFoundError(Exception):
    """Raised when an answer references a question not in the session."""

    pass


@dataclass
class SessionStats:
    """Counts of stored sessions."""

    total_sessions: int
    active_sessions: int
    completed_sessions: int


class PromptRefinementService:
    """Drives refinement sessions through generate, answer and refine cycles.

    The service holds no session state of its own: every operation loads the
    session from the repository, works on that copy, and writes it back only
    once all provider calls for the operation have succeeded. Concurrent
    refinements of one session are last-write-wins.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        repository: SessionRepository,
        max_questions: int = 10,
        session_ttl: timedelta = timedelta(hours=24),
        use_fallback_questions: bool = False,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the service.

        Args:
            registry: Registered LLM providers.
            repository: Session storage.
            max_questions: Upper bound on questions requested per generation.
            session_ttl: Lifetime of a new session.
            use_fallback_questions: Substitute a generic question set when a
                provider response cannot be parsed.
            clock: Returns the current time. Replaced in tests.
        """
        self._registry = registry
        self._repository = repository
        self._max_questions = max_questions
        self._session_ttl = session_ttl
        self._use_fallback_questions = use_fallback_questions
        self._clock = clock

    def _require_provider(self, provider_id: str) -> LLMProvider:
        provider = self._registry.get_provider(provider_id)
        if provider is None:
            logger.warning("Requested provider '%s' is not registered", provider_id)
            raise ProviderUnavailableError(provider_id)
        return provider

    def create_session(
        self, original_prompt: str, provider_id: str, model: str | None = None
    ) -> tuple[RefinementSession, list[Question]]:
        """Start a session and generate its first questions.

        Args:
            original_prompt: The prompt to refine.
            provider_id: Provider to generate questions with.
            model: Optional model for the provider.

        Returns:
            Tuple of (stored session, generated questions).

        Raises:
            ProviderUnavailableError: If the provider is not registered.
            QuestionGenerationError: If question generation fails. No session
                is stored in that case.
        """
        self._require_provider(provider_id)

        session = RefinementSession.start(
            original_prompt=original_prompt,
            llm_provider=provider_id,
            model=model,
            ttl=self._session_ttl,
            now=self._clock(),
        )
        questions = self.generate_questions(original_prompt, provider_id, model)

        session.questions = questions
        session.status = "refining"
        stored = self._repository.add(session)
        logger.info(
            "Created session %s with %d questions via %s", stored.id, len(questions), provider_id
        )
        return stored, questions

    def get_session(self, session_id: str) -> RefinementSession:
        """Load a live session.

        Raises:
            RefinementSessionNotFoundError: If missing or expired.
        """
        return self._repository.get(session_id)

    def generate_questions(
        self,
        prompt: str,
        provider_id: str,
        model: str | None = None,
        max_questions: int | None = None,
    ) -> list[Question]:
        """Generate questions for a prompt without touching any session.

        A requested ``max_questions`` above the configured ceiling is capped.

        Raises:
            ProviderUnavailableError: If the provider is not registered.
            QuestionGenerationError: If the provider call or parsing fails.
        """
        provider = self._require_provider(provider_id)
        limit = self._max_questions
        if max_questions is not None:
            limit = min(max_questions, self._max_questions)

        try:
            return provider.generate_questions(
                prompt,
                model=model,
                max_questions=limit,
                temperature=DEFAULT_GENERATION_TEMPERATURE,
            )
        except GenerationParseError as e:
            if not self._use_fallback_questions:
                raise
            logger.warning(
                "Using fallback questions after unparseable %s (%s) response: %s",
                e.provider,
                e.model,
                e,
            )
            return build_fallback_questions(limit)

    def answer_question(
        self, session_id: str, question_id: str, response: bool | str
    ) -> Answer:
        """Record or replace the answer to one question.

        Raises:
            RefinementSessionNotFoundError: If the session is missing or expired.
            QuestionNotFoundError: If the question is not in the session.
        """
        session = self._repository.get(session_id)
        if session.find_question(question_id) is None:
            raise QuestionNotFoundError(
                f"Question {question_id} not found in session {session_id}"
            )

        answer = Answer(question_id=question_id, response=response, timestamp=self._clock())
        session.upsert_answer(answer)
        self._repository.update(session)
        logger.debug("Recorded answer to %s in session %s", question_id, session_id)
        return answer

    def refine_prompt(
        self,
        session_id: str,
        answers: list[Answer],
        provider_id: str,
        model: str | None = None,
    ) -> tuple[str, RefinementSession]:
        """Refine the session's original prompt and regenerate questions.

        The refinement always starts from the original prompt, using the
        questions the answers were given against. The new questions are
        generated from the refined prompt. Nothing is stored unless both
        calls succeed.

        Args:
            session_id: Session to refine.
            answers: Full answer set, replacing any recorded answers. Later
                answers to the same question win.
            provider_id: Provider for this refinement cycle.
            model: Optional model for the provider.

        Returns:
            Tuple of (refined prompt, updated session).

        Raises:
            RefinementSessionNotFoundError: If the session is missing or expired.
            ProviderUnavailableError: If the provider is not registered.
            RefinementError: If the refinement call fails.
            QuestionGenerationError: If regenerating questions fails.
        """
        session = self._repository.get(session_id)
        provider = self._require_provider(provider_id)

        session.replace_answers(answers)
        refined_prompt = provider.refine_prompt(
            session.original_prompt,
            session.questions,
            session.answers,
            model=model,
            temperature=DEFAULT_REFINEMENT_TEMPERATURE,
        )
        new_questions = self.generate_questions(refined_prompt, provider_id, model)

        session.refined_prompt = refined_prompt
        session.questions = new_questions
        session.llm_provider = provider_id
        session.model = model
        session.status = "refining"
        updated = self._repository.update(session)
        logger.info(
            "Refined session %s via %s; %d new questions",
            session_id,
            provider_id,
            len(new_questions),
        )
        return refined_prompt, updated

    def delete_session(self, session_id: str) -> None:
        """Remove a session. Deleting an unknown session is a no-op."""
        if self._repository.delete(session_id):
            logger.info("Deleted session %s", session_id)

    def get_session_stats(self) -> SessionStats:
        now = self._clock()
        sessions = self._repository.list_all()
        return SessionStats(
            total_sessions=len(sessions),
            active_sessions=sum(
                1 for s in sessions if s.status == "refining" and not s.is_expired(now)
            ),
            completed_sessions=sum(1 for s in sessions if s.status == "completed"),
        )
