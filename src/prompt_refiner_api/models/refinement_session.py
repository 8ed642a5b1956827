"""RefinementSession model for tracking an in-progress prompt refinement."""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Literal

from prompt_refiner_api.models.answer import Answer
from prompt_refiner_api.models.question import Question

SessionStatus = Literal["draft", "refining", "completed"]


@dataclass
class RefinementSession:
    """Tracks one user's refinement of a prompt.

    The question set is replaced wholesale on every refinement cycle, so
    answers are only meaningful against the questions that existed when they
    were recorded.
    """

    original_prompt: str
    llm_provider: str
    expires_at: datetime
    model: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    refined_prompt: str = ""
    status: SessionStatus = "draft"
    questions: list[Question] = field(default_factory=list)
    answers: list[Answer] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def start(
        cls,
        original_prompt: str,
        llm_provider: str,
        ttl: timedelta,
        model: str | None = None,
        now: datetime | None = None,
    ) -> "RefinementSession":
        """Build a new draft session expiring ``ttl`` after creation.

        Args:
            original_prompt: The user's prompt, fixed for the session lifetime.
            llm_provider: Provider id used for the session's LLM calls.
            ttl: Session lifetime.
            model: Optional model name for the provider.
            now: Creation time (defaults to the current UTC time).

        Returns:
            A new RefinementSession in ``draft`` status.
        """
        created = now or datetime.now(UTC)
        return cls(
            original_prompt=original_prompt,
            llm_provider=llm_provider,
            model=model,
            expires_at=created + ttl,
            created_at=created,
            updated_at=created,
        )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def find_question(self, question_id: str) -> Question | None:
        return next((q for q in self.questions if q.id == question_id), None)

    def upsert_answer(self, answer: Answer) -> None:
        """Record an answer, replacing any earlier answer to the same question."""
        for index, existing in enumerate(self.answers):
            if existing.question_id == answer.question_id:
                self.answers[index] = answer
                return
        self.answers.append(answer)

    def replace_answers(self, answers: list[Answer]) -> None:
        """Replace the whole answer set, keeping the last answer per question."""
        self.answers = []
        for answer in answers:
            self.upsert_answer(answer)

    def __repr__(self) -> str:
        return (
            f"<RefinementSession(id='{self.id}', provider='{self.llm_provider}', "
            f"status='{self.status}', questions={len(self.questions)})>"
        )
