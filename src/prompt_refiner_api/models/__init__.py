"""Domain models for prompt refinement sessions."""

from prompt_refiner_api.models.answer import NOT_ANSWERED, Answer
from prompt_refiner_api.models.question import (
    DEFAULT_OPTION_INDEX,
    DEFAULT_OPTIONS,
    OPTIONS_PER_QUESTION,
    QUESTION_CATEGORIES,
    QUESTION_IMPACTS,
    Question,
    QuestionCategory,
    QuestionImpact,
)
from prompt_refiner_api.models.refinement_session import (
    RefinementSession,
    SessionStatus,
)

__all__ = [
    "Answer",
    "DEFAULT_OPTION_INDEX",
    "DEFAULT_OPTIONS",
    "NOT_ANSWERED",
    "OPTIONS_PER_QUESTION",
    "QUESTION_CATEGORIES",
    "QUESTION_IMPACTS",
    "Question",
    "QuestionCategory",
    "QuestionImpact",
    "RefinementSession",
    "SessionStatus",
]
