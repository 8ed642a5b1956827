"""Business logic services."""

from prompt_refiner_api.services.prompt_refinement_service import (
    PromptRefinementService,
    ProviderUnavailableError,
    QuestionNotFoundError,
    SessionStats,
)
from prompt_refiner_api.services.session_sweeper import SessionSweeper

__all__ = [
    "PromptRefinementService",
    "ProviderUnavailableError",
    "QuestionNotFoundError",
    "SessionStats",
    "SessionSweeper",
]
