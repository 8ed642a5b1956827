"""Repositories for refinement session storage."""

from prompt_refiner_api.repositories.refinement_session_repository import (
    InMemorySessionRepository,
    RefinementSessionNotFoundError,
    SessionRepository,
)

__all__ = [
    "InMemorySessionRepository",
    "RefinementSessionNotFoundError",
    "SessionRepository",
]
