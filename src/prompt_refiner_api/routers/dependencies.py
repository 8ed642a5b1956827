"""FastAPI dependencies resolving the application's shared components."""

from fastapi import HTTPException, Request

from prompt_refiner_api.providers.registry import ProviderRegistry
from prompt_refiner_api.services.prompt_refinement_service import PromptRefinementService


def get_refinement_service(request: Request) -> PromptRefinementService:
    """Get the prompt refinement service built by ``create_app``."""
    return request.app.state.refinement_service  # type: ignore[no-any-return]


def get_provider_registry(request: Request) -> ProviderRegistry:
    """Get the provider registry built by ``create_app``."""
    return request.app.state.provider_registry  # type: ignore[no-any-return]


def http_error(status_code: int, code: str, message: str) -> HTTPException:
    """Build an HTTPException with a ``{code, message}`` detail body."""
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})
