"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_refiner_api import __version__
from prompt_refiner_api.core.config import Settings, get_settings
from prompt_refiner_api.core.logging import configure_logging
from prompt_refiner_api.providers.registry import ProviderRegistry
from prompt_refiner_api.repositories.refinement_session_repository import (
    InMemorySessionRepository,
    SessionRepository,
)
from prompt_refiner_api.routers import prompts_router, providers_router, questions_router
from prompt_refiner_api.services.prompt_refinement_service import PromptRefinementService
from prompt_refiner_api.services.session_sweeper import SessionSweeper

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop the expired-session sweeper."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    logger.info(
        "Starting Prompt Refinement API %s (providers: %s)",
        __version__,
        ", ".join(app.state.provider_registry.provider_ids()) or "none",
    )

    sweeper: SessionSweeper = app.state.session_sweeper
    sweeper.start()
    yield
    await sweeper.stop()
    logger.info("Prompt Refinement API stopped")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as 400 with a readable message."""
    problems = [
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "code": "VALIDATION_ERROR",
                "message": "; ".join(problems) or "Invalid request",
            }
        },
    )


def create_app(
    settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
    repository: SessionRepository | None = None,
) -> FastAPI:
    """Build the application and its shared components.

    Args:
        settings: Application settings. Defaults to the environment.
        registry: Provider registry. Defaults to one built from ``settings``.
        repository: Session storage. Defaults to an in-memory repository.

    Returns:
        The configured FastAPI application.
    """
    settings = settings or get_settings()
    if registry is None:
        registry = ProviderRegistry.from_settings(settings)
    if repository is None:
        repository = InMemorySessionRepository()

    app = FastAPI(
        title="Prompt Refinement API",
        description="Refine prompts through LLM-generated clarifying questions",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.provider_registry = registry
    app.state.session_repository = repository
    app.state.refinement_service = PromptRefinementService(
        registry=registry,
        repository=repository,
        max_questions=settings.max_questions_per_session,
        session_ttl=timedelta(hours=settings.session_timeout_hours),
        use_fallback_questions=settings.use_fallback_questions,
    )
    app.state.session_sweeper = SessionSweeper(
        repository, interval_seconds=settings.session_cleanup_interval_minutes * 60
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

    # Register routers
    app.include_router(prompts_router, prefix=f"{API_PREFIX}/prompts", tags=["prompts"])
    app.include_router(questions_router, prefix=f"{API_PREFIX}/questions", tags=["questions"])
    app.include_router(providers_router, prefix=f"{API_PREFIX}/providers", tags=["providers"])

    @app.get("/health")
    async def health_check() -> dict[str, str | list[str]]:
        """Health check endpoint with provider status."""
        providers = registry.provider_ids()
        return {
            "status": "healthy" if providers else "degraded",
            "version": __version__,
            "providers": providers,
        }

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Prompt Refinement API", "version": __version__}

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "prompt_refiner_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
