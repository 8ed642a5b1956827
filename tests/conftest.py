"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from prompt_refiner_api.core.config import Settings
from prompt_refiner_api.main import create_app
from prompt_refiner_api.providers.registry import ProviderRegistry
from prompt_refiner_api.repositories.refinement_session_repository import (
    InMemorySessionRepository,
)
from prompt_refiner_api.services.prompt_refinement_service import PromptRefinementService
from tests.fakes import FakeClock, FakeProvider

# ============================================================================
# Domain fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def registry(fake_provider: FakeProvider) -> ProviderRegistry:
    registry = ProviderRegistry(default_provider_id="fake")
    registry.register(fake_provider)
    return registry


@pytest.fixture
def repository(clock: FakeClock) -> InMemorySessionRepository:
    return InMemorySessionRepository(clock=clock)


@pytest.fixture
def service(
    registry: ProviderRegistry,
    repository: InMemorySessionRepository,
    clock: FakeClock,
) -> PromptRefinementService:
    return PromptRefinementService(
        registry=registry,
        repository=repository,
        max_questions=10,
        session_ttl=timedelta(hours=24),
        clock=clock,
    )


# ============================================================================
# FastAPI test client
# ============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        openai_api_key=None,
        anthropic_api_key=None,
        groq_api_key=None,
        default_llm_provider="fake",
    )


@pytest.fixture
def app(
    test_settings: Settings,
    registry: ProviderRegistry,
    repository: InMemorySessionRepository,
) -> FastAPI:
    """Create an application wired to the fake provider."""
    return create_app(settings=test_settings, registry=registry, repository=repository)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client."""
    with TestClient(app) as test_client:
        yield test_client
