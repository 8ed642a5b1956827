"""FastAPI router for LLM provider discovery and key validation."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from prompt_refiner_api.providers.base import LLMProvider
from prompt_refiner_api.providers.registry import ProviderRegistry
from prompt_refiner_api.routers.dependencies import get_provider_registry, http_error
from prompt_refiner_api.schemas.refinement import (
    ProviderModelsResponse,
    ProviderResponse,
    ProviderStatusResponse,
    ValidateKeyRequest,
    ValidateKeyResponse,
)

router = APIRouter()

Registry = Annotated[ProviderRegistry, Depends(get_provider_registry)]


def _provider_not_found(provider_id: str) -> HTTPException:
    return http_error(
        status.HTTP_404_NOT_FOUND,
        "PROVIDER_NOT_FOUND",
        f"Provider {provider_id} not found or not available",
    )


def _require_provider(registry: ProviderRegistry, provider_id: str) -> LLMProvider:
    provider = registry.get_provider(provider_id)
    if provider is None:
        raise _provider_not_found(provider_id)
    return provider


@router.get("", response_model=list[ProviderResponse])
def list_providers(registry: Registry) -> list[ProviderResponse]:
    """List the providers configured with credentials."""
    return [ProviderResponse.model_validate(d) for d in registry.get_available_providers()]


@router.get("/configs", response_model=list[ProviderResponse])
def list_provider_configs(registry: Registry) -> list[ProviderResponse]:
    """List every supported provider, flagging which are configured."""
    return [
        ProviderResponse.model_validate(d) for d in registry.get_all_provider_descriptors()
    ]


@router.get("/default", response_model=ProviderResponse)
def get_default_provider(registry: Registry) -> ProviderResponse:
    """Get the provider used when a client does not choose one."""
    provider = registry.get_default_provider()
    if provider is None:
        raise http_error(
            status.HTTP_404_NOT_FOUND,
            "NO_DEFAULT_PROVIDER",
            "No providers are configured or available",
        )
    return ProviderResponse.model_validate(provider.describe())


@router.post("/validate-key", response_model=ValidateKeyResponse)
def validate_key(request: ValidateKeyRequest, registry: Registry) -> ValidateKeyResponse:
    """Check an API key against a configured provider.

    Unconfigured providers report the key as invalid.
    """
    is_valid = registry.validate_api_key(request.provider_id, request.api_key)
    return ValidateKeyResponse(provider_id=request.provider_id, is_valid=is_valid)


@router.get("/{provider_id}", response_model=ProviderResponse)
def get_provider(provider_id: str, registry: Registry) -> ProviderResponse:
    """Get a configured provider's details."""
    return ProviderResponse.model_validate(_require_provider(registry, provider_id).describe())


@router.get("/{provider_id}/status", response_model=ProviderStatusResponse)
def get_provider_status(provider_id: str, registry: Registry) -> ProviderStatusResponse:
    return ProviderStatusResponse(
        provider_id=provider_id, is_available=registry.has_provider(provider_id)
    )


@router.get("/{provider_id}/models", response_model=ProviderModelsResponse)
def get_provider_models(provider_id: str, registry: Registry) -> ProviderModelsResponse:
    provider = _require_provider(registry, provider_id)
    return ProviderModelsResponse(provider_id=provider_id, models=list(provider.supported_models))
