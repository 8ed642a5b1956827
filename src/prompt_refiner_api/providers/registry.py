"""Registry of the LLM providers configured for this process."""

import logging

from prompt_refiner_api.core.config import Settings
from prompt_refiner_api.providers.anthropic_provider import AnthropicProvider
from prompt_refiner_api.providers.base import (
    LLMProvider,
    ProviderDescriptor,
    describe_provider_class,
)
from prompt_refiner_api.providers.groq_provider import GroqProvider
from prompt_refiner_api.providers.openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)

# Every vendor this service has an adapter for, in listing order
KNOWN_PROVIDERS: dict[str, type[LLMProvider]] = {
    OpenAIProvider.provider_id: OpenAIProvider,
    AnthropicProvider.provider_id: AnthropicProvider,
    GroqProvider.provider_id: GroqProvider,
}


class ProviderRegistry:
    """Maps provider ids to adapter instances.

    Only vendors with a configured credential are registered, so a process
    started with no keys has an empty registry and every generation request
    fails with a provider-unavailable error.
    """

    def __init__(self, default_provider_id: str | None = None) -> None:
        self._providers: dict[str, LLMProvider] = {}
        self._default_provider_id = default_provider_id

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRegistry":
        """Build a registry from application settings.

        No network calls are made; keys are only checked when used.
        """
        registry = cls(default_provider_id=settings.default_llm_provider)
        timeout = settings.llm_request_timeout_seconds
        max_retries = settings.llm_max_retries

        def default_model_for(provider_id: str) -> str | None:
            if provider_id == settings.default_llm_provider:
                return settings.default_model
            return None

        if settings.openai_api_key:
            registry.register(
                OpenAIProvider(
                    api_key=settings.openai_api_key,
                    base_url=settings.openai_base_url,
                    timeout=timeout,
                    max_retries=max_retries,
                    default_model=default_model_for(OpenAIProvider.provider_id),
                )
            )
        if settings.anthropic_api_key:
            registry.register(
                AnthropicProvider(
                    api_key=settings.anthropic_api_key,
                    base_url=settings.anthropic_base_url,
                    timeout=timeout,
                    max_retries=max_retries,
                    default_model=default_model_for(AnthropicProvider.provider_id),
                )
            )
        if settings.groq_api_key:
            registry.register(
                GroqProvider(
                    api_key=settings.groq_api_key,
                    base_url=settings.groq_base_url,
                    timeout=timeout,
                    max_retries=max_retries,
                    default_model=default_model_for(GroqProvider.provider_id),
                )
            )

        if not registry.provider_ids():
            logger.warning("No LLM provider credentials configured; generation is unavailable")
        else:
            logger.info("Registered LLM providers: %s", ", ".join(registry.provider_ids()))
        return registry

    def register(self, provider: LLMProvider) -> None:
        """Register an adapter, replacing any existing one with the same id."""
        self._providers[provider.provider_id] = provider

    def remove(self, provider_id: str) -> bool:
        """Unregister a provider. Returns False if it was not registered."""
        return self._providers.pop(provider_id, None) is not None

    def has_provider(self, provider_id: str) -> bool:
        return provider_id in self._providers

    def provider_ids(self) -> list[str]:
        return list(self._providers)

    def get_provider(self, provider_id: str) -> LLMProvider | None:
        return self._providers.get(provider_id)

    def get_available_providers(self) -> list[ProviderDescriptor]:
        """Describe the registered providers."""
        return [provider.describe(is_available=True) for provider in self._providers.values()]

    def get_all_provider_descriptors(self) -> list[ProviderDescriptor]:
        """Describe every known vendor, flagging which ones are registered.

        Providers registered outside ``KNOWN_PROVIDERS`` are
        listed after the known vendors.
        """
        descriptors = []
        for provider_id, provider_cls in KNOWN_PROVIDERS.items():
            registered = self._providers.get(provider_id)
            if registered is not None:
                descriptors.append(registered.describe(is_available=True))
            else:
                descriptors.append(describe_provider_class(provider_cls, is_available=False))
        for provider_id, provider in self._providers.items():
            if provider_id not in KNOWN_PROVIDERS:
                descriptors.append(provider.describe(is_available=True))
        return descriptors

    def get_default_provider(self) -> LLMProvider | None:
        """Return the configured default, else the first registered, else None."""
        if self._default_provider_id and self._default_provider_id in self._providers:
            return self._providers[self._default_provider_id]
        return next(iter(self._providers.values()), None)

    def validate_api_key(self, provider_id: str, api_key: str) -> bool:
        """Check a key against a registered provider.

        Unregistered providers report False without any network call.
        """
        provider = self._providers.get(provider_id)
        if provider is None:
            return False
        return provider.validate_api_key(api_key)
