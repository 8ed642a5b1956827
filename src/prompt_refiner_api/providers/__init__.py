"""LLM provider adapters and registry."""

from prompt_refiner_api.providers.anthropic_provider import AnthropicProvider
from prompt_refiner_api.providers.base import (
    GenerationParseError,
    LLMProvider,
    ProviderDescriptor,
    ProviderError,
    QuestionGenerationError,
    RefinementError,
)
from prompt_refiner_api.providers.groq_provider import GroqProvider
from prompt_refiner_api.providers.openai_provider import OpenAIProvider
from prompt_refiner_api.providers.registry import KNOWN_PROVIDERS, ProviderRegistry

__all__ = [
    "AnthropicProvider",
    "GenerationParseError",
    "GroqProvider",
    "KNOWN_PROVIDERS",
    "LLMProvider",
    "OpenAIProvider",
    "ProviderDescriptor",
    "ProviderError",
    "ProviderRegistry",
    "QuestionGenerationError",
    "RefinementError",
]
