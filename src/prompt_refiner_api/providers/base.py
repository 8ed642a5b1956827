"""Provider adapter interface shared by every LLM vendor."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from prompt_refiner_api.models.answer import Answer
from prompt_refiner_api.models.question import Question

logger = logging.getLogger(__name__)

DEFAULT_GENERATION_TEMPERATURE = 0.7
DEFAULT_REFINEMENT_TEMPERATURE = 0.3
DEFAULT_MAX_QUESTIONS = 7


class ProviderError(Exception):
    """Raised when an LLM vendor call cannot be completed.

    Carries the provider id and model so callers can tell the user which
    backend failed.
    """

    def __init__(self, message: str, provider: str, model: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.model = model


class QuestionGenerationError(ProviderError):
    """Raised when the vendor call for question generation fails."""

    pass


class GenerationParseError(QuestionGenerationError):
    """Raised when no questions can be recovered from a vendor response."""

    pass


class RefinementError(ProviderError):
    """Raised when the vendor call for prompt refinement fails."""

    pass


@dataclass
class ProviderDescriptor:
    """Public description of a provider for listing endpoints."""

    id: str
    display_name: str
    supported_models: list[str]
    default_model: str
    is_available: bool = True


def describe_status_error(
    display_name: str, model: str | None, status_code: int | None
) -> str:
    """Build a user-facing message for an HTTP error returned by a vendor.

    Args:
        display_name: Human-readable provider name.
        model: Model the request was made with.
        status_code: HTTP status returned by the vendor, if any.

    Returns:
        A message that tells the user what to fix or whether to retry.
    """
    if status_code in (400, 422):
        return f"{display_name} rejected the request for model '{model}'."
    if status_code == 401:
        return f"Authentication failed for {display_name}. Please check your API key."
    if status_code == 403:
        return f"Access denied for {display_name}. Please check your API key permissions."
    if status_code == 404:
        return (
            f"The model '{model}' is not available for {display_name}. "
            "Please try a different model."
        )
    if status_code == 429:
        return f"Rate limit exceeded for {display_name}. Please try again later."
    if status_code is not None and status_code >= 500:
        return f"{display_name} service is experiencing issues. Please try again later."
    return f"{display_name} service error ({status_code}). Please try again later."


class LLMProvider(ABC):
    """Abstract interface implemented once per LLM vendor.

    Adapters translate generate/refine requests into vendor calls and turn
    the vendor's raw text back into typed results. Vendor SDK exceptions never
    leave an adapter: they are re-raised as ``ProviderError`` subclasses.
    """

    provider_id: str
    display_name: str
    supported_models: tuple[str, ...]
    default_model: str

    def resolve_model(self, model: str | None) -> str:
        """Pick the model to call, defaulting when none was requested.

        Models outside ``supported_models`` are passed through; vendors add
        models faster than this list is updated.
        """
        if not model:
            return self.default_model
        if model not in self.supported_models:
            logger.warning(
                "Model '%s' is not in the known model list for %s; using it as given",
                model,
                self.provider_id,
            )
        return model

    def describe(self, is_available: bool = True) -> ProviderDescriptor:
        """Describe this provider for listing endpoints."""
        return ProviderDescriptor(
            id=self.provider_id,
            display_name=self.display_name,
            supported_models=list(self.supported_models),
            default_model=self.default_model,
            is_available=is_available,
        )

    @abstractmethod
    def validate_api_key(self, api_key: str) -> bool:
        """Probe the vendor with a minimal call using ``api_key``.

        Returns:
            True if the key works, False on any failure (auth, network, timeout).
        """
        pass

    @abstractmethod
    def generate_questions(
        self,
        prompt: str,
        model: str | None = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
        temperature: float = DEFAULT_GENERATION_TEMPERATURE,
    ) -> list[Question]:
        """Generate refinement questions for a prompt.

        Raises:
            QuestionGenerationError: If the vendor call fails.
            GenerationParseError: If no questions can be parsed from the response.
        """
        pass

    @abstractmethod
    def refine_prompt(
        self,
        original_prompt: str,
        questions: list[Question],
        answers: list[Answer],
        model: str | None = None,
        temperature: float = DEFAULT_REFINEMENT_TEMPERATURE,
    ) -> str:
        """Rewrite a prompt using the user's answers.

        Raises:
            RefinementError: If the vendor call fails or returns no text.
        """
        pass


def describe_provider_class(
    provider_cls: type[LLMProvider], is_available: bool
) -> ProviderDescriptor:
    """Describe a provider class without instantiating it."""
    return ProviderDescriptor(
        id=provider_cls.provider_id,
        display_name=provider_cls.display_name,
        supported_models=list(provider_cls.supported_models),
        default_model=provider_cls.default_model,
        is_available=is_available,
    )
