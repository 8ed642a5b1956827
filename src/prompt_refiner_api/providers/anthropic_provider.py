"""Anthropic adapter using the Messages API."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import anthropic
from anthropic import Anthropic

from prompt_refiner_api.models.answer import Answer
from prompt_refiner_api.models.question import Question
from prompt_refiner_api.providers.base import (
    DEFAULT_GENERATION_TEMPERATURE,
    DEFAULT_MAX_QUESTIONS,
    DEFAULT_REFINEMENT_TEMPERATURE,
    GenerationParseError,
    LLMProvider,
    ProviderError,
    QuestionGenerationError,
    RefinementError,
    describe_status_error,
)
from prompt_refiner_api.providers.prompts import (
    GENERATION_SYSTEM_PROMPT,
    REFINEMENT_SYSTEM_PROMPT,
    build_generation_request,
    build_refinement_request,
)
from prompt_refiner_api.providers.question_parser import parse_questions

logger = logging.getLogger(__name__)

GENERATION_MAX_TOKENS = 2000
REFINEMENT_MAX_TOKENS = 1000


class AnthropicProvider(LLMProvider):
    """Adapter for Claude models.

    The SDK client is created once per adapter with the configured timeout
    and retry count; key validation uses a separate throwaway client.
    """

    provider_id = "anthropic"
    display_name = "Anthropic Claude"
    supported_models = (
        "claude-3-5-sonnet-20241022",
        "claude-3-5-sonnet-20240620",
        "claude-3-5-haiku-20241022",
        "claude-3-haiku-20240307",
        "claude-3-opus-20240229",
        "claude-3-sonnet-20240229",
    )
    default_model = "claude-3-5-sonnet-20240620"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 2,
        default_model: str | None = None,
        client: Anthropic | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            api_key: Anthropic API key.
            base_url: Endpoint override. None uses the SDK default.
            timeout: Per-request timeout in seconds.
            max_retries: Retries the SDK performs on transient failures.
            default_model: Overrides the class default model.
            client: Pre-built SDK client, mainly for tests.
        """
        self._base_url = base_url
        self._timeout = timeout
        if default_model:
            self.default_model = default_model
        self._client = client or Anthropic(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    @contextmanager
    def _translate_errors(
        self, error_cls: type[ProviderError], model: str
    ) -> Iterator[None]:
        try:
            yield
        except anthropic.APITimeoutError as e:
            logger.error("anthropic request timed out (model=%s)", model)
            raise error_cls(
                f"Request to {self.display_name} timed out. Please try again.",
                provider=self.provider_id,
                model=model,
            ) from e
        except anthropic.APIConnectionError as e:
            logger.error("Cannot connect to anthropic (model=%s): %s", model, e)
            raise error_cls(
                f"Cannot connect to {self.display_name}. Please check your network connection.",
                provider=self.provider_id,
                model=model,
            ) from e
        except anthropic.APIStatusError as e:
            logger.error(
                "anthropic returned HTTP %s (model=%s): %s", e.status_code, model, e.message
            )
            raise error_cls(
                describe_status_error(self.display_name, model, e.status_code),
                provider=self.provider_id,
                model=model,
            ) from e
        except anthropic.AnthropicError as e:
            logger.error("anthropic call failed (model=%s): %s", model, e)
            raise error_cls(
                f"{self.display_name} request failed: {e}",
                provider=self.provider_id,
                model=model,
            ) from e

    def _complete(
        self,
        model: str,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        response = self._client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_message}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )

    def validate_api_key(self, api_key: str) -> bool:
        client = Anthropic(
            api_key=api_key, base_url=self._base_url, timeout=self._timeout, max_retries=0
        )
        try:
            client.messages.create(
                model=self.default_model,
                max_tokens=1,
                messages=[{"role": "user", "content": "Hi"}],
            )
        except anthropic.AnthropicError as e:
            logger.info("Anthropic API key validation failed: %s", e)
            return False
        return True

    def generate_questions(
        self,
        prompt: str,
        model: str | None = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
        temperature: float = DEFAULT_GENERATION_TEMPERATURE,
    ) -> list[Question]:
        resolved = self.resolve_model(model)
        logger.info("Generating up to %d questions with anthropic (%s)", max_questions, resolved)

        with self._translate_errors(QuestionGenerationError, resolved):
            text = self._complete(
                resolved,
                GENERATION_SYSTEM_PROMPT,
                build_generation_request(prompt, max_questions),
                temperature,
                GENERATION_MAX_TOKENS,
            )

        if not text.strip():
            raise GenerationParseError(
                f"{self.display_name} returned an empty response for model '{resolved}'.",
                provider=self.provider_id,
                model=resolved,
            )
        return parse_questions(text, self.provider_id, resolved, max_questions)

    def refine_prompt(
        self,
        original_prompt: str,
        questions: list[Question],
        answers: list[Answer],
        model: str | None = None,
        temperature: float = DEFAULT_REFINEMENT_TEMPERATURE,
    ) -> str:
        resolved = self.resolve_model(model)
        logger.info("Refining prompt with anthropic (%s)", resolved)

        with self._translate_errors(RefinementError, resolved):
            text = self._complete(
                resolved,
                REFINEMENT_SYSTEM_PROMPT,
                build_refinement_request(original_prompt, questions, answers),
                temperature,
                REFINEMENT_MAX_TOKENS,
            )

        refined = text.strip()
        if not refined:
            raise RefinementError(
                f"{self.display_name} returned an empty refinement for model '{resolved}'.",
                provider=self.provider_id,
                model=resolved,
            )
        return refined
