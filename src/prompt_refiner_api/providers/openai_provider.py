"""OpenAI adapter."""

import logging

from openai import OpenAI

from prompt_refiner_api.models.answer import Answer
from prompt_refiner_api.models.question import Question
from prompt_refiner_api.providers.base import (
    DEFAULT_GENERATION_TEMPERATURE,
    DEFAULT_MAX_QUESTIONS,
    DEFAULT_REFINEMENT_TEMPERATURE,
    GenerationParseError,
    LLMProvider,
    QuestionGenerationError,
    RefinementError,
)
from prompt_refiner_api.providers.openai_compat import (
    create_chat_completion,
    probe_api_key,
    translate_openai_errors,
)
from prompt_refiner_api.providers.prompts import (
    GENERATION_SYSTEM_PROMPT,
    REFINEMENT_SYSTEM_PROMPT,
    build_generation_request,
    build_refinement_request,
)
from prompt_refiner_api.providers.question_parser import parse_questions

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Adapter for the OpenAI chat-completions API.

    Subclasses targeting OpenAI-compatible vendors override the class
    attributes and, where needed, ``generation_system_prompt``.
    """

    provider_id = "openai"
    display_name = "OpenAI"
    supported_models = ("gpt-4", "gpt-4-turbo", "gpt-3.5-turbo")
    default_model = "gpt-4"
    default_base_url: str | None = None

    generation_system_prompt = GENERATION_SYSTEM_PROMPT
    generation_max_tokens = 2000
    refinement_max_tokens = 1000

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 2,
        default_model: str | None = None,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            api_key: Vendor API key.
            base_url: Endpoint override. None uses the vendor default.
            timeout: Per-request timeout in seconds.
            max_retries: Retries the SDK performs on transient failures.
            default_model: Overrides the class default model.
            client: Pre-built SDK client, mainly for tests.
        """
        self._base_url = base_url or self.default_base_url
        self._timeout = timeout
        if default_model:
            self.default_model = default_model
        self._client = client or OpenAI(
            api_key=api_key,
            base_url=self._base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    def validate_api_key(self, api_key: str) -> bool:
        return probe_api_key(api_key, self._base_url, self._timeout)

    def generate_questions(
        self,
        prompt: str,
        model: str | None = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
        temperature: float = DEFAULT_GENERATION_TEMPERATURE,
    ) -> list[Question]:
        resolved = self.resolve_model(model)
        logger.info(
            "Generating up to %d questions with %s (%s)", max_questions, self.provider_id, resolved
        )

        with translate_openai_errors(
            QuestionGenerationError, self.provider_id, self.display_name, resolved
        ):
            text = create_chat_completion(
                self._client,
                model=resolved,
                system_prompt=self.generation_system_prompt,
                user_message=build_generation_request(prompt, max_questions),
                temperature=temperature,
                max_tokens=self.generation_max_tokens,
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
        logger.info("Refining prompt with %s (%s)", self.provider_id, resolved)

        with translate_openai_errors(
            RefinementError, self.provider_id, self.display_name, resolved
        ):
            text = create_chat_completion(
                self._client,
                model=resolved,
                system_prompt=REFINEMENT_SYSTEM_PROMPT,
                user_message=build_refinement_request(original_prompt, questions, answers),
                temperature=temperature,
                max_tokens=self.refinement_max_tokens,
            )

        refined = text.strip()
        if not refined:
            raise RefinementError(
                f"{self.display_name} returned an empty refinement for model '{resolved}'.",
                provider=self.provider_id,
                model=resolved,
            )
        return refined
