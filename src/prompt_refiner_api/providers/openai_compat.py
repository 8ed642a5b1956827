"""Helpers for vendors that speak the OpenAI chat-completions protocol."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import openai
from openai import OpenAI

from prompt_refiner_api.providers.base import ProviderError, describe_status_error

logger = logging.getLogger(__name__)


@contextmanager
def translate_openai_errors(
    error_cls: type[ProviderError],
    provider_id: str,
    display_name: str,
    model: str | None,
) -> Iterator[None]:
    """Re-raise OpenAI SDK exceptions as ``error_cls``.

    Args:
        error_cls: ProviderError subclass to raise.
        provider_id: Provider id attached to the raised error.
        display_name: Human-readable provider name used in the message.
        model: Model the call was made with.

    Raises:
        ProviderError: ``error_cls`` with a user-facing message.
    """
    try:
        yield
    except openai.APITimeoutError as e:
        logger.error("%s request timed out (model=%s)", provider_id, model)
        raise error_cls(
            f"Request to {display_name} timed out. Please try again.",
            provider=provider_id,
            model=model,
        ) from e
    except openai.APIConnectionError as e:
        logger.error("Cannot connect to %s (model=%s): %s", provider_id, model, e)
        raise error_cls(
            f"Cannot connect to {display_name}. Please check your network connection.",
            provider=provider_id,
            model=model,
        ) from e
    except openai.APIStatusError as e:
        logger.error(
            "%s returned HTTP %s (model=%s): %s", provider_id, e.status_code, model, e.message
        )
        raise error_cls(
            describe_status_error(display_name, model, e.status_code),
            provider=provider_id,
            model=model,
        ) from e
    except openai.OpenAIError as e:
        logger.error("%s call failed (model=%s): %s", provider_id, model, e)
        raise error_cls(
            f"{display_name} request failed: {e}",
            provider=provider_id,
            model=model,
        ) from e


def create_chat_completion(
    client: OpenAI,
    model: str,
    system_prompt: str,
    user_message: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Send a single system+user exchange and return the reply text."""
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    if not response.choices:
        return ""
    return response.choices[0].message.content or ""


def probe_api_key(api_key: str, base_url: str | None, timeout: float) -> bool:
    """Check a key by listing models with a throwaway client."""
    client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
    try:
        client.models.list()
    except openai.OpenAIError as e:
        logger.info("API key validation failed against %s: %s", base_url or "default endpoint", e)
        return False
    return True
