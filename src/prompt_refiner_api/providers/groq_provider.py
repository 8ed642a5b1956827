"""Groq adapter, served through Groq's OpenAI-compatible endpoint."""

from prompt_refiner_api.providers.openai_provider import OpenAIProvider
from prompt_refiner_api.providers.prompts import STRICT_JSON_GENERATION_SYSTEM_PROMPT

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GroqProvider(OpenAIProvider):
    """Adapter for models hosted on Groq.

    Open models tend to wrap JSON in prose, so generation uses the
    JSON-only instruction.
    """

    provider_id = "groq"
    display_name = "Groq"
    supported_models = (
        "llama-3.3-70b-versatile",
        "meta-llama/llama-4-scout-17b-16e-instruct",
        "moonshotai/kimi-k2-instruct",
        "gemma2-9b-it",
        "llama-3.1-8b-instant",
        "llama-3.1-70b-versatile",
        "mixtral-8x7b-32768",
    )
    default_model = "llama-3.3-70b-versatile"
    default_base_url = GROQ_BASE_URL

    generation_system_prompt = STRICT_JSON_GENERATION_SYSTEM_PROMPT
