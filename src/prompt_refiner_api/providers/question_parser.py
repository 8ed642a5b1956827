"""Parsing of raw LLM output into Question objects.

LLMs do not reliably return clean JSON, so parsing runs a pipeline of
progressively looser strategies:

1. the whole response as JSON
2. JSON inside a fenced code block
3. a bare ``{...}`` object that mentions ``"questions"``
4. question-like lines (``Question 1:``, ``Q1:``, ``1. ...?``) wrapped in
   three-option scaffolds

The first strategy that yields at least one question wins. If none does,
``GenerationParseError`` is raised.
"""

import json
import logging
import re
import uuid
from collections.abc import Callable
from typing import Any

from prompt_refiner_api.models.question import (
    DEFAULT_OPTION_INDEX,
    DEFAULT_OPTIONS,
    OPTIONS_PER_QUESTION,
    QUESTION_CATEGORIES,
    QUESTION_IMPACTS,
    Question,
)
from prompt_refiner_api.providers.base import GenerationParseError

logger = logging.getLogger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)
EMBEDDED_OBJECT_PATTERN = re.compile(r"\{.*\"questions\".*\}", re.DOTALL)
QUESTION_LINE_PATTERN = re.compile(
    r"(?:\bQuestion\s*\d+\s*[:.)-]?|\bQ\d*\s*[:.)]|\b\d+[.)](?=\s))\s*([^?\n]*\?)",
    re.IGNORECASE,
)

# Cap on questions salvaged from free text before the caller's own limit
MAX_RECOVERED_QUESTIONS = 7
RECOVERED_OPTIONS: tuple[str, str, str] = ("Yes", "Somewhat", "No")

RawQuestions = list[dict[str, Any]]


def new_question_id() -> str:
    return f"q_{uuid.uuid4().hex[:12]}"


def _questions_from_payload(payload: Any) -> RawQuestions:
    """Pull the list of raw question objects out of decoded JSON."""
    if isinstance(payload, dict):
        payload = payload.get("questions")
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, dict)]


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def parse_direct_json(response_text: str) -> RawQuestions:
    return _questions_from_payload(_loads(response_text.strip()))


def parse_fenced_block(response_text: str) -> RawQuestions:
    match = FENCED_BLOCK_PATTERN.search(response_text)
    if not match:
        return []
    return _questions_from_payload(_loads(match.group(1)))


def parse_embedded_object(response_text: str) -> RawQuestions:
    match = EMBEDDED_OBJECT_PATTERN.search(response_text)
    if not match:
        return []
    return _questions_from_payload(_loads(match.group(0)))


def parse_question_lines(response_text: str) -> RawQuestions:
    """Salvage question-like lines from free text.

    Each recovered line becomes a ``clarity`` question with a generic
    Yes/Somewhat/No scaffold.
    """
    raw: RawQuestions = []
    for match in QUESTION_LINE_PATTERN.finditer(response_text):
        text = match.group(1).strip()
        if len(text) <= 1:
            continue
        raw.append(
            {
                "text": text,
                "category": "clarity",
                "impact": "medium",
                "explanation": "Recovered from an unstructured model response",
                "options": list(RECOVERED_OPTIONS),
                "defaultOption": DEFAULT_OPTION_INDEX,
            }
        )
        if len(raw) >= MAX_RECOVERED_QUESTIONS:
            break
    return raw


PARSE_STRATEGIES: tuple[tuple[str, Callable[[str], RawQuestions]], ...] = (
    ("direct_json", parse_direct_json),
    ("fenced_block", parse_fenced_block),
    ("embedded_object", parse_embedded_object),
    ("question_lines", parse_question_lines),
)


def _normalize_options(value: Any) -> list[str]:
    if not isinstance(value, list):
        return list(DEFAULT_OPTIONS)
    options = [str(option).strip() for option in value if str(option).strip()]
    if len(options) < OPTIONS_PER_QUESTION:
        return list(DEFAULT_OPTIONS)
    return options[:OPTIONS_PER_QUESTION]


def _normalize_default_option(value: Any) -> int:
    # bool is an int subclass; true/false is not an index
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_OPTION_INDEX
    if 0 <= value < OPTIONS_PER_QUESTION:
        return value
    return DEFAULT_OPTION_INDEX


def normalize_questions(raw_questions: RawQuestions, max_questions: int) -> list[Question]:
    """Turn raw question objects into Questions.

    Entries without text are dropped. Every accepted question gets a fresh id
    and its position in the response as ``order``; missing or malformed
    options fall back to Yes/Maybe/No with the middle option as default.

    Args:
        raw_questions: Decoded question objects from the vendor response.
        max_questions: Maximum number of questions to keep.

    Returns:
        Normalized questions, at most ``max_questions`` long.
    """
    questions: list[Question] = []
    for item in raw_questions:
        if len(questions) >= max_questions:
            break

        text = str(item.get("text") or "").strip()
        if not text:
            continue

        category = item.get("category")
        impact = item.get("impact")
        explanation = item.get("explanation")

        questions.append(
            Question(
                id=new_question_id(),
                text=text,
                order=len(questions),
                category=category if category in QUESTION_CATEGORIES else "clarity",
                impact=impact if impact in QUESTION_IMPACTS else "medium",
                explanation=str(explanation) if explanation else None,
                options=_normalize_options(item.get("options")),
                default_option=_normalize_default_option(item.get("defaultOption")),
            )
        )
    return questions


def parse_questions(
    response_text: str,
    provider: str,
    model: str | None,
    max_questions: int,
) -> list[Question]:
    """Parse a vendor response into questions.

    Args:
        response_text: Raw text returned by the vendor.
        provider: Provider id, used in logs and errors.
        model: Model name, used in logs and errors.
        max_questions: Maximum number of questions to return.

    Returns:
        Normalized questions from the first strategy that yields any.

    Raises:
        GenerationParseError: If no strategy yields a question.
    """
    logger.debug("Parsing %s response: %s", provider, response_text[:500])

    for name, strategy in PARSE_STRATEGIES:
        questions = normalize_questions(strategy(response_text), max_questions)
        if questions:
            logger.info(
                "Parsed %d questions from %s (%s) using %s",
                len(questions),
                provider,
                model,
                name,
            )
            return questions

    logger.warning(
        "No questions could be parsed from %s (%s) response: %s",
        provider,
        model,
        response_text[:200],
    )
    raise GenerationParseError(
        f"{provider} returned a response for model '{model}' that could not be "
        "parsed into questions.",
        provider=provider,
        model=model,
    )


def questions_to_payload(questions: list[Question]) -> dict[str, Any]:
    """Serialize questions in the JSON shape the generation prompt asks for."""
    return {
        "questions": [
            {
                "text": q.text,
                "category": q.category,
                "impact": q.impact,
                "explanation": q.explanation,
                "options": list(q.options),
                "defaultOption": q.default_option,
            }
            for q in sorted(questions, key=lambda q: q.order)
        ]
    }
