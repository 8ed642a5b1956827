"""Generic question set used when a provider's output cannot be parsed."""

from typing import Any

from prompt_refiner_api.models.question import Question
from prompt_refiner_api.providers.question_parser import normalize_questions

FALLBACK_QUESTIONS: list[dict[str, Any]] = [
    {
        "text": "What level of detail do you want in the response?",
        "category": "specificity",
        "impact": "high",
        "explanation": "Helps determine the level of detail needed",
        "options": ["Basic", "Detailed", "Comprehensive"],
        "defaultOption": 1,
    },
    {
        "text": "What type of thinking approach do you prefer?",
        "category": "clarity",
        "impact": "high",
        "explanation": "Clarifies the type of thinking required",
        "options": ["Creative", "Balanced", "Analytical"],
        "defaultOption": 1,
    },
    {
        "text": "How specific should the audience targeting be?",
        "category": "context",
        "impact": "medium",
        "explanation": "Helps tailor the response appropriately",
        "options": ["General", "Somewhat Specific", "Highly Specific"],
        "defaultOption": 1,
    },
    {
        "text": "How many examples should be included?",
        "category": "specificity",
        "impact": "medium",
        "explanation": "Determines whether to include concrete examples",
        "options": ["Few", "Moderate", "Many"],
        "defaultOption": 1,
    },
    {
        "text": "How strict should the constraints be?",
        "category": "constraints",
        "impact": "medium",
        "explanation": "Identifies any limitations or restrictions",
        "options": ["Flexible", "Moderate", "Strict"],
        "defaultOption": 1,
    },
]


def build_fallback_questions(max_questions: int) -> list[Question]:
    """Build fresh fallback questions, at most ``max_questions`` of them."""
    return normalize_questions(FALLBACK_QUESTIONS, max_questions)
