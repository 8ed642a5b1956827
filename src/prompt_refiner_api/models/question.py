"""Question model for LLM-generated refinement questions."""

from dataclasses import dataclass, field
from typing import Literal

QuestionCategory = Literal["clarity", "specificity", "context", "constraints"]
QuestionImpact = Literal["high", "medium", "low"]

QUESTION_CATEGORIES: tuple[str, ...] = ("clarity", "specificity", "context", "constraints")
QUESTION_IMPACTS: tuple[str, ...] = ("high", "medium", "low")

OPTIONS_PER_QUESTION = 3
DEFAULT_OPTIONS: tuple[str, str, str] = ("Yes", "Maybe", "No")
DEFAULT_OPTION_INDEX = 1


@dataclass
class Question:
    """A multiple-choice question that narrows down a prompt.

    Every question carries exactly three options; ``default_option`` points at
    the option used when the question is left unanswered (normally the middle,
    neutral choice).
    """

    id: str
    text: str
    order: int
    category: QuestionCategory = "clarity"
    impact: QuestionImpact = "medium"
    explanation: str | None = None
    options: list[str] = field(default_factory=lambda: list(DEFAULT_OPTIONS))
    default_option: int = DEFAULT_OPTION_INDEX

    def __repr__(self) -> str:
        text_preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
        return f"<Question(id='{self.id}', order={self.order}, text='{text_preview}')>"
