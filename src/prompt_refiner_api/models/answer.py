"""Answer model for responses to refinement questions."""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

NOT_ANSWERED = "Not answered"


@dataclass
class Answer:
    """A user's response to one question of a session.

    ``response`` is either a legacy yes/no boolean or the text of the chosen
    (or free-form) option.
    """

    question_id: str
    response: bool | str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def display_text(self) -> str:
        """Render the response the way it is shown to the LLM."""
        if isinstance(self.response, bool):
            return "Yes" if self.response else "No"
        return str(self.response)
