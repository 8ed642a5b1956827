"""Pydantic schemas for the prompt refinement API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prompt_refiner_api.models.answer import Answer

MIN_PROMPT_LENGTH = 10
MAX_PROMPT_LENGTH = 5000
MAX_REQUESTED_QUESTIONS = 15


class CamelModel(BaseModel):
    """Base schema serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Question and Answer Schemas ---


class QuestionResponse(CamelModel):
    """A generated question with its three options."""

    id: str
    text: str
    order: int
    category: str
    impact: str
    explanation: str | None = None
    options: list[str]
    default_option: int


class AnswerResponse(CamelModel):
    """A recorded answer."""

    id: str
    question_id: str
    response: bool | str
    timestamp: datetime


class AnswerInput(CamelModel):
    """An answer submitted as part of a refine request."""

    question_id: str = Field(..., min_length=1)
    response: bool | str
    id: str | None = None
    timestamp: datetime | None = None

    def to_answer(self) -> Answer:
        """Convert to a domain Answer, filling in missing id and timestamp."""
        answer = Answer(question_id=self.question_id, response=self.response)
        if self.id:
            answer.id = self.id
        if self.timestamp:
            answer.timestamp = self.timestamp
        return answer


# --- Session Schemas ---


class SessionResponse(CamelModel):
    """Response with session details."""

    id: str
    original_prompt: str
    refined_prompt: str
    llm_provider: str
    model: str | None = None
    status: str
    questions: list[QuestionResponse]
    answers: list[AnswerResponse]
    created_at: datetime
    updated_at: datetime
    expires_at: datetime


class CreateSessionRequest(CamelModel):
    """Request to start a refinement session."""

    original_prompt: str = Field(
        ..., min_length=MIN_PROMPT_LENGTH, max_length=MAX_PROMPT_LENGTH
    )
    llm_provider: str = Field(..., min_length=1)
    model: str | None = None


class CreateSessionResponse(CamelModel):
    session: SessionResponse
    questions: list[QuestionResponse]


class AnswerQuestionRequest(CamelModel):
    """Request to answer a single question."""

    session_id: str = Field(..., min_length=1)
    question_id: str = Field(..., min_length=1)
    response: bool | str


class RefinePromptRequest(CamelModel):
    """Request to refine a session's prompt from a set of answers."""

    session_id: str = Field(..., min_length=1)
    answers: list[AnswerInput]
    llm_provider: str = Field(..., min_length=1)
    model: str | None = None


class RefinePromptResponse(CamelModel):
    refined_prompt: str
    session: SessionResponse


class SessionStatsResponse(CamelModel):
    total_sessions: int
    active_sessions: int
    completed_sessions: int


# --- Question Generation Schemas ---


class GenerateQuestionsRequest(CamelModel):
    """Request to generate questions without creating a session."""

    prompt: str = Field(..., min_length=MIN_PROMPT_LENGTH, max_length=MAX_PROMPT_LENGTH)
    llm_provider: str = Field(..., min_length=1)
    model: str | None = None
    max_questions: int | None = Field(None, ge=1, le=MAX_REQUESTED_QUESTIONS)


class GenerateQuestionsResponse(CamelModel):
    questions: list[QuestionResponse]
    total_generated: int
    prompt: str
    llm_provider: str
    model: str | None = None


# --- Provider Schemas ---


class ProviderResponse(CamelModel):
    """Public description of an LLM provider."""

    id: str
    display_name: str
    supported_models: list[str]
    default_model: str
    is_available: bool


class ProviderStatusResponse(CamelModel):
    provider_id: str
    is_available: bool


class ProviderModelsResponse(CamelModel):
    provider_id: str
    models: list[str]


class ValidateKeyRequest(CamelModel):
    """Request to check an API key against a provider."""

    provider_id: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)


class ValidateKeyResponse(CamelModel):
    provider_id: str
    is_valid: bool
