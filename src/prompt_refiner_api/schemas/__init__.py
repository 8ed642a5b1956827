"""Pydantic schemas for API request/response validation."""

from prompt_refiner_api.schemas.refinement import (
    AnswerInput,
    AnswerQuestionRequest,
    AnswerResponse,
    CreateSessionRequest,
    CreateSessionResponse,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    ProviderModelsResponse,
    ProviderResponse,
    ProviderStatusResponse,
    QuestionResponse,
    RefinePromptRequest,
    RefinePromptResponse,
    SessionResponse,
    SessionStatsResponse,
    ValidateKeyRequest,
    ValidateKeyResponse,
)

__all__ = [
    "AnswerInput",
    "AnswerQuestionRequest",
    "AnswerResponse",
    "CreateSessionRequest",
    "CreateSessionResponse",
    "GenerateQuestionsRequest",
    "GenerateQuestionsResponse",
    "ProviderModelsResponse",
    "ProviderResponse",
    "ProviderStatusResponse",
    "QuestionResponse",
    "RefinePromptRequest",
    "RefinePromptResponse",
    "SessionResponse",
    "SessionStatsResponse",
    "ValidateKeyRequest",
    "ValidateKeyResponse",
]
