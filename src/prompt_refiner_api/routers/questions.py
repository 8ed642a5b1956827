"""FastAPI router for standalone question generation."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from prompt_refiner_api.providers.base import GenerationParseError, QuestionGenerationError
from prompt_refiner_api.routers.dependencies import get_refinement_service, http_error
from prompt_refiner_api.schemas.refinement import (
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    QuestionResponse,
)
from prompt_refiner_api.services.prompt_refinement_service import (
    PromptRefinementService,
    ProviderUnavailableError,
)

router = APIRouter()


@router.post("/generate", response_model=GenerateQuestionsResponse)
def generate_questions(
    request: GenerateQuestionsRequest,
    service: Annotated[PromptRefinementService, Depends(get_refinement_service)],
) -> GenerateQuestionsResponse:
    """Generate questions for a prompt without creating a session."""
    try:
        questions = service.generate_questions(
            request.prompt,
            request.llm_provider,
            model=request.model,
            max_questions=request.max_questions,
        )
    except ProviderUnavailableError as e:
        raise http_error(status.HTTP_400_BAD_REQUEST, "PROVIDER_UNAVAILABLE", str(e)) from None
    except GenerationParseError as e:
        raise http_error(status.HTTP_502_BAD_GATEWAY, "GENERATION_PARSE_ERROR", str(e)) from None
    except QuestionGenerationError as e:
        raise http_error(
            status.HTTP_502_BAD_GATEWAY, "QUESTION_GENERATION_ERROR", str(e)
        ) from None

    return GenerateQuestionsResponse(
        questions=[QuestionResponse.model_validate(q) for q in questions],
        total_generated=len(questions),
        prompt=request.prompt,
        llm_provider=request.llm_provider,
        model=request.model,
    )
