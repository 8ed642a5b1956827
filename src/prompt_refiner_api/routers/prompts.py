"""FastAPI router for refinement session endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from prompt_refiner_api.providers.base import (
    GenerationParseError,
    QuestionGenerationError,
    RefinementError,
)
from prompt_refiner_api.repositories.refinement_session_repository import (
    RefinementSessionNotFoundError,
)
from prompt_refiner_api.routers.dependencies import get_refinement_service, http_error
from prompt_refiner_api.schemas.refinement import (
    AnswerQuestionRequest,
    AnswerResponse,
    CreateSessionRequest,
    CreateSessionResponse,
    QuestionResponse,
    RefinePromptRequest,
    RefinePromptResponse,
    SessionResponse,
    SessionStatsResponse,
)
from prompt_refiner_api.services.prompt_refinement_service import (
    PromptRefinementService,
    ProviderUnavailableError,
    QuestionNotFoundError,
)

router = APIRouter()

RefinementService = Annotated[PromptRefinementService, Depends(get_refinement_service)]


def _session_not_found(session_id: str) -> HTTPException:
    return http_error(
        status.HTTP_404_NOT_FOUND, "SESSION_NOT_FOUND", f"Session {session_id} not found"
    )


@router.post(
    "/create-session",
    response_model=CreateSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_session(
    request: CreateSessionRequest,
    service: RefinementService,
) -> CreateSessionResponse:
    """Start a refinement session and return its first questions."""
    try:
        session, questions = service.create_session(
            request.original_prompt, request.llm_provider, request.model
        )
    except ProviderUnavailableError as e:
        raise http_error(status.HTTP_400_BAD_REQUEST, "PROVIDER_UNAVAILABLE", str(e)) from None
    except GenerationParseError as e:
        raise http_error(status.HTTP_502_BAD_GATEWAY, "GENERATION_PARSE_ERROR", str(e)) from None
    except QuestionGenerationError as e:
        raise http_error(
            status.HTTP_502_BAD_GATEWAY, "QUESTION_GENERATION_ERROR", str(e)
        ) from None

    return CreateSessionResponse(
        session=SessionResponse.model_validate(session),
        questions=[QuestionResponse.model_validate(q) for q in questions],
    )


@router.get("/session/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, service: RefinementService) -> SessionResponse:
    """Get a live session."""
    try:
        session = service.get_session(session_id)
    except RefinementSessionNotFoundError:
        raise _session_not_found(session_id) from None
    return SessionResponse.model_validate(session)


@router.delete("/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, service: RefinementService) -> Response:
    """Delete a session. Unknown ids are accepted."""
    service.delete_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/answer-question", response_model=AnswerResponse)
def answer_question(
    request: AnswerQuestionRequest,
    service: RefinementService,
) -> AnswerResponse:
    """Record or replace the answer to a question in a session."""
    try:
        answer = service.answer_question(
            request.session_id, request.question_id, request.response
        )
    except RefinementSessionNotFoundError:
        raise _session_not_found(request.session_id) from None
    except QuestionNotFoundError as e:
        raise http_error(status.HTTP_404_NOT_FOUND, "QUESTION_NOT_FOUND", str(e)) from None
    return AnswerResponse.model_validate(answer)


@router.post("/refine", response_model=RefinePromptResponse)
def refine_prompt(
    request: RefinePromptRequest,
    service: RefinementService,
) -> RefinePromptResponse:
    """Refine the session prompt from the submitted answers.

    Returns the refined prompt and the session with its new questions.
    """
    try:
        refined_prompt, session = service.refine_prompt(
            request.session_id,
            [answer.to_answer() for answer in request.answers],
            request.llm_provider,
            request.model,
        )
    except RefinementSessionNotFoundError:
        raise _session_not_found(request.session_id) from None
    except ProviderUnavailableError as e:
        raise http_error(status.HTTP_400_BAD_REQUEST, "PROVIDER_UNAVAILABLE", str(e)) from None
    except RefinementError as e:
        raise http_error(status.HTTP_502_BAD_GATEWAY, "REFINEMENT_ERROR", str(e)) from None
    except GenerationParseError as e:
        raise http_error(status.HTTP_502_BAD_GATEWAY, "GENERATION_PARSE_ERROR", str(e)) from None
    except QuestionGenerationError as e:
        raise http_error(
            status.HTTP_502_BAD_GATEWAY, "QUESTION_GENERATION_ERROR", str(e)
        ) from None

    return RefinePromptResponse(
        refined_prompt=refined_prompt,
        session=SessionResponse.model_validate(session),
    )


@router.get("/stats", response_model=SessionStatsResponse)
def get_stats(service: RefinementService) -> SessionStatsResponse:
    """Get counts of stored sessions."""
    return SessionStatsResponse.model_validate(service.get_session_stats())
