"""API routers."""

from prompt_refiner_api.routers.prompts import router as prompts_router
from prompt_refiner_api.routers.providers import router as providers_router
from prompt_refiner_api.routers.questions import router as questions_router

__all__ = ["prompts_router", "providers_router", "questions_router"]
