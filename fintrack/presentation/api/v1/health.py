"""Health check endpoint for service monitoring."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fintrack import __version__
from fintrack.core.context import AppContext
from fintrack.core.dependencies import get_app_context

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    store: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service and the active store mode.",
)
async def health_check(
    context: Annotated[AppContext, Depends(get_app_context)],
) -> HealthResponse:
    return HealthResponse(status="healthy", version=__version__, store=context.store.mode)
