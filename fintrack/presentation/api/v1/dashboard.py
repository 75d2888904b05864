"""Dashboard API endpoints."""

import json
from typing import Annotated, AsyncIterator, Optional

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from fintrack.application.services import DashboardService
from fintrack.core.dependencies import OwnerId, Window, get_dashboard_service
from fintrack.domain.exceptions import StoreUnavailableException
from fintrack.presentation.middleware.error_handler import STORE_UNAVAILABLE_MESSAGE
from fintrack.presentation.schemas import DashboardResponseSchema, ErrorResponseSchema

dashboard_router = APIRouter(
    prefix="/dashboard",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid window"},
        503: {"model": ErrorResponseSchema, "description": "Store unavailable"},
    },
)

NDJSON_MEDIA_TYPE = "application/x-ndjson"

logger = structlog.get_logger(__name__)


@dashboard_router.get(
    "",
    response_model=DashboardResponseSchema,
    summary="Get Dashboard",
    description="""
    Totals, category breakdown, daily trend and recent activity for the
    active window. The trend is only present for day-count windows.
    """,
)
async def get_dashboard(
    owner_id: OwnerId,
    window: Window,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponseSchema:
    dashboard = await service.get_dashboard(owner_id, window)
    return DashboardResponseSchema.model_validate(dashboard.to_dict())


@dashboard_router.get(
    "/stream",
    summary="Stream Dashboard",
    description="""
    Newline-delimited JSON: one dashboard per snapshot delivered by the
    store, starting with the current one. The stream stays open until the
    client disconnects, or until `limit` dashboards have been sent. If the
    store fails mid-stream, a final `{error, message}` line ends it.
    """,
    response_class=StreamingResponse,
)
async def stream_dashboard(
    owner_id: OwnerId,
    window: Window,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
    limit: Annotated[Optional[int], Query(ge=1, description="Stop after this many updates")] = None,
) -> StreamingResponse:
    async def lines() -> AsyncIterator[str]:
        updates = service.watch(owner_id, window)
        sent = 0
        try:
            async for dashboard in updates:
                yield json.dumps(dashboard.to_dict()) + "\n"
                sent += 1
                if limit is not None and sent >= limit:
                    break
        except StoreUnavailableException as e:
            logger.warning("dashboard_stream_failed", owner_id=owner_id, error=e.message)
            yield json.dumps({"error": e.code, "message": STORE_UNAVAILABLE_MESSAGE}) + "\n"
        finally:
            await updates.aclose()

    return StreamingResponse(lines(), media_type=NDJSON_MEDIA_TYPE)
