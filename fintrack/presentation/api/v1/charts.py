"""Chart API endpoints returning SVG documents."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from fintrack.application.services import DashboardService
from fintrack.core.dependencies import OwnerId, Window, get_dashboard_service
from fintrack.presentation.schemas import ErrorResponseSchema

charts_router = APIRouter(
    prefix="/charts",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid window"},
    },
)

SVG_MEDIA_TYPE = "image/svg+xml"


@charts_router.get(
    "/trend.svg",
    summary="Daily Trend Chart",
    description="Daily net movement over a day-count window, zero-filled.",
    response_class=Response,
)
async def trend_chart(
    owner_id: OwnerId,
    window: Window,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> Response:
    chart = await service.trend_chart(owner_id, window)
    return Response(content=chart.to_svg(), media_type=SVG_MEDIA_TYPE)


@charts_router.get(
    "/categories.svg",
    summary="Category Breakdown Chart",
    description="Expense share per category as a donut chart.",
    response_class=Response,
)
async def category_chart(
    owner_id: OwnerId,
    window: Window,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> Response:
    chart = await service.category_chart(owner_id, window)
    return Response(content=chart.to_svg(), media_type=SVG_MEDIA_TYPE)
