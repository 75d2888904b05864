"""Export API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response

from fintrack.application.services import ExportFormat, ExportService
from fintrack.core.dependencies import OwnerId, Window, get_export_service
from fintrack.presentation.schemas import ErrorResponseSchema

exports_router = APIRouter(
    prefix="/exports",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid window"},
        503: {"model": ErrorResponseSchema, "description": "Store unavailable"},
    },
)


@exports_router.get(
    "/{export_format}",
    summary="Export Transactions",
    description="""
    Download the transactions inside the active window as CSV, JSON or a
    PDF report. Nothing is produced for an empty window.
    """,
    response_class=Response,
    responses={
        200: {"description": "File attachment"},
        204: {"description": "No transactions in the window"},
    },
)
async def export_transactions(
    export_format: Annotated[ExportFormat, Path(description="csv, json or pdf")],
    owner_id: OwnerId,
    window: Window,
    service: Annotated[ExportService, Depends(get_export_service)],
) -> Response:
    artifact = await service.export(owner_id, window, export_format)

    if artifact is None:
        return Response(status_code=204)

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
