"""
FinTrack - Main Application Entry Point

A personal finance tracker that records expenses and income, summarizes
them over a time window, renders trend and category charts, and exports
the filtered set as CSV, JSON or a PDF report.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from fintrack import __version__
from fintrack.core.config import settings
from fintrack.core.context import open_context
from fintrack.core.logging import setup_logging
from fintrack.core.metrics import get_metrics, get_metrics_content_type
from fintrack.infrastructure.database import db_manager
from fintrack.presentation.api import api_router
from fintrack.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Build the store context, falling back to local storage if the
      document store cannot be reached
    - Release the connection pool on shutdown
    """
    setup_logging()
    logger = structlog.get_logger(__name__)

    app.state.context = await open_context(settings, db_manager)
    logger.info(
        "application_started",
        version=__version__,
        app_id=settings.app_id,
        store=app.state.context.store.mode,
    )

    yield

    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="FinTrack",
    description="Personal expense and income tracker",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")
