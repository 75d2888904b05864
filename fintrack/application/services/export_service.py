"""Export service - turns a window of transactions into a downloadable file."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

import structlog

from fintrack.core.config import Settings, settings
from fintrack.core.metrics import record_empty_export, record_export
from fintrack.domain.interfaces import TransactionStore
from fintrack.service.analytics import (
    ExportArtifact,
    TimeWindow,
    aggregate,
    encode_csv,
    encode_json,
    encode_pdf,
    filter_transactions,
    window_description,
    window_label,
)

logger = structlog.get_logger(__name__)


class ExportFormat(str, Enum):
    """Supported export encodings."""

    CSV = "csv"
    JSON = "json"
    PDF = "pdf"


class ExportService:
    """Application service for exports of the active window."""

    def __init__(self, store: TransactionStore, app_settings: Settings = settings):
        self._store = store
        self._settings = app_settings

    async def export(
        self,
        owner_id: str,
        window: TimeWindow,
        export_format: ExportFormat,
        today: Optional[date] = None,
        generated_at: Optional[datetime] = None,
    ) -> Optional[ExportArtifact]:
        """
        Encode the owner's transactions inside the window.

        Args:
            owner_id: Owner of the collection
            window: The active window
            export_format: csv, json or pdf
            today: Reference day for day-count windows
            generated_at: Timestamp printed on PDF reports

        Returns:
            The artifact, or None when the window holds no transactions
        """
        snapshot = await self._store.snapshot(owner_id)
        transactions = filter_transactions(snapshot, window, today)
        label = window_label(window)

        log = logger.bind(owner_id=owner_id, format=export_format.value, window=label)

        if export_format == ExportFormat.CSV:
            artifact = encode_csv(transactions, label)
        elif export_format == ExportFormat.JSON:
            artifact = encode_json(transactions, label)
        else:
            artifact = encode_pdf(
                transactions,
                aggregate(transactions, window),
                range_description=window_description(window),
                label=label,
                title=self._settings.report_title,
                product=self._settings.product_name,
                currency=self._settings.currency_label,
                generated_at=generated_at,
            )

        if artifact is None:
            record_empty_export(export_format.value)
            log.info("export_empty")
            return None

        record_export(export_format.value)
        log.info("export_created", filename=artifact.filename, size=len(artifact.content))
        return artifact
