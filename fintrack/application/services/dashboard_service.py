"""Dashboard service - recomputes summaries and charts from snapshots."""

from datetime import date
from typing import AsyncIterator, List, Optional

import structlog

from fintrack.application.dto import DashboardResponse, TransactionResponse
from fintrack.core.config import Settings, settings
from fintrack.core.metrics import track_dashboard_latency
from fintrack.domain.entities import Transaction
from fintrack.domain.exceptions import InvalidWindowException
from fintrack.domain.interfaces import TransactionStore
from fintrack.service.analytics import (
    ChartSettings,
    DayCountWindow,
    DonutChart,
    TimeWindow,
    TrendChart,
    aggregate,
    chart_settings,
    filter_transactions,
    render_donut,
    render_trend,
    window_description,
    window_label,
)

logger = structlog.get_logger(__name__)


class DashboardService:
    """
    Application service for the dashboard view.

    Every snapshot goes through one full filter/aggregate/render pass;
    there is no incremental update path.
    """

    def __init__(
        self,
        store: TransactionStore,
        app_settings: Settings = settings,
        charts: ChartSettings = chart_settings,
    ):
        self._store = store
        self._settings = app_settings
        self._charts = charts

    def build_dashboard(
        self,
        snapshot: List[Transaction],
        window: TimeWindow,
        today: Optional[date] = None,
    ) -> DashboardResponse:
        """
        Recompute the dashboard for one snapshot.

        Args:
            snapshot: The owner's complete current set, newest first
            window: The active window
            today: Reference day (defaults to today)

        Returns:
            DashboardResponse; the trend is None outside day-count windows
        """
        with track_dashboard_latency():
            filtered = filter_transactions(snapshot, window, today)
            summary = aggregate(filtered, window)
            donut = render_donut(summary.category_totals, self._charts)

            trend = None
            if isinstance(window, DayCountWindow):
                trend = render_trend(summary.daily_trend, window.days, today, self._charts)

            recent = [
                TransactionResponse.from_entity(t)
                for t in filtered[: self._settings.recent_limit]
            ]

        return DashboardResponse(
            window=window_label(window),
            range=window_description(window),
            summary=summary,
            donut=donut,
            trend=trend,
            recent=recent,
        )

    async def get_dashboard(
        self,
        owner_id: str,
        window: TimeWindow,
        today: Optional[date] = None,
    ) -> DashboardResponse:
        """Dashboard for the owner's current snapshot."""
        snapshot = await self._store.snapshot(owner_id)
        return self.build_dashboard(snapshot, window, today)

    async def watch(
        self,
        owner_id: str,
        window: TimeWindow,
    ) -> AsyncIterator[DashboardResponse]:
        """
        Yield a recomputed dashboard for every snapshot the store delivers.

        The first item reflects the snapshot at subscription time. The
        subscription is released when the consumer stops iterating.
        """
        log = logger.bind(owner_id=owner_id, window=window_label(window))
        log.info("dashboard_watch_started")
        snapshots = self._store.stream(owner_id)
        try:
            async for snapshot in snapshots:
                yield self.build_dashboard(snapshot, window)
        finally:
            await snapshots.aclose()
            log.info("dashboard_watch_stopped")

    async def trend_chart(self, owner_id: str, window: TimeWindow) -> TrendChart:
        """
        Raises:
            InvalidWindowException: If the window is not a day-count window
        """
        if not isinstance(window, DayCountWindow):
            raise InvalidWindowException("The trend chart needs a day-count window")

        dashboard = await self.get_dashboard(owner_id, window)
        return dashboard.trend

    async def category_chart(self, owner_id: str, window: TimeWindow) -> DonutChart:
        dashboard = await self.get_dashboard(owner_id, window)
        return dashboard.donut
