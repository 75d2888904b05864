"""Data transfer objects for the dashboard."""

from dataclasses import asdict, dataclass
from typing import List, Optional

from fintrack.service.analytics import DonutChart, Summary, TrendChart

from .transaction import TransactionResponse


@dataclass(frozen=True)
class DashboardResponse:
    """Everything the dashboard shows for one window."""

    window: str
    range: str
    summary: Summary
    donut: DonutChart
    trend: Optional[TrendChart]
    recent: List[TransactionResponse]

    def to_dict(self) -> dict:
        return {
            "window": self.window,
            "range": self.range,
            "summary": self.summary.to_dict(),
            "donut": self.donut.to_dict(),
            "trend": self.trend.to_dict() if self.trend is not None else None,
            "recent": [asdict(r) for r in self.recent],
        }
