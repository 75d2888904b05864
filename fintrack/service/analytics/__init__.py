"""
Analytics Module for the FinTrack dashboard
"""

from .models import (
    CategoryTotal,
    ChartPoint,
    DailyValue,
    DonutChart,
    DonutSlice,
    ExportArtifact,
    Summary,
    TrendChart,
)
from .settings import ChartSettings, chart_settings
from .window import (
    AllTimeWindow,
    CustomRangeWindow,
    DayCountWindow,
    TimeWindow,
    filter_transactions,
    parse_window,
    window_description,
    window_label,
)
from .aggregator import (
    aggregate,
    calculate_category_totals,
    calculate_daily_trend,
    calculate_totals,
)
from .charts import build_daily_series, render_donut, render_trend
from .export import encode_csv, encode_json
from .report import encode_pdf

__all__ = [
    # Settings
    "ChartSettings",
    "chart_settings",
    # Models
    "CategoryTotal",
    "ChartPoint",
    "DailyValue",
    "DonutChart",
    "DonutSlice",
    "ExportArtifact",
    "Summary",
    "TrendChart",
    # Window
    "AllTimeWindow",
    "CustomRangeWindow",
    "DayCountWindow",
    "TimeWindow",
    "filter_transactions",
    "parse_window",
    "window_description",
    "window_label",
    # Aggregation
    "aggregate",
    "calculate_category_totals",
    "calculate_daily_trend",
    "calculate_totals",
    # Charts
    "build_daily_series",
    "render_donut",
    "render_trend",
    # Export
    "encode_csv",
    "encode_json",
    "encode_pdf",
]
