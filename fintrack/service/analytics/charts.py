"""
Chart Renderers for the FinTrack dashboard.

Two pure renderers map aggregated series into SVG geometry:
- Trend chart: zero-filled daily net movement as a line/area chart
- Donut chart: expense share per category as circular sectors

Both work in a 0-100 viewbox and are deterministic: the same input always
yields the same geometry.
"""

import math
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from .models import (
    CategoryTotal,
    ChartPoint,
    DailyValue,
    DonutChart,
    DonutSlice,
    TrendChart,
    svg_number,
)
from .settings import ChartSettings, chart_settings

FULL_CIRCLE = 360.0
ANGLE_TOLERANCE = 1e-9


def date_range(days: int, today: Optional[date] = None) -> List[date]:
    """The `days` calendar dates ending today, oldest first."""
    today = today or date.today()
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def build_daily_series(
    points: Iterable[DailyValue],
    days: int,
    today: Optional[date] = None,
) -> List[DailyValue]:
    """
    Expand a sparse daily trend into one value per day of the window.

    Dates absent from `points` get a value of 0. Points outside the window
    are dropped.
    """
    by_date: Dict[date, float] = {}
    for point in points:
        by_date[point.date] = by_date.get(point.date, 0.0) + point.value

    return [
        DailyValue(date=day, value=by_date.get(day, 0.0))
        for day in date_range(days, today)
    ]


def format_day_label(day: date) -> str:
    """Short axis label such as 'Oct 19'."""
    return f"{day:%b} {day.day}"


def render_trend(
    points: Iterable[DailyValue],
    days: int,
    today: Optional[date] = None,
    settings: ChartSettings = chart_settings,
) -> TrendChart:
    """
    Render the daily net-movement chart for a day-count window.

    Algorithm:
        1. Zero-fill the sparse series over the full window
        2. x = index / (days - 1) * 100
        3. y maps the value range, widened to include 0 and the value
           floor, into the band between the top and bottom padding
        4. The zero baseline uses the same transform
        5. Colours follow the sign of the window average

    Args:
        points: Sparse {date, value} pairs from the aggregator
        days: Window length in days
        today: Last day of the window (defaults to today)
        settings: Chart settings (uses defaults if not provided)

    Returns:
        TrendChart, in its empty state when there is nothing to draw
    """
    points = list(points)
    series = build_daily_series(points, days, today)

    if not points or days < 2:
        return TrendChart(
            days=days,
            series=series,
            placeholder=settings.trend_placeholder,
        )

    values = [p.value for p in series]
    min_val = min(min(values), 0.0)
    max_val = max(max(values), settings.trend_value_floor)
    span = (max_val - min_val) or 1.0

    pad = settings.trend_padding
    band = 100.0 - 2 * pad

    def y_for(value: float) -> float:
        normalized = (value - min_val) / span
        return 100.0 - (normalized * band + pad)

    average = sum(values) / len(values)
    positive = average >= 0

    chart_points = [
        ChartPoint(
            date=p.date,
            value=p.value,
            x=i / (days - 1) * 100.0,
            y=y_for(p.value),
            color=settings.positive_color if p.value >= 0 else settings.negative_color,
        )
        for i, p in enumerate(series)
    ]

    labels = [format_day_label(series[0].date)]
    labels.append(format_day_label(series[len(series) // 2].date))
    labels.append(format_day_label(series[-1].date))

    return TrendChart(
        days=days,
        series=series,
        points=chart_points,
        zero_y=y_for(0.0),
        average=average,
        stroke_color=settings.positive_color if positive else settings.negative_color,
        fill_color=settings.positive_fill if positive else settings.negative_fill,
        labels=labels,
    )


def _point_on_circle(angle: float, radius: float) -> tuple[float, float]:
    rad = math.pi * angle / 180.0
    return 50.0 + radius * math.cos(rad), 50.0 + radius * math.sin(rad)


def sector_path(start_angle: float, end_angle: float, radius: float = 50.0) -> str:
    """
    SVG path for a circular sector centred at (50, 50).

    A sweep of a full circle cannot be drawn with a single arc whose end
    point equals its start point, so it is split into two half arcs.
    """
    r = svg_number(radius)
    x1, y1 = _point_on_circle(start_angle, radius)
    sweep = end_angle - start_angle

    if sweep >= FULL_CIRCLE - ANGLE_TOLERANCE:
        xm, ym = _point_on_circle(start_angle + 180.0, radius)
        return (
            f"M 50 50 L {svg_number(x1)} {svg_number(y1)} "
            f"A {r} {r} 0 1 1 {svg_number(xm)} {svg_number(ym)} "
            f"A {r} {r} 0 1 1 {svg_number(x1)} {svg_number(y1)} Z"
        )

    x2, y2 = _point_on_circle(end_angle, radius)
    large_arc = 1 if sweep > 180.0 else 0
    return (
        f"M 50 50 L {svg_number(x1)} {svg_number(y1)} "
        f"A {r} {r} 0 {large_arc} 1 {svg_number(x2)} {svg_number(y2)} Z"
    )


def share_percent(value: float, total: float) -> int:
    """Share of the total as a whole percentage, halves rounded up."""
    return int(math.floor(value / total * 100.0 + 0.5))


def render_donut(
    category_totals: Iterable[CategoryTotal],
    settings: ChartSettings = chart_settings,
) -> DonutChart:
    """
    Render the category breakdown as a donut chart.

    Each category gets a sector whose angle is proportional to its share of
    the total, in input order, coloured from the cyclic palette by position.

    Args:
        category_totals: Category totals, normally largest first
        settings: Chart settings (uses defaults if not provided)

    Returns:
        DonutChart, in its empty state when there are no expenses
    """
    category_totals = list(category_totals)
    total = sum(c.value for c in category_totals)

    if not category_totals or total <= 0:
        return DonutChart(
            inner_radius=settings.donut_inner_radius,
            legend_limit=settings.legend_limit,
            placeholder=settings.donut_placeholder,
        )

    palette = settings.palette
    slices = []
    current_angle = 0.0

    for i, category in enumerate(category_totals):
        sweep = category.value / total * FULL_CIRCLE
        start_angle = current_angle
        end_angle = current_angle + sweep

        slices.append(
            DonutSlice(
                name=category.name,
                value=category.value,
                percent=share_percent(category.value, total),
                color=palette[i % len(palette)],
                start_angle=start_angle,
                end_angle=end_angle,
                path=sector_path(start_angle, end_angle, settings.donut_radius),
            )
        )
        current_angle = end_angle

    return DonutChart(
        slices=slices,
        total=total,
        inner_radius=settings.donut_inner_radius,
        legend_limit=settings.legend_limit,
    )
