"""
Data models for the analytics pipeline.

These models carry results from the aggregator to the chart renderers
and export encoders. Chart models know how to draw themselves as SVG.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from xml.sax.saxutils import escape


def svg_number(value: float) -> str:
    """Format a coordinate compactly and deterministically."""
    return format(round(value, 4) + 0.0, "g")


@dataclass(frozen=True)
class DailyValue:
    """Net movement for one calendar day."""

    date: date
    value: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass(frozen=True)
class CategoryTotal:
    """Summed expense amount for one category."""

    name: str
    value: float

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Summary:
    """
    Aggregated figures for a filtered transaction set.

    Attributes:
        total_income: Sum of income amounts
        total_expense: Sum of expense amounts
        net_balance: total_income - total_expense
        category_totals: Expense totals per category, largest first
        daily_trend: Sparse per-day net movement (day-count windows only)
        transaction_count: Number of transactions aggregated
    """

    total_income: float
    total_expense: float
    net_balance: float
    category_totals: List[CategoryTotal]
    daily_trend: List[DailyValue]
    transaction_count: int

    def to_dict(self) -> dict:
        return {
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "net_balance": self.net_balance,
            "category_totals": [c.to_dict() for c in self.category_totals],
            "daily_trend": [d.to_dict() for d in self.daily_trend],
            "transaction_count": self.transaction_count,
        }


@dataclass(frozen=True)
class ChartPoint:
    """A trend value placed in the 0-100 viewbox."""

    date: date
    value: float
    x: float
    y: float
    color: str


@dataclass(frozen=True)
class TrendChart:
    """
    Line/area chart geometry for a day-count window.

    When placeholder is set the chart is in its empty state and carries
    no geometry.
    """

    days: int
    series: List[DailyValue]
    points: List[ChartPoint] = field(default_factory=list)
    zero_y: Optional[float] = None
    average: float = 0.0
    stroke_color: Optional[str] = None
    fill_color: Optional[str] = None
    labels: List[str] = field(default_factory=list)
    placeholder: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.placeholder is not None

    @property
    def line_points(self) -> str:
        """Polyline points attribute."""
        return " ".join(f"{svg_number(p.x)},{svg_number(p.y)}" for p in self.points)

    @property
    def area_path(self) -> str:
        """Closed path between the line and the zero baseline."""
        if self.is_empty:
            return ""
        zero = svg_number(self.zero_y)
        body = " L ".join(f"{svg_number(p.x)} {svg_number(p.y)}" for p in self.points)
        return f"M 0 {zero} L {body} L 100 {zero} Z"

    def to_dict(self) -> dict:
        return {
            "days": self.days,
            "series": [d.to_dict() for d in self.series],
            "points": [
                {
                    "date": p.date.isoformat(),
                    "value": p.value,
                    "x": p.x,
                    "y": p.y,
                    "color": p.color,
                }
                for p in self.points
            ],
            "zero_y": self.zero_y,
            "average": self.average,
            "stroke_color": self.stroke_color,
            "fill_color": self.fill_color,
            "labels": self.labels,
            "placeholder": self.placeholder,
        }

    def to_svg(self) -> str:
        if self.is_empty:
            return _placeholder_svg(self.placeholder)

        zero = svg_number(self.zero_y)
        parts = [
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100" preserveAspectRatio="none">',
            '<line x1="0" y1="100" x2="100" y2="100" stroke="#E2E8F0" stroke-width="0.5"/>',
            '<line x1="0" y1="50" x2="100" y2="50" stroke="#E2E8F0" stroke-width="0.5" stroke-dasharray="4"/>',
            '<line x1="0" y1="0" x2="100" y2="0" stroke="#E2E8F0" stroke-width="0.5" stroke-dasharray="4"/>',
            f'<line x1="0" y1="{zero}" x2="100" y2="{zero}" stroke="rgba(255,255,255,0.12)" stroke-dasharray="2"/>',
            f'<path d="{self.area_path}" fill="{self.fill_color}"/>',
            f'<polyline fill="none" stroke="{self.stroke_color}" stroke-width="2" '
            f'points="{self.line_points}" vector-effect="non-scaling-stroke" '
            'stroke-linecap="round" stroke-linejoin="round"/>',
        ]
        for p in self.points:
            parts.append(
                f'<circle cx="{svg_number(p.x)}" cy="{svg_number(p.y)}" r="0.9" fill="{p.color}"/>'
            )
        parts.append("</svg>")
        return "".join(parts)


@dataclass(frozen=True)
class DonutSlice:
    """One category sector. Angles are in degrees, clockwise from 3 o'clock."""

    name: str
    value: float
    percent: int
    color: str
    start_angle: float
    end_angle: float
    path: str

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "percent": self.percent,
            "color": self.color,
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
            "path": self.path,
        }


@dataclass(frozen=True)
class DonutChart:
    """Category breakdown geometry."""

    slices: List[DonutSlice] = field(default_factory=list)
    total: float = 0.0
    inner_radius: float = 38.0
    legend_limit: int = 6
    placeholder: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.placeholder is not None

    @property
    def legend(self) -> List[DonutSlice]:
        return self.slices[: self.legend_limit]

    def to_dict(self) -> dict:
        return {
            "slices": [s.to_dict() for s in self.slices],
            "legend": [s.name for s in self.legend],
            "total": self.total,
            "placeholder": self.placeholder,
        }

    def to_svg(self) -> str:
        if self.is_empty:
            return _placeholder_svg(self.placeholder)

        parts = [
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">',
            '<g transform="rotate(-90 50 50)">',
        ]
        for s in self.slices:
            parts.append(
                f'<path d="{s.path}" fill="{s.color}" '
                'stroke="rgba(255,255,255,0.08)" stroke-width="0.6"/>'
            )
        parts.append(
            f'<circle cx="50" cy="50" r="{svg_number(self.inner_radius)}" '
            'fill="rgba(255,255,255,0.06)"/>'
        )
        parts.append("</g>")
        parts.append(
            '<text x="50" y="47" text-anchor="middle" font-size="5">Total</text>'
        )
        parts.append(
            f'<text x="50" y="56" text-anchor="middle" font-size="8" '
            f'font-weight="bold">{self.total:,.0f}</text>'
        )
        parts.append("</svg>")
        return "".join(parts)


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable file produced by an export encoder."""

    filename: str
    media_type: str
    content: bytes


def _placeholder_svg(text: str) -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">'
        f'<text x="50" y="50" text-anchor="middle" font-size="6">{escape(text)}</text>'
        "</svg>"
    )
