"""
Chart Settings for the FinTrack dashboard.

Tunable presentation parameters for the trend and donut renderers.
They can be adjusted via environment variables with the CHART_ prefix:
    CHART_POSITIVE_COLOR=#10B981
    CHART_PALETTE_JSON='["#6366F1", "#8B5CF6"]'
    CHART_LEGEND_LIMIT=6

Usage:
    from fintrack.service.analytics.settings import chart_settings

    # Use default settings (loaded from env)
    palette = chart_settings.palette

    # Or create custom settings for testing
    custom = ChartSettings(legend_limit=3)
"""

import json
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChartSettings(BaseSettings):
    """
    Configurable parameters for chart geometry and colours.

    All coordinates are in a 0-100 SVG viewbox.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHART_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Trend Chart ===
    trend_padding: float = Field(
        default=10.0,
        ge=0.0,
        lt=50.0,
        description="Vertical padding kept free at the top and bottom of the band",
    )
    trend_value_floor: float = Field(
        default=10.0,
        ge=0.0,
        description="Minimum upper bound of the value axis",
    )
    positive_color: str = Field(
        default="#10B981",
        description="Line colour when the window average is non-negative",
    )
    negative_color: str = Field(
        default="#EF4444",
        description="Line colour when the window average is negative",
    )
    positive_fill: str = Field(
        default="rgba(16,185,129,0.12)",
        description="Area fill when the window average is non-negative",
    )
    negative_fill: str = Field(
        default="rgba(239,68,68,0.10)",
        description="Area fill when the window average is negative",
    )
    trend_placeholder: str = Field(
        default="No data for this period",
        description="Text shown instead of an empty trend chart",
    )

    # === Donut Chart ===
    donut_radius: float = Field(default=50.0, gt=0.0)
    donut_inner_radius: float = Field(
        default=38.0,
        ge=0.0,
        description="Radius of the hole drawn over the sectors",
    )
    legend_limit: int = Field(
        default=6,
        ge=1,
        description="Number of categories listed in the legend",
    )
    donut_placeholder: str = Field(
        default="No expenses yet",
        description="Text shown instead of an empty donut chart",
    )
    palette_json: str = Field(
        default='["#6366F1", "#8B5CF6", "#EC4899", "#F43F5E", "#F59E0B", "#10B981", "#3B82F6"]',
        description="Cyclic category palette as a JSON array of colour strings",
    )

    @field_validator("palette_json")
    @classmethod
    def validate_palette_json(cls, v: str) -> str:
        """Validate that the palette is a non-empty JSON list of strings."""
        try:
            palette = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(palette, list) or not palette:
            raise ValueError("Palette must be a non-empty list")
        if not all(isinstance(c, str) and c for c in palette):
            raise ValueError("Palette entries must be non-empty strings")
        return v

    @property
    def palette(self) -> List[str]:
        """Category colours, indexed by position modulo length."""
        return json.loads(self.palette_json)


@lru_cache
def get_chart_settings() -> ChartSettings:
    """Get cached chart settings instance."""
    return ChartSettings()


chart_settings = get_chart_settings()
