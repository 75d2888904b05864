"""Dashboard Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .transaction import TransactionSchema


class CategoryTotalSchema(BaseModel):
    name: str
    value: float


class DailyValueSchema(BaseModel):
    date: str
    value: float


class SummarySchema(BaseModel):
    """Totals and breakdowns for the filtered set."""

    total_income: float
    total_expense: float
    net_balance: float = Field(..., description="total_income - total_expense")
    category_totals: List[CategoryTotalSchema] = Field(
        ..., description="Expense totals per category, largest first"
    )
    daily_trend: List[DailyValueSchema] = Field(
        ..., description="Sparse daily net movement, day-count windows only"
    )
    transaction_count: int


class DonutSliceSchema(BaseModel):
    name: str
    value: float
    percent: int
    color: str
    start_angle: float
    end_angle: float
    path: str = Field(..., description="SVG path in a 0-100 viewbox")


class DonutChartSchema(BaseModel):
    slices: List[DonutSliceSchema]
    legend: List[str] = Field(..., description="Categories shown in the legend")
    total: float
    placeholder: Optional[str] = Field(None, description="Set when there is nothing to draw")


class TrendPointSchema(BaseModel):
    date: str
    value: float
    x: float
    y: float
    color: str


class TrendChartSchema(BaseModel):
    days: int
    series: List[DailyValueSchema] = Field(..., description="One value per day of the window")
    points: List[TrendPointSchema]
    zero_y: Optional[float] = None
    average: float
    stroke_color: Optional[str] = None
    fill_color: Optional[str] = None
    labels: List[str]
    placeholder: Optional[str] = Field(None, description="Set when there is nothing to draw")


class DashboardResponseSchema(BaseModel):
    """Schema for GET /v1/dashboard response body."""

    window: str = Field(..., examples=["30days"])
    range: str = Field(..., examples=["30 days"])
    summary: SummarySchema
    donut: DonutChartSchema
    trend: Optional[TrendChartSchema] = Field(
        None, description="Present for day-count windows only"
    )
    recent: List[TransactionSchema] = Field(..., description="Most recent transactions")
