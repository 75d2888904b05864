"""
Integration tests for the dashboard, stream and chart endpoints.

These tests verify:
1. GET /v1/dashboard - totals, breakdown, trend and recent activity
2. GET /v1/dashboard/stream - NDJSON dashboards per snapshot
3. GET /v1/charts/*.svg - chart documents and window restrictions
"""

import json
from datetime import date, timedelta

import pytest
from httpx import AsyncClient

from fintrack.application.services import DashboardService
from fintrack.core.context import AppContext
from fintrack.core.dependencies import get_dashboard_service
from fintrack.domain.exceptions import StoreUnavailableException
from fintrack.main import app


def days_ago(n: int) -> str:
    return (date.today() - timedelta(days=n)).isoformat()


async def seed(client: AsyncClient) -> None:
    await client.post("/v1/transactions", json={"amount": 1000, "type": "income"})
    await client.post("/v1/transactions", json={"amount": 300, "category": "Rent"})
    await client.post(
        "/v1/transactions",
        json={"amount": 50, "category": "Food", "date": days_ago(1)},
    )
    await client.post(
        "/v1/transactions",
        json={"amount": 25, "category": "Food", "date": days_ago(2)},
    )


# =============================================================================
# GET /v1/dashboard Tests
# =============================================================================

class TestDashboard:
    """Tests for GET /v1/dashboard endpoint."""

    @pytest.mark.asyncio
    async def test_empty_dashboard(self, client: AsyncClient):
        response = await client.get("/v1/dashboard")

        assert response.status_code == 200

        data = response.json()
        assert data["window"] == "30days"
        assert data["range"] == "30 days"
        assert data["summary"]["total_income"] == 0
        assert data["summary"]["total_expense"] == 0
        assert data["summary"]["net_balance"] == 0
        assert data["donut"]["placeholder"] == "No expenses yet"
        assert data["trend"]["placeholder"] == "No data for this period"
        assert len(data["trend"]["series"]) == 30
        assert data["recent"] == []

    @pytest.mark.asyncio
    async def test_summary(self, client: AsyncClient):
        await seed(client)

        data = (await client.get("/v1/dashboard", params={"window": "7"})).json()

        summary = data["summary"]
        assert summary["total_income"] == 1000
        assert summary["total_expense"] == 375
        assert summary["net_balance"] == 625
        assert summary["transaction_count"] == 4
        assert summary["category_totals"] == [
            {"name": "Rent", "value": 300},
            {"name": "Food", "value": 75},
        ]

    @pytest.mark.asyncio
    async def test_donut(self, client: AsyncClient):
        await seed(client)

        donut = (await client.get("/v1/dashboard")).json()["donut"]

        assert donut["placeholder"] is None
        assert donut["legend"] == ["Rent", "Food"]
        assert [s["percent"] for s in donut["slices"]] == [80, 20]
        assert donut["slices"][-1]["end_angle"] == pytest.approx(360.0)

    @pytest.mark.asyncio
    async def test_trend(self, client: AsyncClient):
        await seed(client)

        trend = (await client.get("/v1/dashboard", params={"window": "7"})).json()["trend"]

        assert trend["days"] == 7
        assert [p["date"] for p in trend["series"]] == [days_ago(n) for n in range(6, -1, -1)]
        assert [p["value"] for p in trend["series"]][-3:] == [-25, -50, 700]
        assert len(trend["points"]) == 7
        assert trend["points"][0]["x"] == 0
        assert trend["points"][-1]["x"] == 100

    @pytest.mark.asyncio
    async def test_no_trend_outside_day_count_windows(self, client: AsyncClient):
        await seed(client)

        data = (await client.get("/v1/dashboard", params={"window": "all"})).json()

        assert data["trend"] is None
        assert data["summary"]["daily_trend"] == []
        assert data["range"] == "All time"

    @pytest.mark.asyncio
    async def test_recent_limited_to_five(self, client: AsyncClient):
        for n in range(7):
            await client.post("/v1/transactions", json={"amount": n + 1, "date": days_ago(n)})

        recent = (await client.get("/v1/dashboard")).json()["recent"]

        assert [t["date"] for t in recent] == [days_ago(n) for n in range(5)]

    @pytest.mark.asyncio
    async def test_window_filters_everything(self, client: AsyncClient):
        await client.post("/v1/transactions", json={"amount": 10, "date": days_ago(40)})

        data = (await client.get("/v1/dashboard", params={"window": "30"})).json()

        assert data["summary"]["transaction_count"] == 0
        assert data["recent"] == []


# =============================================================================
# GET /v1/dashboard/stream Tests
# =============================================================================

class TestDashboardStream:

    @pytest.mark.asyncio
    async def test_first_line_reflects_current_snapshot(self, client: AsyncClient):
        await seed(client)

        response = await client.get("/v1/dashboard/stream", params={"limit": 1})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/x-ndjson")

        lines = [line for line in response.text.split("\n") if line]
        assert len(lines) == 1
        assert json.loads(lines[0])["summary"]["transaction_count"] == 4

    @pytest.mark.asyncio
    async def test_invalid_window(self, client: AsyncClient):
        response = await client.get("/v1/dashboard/stream", params={"window": "x", "limit": 1})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_store_failure_ends_stream_with_error_line(
        self,
        client: AsyncClient,
        context: AppContext,
    ):
        class InterruptedDashboardService(DashboardService):
            async def watch(self, owner_id, window):
                yield self.build_dashboard([], window)
                raise StoreUnavailableException("listener lost")

        app.dependency_overrides[get_dashboard_service] = (
            lambda: InterruptedDashboardService(context.store, context.settings)
        )

        response = await client.get("/v1/dashboard/stream")

        lines = [json.loads(line) for line in response.text.split("\n") if line]
        assert response.status_code == 200
        assert len(lines) == 2
        assert lines[0]["summary"]["transaction_count"] == 0
        assert lines[1]["error"] == "STORE_UNAVAILABLE"
        assert "listener lost" not in lines[1]["message"]


# =============================================================================
# Chart Tests
# =============================================================================

class TestCharts:

    @pytest.mark.asyncio
    async def test_trend_svg(self, client: AsyncClient):
        await seed(client)

        response = await client.get("/v1/charts/trend.svg", params={"window": "7"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert "<polyline" in response.text

    @pytest.mark.asyncio
    async def test_trend_svg_placeholder(self, client: AsyncClient):
        response = await client.get("/v1/charts/trend.svg", params={"window": "7"})

        assert "No data for this period" in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("window", ["all", "custom"])
    async def test_trend_needs_day_count_window(self, client: AsyncClient, window: str):
        response = await client.get("/v1/charts/trend.svg", params={"window": window})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_WINDOW"

    @pytest.mark.asyncio
    async def test_category_svg(self, client: AsyncClient):
        await seed(client)

        response = await client.get("/v1/charts/categories.svg", params={"window": "all"})

        assert response.status_code == 200
        assert response.text.count("<path") == 2

    @pytest.mark.asyncio
    async def test_category_svg_placeholder(self, client: AsyncClient):
        await client.post("/v1/transactions", json={"amount": 10, "type": "income"})

        response = await client.get("/v1/charts/categories.svg")

        assert "No expenses yet" in response.text
