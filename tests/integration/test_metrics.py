"""
Integration tests for metrics tracking.

These tests verify:
1. Metrics endpoint returns valid Prometheus format
2. Business metrics (transactions, exports) are tracked
3. Technical metrics (dashboard passes, HTTP requests) are recorded
"""

import pytest
from httpx import AsyncClient

from fintrack.core.metrics import REGISTRY


def sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetricsEndpoint:
    """Tests for GET /metrics endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_endpoint_returns_prometheus_format(self, client: AsyncClient):
        await client.get("/v1/health")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "fintrack_http_requests_total" in response.text


class TestBusinessMetrics:

    @pytest.mark.asyncio
    async def test_transactions_created_by_type(self, client: AsyncClient):
        expense_before = sample("fintrack_transactions_created_total", {"type": "expense"})
        income_before = sample("fintrack_transactions_created_total", {"type": "income"})

        await client.post("/v1/transactions", json={"amount": 1})
        await client.post("/v1/transactions", json={"amount": 1})
        await client.post("/v1/transactions", json={"amount": 1, "type": "income"})

        assert sample("fintrack_transactions_created_total", {"type": "expense"}) == expense_before + 2
        assert sample("fintrack_transactions_created_total", {"type": "income"}) == income_before + 1

    @pytest.mark.asyncio
    async def test_transactions_deleted(self, client: AsyncClient):
        before = sample("fintrack_transactions_deleted_total")
        created = (await client.post("/v1/transactions", json={"amount": 1})).json()

        await client.delete(f"/v1/transactions/{created['id']}")
        await client.delete(f"/v1/transactions/{created['id']}")

        assert sample("fintrack_transactions_deleted_total") == before + 1

    @pytest.mark.asyncio
    async def test_exports(self, client: AsyncClient):
        empty_before = sample("fintrack_exports_empty_total", {"format": "csv"})
        await client.get("/v1/exports/csv")
        assert sample("fintrack_exports_empty_total", {"format": "csv"}) == empty_before + 1

        done_before = sample("fintrack_exports_total", {"format": "json"})
        await client.post("/v1/transactions", json={"amount": 1})
        await client.get("/v1/exports/json")
        assert sample("fintrack_exports_total", {"format": "json"}) == done_before + 1


class TestTechnicalMetrics:

    @pytest.mark.asyncio
    async def test_dashboard_passes_observed(self, client: AsyncClient):
        before = sample("fintrack_dashboard_recompute_seconds_count")

        await client.get("/v1/dashboard")
        await client.get("/v1/charts/categories.svg")

        assert sample("fintrack_dashboard_recompute_seconds_count") == before + 2

    @pytest.mark.asyncio
    async def test_http_requests_counted(self, client: AsyncClient):
        labels = {"method": "GET", "endpoint": "/v1/health", "status": "200"}
        before = sample("fintrack_http_requests_total", labels)

        await client.get("/v1/health")

        assert sample("fintrack_http_requests_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_http_requests_labelled_by_route_template(self, client: AsyncClient):
        labels = {
            "method": "DELETE",
            "endpoint": "/v1/transactions/{transaction_id}",
            "status": "404",
        }
        before = sample("fintrack_http_requests_total", labels)

        await client.delete("/v1/transactions/missing-id")

        assert sample("fintrack_http_requests_total", labels) == before + 1
        assert sample(
            "fintrack_http_requests_total",
            {"method": "DELETE", "endpoint": "/v1/transactions/missing-id", "status": "404"},
        ) == 0.0
